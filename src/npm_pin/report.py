"""Report assembly from a finished resolution."""

from __future__ import annotations

from .models import OutputRow, PinReport, ResolutionMap, RootManifest
from .resolver import missing_names, name_sort_key


def build_report(root_manifest: RootManifest, resolution: ResolutionMap) -> PinReport:
    """Project the resolution onto the declared groups.

    Rows are ordered by name, case-insensitively. A name declared in both
    groups produces a row for each. Names without an installed record are
    left out of the rows and listed in ``missing`` instead.
    """
    found = resolution.snapshot()
    entries = sorted(root_manifest.entries(), key=lambda e: name_sort_key(e[0]))

    rows: list[OutputRow] = []
    for name, kind in entries:
        record = found.get(name)
        if record is not None:
            rows.append(OutputRow(name=name, version=record.version, kind=kind))

    return PinReport(
        rows=tuple(rows),
        missing=tuple(missing_names(root_manifest.wanted, resolution)),
        declared=len(root_manifest.wanted),
    )
