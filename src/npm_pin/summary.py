"""Human-readable rendering of a pin report."""

from __future__ import annotations

import json
from collections.abc import Sequence

from .models import OutputRow, PinReport

EXCERPT_HEADER = "// --- Paste into your package.json ---"
NO_DECLARED = "No dependencies/devDependencies declared in package.json."
NO_MATCHES = "No matching installed packages were found in node_modules."


def _pad(text: str, width: int) -> str:
    return text + " " * max(0, width - len(text))


def render_table(rows: Sequence[OutputRow]) -> str:
    """Return an aligned two-column name/version table, values unquoted."""
    headers = ("name", "version")
    name_width = max([len(headers[0])] + [len(r.name) for r in rows])
    version_width = max([len(headers[1])] + [len(r.version) for r in rows])

    lines = [
        _pad(headers[0], name_width) + "  " + _pad(headers[1], version_width),
        "-" * name_width + "  " + "-" * version_width,
    ]
    for row in rows:
        lines.append(_pad(row.name, name_width) + "  " + _pad(row.version, version_width))
    return "\n".join(lines) + "\n"


def render_excerpt(report: PinReport) -> str:
    return EXCERPT_HEADER + "\n" + json.dumps(report.excerpt, indent=2) + "\n"


def render_missing(missing: Sequence[str], *, comment: bool = True) -> str:
    if not missing:
        return ""
    if comment:
        lines = ["// Declared but not found in node_modules:"]
        lines.extend(f"// - {name}" for name in missing)
    else:
        lines = ["Missing (declared but not found):"]
        lines.extend(f" - {name}" for name in missing)
    return "\n".join(lines) + "\n"


def render_text(report: PinReport) -> str:
    """Return the full console output for a report."""
    if report.declared == 0:
        return NO_DECLARED + "\n"

    if not report.has_matches:
        text = NO_MATCHES + "\n"
        if report.missing:
            text += "\n" + render_missing(report.missing, comment=False)
        return text

    parts = [render_table(report.rows), render_excerpt(report)]
    if report.missing:
        parts.append(render_missing(report.missing))
    return "\n".join(parts)


def render_summary(report: PinReport) -> str:
    """Return a Markdown summary with totals, pinned versions and missing names."""
    totals = report.totals

    lines = []
    lines.append("# npm-pin Summary")
    lines.append("")
    lines.append(
        f"Declared: {totals['declared']} | Pinned: {totals['pinned']} | Missing: {totals['missing']}"
    )
    lines.append("")
    lines.append("| Package | Installed | Group |")
    lines.append("| --- | --- | --- |")

    for row in report.rows:
        lines.append(f"| {row.name} | {row.version} | {row.kind} |")

    if not report.rows:
        lines.append("| (no installed packages matched) | n/a | n/a |")

    if report.missing:
        lines.append("")
        lines.append("## Declared but not found")
        lines.append("")
        lines.extend(f"- {name}" for name in report.missing)

    return "\n".join(lines) + "\n"
