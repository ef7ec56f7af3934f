"""Report models for a resolution run."""

from __future__ import annotations

from dataclasses import dataclass

from .root_manifest import DEPENDENCIES, DEV_DEPENDENCIES, GROUPS


@dataclass(frozen=True)
class OutputRow:
    """A resolved name/version pair and the group it was declared in."""

    name: str
    version: str
    kind: str

    def __post_init__(self) -> None:
        if self.kind not in GROUPS:
            raise ValueError(f"Invalid dependency group: {self.kind}")

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "version": self.version,
            "kind": self.kind,
        }


@dataclass(frozen=True)
class PinReport:
    """Outcome of pinning a project: rows found, names missing, excerpt."""

    rows: tuple[OutputRow, ...] = ()
    missing: tuple[str, ...] = ()
    declared: int = 0

    @property
    def has_matches(self) -> bool:
        return bool(self.rows)

    @property
    def excerpt(self) -> dict[str, dict[str, str]]:
        """Pinned versions by group; names that were not found are omitted."""
        excerpt: dict[str, dict[str, str]] = {DEPENDENCIES: {}, DEV_DEPENDENCIES: {}}
        for row in self.rows:
            excerpt[row.kind][row.name] = row.version
        return excerpt

    @property
    def totals(self) -> dict[str, int]:
        return {
            "declared": self.declared,
            "pinned": len(self.rows),
            "missing": len(self.missing),
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "hasMatches": self.has_matches,
            "rows": [row.to_dict() for row in self.rows],
            "excerpt": self.excerpt,
            "missing": list(self.missing),
            "totals": self.totals,
        }

