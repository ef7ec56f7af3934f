"""Installed manifest record model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from collections.abc import Mapping
from typing import Any


def depth_of(path: Path) -> int:
    """Return the number of path segments from the filesystem root."""
    return len(Path(path).parts)


@dataclass(frozen=True)
class ManifestRecord:
    """One installed package.json: who it claims to be and where it lives."""

    name: str
    version: str
    source_path: Path
    depth: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package name must be non-empty")
        if not self.version:
            raise ValueError("Package version must be non-empty")
        if self.depth < 1:
            raise ValueError("Depth must be positive")

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "version": self.version,
            "sourcePath": str(self.source_path),
            "depth": self.depth,
        }

    @classmethod
    def from_manifest(cls, data: Any, path: Path) -> ManifestRecord | None:
        """Build a record from decoded manifest content, or None when unusable.

        Both ``name`` and ``version`` must be present, non-empty strings.
        """
        if not isinstance(data, Mapping):
            return None
        name = data.get("name")
        version = data.get("version")
        if not isinstance(name, str) or not isinstance(version, str):
            return None
        if not name or not version:
            return None
        return cls(name=name, version=version, source_path=path, depth=depth_of(path))
