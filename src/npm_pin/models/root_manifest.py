"""Root project manifest model."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Iterator, Mapping

DEPENDENCIES = "dependencies"
DEV_DEPENDENCIES = "devDependencies"

GROUPS = (DEPENDENCIES, DEV_DEPENDENCIES)


@dataclass(frozen=True)
class RootManifest:
    """Declared dependency groups of the project being pinned.

    Only the keys matter; the declared range strings are carried through
    untouched and never interpreted.
    """

    dependencies: Mapping[str, str] = field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = field(default_factory=dict)

    @property
    def wanted(self) -> frozenset[str]:
        return frozenset(self.dependencies) | frozenset(self.dev_dependencies)

    def entries(self) -> Iterator[tuple[str, str]]:
        """Yield (name, group) pairs; a name declared twice yields twice."""
        for name in self.dependencies:
            yield name, DEPENDENCIES
        for name in self.dev_dependencies:
            yield name, DEV_DEPENDENCIES

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> RootManifest:
        deps = data.get(DEPENDENCIES) or {}
        dev_deps = data.get(DEV_DEPENDENCIES) or {}
        return cls(
            dependencies={str(k): str(v) for k, v in dict(deps).items()},
            dev_dependencies={str(k): str(v) for k, v in dict(dev_deps).items()},
        )
