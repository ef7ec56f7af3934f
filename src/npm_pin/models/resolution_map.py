"""Name to installed record mapping with nearest-wins replacement."""

from __future__ import annotations

import threading
from collections.abc import Iterator

from .manifest_record import ManifestRecord


class ResolutionMap:
    """Holds the shallowest-seen record for every resolved package name.

    ``offer`` is the only mutator. It reads the current entry, compares depths
    and conditionally replaces as a single step under a lock, so concurrent
    readers can feed it without ever leaving a deeper record stored over a
    shallower one. Equal depths keep whichever record arrived first.
    """

    def __init__(self) -> None:
        self._records: dict[str, ManifestRecord] = {}
        self._lock = threading.Lock()

    def offer(self, record: ManifestRecord) -> bool:
        """Store ``record`` if it is the first or strictly shallowest seen.

        Returns True when the map changed.
        """
        with self._lock:
            current = self._records.get(record.name)
            if current is not None and current.depth <= record.depth:
                return False
            self._records[record.name] = record
            return True

    def get(self, name: str) -> ManifestRecord | None:
        with self._lock:
            return self._records.get(name)

    def snapshot(self) -> dict[str, ManifestRecord]:
        """Return a point-in-time copy of the mapping."""
        with self._lock:
            return dict(self._records)

    def versions(self) -> dict[str, str]:
        return {name: record.version for name, record in self.snapshot().items()}

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.snapshot()))

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"ResolutionMap({self.versions()!r})"
