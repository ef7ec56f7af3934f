"""Resolve one installed version per wanted package name.

Every qualifying manifest is offered to a ``ResolutionMap``, which keeps the
shallowest record seen for each name. Per-file problems never abort a run:
an unreadable, malformed or unwanted manifest simply contributes nothing.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Set
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path

from .models import ManifestRecord, ResolutionMap
from .parsers.package_json import parse_installed

logger = logging.getLogger(__name__)

# In-flight reads per worker when running concurrently.
_QUEUE_FACTOR = 4


def read_manifest(path: Path) -> ManifestRecord | None:
    """Parse one installed manifest, returning None for anything unusable."""
    try:
        record = parse_installed(path)
    except json.JSONDecodeError as exc:
        logger.debug("Skipping malformed manifest %s: %s", path, exc.msg)
        return None
    except RecursionError:
        logger.debug("Skipping manifest nested too deeply to decode: %s", path)
        return None
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.debug("Skipping unreadable manifest %s: %s", path, exc)
        return None

    if record is None:
        logger.debug("Skipping manifest without string name/version: %s", path)
    return record


def _fold(resolution: ResolutionMap, record: ManifestRecord | None, wanted: Set[str]) -> None:
    if record is None or record.name not in wanted:
        return
    if resolution.offer(record):
        logger.debug("Selected %s@%s (depth %d) from %s",
                     record.name, record.version, record.depth, record.source_path)


def collect_installed_versions(
    paths: Iterable[Path],
    wanted: Set[str],
    *,
    workers: int = 1,
) -> ResolutionMap:
    """Fold a stream of manifest paths into a nearest-wins ``ResolutionMap``.

    Params:
        paths: manifest paths, typically from ``discovery.walk_manifests``
        wanted: exact, case-sensitive package names to keep
        workers: number of threads reading manifests; 1 reads sequentially

    An empty ``wanted`` set returns immediately without consuming ``paths``.
    """
    resolution = ResolutionMap()
    if not wanted:
        return resolution

    if workers <= 1:
        for path in paths:
            _fold(resolution, read_manifest(path), wanted)
        return resolution

    limit = workers * _QUEUE_FACTOR
    pending: set[Future[ManifestRecord | None]] = set()
    with ThreadPoolExecutor(max_workers=workers) as executor:
        for path in paths:
            pending.add(executor.submit(read_manifest, path))
            if len(pending) >= limit:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    _fold(resolution, future.result(), wanted)
        for future in pending:
            _fold(resolution, future.result(), wanted)

    return resolution


def missing_names(wanted: Iterable[str], resolution: ResolutionMap) -> list[str]:
    """Return wanted names with no resolved record, case-insensitively sorted."""
    return sorted({name for name in wanted if name not in resolution}, key=name_sort_key)


def name_sort_key(name: str) -> tuple[str, str]:
    """Case-insensitive ordering with a stable case-sensitive tiebreak."""
    return name.casefold(), name
