"""Installed manifest discovery."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"

# Matched case-insensitively against directory names.
DEFAULT_IGNORED_DIRS = frozenset({".git", ".cache"})


def walk_manifests(
    root: Path | str,
    *,
    manifest_name: str = MANIFEST_NAME,
    ignore_dirs: Iterable[str] = DEFAULT_IGNORED_DIRS,
) -> Iterator[Path]:
    """Lazily yield absolute paths of every ``manifest_name`` file under root.

    Uses an explicit stack of pending directories so arbitrarily deep installs
    do not hit the recursion limit. Ignored directories are pruned with their
    whole subtree. Symlinks are neither followed nor yielded. Directories that
    cannot be listed are skipped; the generator itself never raises, so a
    missing or non-directory root simply yields nothing. Order is unspecified.
    """
    ignored = {name.lower() for name in ignore_dirs}
    stack = [Path(root).absolute()]

    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as exc:
            logger.debug("Skipping unreadable directory %s: %s", current, exc)
            continue

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    if entry.name.lower() in ignored:
                        continue
                    stack.append(current / entry.name)
                elif entry.name == manifest_name and entry.is_file(follow_symlinks=False):
                    yield current / entry.name
            except OSError as exc:
                logger.debug("Skipping entry %s: %s", entry.path, exc)
