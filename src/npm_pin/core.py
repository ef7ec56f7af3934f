"""Core pinning entrypoints.

This module performs no output of its own so it can back both the CLI and
other build tooling that wants the report as data.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .config import Settings, load_settings
from .discovery import walk_manifests
from .models import PinReport, RootManifest
from .parsers.package_json import parse_root
from .report import build_report
from .resolver import collect_installed_versions

logger = logging.getLogger(__name__)


class PinError(RuntimeError):
    """Base error for precondition failures that stop a whole run."""


class DependencyRootError(PinError):
    """Raised when the dependency directory is missing or not a directory."""


class RootManifestError(PinError):
    """Raised when the project manifest cannot be read or is invalid."""


def _check_dependency_root(path: Path) -> None:
    if not path.is_dir():
        if path.exists():
            raise DependencyRootError(f"{path.name} is not a directory: {path}")
        raise DependencyRootError(f"{path.name} not found in {path.parent}")


def load_root_manifest(path: Path) -> RootManifest:
    """Parse the project manifest, raising RootManifestError on any failure."""
    try:
        return parse_root(path)
    except json.JSONDecodeError as exc:
        raise RootManifestError(f"Could not read {path}: invalid JSON ({exc.msg})") from exc
    except RecursionError as exc:
        raise RootManifestError(f"Could not read {path}: JSON nested too deeply") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise RootManifestError(f"Could not read {path}: {exc}") from exc
    except ValueError as exc:
        raise RootManifestError(f"Could not read {path}:{exc}") from exc


def pin_installed_versions(
    project_root: Path,
    settings: Settings | None = None,
) -> PinReport:
    """Resolve the installed version of every declared dependency.

    Params:
        project_root: directory holding the project manifest and its
            dependency directory
        settings: run settings; loaded from the project when None

    Returns: a ``PinReport`` with rows, missing names and the pinned excerpt

    Raises:
        DependencyRootError: the dependency directory is missing
        RootManifestError: the project manifest is unreadable or invalid
        ConfigError: settings were loaded here and are invalid
    """
    project_root = Path(project_root).resolve()
    if settings is None:
        settings = load_settings(project_root=project_root)

    dependency_root = project_root / settings.dependency_dir
    _check_dependency_root(dependency_root)

    root_manifest = load_root_manifest(project_root / settings.root_manifest)
    wanted = root_manifest.wanted
    if not wanted:
        logger.info("No dependencies declared in %s", settings.root_manifest)
        return PinReport()

    logger.info("Resolving %d declared package(s) under %s", len(wanted), dependency_root)
    paths = walk_manifests(
        dependency_root,
        manifest_name=settings.manifest_name,
        ignore_dirs=settings.ignore_dirs,
    )
    resolution = collect_installed_versions(paths, wanted, workers=settings.workers)

    report = build_report(root_manifest, resolution)
    logger.info(
        "Pinned %d of %d declared package(s); %d missing",
        len(resolution),
        len(wanted),
        len(report.missing),
    )
    return report
