"""Data models for installed version resolution."""

from __future__ import annotations

from .manifest_record import ManifestRecord, depth_of
from .pin_report import OutputRow, PinReport
from .resolution_map import ResolutionMap
from .root_manifest import DEPENDENCIES, DEV_DEPENDENCIES, GROUPS, RootManifest

__all__ = [
    "DEPENDENCIES",
    "DEV_DEPENDENCIES",
    "GROUPS",
    "ManifestRecord",
    "OutputRow",
    "PinReport",
    "ResolutionMap",
    "RootManifest",
    "depth_of",
]
