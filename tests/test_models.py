"""Tests for npm_pin.models."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from npm_pin.models import (
    DEPENDENCIES,
    DEV_DEPENDENCIES,
    ManifestRecord,
    OutputRow,
    PinReport,
    ResolutionMap,
    RootManifest,
    depth_of,
)


def _record(name: str, version: str, depth: int) -> ManifestRecord:
    return ManifestRecord(name=name, version=version, source_path=Path("/x"), depth=depth)


class TestManifestRecord:
    def test_depth_counts_segments_from_filesystem_root(self):
        assert depth_of(Path("/a/b/package.json")) == 4
        assert depth_of(Path("/a/node_modules/b/package.json")) > depth_of(
            Path("/a/b/package.json")
        )

    def test_from_manifest_valid(self):
        path = Path("/p/node_modules/@scope/pkg/package.json")
        record = ManifestRecord.from_manifest({"name": "@scope/pkg", "version": "2.1.0"}, path)
        assert record == ManifestRecord("@scope/pkg", "2.1.0", path, len(path.parts))

    @pytest.mark.parametrize(
        "data",
        [
            {"version": "1.0.0"},
            {"name": "a"},
            {"name": 1, "version": "1.0.0"},
            {"name": "a", "version": 1},
            {"name": "a", "version": None},
            {"name": "", "version": "1.0.0"},
            ["a", "1.0.0"],
            "a@1.0.0",
            None,
        ],
    )
    def test_from_manifest_fails_closed(self, data):
        assert ManifestRecord.from_manifest(data, Path("/p/package.json")) is None

    def test_to_dict(self):
        record = _record("a", "1.0.0", 3)
        assert record.to_dict() == {
            "name": "a",
            "version": "1.0.0",
            "sourcePath": str(Path("/x")),
            "depth": 3,
        }


class TestResolutionMap:
    def test_first_offer_inserts(self):
        resolution = ResolutionMap()
        assert resolution.offer(_record("a", "1.0.0", 5)) is True
        assert resolution.get("a").version == "1.0.0"
        assert "a" in resolution
        assert len(resolution) == 1

    def test_shallower_replaces_deeper(self):
        resolution = ResolutionMap()
        resolution.offer(_record("a", "2.0.0", 5))
        assert resolution.offer(_record("a", "1.0.0", 3)) is True
        assert resolution.versions() == {"a": "1.0.0"}

    def test_deeper_and_equal_depth_are_ignored(self):
        resolution = ResolutionMap()
        resolution.offer(_record("a", "1.0.0", 3))
        assert resolution.offer(_record("a", "2.0.0", 5)) is False
        assert resolution.offer(_record("a", "3.0.0", 3)) is False
        assert resolution.versions() == {"a": "1.0.0"}

    def test_snapshot_is_a_copy(self):
        resolution = ResolutionMap()
        resolution.offer(_record("a", "1.0.0", 3))
        snap = resolution.snapshot()
        snap.clear()
        assert "a" in resolution

    def test_iterates_sorted_names(self):
        resolution = ResolutionMap()
        for name in ("c", "a", "b"):
            resolution.offer(_record(name, "1.0.0", 3))
        assert list(resolution) == ["a", "b", "c"]

    def test_concurrent_offers_keep_shallowest(self):
        resolution = ResolutionMap()
        records = [_record("a", f"{d}.0.0", d) for d in range(2, 202)]
        barrier = threading.Barrier(8)

        def feed(chunk):
            barrier.wait()
            for record in chunk:
                resolution.offer(record)

        threads = [threading.Thread(target=feed, args=(records[i::8],)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert resolution.get("a").depth == 2


class TestRootManifest:
    def test_wanted_is_union_of_groups(self):
        manifest = RootManifest.from_dict(
            {"dependencies": {"a": "^1", "b": "~2"}, "devDependencies": {"b": "*", "c": "1"}}
        )
        assert manifest.wanted == frozenset({"a", "b", "c"})
        assert list(manifest.entries()) == [
            ("a", DEPENDENCIES),
            ("b", DEPENDENCIES),
            ("b", DEV_DEPENDENCIES),
            ("c", DEV_DEPENDENCIES),
        ]

    def test_missing_or_null_groups_are_empty(self):
        manifest = RootManifest.from_dict({"name": "app", "dependencies": None})
        assert manifest.wanted == frozenset()
        assert list(manifest.entries()) == []


class TestPinReport:
    def test_excerpt_has_exactly_two_groups(self):
        report = PinReport(
            rows=(
                OutputRow("a", "1.0.0", DEPENDENCIES),
                OutputRow("t", "3.0.0", DEV_DEPENDENCIES),
            ),
            missing=("m",),
            declared=3,
        )
        assert report.excerpt == {
            "dependencies": {"a": "1.0.0"},
            "devDependencies": {"t": "3.0.0"},
        }
        assert report.to_dict()["totals"] == {"declared": 3, "pinned": 2, "missing": 1}
        assert report.to_dict()["hasMatches"] is True

    def test_empty_report(self):
        report = PinReport()
        assert report.has_matches is False
        assert report.excerpt == {"dependencies": {}, "devDependencies": {}}

    def test_row_rejects_unknown_group(self):
        with pytest.raises(ValueError):
            OutputRow("a", "1.0.0", "peerDependencies")
