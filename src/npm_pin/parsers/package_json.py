"""Parse package.json files: the project's own and the installed ones."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from ..models import ManifestRecord, RootManifest

_SCHEMA_DIR = Path(__file__).resolve().parents[1] / "schemas"
ROOT_MANIFEST_SCHEMA = _SCHEMA_DIR / "root-manifest.schema.json"
EXCERPT_SCHEMA = _SCHEMA_DIR / "excerpt.schema.json"


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def parse_installed(path: Path) -> ManifestRecord | None:
    """Return the record for an installed package.json, or None if unusable.

    Raises OSError, ValueError (including UnicodeDecodeError) or
    RecursionError when the file cannot be read or decoded; callers decide
    whether that is fatal.
    """
    return ManifestRecord.from_manifest(_load_json(path), path)


def schema_errors(schema_path: Path, data: Any) -> list[str]:
    """Return violations of the schema at ``schema_path`` as "- pointer: message" lines."""
    validator = Draft202012Validator(_load_json(schema_path))
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return messages


def parse_root(path: Path) -> RootManifest:
    """Read the project package.json and return its declared dependency groups.

    Raises:
        OSError: the file cannot be read.
        ValueError: the content is not JSON or does not match the schema.
    """
    data = _load_json(path)
    errors = schema_errors(ROOT_MANIFEST_SCHEMA, data)
    if errors:
        raise ValueError("\n" + "\n".join(errors))
    return RootManifest.from_dict(data)
