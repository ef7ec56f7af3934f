"""Check a saved pin excerpt before pasting it into package.json.

The excerpt must have exactly the two dependency groups with non-empty
version strings. With ``--project`` every pinned name must also be declared
in the same group of that project's package.json.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from ..core import RootManifestError, load_root_manifest
from ..models import DEPENDENCIES, DEV_DEPENDENCIES, RootManifest
from ..parsers.package_json import EXCERPT_SCHEMA, schema_errors
from ..resolver import name_sort_key
from ..summary import EXCERPT_HEADER


def read_excerpt(path: Path) -> Any:
    """Decode an excerpt file, tolerating the ``//`` lines npm-pin prints around it."""
    text = path.read_text(encoding="utf-8")
    body = "\n".join(line for line in text.splitlines() if not line.lstrip().startswith("//"))
    return json.loads(body)


def excerpt_errors(document: Any, root_manifest: RootManifest | None = None) -> list[str]:
    """Return problems with an excerpt; empty when it is safe to paste."""
    errors = schema_errors(EXCERPT_SCHEMA, document)
    if errors or root_manifest is None:
        return errors

    declared = {
        DEPENDENCIES: root_manifest.dependencies,
        DEV_DEPENDENCIES: root_manifest.dev_dependencies,
    }
    for group in (DEPENDENCIES, DEV_DEPENDENCIES):
        for name in sorted(document[group], key=name_sort_key):
            if name not in declared[group]:
                errors.append(f"- {group}/{name}: not declared under {group} in package.json")
    return errors


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="npm-pin-validate",
        description="Validate a pinned excerpt, optionally against a project's declarations.",
    )
    parser.add_argument(
        "excerpt",
        type=Path,
        help=f"Excerpt JSON; comment lines such as '{EXCERPT_HEADER}' are ignored",
    )
    parser.add_argument(
        "--project",
        type=Path,
        default=None,
        help="Project directory whose package.json must declare every pinned name",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    root_manifest = None
    if args.project is not None:
        try:
            root_manifest = load_root_manifest(args.project / "package.json")
        except RootManifestError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    try:
        document = read_excerpt(args.excerpt)
    except OSError as exc:
        print(f"ERROR: Could not read {args.excerpt}: {exc}", file=sys.stderr)
        return 1
    except (ValueError, RecursionError) as exc:
        print(f"ERROR: {args.excerpt} is not a JSON excerpt: {exc}", file=sys.stderr)
        return 1

    errors = excerpt_errors(document, root_manifest)
    if errors:
        print(f"ERROR: {args.excerpt} cannot be pasted as-is:", file=sys.stderr)
        print("\n".join(errors), file=sys.stderr)
        return 1

    pinned = len(document[DEPENDENCIES]) + len(document[DEV_DEPENDENCIES])
    print(f"{args.excerpt}: {pinned} pinned version(s) OK")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
