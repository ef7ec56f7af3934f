"""Command line entrypoint.

Usage:
  npm-pin [--root DIR] [--config FILE] [--workers N] [--format text|json|markdown]
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, load_settings
from .core import PinError, pin_installed_versions
from .logging_config import setup_logging
from .models import PinReport
from .summary import render_summary, render_text

FORMATS = ("text", "json", "markdown")


def render(report: PinReport, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(report.to_dict(), indent=2) + "\n"
    if fmt == "markdown":
        return render_summary(report)
    return render_text(report)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="npm-pin",
        description="Pin declared npm dependencies to the versions installed in node_modules.",
    )
    parser.add_argument("--root", type=Path, default=Path("."), help="Project directory")
    parser.add_argument("--config", type=Path, default=None, help="Settings file (YAML)")
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads reading manifests (overrides settings)",
    )
    parser.add_argument("--format", choices=FORMATS, default="text")
    parser.add_argument("--output", type=Path, default=None, help="Write output to a file")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-q", "--quiet", action="store_true")
    parser.add_argument("--log-file", default=None)
    args = parser.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be >= 1")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    root = args.root.resolve()
    try:
        settings = load_settings(args.config, project_root=root)
        if args.workers is not None:
            settings = replace(settings, workers=args.workers)
        report = pin_installed_versions(root, settings)
    except (PinError, ConfigError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    output = render(report, args.format)
    if args.output is not None:
        try:
            args.output.write_text(output, encoding="utf-8")
        except OSError as exc:
            print(f"ERROR: Could not write {args.output}: {exc}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
