"""Command line entry point.

Usage:
    tagcheck page.html snippets/*.html
    cat description.html | tagcheck --json

Exit status is 0 when every input is well-formed, 1 when any input is not,
and 2 when an input cannot be read.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .validator import validate_html

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tagcheck", description="Check that HTML tags are properly nested")
    parser.add_argument("paths", nargs="*", default=["-"], help="Files to check ('-' or nothing reads stdin)")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per input")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only report invalid inputs")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    status = EXIT_OK
    for path in args.paths:
        try:
            html = _read_input(path)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: {path}: {exc}", file=sys.stderr)
            status = EXIT_UNREADABLE
            continue

        result = validate_html(html)
        if not result.valid and status == EXIT_OK:
            status = EXIT_INVALID
        if args.quiet and result.valid:
            continue

        label = "<stdin>" if path == "-" else path
        if args.json:
            print(json.dumps({"path": label, **result.as_dict()}))
        else:
            print(f"{label}: {result.reason}")

    return status


if __name__ == "__main__":
    raise SystemExit(main())
