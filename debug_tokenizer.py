#!/usr/bin/env python3
"""Print the token stream and verdict for one input."""

import argparse
import sys
from pathlib import Path

from tagcheck import validate_html
from tagcheck.tokenizer import Tokenizer, TokenizerOpts


def debug_input(html, rawtext_tag=None):
    opts = TokenizerOpts(discard_bom=False)
    if rawtext_tag:
        opts = TokenizerOpts(
            discard_bom=False, initial_state=Tokenizer.RAWTEXT, initial_rawtext_tag=rawtext_tag.lower()
        )
    print(f"Input: {html[:200]!r}{'...' if len(html) > 200 else ''}")
    print()
    result = validate_html(html, debug=True, tokenizer_opts=opts)
    print()
    print(f"valid:  {result.valid}")
    print(f"reason: {result.reason}")
    return result


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Dump tagcheck tokens for an input")
    parser.add_argument("html", nargs="?", help="Markup to inspect (use --file to read a file)")
    parser.add_argument("--file", "-f", type=Path, help="Read markup from a file")
    parser.add_argument("--rawtext", metavar="TAG", help="Start inside a raw-text element, e.g. script")
    args = parser.parse_args()

    if args.file:
        source = args.file.read_text(encoding="utf-8")
    elif args.html is not None:
        source = args.html
    else:
        print("Usage: python debug_tokenizer.py '<div>Content</p>'")
        print("       python debug_tokenizer.py --file page.html")
        sys.exit(1)

    sys.exit(0 if debug_input(source, args.rawtext).valid else 1)
