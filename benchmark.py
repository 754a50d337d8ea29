#!/usr/bin/env python3
"""
Performance benchmark for tagcheck against full HTML parsers.
Reads *.html files from a directory, or builds a synthetic corpus of product
description snippets, and times one pass of each parser over every file.
"""

# ruff: noqa: PLC0415, BLE001
from __future__ import annotations

import argparse
import pathlib
import random
import sys
import time


def load_html_files(directory: pathlib.Path, limit: int | None) -> list:
    html_files = []
    for path in sorted(directory.rglob("*.html")):
        try:
            html_files.append((str(path), path.read_text(encoding="utf-8", errors="replace")))
        except OSError as e:
            print(f"  skipping {path}: {e}")
        if limit and len(html_files) >= limit:
            break
    return html_files


def synthetic_html_files(count: int, seed: int = 0) -> list:
    """Generate product-description sized snippets, about a tenth of them broken."""
    rng = random.Random(seed)
    features = ["High quality material", "Comfortable fit", "Machine washable", "Available in <em>6</em> colors"]
    html_files = []
    for i in range(count):
        items = "".join(f"\n    <li>{rng.choice(features)}</li>" for _ in range(rng.randint(2, 12)))
        closing = "</ul>" if rng.random() > 0.1 else "</div>"
        html = (
            f'<div class="product-description" data-sku="SKU-{i:05d}">\n'
            f"  <h3>Product Features</h3>\n"
            f"  <ul>{items}\n  {closing}\n"
            f'  <p>Made with <strong>premium materials</strong>.<br><img src="p{i}.jpg" alt="Product"></p>\n'
            f"  <script>window.sku = 'SKU-{i:05d}';</script>\n"
            f"</div>\n"
        )
        html_files.append((f"synthetic-{i:05d}.html", html * rng.randint(1, 20)))
    return html_files


def _time_calls(parse_fn, html_files: list, iterations: int) -> dict:
    times = []
    errors = 0
    error_files = []
    if html_files:
        try:
            parse_fn(html_files[0][1])
        except Exception:
            pass
    for _ in range(iterations):
        for filename, html in html_files:
            try:
                start = time.perf_counter()
                parse_fn(html)
                times.append(time.perf_counter() - start)
            except Exception as e:
                errors += 1
                error_files.append((filename, str(e)))
    return {
        "total_time": sum(times),
        "mean_time": sum(times) / len(times) if times else 0,
        "min_time": min(times) if times else 0,
        "max_time": max(times) if times else 0,
        "errors": errors,
        "success_count": len(times),
        "error_files": error_files,
    }


def benchmark_tagcheck(html_files: list, iterations: int = 1) -> dict:
    """Benchmark the tagcheck validator."""
    try:
        from tagcheck import validate_html
    except ImportError:
        return {"error": "tagcheck not importable"}
    results = _time_calls(validate_html, html_files, iterations)
    results["invalid_count"] = sum(1 for _, html in html_files if not validate_html(html).valid)
    return results


def benchmark_html5lib(html_files: list, iterations: int = 1) -> dict:
    """Benchmark html5lib parser."""
    try:
        import html5lib
    except ImportError:
        return {"error": "html5lib not installed (pip install html5lib)"}
    return _time_calls(html5lib.parse, html_files, iterations)


def benchmark_lxml(html_files: list, iterations: int = 1) -> dict:
    """Benchmark lxml parser."""
    try:
        from lxml import html as lxml_html
    except ImportError:
        return {"error": "lxml not installed (pip install lxml)"}
    return _time_calls(lxml_html.fromstring, html_files, iterations)


def benchmark_bs4(html_files: list, iterations: int = 1) -> dict:
    """Benchmark BeautifulSoup4 parser."""
    try:
        from bs4 import BeautifulSoup
    except ImportError:
        return {"error": "beautifulsoup4 not installed (pip install beautifulsoup4)"}
    return _time_calls(lambda html: BeautifulSoup(html, "html.parser"), html_files, iterations)


def benchmark_html_parser(html_files: list, iterations: int = 1) -> dict:
    """Benchmark stdlib html.parser with a tag-balance handler."""
    from html.parser import HTMLParser

    class BalanceParser(HTMLParser):
        def __init__(self):
            super().__init__()
            self.stack = []

        def handle_starttag(self, tag, attrs):
            self.stack.append(tag)

        def handle_endtag(self, tag):
            if self.stack and self.stack[-1] == tag:
                self.stack.pop()

    def parse(html):
        parser = BalanceParser()
        parser.feed(html)
        parser.close()
        return parser.stack

    return _time_calls(parse, html_files, iterations)


BENCHMARKS = {
    "tagcheck": benchmark_tagcheck,
    "html5lib": benchmark_html5lib,
    "lxml": benchmark_lxml,
    "bs4": benchmark_bs4,
    "html.parser": benchmark_html_parser,
}


def print_results(results: dict, file_count: int, iterations: int = 1):
    """Pretty print benchmark results."""
    print("\n" + "=" * 80)
    if iterations > 1:
        print(f"BENCHMARK RESULTS ({file_count} HTML files x {iterations} iterations)")
    else:
        print(f"BENCHMARK RESULTS ({file_count} HTML files)")
    print("=" * 80)

    print(f"\n{'Parser':<15} {'Total (s)':<10} {'Mean (ms)':<10} {'Errors':<8}")
    print("-" * 80)

    tagcheck_time = results.get("tagcheck", {}).get("total_time", 0)

    for name in BENCHMARKS:
        if name not in results:
            continue
        result = results[name]
        if "error" in result:
            print(f"{name:<15} {result['error']}")
            continue

        total = result["total_time"]
        mean_ms = result["mean_time"] * 1000
        speedup = ""
        if name != "tagcheck" and tagcheck_time > 0 and total > 0:
            speedup = f" ({total / tagcheck_time:.2f}x)"
        print(f"{name:<15} {total:<10.3f} {mean_ms:<10.3f} {result['errors']:<8}{speedup}")

    print("\n" + "=" * 80)
    if "invalid_count" in results.get("tagcheck", {}):
        print(f"\ntagcheck flagged {results['tagcheck']['invalid_count']} of {file_count} files as not well-formed")

    for name, result in results.items():
        error_files = result.get("error_files", [])
        if error_files:
            print(f"\nErrors for {name}:")
            for filename, error_msg in error_files[:10]:
                print(f"  {filename}: {error_msg}")


def main():
    parser = argparse.ArgumentParser(description="Benchmark tagcheck against HTML parsers")
    parser.add_argument("--dir", type=pathlib.Path, help="Directory of *.html files to benchmark")
    parser.add_argument("--synthetic", type=int, default=200, help="Synthetic files to generate when --dir is not given")
    parser.add_argument("--limit", type=int, default=100, help="Limit number of files (default: 100, use 0 for all)")
    parser.add_argument("--iterations", type=int, default=5, help="Iterations for averaging (default: 5)")
    parser.add_argument(
        "--parsers",
        nargs="+",
        choices=list(BENCHMARKS),
        default=list(BENCHMARKS),
        help="Parsers to benchmark (default: all)",
    )
    args = parser.parse_args()

    if args.dir:
        print(f"Loading HTML files from {args.dir}...")
        html_files = load_html_files(args.dir, args.limit if args.limit > 0 else None)
    else:
        html_files = synthetic_html_files(args.synthetic)
    if not html_files:
        print("ERROR: No HTML files loaded")
        sys.exit(1)
    total_bytes = sum(len(html) for _, html in html_files)
    print(f"Loaded {len(html_files)} HTML files ({total_bytes / 1024 / 1024:.2f} MB)")

    results = {}
    for name in args.parsers:
        print(f"\nBenchmarking {name}...", end="", flush=True)
        res = BENCHMARKS[name](html_files, args.iterations)
        results[name] = res
        if "error" in res:
            print(f" SKIPPED ({res['error']})")
        else:
            print(f" DONE ({res['total_time']:.3f}s)")

    print_results(results, len(html_files), args.iterations)


if __name__ == "__main__":
    main()
