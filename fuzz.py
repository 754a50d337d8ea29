#!/usr/bin/env python3
"""
Random fuzzer for the tagcheck validator.
Generates well-formed trees and malformed fragments and checks that the
validator never crashes, always agrees with itself, accepts every
well-formed tree and never reports void elements as unclosed.
"""

import argparse
import random
import string
import sys
import time
import traceback

from tagcheck import validate_html
from tagcheck.constants import VOID_ELEMENTS

TAGS = [
    "div", "span", "p", "a", "table", "tr", "td", "th", "ul", "ol", "li",
    "form", "button", "select", "option", "textarea", "h1", "h2", "h3",
    "section", "article", "header", "footer", "nav", "main", "figure", "strong", "em",
    "b", "i", "u", "code", "pre", "blockquote", "product-card", "svg", "g",
]
RAW_TEXT_TAGS = ["script", "style"]
VOID_TAGS = sorted(VOID_ELEMENTS)

ATTRIBUTES = ["id", "class", "style", "href", "src", "alt", "title", "data-x", "aria-label"]

TRICKY_VALUES = [
    "a > b", "</div>", "<p>", "it's", 'say "hi"', "/", "x/", "", "=", "<!--",
]


def random_string(min_len=0, max_len=20):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits + " ", k=length))


def random_case(name):
    return "".join(c.upper() if random.random() < 0.3 else c for c in name)


def fuzz_attribute():
    name = random.choice(ATTRIBUTES)
    value = random.choice(TRICKY_VALUES + [random_string()])
    if '"' not in value and random.random() < 0.6:
        return f' {name}="{value}"'
    if "'" not in value:
        return f" {name}='{value}'"
    return f" {name}"


def fuzz_attributes():
    return "".join(fuzz_attribute() for _ in range(random.randint(0, 3)))


def fuzz_text():
    variants = [
        lambda: random_string(1, 30),
        lambda: "a < b",
        lambda: "5 > 3",
        lambda: "x <> y",
        lambda: "&amp; &lt;",
        lambda: "\n" * random.randint(1, 3),
        lambda: "\r\n",
    ]
    return random.choice(variants)()


def fuzz_comment():
    body = random.choice([random_string(), "<div>", "</p>", "<script>", "-", ""])
    return f"<!--{body}-->"


def fuzz_raw_text():
    tag = random.choice(RAW_TEXT_TAGS)
    body = random.choice([
        "if (a < b) { x = '</div>'; }",
        "a > b { color: red }",
        "document.write('<p>')",
        "</" + tag + "s>",
        "",
    ])
    return f"<{random_case(tag)}{fuzz_attributes()}>{body}</{random_case(tag)}>"


def fuzz_void():
    tag = random.choice(VOID_TAGS)
    slash = random.choice(["", "/", " /"])
    return f"<{random_case(tag)}{fuzz_attributes()}{slash}>"


def fuzz_well_formed(depth=0, max_depth=6):
    """Generate a properly nested fragment."""
    parts = []
    for _ in range(random.randint(0, 4)):
        kind = random.random()
        if kind < 0.35 and depth < max_depth:
            tag = random.choice(TAGS)
            inner = fuzz_well_formed(depth + 1, max_depth)
            parts.append(f"<{random_case(tag)}{fuzz_attributes()}>{inner}</{random_case(tag)}>")
        elif kind < 0.5:
            parts.append(fuzz_void())
        elif kind < 0.6:
            parts.append(f"<{random.choice(TAGS)}{fuzz_attributes()} />")
        elif kind < 0.7:
            parts.append(fuzz_comment())
        elif kind < 0.8:
            parts.append(fuzz_raw_text())
        else:
            parts.append(fuzz_text())
    return "".join(parts)


def fuzz_malformed():
    """Generate a fragment with random open and close tags."""
    parts = []
    for _ in range(random.randint(1, 20)):
        kind = random.random()
        if kind < 0.3:
            parts.append(f"<{random_case(random.choice(TAGS))}{fuzz_attributes()}>")
        elif kind < 0.55:
            parts.append(f"</{random_case(random.choice(TAGS + VOID_TAGS))}>")
        elif kind < 0.65:
            parts.append(fuzz_void())
        elif kind < 0.7:
            parts.append(random.choice(["<", "</", "<!--", "<div", '<a title="', "<!DOCTYPE", "<script>"]))
        elif kind < 0.8:
            parts.append(fuzz_comment())
        else:
            parts.append(fuzz_text())
    return "".join(parts)


def generate_fuzzed_html():
    """Return ``(html, expected_valid)``; ``None`` when the verdict is unknown."""
    prefix = "<!DOCTYPE html>" if random.random() < 0.2 else ""
    if random.random() < 0.5:
        return prefix + fuzz_well_formed(), True
    return prefix + fuzz_malformed(), None


def check(html, expected_valid):
    """Return a list of violated properties for one input."""
    problems = []
    first = validate_html(html)
    second = validate_html(html)
    if first != second or first.outcome is not second.outcome:
        problems.append("not idempotent")
    if expected_valid is not None and first.valid != expected_valid:
        problems.append(f"expected valid={expected_valid}, got {first.reason!r}")
    if first.reason.startswith("Unclosed tags: "):
        names = first.reason[len("Unclosed tags: "):].split(", ")
        if any(name in VOID_ELEMENTS for name in names):
            problems.append(f"void element reported unclosed: {first.reason!r}")
    return problems


def run_fuzzer(num_tests, seed=None, verbose=False):
    """Run the fuzzer against the validator."""
    if seed is not None:
        random.seed(seed)

    failures = []
    crashes = []

    print(f"Fuzzing tagcheck with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        html, expected_valid = generate_fuzzed_html()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            problems = check(html, expected_valid)
        except Exception as e:
            crashes.append({"test_num": i, "html": html, "error": str(e), "traceback": traceback.format_exc()})
            if verbose:
                print(f"  CRASH: Test {i}: {e}")
            continue

        if problems:
            failures.append({"test_num": i, "html": html, "problems": problems})
            if verbose:
                print(f"  FAIL: Test {i}: {'; '.join(problems)}")

    elapsed_total = time.time() - start_time

    print(f"\n{'='*60}")
    print("FUZZING RESULTS: tagcheck")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Failures:       {len(failures)}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    if elapsed_total > 0:
        print(f"Tests/second:   {num_tests/elapsed_total:.1f}")

    for crash in crashes[:10]:
        print(f"\nCrash #{crash['test_num']}:")
        print(f"  HTML: {crash['html'][:200]!r}")
        print(f"  Error: {crash['error']}")
    for failure in failures[:10]:
        print(f"\nFailure #{failure['test_num']}:")
        print(f"  HTML: {failure['html'][:200]!r}")
        for problem in failure["problems"]:
            print(f"  - {problem}")

    return not failures and not crashes


def main():
    parser = argparse.ArgumentParser(description="Fuzz the tagcheck validator")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed HTML documents (no validation)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            html, _ = generate_fuzzed_html()
            print(f"=== Sample {i+1} ===")
            print(html)
            print()
        return

    success = run_fuzzer(args.num_tests, seed=args.seed, verbose=args.verbose)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
