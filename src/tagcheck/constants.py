"""Element tables and reason strings.

Usage:
    from tagcheck.constants import VOID_ELEMENTS, RAWTEXT_ELEMENTS

References:
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
    - https://html.spec.whatwg.org/multipage/syntax.html#raw-text-elements
"""

import re

# Elements that never take a closing tag.
VOID_ELEMENTS = frozenset(
    [
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    ]
)

# Elements whose body is not scanned for nested tags.
RAWTEXT_ELEMENTS = frozenset(["script", "style"])

# A raw-text body ends at "</name" followed by a tag-name terminator or EOF.
RAWTEXT_END_PATTERNS = {
    name: re.compile(rf"</{name}(?=[\t\n\f\r />]|$)", re.IGNORECASE) for name in RAWTEXT_ELEMENTS
}

WHITESPACE = "\t\n\f\r "
TAG_NAME_TERMINATORS = "\t\n\f\r /><"

REASON_INPUT_TYPE = "Input must be a string"
REASON_EMPTY = "Empty string is valid"
REASON_VALID = "HTML is valid"
REASON_MISMATCHED = "Mismatched tags: expected </{expected}> but found </{found}> at line {line}, position {column}"
REASON_UNEXPECTED = "Unexpected closing tag </{name}> at line {line}, position {column}"
REASON_UNCLOSED = "Unclosed tags: {names}"
