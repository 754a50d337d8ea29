"""Validation results and the reason strings that describe them."""

import enum

from .constants import (
    REASON_EMPTY,
    REASON_INPUT_TYPE,
    REASON_MISMATCHED,
    REASON_UNCLOSED,
    REASON_UNEXPECTED,
    REASON_VALID,
)


class Outcome(enum.Enum):
    INPUT_TYPE_ERROR = "input-type-error"
    TRIVIALLY_VALID = "trivially-valid"
    STRUCTURALLY_VALID = "structurally-valid"
    MISMATCHED_TAGS = "mismatched-tags"
    UNEXPECTED_CLOSING_TAG = "unexpected-closing-tag"
    UNCLOSED_TAGS = "unclosed-tags"


class ValidationResult:
    """Two-field verdict: ``valid`` and a human-readable ``reason``.

    ``outcome`` tells callers which case produced the reason without parsing
    it; it takes no part in equality or ``as_dict()``.
    """

    __slots__ = ("outcome", "reason", "valid")

    def __init__(self, valid, reason, outcome=None):
        self.valid = bool(valid)
        self.reason = reason
        self.outcome = outcome

    def as_dict(self):
        return {"valid": self.valid, "reason": self.reason}

    def __bool__(self):
        return self.valid

    def __repr__(self):
        return f"ValidationResult(valid={self.valid!r}, reason={self.reason!r})"

    def __eq__(self, other):
        if isinstance(other, dict):
            return self.as_dict() == other
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self.valid == other.valid and self.reason == other.reason

    __hash__ = None  # Unhashable since we define __eq__


class StrictValidationError(Exception):
    """Raised by strict validation when the input is not well-formed."""

    def __init__(self, result):
        self.result = result
        super().__init__(result.reason)


def input_type_error():
    return ValidationResult(False, REASON_INPUT_TYPE, Outcome.INPUT_TYPE_ERROR)


def trivially_valid():
    return ValidationResult(True, REASON_EMPTY, Outcome.TRIVIALLY_VALID)


def structurally_valid():
    return ValidationResult(True, REASON_VALID, Outcome.STRUCTURALLY_VALID)


def mismatched_tags(expected, found, position):
    reason = REASON_MISMATCHED.format(expected=expected, found=found, line=position.line, column=position.column)
    return ValidationResult(False, reason, Outcome.MISMATCHED_TAGS)


def unexpected_closing_tag(name, position):
    reason = REASON_UNEXPECTED.format(name=name, line=position.line, column=position.column)
    return ValidationResult(False, reason, Outcome.UNEXPECTED_CLOSING_TAG)


def unclosed_tags(entries):
    """Report leftover stack entries innermost first (pop order)."""
    names = ", ".join(entry.name for entry in reversed(entries))
    return ValidationResult(False, REASON_UNCLOSED.format(names=names), Outcome.UNCLOSED_TAGS)
