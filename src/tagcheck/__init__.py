from .diagnostics import Outcome, StrictValidationError, ValidationResult
from .validator import validate_html

__all__ = [
    "Outcome",
    "StrictValidationError",
    "ValidationResult",
    "validate_html",
]
