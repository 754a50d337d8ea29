"""Well-formedness entry point."""

from . import diagnostics
from .diagnostics import StrictValidationError
from .matcher import TagStackMatcher
from .tokenizer import Tokenizer, TokenizerOpts


def _is_blank(html):
    # U+FEFF counts as blank, as in ECMAScript String.prototype.trim.
    return not html.replace("\ufeff", "").strip()


def validate_html(html=None, *, debug=False, strict=False, tokenizer_opts=None):
    """Check that the tags in ``html`` form a properly nested tree.

    Returns a :class:`~tagcheck.diagnostics.ValidationResult`. Malformed
    markup is reported in the result, never raised, unless ``strict`` is set,
    in which case any invalid result raises :class:`StrictValidationError`.

    Positions are offsets into ``html`` exactly as given; a leading byte
    order mark is kept and counted unless ``tokenizer_opts`` says otherwise.
    """
    if not isinstance(html, str):
        result = diagnostics.input_type_error()
    elif _is_blank(html):
        result = diagnostics.trivially_valid()
    else:
        matcher = TagStackMatcher(debug=debug)
        tokenizer = Tokenizer(matcher, tokenizer_opts or TokenizerOpts(discard_bom=False))
        tokenizer.run(html)
        result = matcher.finish()

    if strict and not result.valid:
        raise StrictValidationError(result)
    return result
