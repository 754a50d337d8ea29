"""Open-element stack that checks tag nesting as tokens arrive."""

from . import diagnostics
from .constants import VOID_ELEMENTS
from .tokens import (
    CharacterTokens,
    CommentToken,
    DirectiveToken,
    EOFToken,
    RawTextToken,
    Tag,
    TokenSinkResult,
)


class StackEntry:
    __slots__ = ("name", "position")

    def __init__(self, name, position):
        self.name = name
        self.position = position

    def __repr__(self):
        return f"StackEntry({self.name!r}, line={self.position.line}, column={self.position.column})"


class TagStackMatcher:
    """Token sink for :class:`tagcheck.tokenizer.Tokenizer`.

    Stops the tokenizer at the first closing tag that does not match the
    innermost open element. ``result`` is ``None`` until a verdict exists.
    """

    __slots__ = ("debug", "open_elements", "result")

    def __init__(self, debug=False):
        self.debug = bool(debug)
        self.open_elements = []
        self.result = None

    def process_token(self, token):
        if self.debug:
            self._debug_token(token)

        if isinstance(token, Tag):
            if token.kind == Tag.START:
                if not token.self_closing:
                    self.open_elements.append(StackEntry(token.name, token.position))
                return TokenSinkResult.Continue
            return self._process_end_tag(token)

        if isinstance(token, EOFToken):
            self.finish()
            return TokenSinkResult.Stop

        # Text, comments, directives and raw text never touch the stack.
        return TokenSinkResult.Continue

    def _process_end_tag(self, token):
        name = token.name
        # "</br>" and "</div/>" never close anything.
        if token.self_closing or name in VOID_ELEMENTS:
            return TokenSinkResult.Continue
        if not self.open_elements:
            self.result = diagnostics.unexpected_closing_tag(name, token.position)
            return TokenSinkResult.Stop
        expected = self.open_elements[-1].name
        if expected != name:
            self.result = diagnostics.mismatched_tags(expected, name, token.position)
            return TokenSinkResult.Stop
        self.open_elements.pop()
        return TokenSinkResult.Continue

    def finish(self):
        if self.result is None:
            if self.open_elements:
                self.result = diagnostics.unclosed_tags(self.open_elements)
            else:
                self.result = diagnostics.structurally_valid()
        return self.result

    def _debug_token(self, token):
        """Print debug information about a token."""
        where = f"@{token.line}:{token.column}"
        if isinstance(token, Tag):
            kind = "StartTag" if token.kind == Tag.START else "EndTag"
            closing = " /" if token.self_closing else ""
            print(f"Token: {kind} {token.name}{closing} {where}")
        elif isinstance(token, (CharacterTokens, CommentToken, DirectiveToken)):
            if isinstance(token, CharacterTokens):
                type_ = "Character"
            elif isinstance(token, CommentToken):
                type_ = "Comment"
            else:
                type_ = "Directive"
            preview = token.data[:20] if len(token.data) > 20 else token.data
            suffix = "..." if len(token.data) > 20 else ""
            print(f"Token: {type_} {preview!r}{suffix} {where}")
        elif isinstance(token, RawTextToken):
            print(f"Token: RawText <{token.container}> ({len(token.data)} chars) {where}")
        else:
            print(f"Token: EOF {where}")
