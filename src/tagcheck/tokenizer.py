import re

from .constants import RAWTEXT_ELEMENTS, RAWTEXT_END_PATTERNS, TAG_NAME_TERMINATORS, VOID_ELEMENTS, WHITESPACE
from .tokens import (
    CharacterTokens,
    CommentToken,
    DirectiveToken,
    EOFToken,
    RawTextToken,
    Tag,
    TokenSinkResult,
)

_ASCII_LOWER_TABLE = str.maketrans({chr(code): chr(code + 32) for code in range(65, 91)})
_TAG_NAME_TERMINATOR_PATTERN = re.compile(f"[{re.escape(TAG_NAME_TERMINATORS)}]")
_TAG_BODY_PATTERN = re.compile("[=>]")


def _is_ascii_alpha(c):
    return ("a" <= c <= "z") or ("A" <= c <= "Z")


def _rawtext_end_pattern(name):
    pattern = RAWTEXT_END_PATTERNS.get(name)
    if pattern is None:
        pattern = re.compile(rf"</{re.escape(name)}(?=[\t\n\f\r />]|$)", re.IGNORECASE)
    return pattern


class TokenizerOpts:
    __slots__ = ("discard_bom", "initial_rawtext_tag", "initial_state")

    def __init__(self, discard_bom=True, initial_state=None, initial_rawtext_tag=None):
        self.discard_bom = bool(discard_bom)
        self.initial_state = initial_state
        self.initial_rawtext_tag = initial_rawtext_tag


class Tokenizer:
    """Single-pass scanner that pushes positioned tokens into a sink.

    The sink exposes ``process_token(token)`` and may answer
    ``TokenSinkResult.Stop`` to end the scan early. Every token records the
    absolute offset, line and column of its first character.
    """

    DATA = 0
    TAG_OPEN = 1
    END_TAG_OPEN = 2
    TAG_NAME = 3
    TAG_ATTRIBUTES = 4
    BEFORE_ATTRIBUTE_VALUE = 5
    ATTRIBUTE_VALUE_QUOTED = 6
    MARKUP_DECLARATION_OPEN = 7
    COMMENT = 8
    CDATA_SECTION = 9
    DIRECTIVE = 10
    RAWTEXT = 11
    STOPPED = 12

    __slots__ = (
        "buffer",
        "current_quote",
        "current_tag_kind",
        "current_tag_last_char",
        "current_tag_name",
        "length",
        "line",
        "line_pos",
        "line_start",
        "opts",
        "pos",
        "rawtext_tag_name",
        "sink",
        "state",
        "tag_start",
        "text_start",
    )

    def __init__(self, sink, opts=None):
        self.sink = sink
        self.opts = opts or TokenizerOpts()

        self.state = self.DATA
        self.buffer = ""
        self.length = 0
        self.pos = 0
        self.text_start = 0
        self.tag_start = 0
        self.line = 1
        self.line_start = 0
        self.line_pos = 0
        self.current_tag_kind = Tag.START
        self.current_tag_name = ""
        self.current_tag_last_char = ""
        self.current_quote = ""
        self.rawtext_tag_name = None

    def run(self, html):
        if html and html[0] == "\ufeff" and self.opts.discard_bom:
            html = html[1:]

        self.buffer = html or ""
        self.length = len(self.buffer)
        self.pos = 0
        self.text_start = 0
        self.tag_start = 0
        self.line = 1
        self.line_start = 0
        self.line_pos = 0
        self.current_tag_kind = Tag.START
        self.current_tag_name = ""
        self.current_tag_last_char = ""
        self.current_quote = ""
        self.rawtext_tag_name = self.opts.initial_rawtext_tag

        initial_state = self.opts.initial_state
        if isinstance(initial_state, int):
            self.state = initial_state
        else:
            self.state = self.DATA

        while True:
            state = self.state
            if state == self.DATA:
                if self._state_data():
                    break
            elif state == self.TAG_OPEN:
                if self._state_tag_open():
                    break
            elif state == self.END_TAG_OPEN:
                if self._state_end_tag_open():
                    break
            elif state == self.TAG_NAME:
                if self._state_tag_name():
                    break
            elif state == self.TAG_ATTRIBUTES:
                if self._state_tag_attributes():
                    break
            elif state == self.BEFORE_ATTRIBUTE_VALUE:
                if self._state_before_attribute_value():
                    break
            elif state == self.ATTRIBUTE_VALUE_QUOTED:
                if self._state_attribute_value_quoted():
                    break
            elif state == self.MARKUP_DECLARATION_OPEN:
                if self._state_markup_declaration_open():
                    break
            elif state == self.COMMENT:
                if self._state_comment():
                    break
            elif state == self.CDATA_SECTION:
                if self._state_cdata_section():
                    break
            elif state == self.DIRECTIVE:
                if self._state_directive():
                    break
            elif state == self.RAWTEXT:
                if self._state_rawtext():
                    break
            elif state == self.STOPPED:
                break
            else:
                # Unknown state fallback to data.
                self.state = self.DATA

    # ---------------------
    # State handlers
    # ---------------------

    def _state_data(self):
        lt_index = self.buffer.find("<", self.pos)
        if lt_index == -1:
            self.pos = self.length
            self._flush_text(self.length)
            self._emit_token(EOFToken(*self._locate(self.length)))
            return True
        self.tag_start = lt_index
        self.pos = lt_index + 1
        self.state = self.TAG_OPEN
        return False

    def _state_tag_open(self):
        c = self._peek_char(0)
        if c is None:
            # A lone "<" at EOF stays text.
            self.state = self.DATA
            return False
        if c == "!":
            self.pos += 1
            self.state = self.MARKUP_DECLARATION_OPEN
            return False
        if c == "/":
            self.pos += 1
            self.state = self.END_TAG_OPEN
            return False
        if c == "?":
            self.state = self.DIRECTIVE
            return False
        if _is_ascii_alpha(c):
            self._start_tag(Tag.START)
            self.state = self.TAG_NAME
            return False
        # "a < b": not markup.
        self.state = self.DATA
        return False

    def _state_end_tag_open(self):
        c = self._peek_char(0)
        if c is not None and _is_ascii_alpha(c):
            self._start_tag(Tag.END)
            self.state = self.TAG_NAME
            return False
        self.state = self.DATA
        return False

    def _state_tag_name(self):
        start = self.pos
        match = _TAG_NAME_TERMINATOR_PATTERN.search(self.buffer, start)
        if match is None:
            return self._eof_in_tag()
        end = match.start()
        self.current_tag_name = self.buffer[start:end].translate(_ASCII_LOWER_TABLE)
        self.pos = end
        self.state = self.TAG_ATTRIBUTES
        return False

    def _state_tag_attributes(self):
        buffer = self.buffer
        pos = self.pos
        match = _TAG_BODY_PATTERN.search(buffer, pos)
        if match is None:
            return self._eof_in_tag()
        index = match.start()
        segment = buffer[pos:index].rstrip(WHITESPACE)
        if segment:
            self.current_tag_last_char = segment[-1]
        if match.group() == "=":
            self.current_tag_last_char = "="
            self.pos = index + 1
            self.state = self.BEFORE_ATTRIBUTE_VALUE
            return False
        self.pos = index + 1
        self._emit_current_tag()
        return False

    def _state_before_attribute_value(self):
        buffer = self.buffer
        length = self.length
        pos = self.pos
        while pos < length and buffer[pos] in WHITESPACE:
            pos += 1
        self.pos = pos
        if pos >= length:
            return self._eof_in_tag()
        c = buffer[pos]
        if c == '"' or c == "'":
            self.current_quote = c
            self.pos = pos + 1
            self.state = self.ATTRIBUTE_VALUE_QUOTED
            return False
        # Unquoted value: ends at whitespace or ">", which the attribute scan handles.
        self.state = self.TAG_ATTRIBUTES
        return False

    def _state_attribute_value_quoted(self):
        end = self.buffer.find(self.current_quote, self.pos)
        if end == -1:
            return self._eof_in_tag()
        self.current_tag_last_char = self.current_quote
        self.current_quote = ""
        self.pos = end + 1
        self.state = self.TAG_ATTRIBUTES
        return False

    def _state_markup_declaration_open(self):
        if self._consume_if("--"):
            self.state = self.COMMENT
            return False
        if self._consume_if("[CDATA["):
            self.state = self.CDATA_SECTION
            return False
        # DOCTYPE and any other declaration.
        self.state = self.DIRECTIVE
        return False

    def _state_comment(self):
        buffer = self.buffer
        pos = self.pos
        if self._consume_if(">") or self._consume_if("->"):
            # Abrupt closing of empty comment: <!--> or <!--->
            self._emit_comment("")
            return False
        end = buffer.find("-->", pos)
        if end == -1:
            data = buffer[pos:]
            self.pos = self.length
        else:
            data = buffer[pos:end]
            self.pos = end + 3
        self._emit_comment(data)
        return False

    def _state_cdata_section(self):
        end = self.buffer.find("]]>", self.pos)
        self.pos = self.length if end == -1 else end + 3
        self._emit_directive()
        return False

    def _state_directive(self):
        end = self.buffer.find(">", self.pos)
        self.pos = self.length if end == -1 else end + 1
        self._emit_directive()
        return False

    def _state_rawtext(self):
        name = self.rawtext_tag_name
        if not name:
            self.state = self.DATA
            return False
        start = self.pos
        match = _rawtext_end_pattern(name).search(self.buffer, start)
        end = self.length if match is None else match.start()
        self._flush_text(start)
        self._emit_token(RawTextToken(name, self.buffer[start:end], *self._locate(start)))
        self.pos = end
        self.text_start = end
        self.rawtext_tag_name = None
        if self.state == self.RAWTEXT:
            self.state = self.DATA
        return False

    # ---------------------
    # Helper methods
    # ---------------------

    def _peek_char(self, offset):
        """Peek ahead at character at current position + offset without consuming"""
        peek_pos = self.pos + offset
        if peek_pos < self.length:
            return self.buffer[peek_pos]
        return None

    def _consume_if(self, literal):
        end = self.pos + len(literal)
        if end > self.length:
            return False
        if self.buffer[self.pos : end] != literal:
            return False
        self.pos = end
        return True

    def _locate(self, offset):
        """Return ``(offset, line, column)``; offsets must not decrease between calls."""
        buffer = self.buffer
        line_pos = self.line_pos
        if offset > line_pos:
            newlines = buffer.count("\n", line_pos, offset)
            if newlines:
                self.line += newlines
                self.line_start = buffer.rfind("\n", line_pos, offset) + 1
            self.line_pos = offset
        return offset, self.line, offset - self.line_start

    def _start_tag(self, kind):
        self.current_tag_kind = kind
        self.current_tag_name = ""
        self.current_tag_last_char = ""
        self.current_quote = ""

    def _eof_in_tag(self):
        # The incomplete tag runs to EOF and is kept as text.
        self.pos = self.length
        self.state = self.DATA
        return False

    def _flush_text(self, end):
        start = self.text_start
        if end > start:
            self._emit_token(CharacterTokens(self.buffer[start:end], *self._locate(start)))
        self.text_start = end

    def _emit_current_tag(self):
        name = self.current_tag_name
        kind = self.current_tag_kind
        self_closing = self.current_tag_last_char == "/"
        if kind == Tag.START and name in VOID_ELEMENTS:
            self_closing = True
        self._flush_text(self.tag_start)
        self.state = self.DATA
        self._emit_token(Tag(kind, name, self_closing, *self._locate(self.tag_start)))
        self.text_start = self.pos
        if self.state == self.STOPPED:
            return
        if kind == Tag.START and not self_closing and name in RAWTEXT_ELEMENTS:
            self.rawtext_tag_name = name
            self.state = self.RAWTEXT

    def _emit_comment(self, data):
        self._flush_text(self.tag_start)
        self.state = self.DATA
        self._emit_token(CommentToken(data, *self._locate(self.tag_start)))
        self.text_start = self.pos

    def _emit_directive(self):
        self._flush_text(self.tag_start)
        self.state = self.DATA
        data = self.buffer[self.tag_start : self.pos]
        self._emit_token(DirectiveToken(data, *self._locate(self.tag_start)))
        self.text_start = self.pos

    def _emit_token(self, token):
        if self.state == self.STOPPED:
            return
        result = self.sink.process_token(token)
        if result == TokenSinkResult.Stop:
            self.state = self.STOPPED
