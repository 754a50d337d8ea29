class Position:
    """Line (1-indexed) and column (0-indexed) of an absolute offset."""

    __slots__ = ("column", "line", "pos")

    def __init__(self, pos, line, column):
        self.pos = pos
        self.line = line
        self.column = column

    def __repr__(self):
        return f"Position(pos={self.pos}, line={self.line}, column={self.column})"

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return self.pos == other.pos and self.line == other.line and self.column == other.column

    __hash__ = None


class Token:
    __slots__ = ("column", "line", "pos")

    def __init__(self, pos=0, line=1, column=0):
        self.pos = pos
        self.line = line
        self.column = column

    @property
    def position(self):
        return Position(self.pos, self.line, self.column)


class Tag(Token):
    __slots__ = ("kind", "name", "self_closing")

    START = 0
    END = 1

    def __init__(self, kind, name, self_closing=False, pos=0, line=1, column=0):
        super().__init__(pos, line, column)
        self.kind = kind
        self.name = name
        self.self_closing = bool(self_closing)

    def __repr__(self):
        closing = " /" if self.self_closing else ""
        kind_str = "start" if self.kind == self.START else "end"
        return f"<{kind_str}:{self.name}{closing} @{self.line}:{self.column}>"


class CharacterTokens(Token):
    __slots__ = ("data",)

    def __init__(self, data, pos=0, line=1, column=0):
        super().__init__(pos, line, column)
        self.data = data


class CommentToken(Token):
    __slots__ = ("data",)

    def __init__(self, data, pos=0, line=1, column=0):
        super().__init__(pos, line, column)
        self.data = data


class DirectiveToken(Token):
    """A markup declaration (`<!DOCTYPE html>`, `<![CDATA[..]]>`) or `<?..?>`."""

    __slots__ = ("data",)

    def __init__(self, data, pos=0, line=1, column=0):
        super().__init__(pos, line, column)
        self.data = data


class RawTextToken(Token):
    """Unparsed body of a raw-text element such as `script` or `style`."""

    __slots__ = ("container", "data")

    def __init__(self, container, data, pos=0, line=1, column=0):
        super().__init__(pos, line, column)
        self.container = container
        self.data = data


class EOFToken(Token):
    __slots__ = ()


class TokenSinkResult:
    __slots__ = ()

    Continue = 0
    Stop = 1
