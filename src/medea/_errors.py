"""Parse error hierarchy with line and column diagnostics."""

type Position = int


class ParseError(ValueError):
    """
    Handles JSON parsing failures with precise position information.

    Carries the reason, the 1-based line and byte column at the point of
    failure, and the byte offset into the source. ``char_pos`` is filled in
    by the text wrappers once the byte offset is mapped back to a character
    offset.
    """

    def __init__(
        self, reason: str, line: int = 1, column: int = 1, pos: Position = 0
    ) -> None:
        if not isinstance(reason, str):
            raise TypeError("reason must be a string")
        if line < 1 or column < 1:
            raise ValueError("line and column must be positive")

        self.reason = reason
        self.line = line
        self.column = column
        self.pos = pos
        self.char_pos: Position | None = None

        super().__init__(f"{reason} at line {line}, column {column}")

    def __reduce__(self) -> tuple[type, tuple[str, int, int, Position]]:
        return (type(self), (self.reason, self.line, self.column, self.pos))


class ExtraTokenError(ParseError):
    """Non-whitespace content follows a complete value."""


class InsufficientTokenError(ParseError):
    """Input ended where a value or delimiter was required."""


class UnexpectedTokenError(ParseError):
    """A byte cannot start or continue the current production."""


class InvalidStringError(ParseError):
    """Malformed string literal or escape sequence."""


class InvalidNumberError(ParseError):
    """Malformed or unrepresentable number literal."""


class NonStringKeyError(ParseError):
    """An object key parsed to something other than a string."""


class NestingTooDeepError(ParseError):
    """Objects and arrays are nested deeper than the configured limit."""


__all__ = [
    "ExtraTokenError",
    "InsufficientTokenError",
    "InvalidNumberError",
    "InvalidStringError",
    "NestingTooDeepError",
    "NonStringKeyError",
    "ParseError",
    "Position",
    "UnexpectedTokenError",
]
