"""
Recursive-descent JSON parser over raw bytes.

The engine walks the source one byte at a time and keeps the cursor and its
(line, column) position in lockstep, so every error points at the byte that
caused it. Each grammar production is a method; objects and arrays recurse
back into ``parse_value``.
"""

import logging
import math
import re
from collections.abc import Iterator
from contextlib import contextmanager

from ._config import ParseConfig
from ._errors import ExtraTokenError
from ._errors import InsufficientTokenError
from ._errors import InvalidNumberError
from ._errors import InvalidStringError
from ._errors import NestingTooDeepError
from ._errors import NonStringKeyError
from ._errors import ParseError
from ._errors import UnexpectedTokenError
from ._profiling import ProfileContext
from ._values import FALSE
from ._values import NULL
from ._values import TRUE
from ._values import JsonArray
from ._values import JsonNumber
from ._values import JsonObject
from ._values import JsonString
from ._values import JsonValue

logger = logging.getLogger(__name__)

type Source = bytes | bytearray | memoryview

_NEWLINE = ord("\n")
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_MINUS = ord("-")
_ZERO = ord("0")
_LOWER_A = ord("a")
_LOWER_Z = ord("z")
_LOWER_U = ord("u")
_CONTROL_LIMIT = 0x20

_WHITESPACE = frozenset(b" \t\r\n")
_DIGITS = frozenset(b"0123456789")
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")

_UNESCAPES = {
    ord('"'): '"',
    ord("\\"): "\\",
    ord("/"): "/",
    ord("b"): "\b",
    ord("f"): "\f",
    ord("n"): "\n",
    ord("r"): "\r",
    ord("t"): "\t",
}

# Bytes that can be copied into a string buffer without inspection
_PLAIN_RUN = re.compile(rb'[^"\\\x00-\x1f]+')

_INT64_MAX = 2**63 - 1
_MAX_CODE_POINT = 0x10FFFF
_MAX_LENIENT_HEX_DIGITS = 8
_MIN_LENIENT_HEX_DIGITS = 2
# Any exponent past this overflows or underflows a double regardless of mantissa
_EXPONENT_CAP = 1000


def _is_identifier(byte: int) -> bool:
    """Only ``true``, ``false`` and ``null`` start with an identifier byte."""
    return _LOWER_A <= byte <= _LOWER_Z


def _scale(sign: float, mantissa: float, exponent: int) -> float:
    """Computes ``sign * mantissa * 10 ** exponent`` with IEEE overflow."""
    if mantissa == 0.0:
        return sign * 0.0
    try:
        return sign * mantissa * 10.0**exponent
    except OverflowError:
        return sign * math.inf


class JsonParser:
    """
    Single-use parser engine for one JSON document.

    Holds the source, the cursor and the line/column counters. Create one per
    document and call ``parse``; instances are not reusable.
    """

    def __init__(self, source: Source, config: ParseConfig | None = None):
        if not isinstance(source, bytes | bytearray | memoryview):
            raise TypeError(
                "the JSON source must be bytes, bytearray or memoryview, "
                f"not {type(source).__name__}"
            )

        self.source = bytes(source)
        self.config = config if config is not None else ParseConfig()
        self.cur = 0
        self.end = len(self.source)
        self.line = 1
        self.column = 1
        self.depth = 0

    def parse(self) -> JsonValue:
        """Parses exactly one value followed only by whitespace."""
        value = self.parse_value()
        self.skip_whitespaces()
        if self.cur != self.end:
            raise self._error(ExtraTokenError, "extra tokens found")
        return value

    # Productions

    def parse_value(self) -> JsonValue:
        """Dispatches on the first non-whitespace byte."""
        self.skip_whitespaces()
        if self.cur == self.end:
            raise self._error(
                InsufficientTokenError, "unexpected end of tokens"
            )

        byte = self.source[self.cur]
        if byte == ord("n"):
            return self.parse_symbol(b"null", NULL)
        elif byte == ord("t"):
            return self.parse_symbol(b"true", TRUE)
        elif byte == ord("f"):
            return self.parse_symbol(b"false", FALSE)
        elif byte == _MINUS or byte in _DIGITS:
            return self.parse_number()
        elif byte == _QUOTE:
            return self.parse_string()
        elif byte == ord("{"):
            return self.parse_object()
        elif byte == ord("["):
            return self.parse_array()
        else:
            raise self._error(
                UnexpectedTokenError,
                f"unexpected token: {self.current_symbol}",
            )

    def parse_symbol(self, target: bytes, value: JsonValue) -> JsonValue:
        """Matches a keyword literal or fails without moving the cursor."""
        with ProfileContext("parse_symbol", self):
            if self.expect(target):
                return value
            literal = target.decode("ascii")
            raise self._error(
                UnexpectedTokenError,
                f'expected "{literal}" but {self.current_symbol}',
            )

    def parse_string(self) -> JsonString:
        """Parses a string literal, decoding escapes into a fresh ``str``."""
        with ProfileContext("parse_string", self):
            start = (self.line, self.column, self.cur)
            self.advance()

            # Raw runs stay bytes until the closing quote; escapes are text.
            # Runs only end on ASCII bytes, so no UTF-8 sequence is split.
            chunks: list[bytes | str] = []
            allow_control = self.config.allow_control_characters

            while self.cur != self.end:
                # Runs contain no newline, so only the column moves
                run = _PLAIN_RUN.match(self.source, self.cur)
                if run is not None:
                    chunks.append(run.group())
                    self.column += run.end() - self.cur
                    self.cur = run.end()
                    continue

                byte = self.source[self.cur]
                if byte == _BACKSLASH:
                    self.advance()
                    if self.cur == self.end:
                        raise self._error(
                            InvalidStringError,
                            "unexpected end of a string literal",
                        )
                    char = self._parse_escaped_char()
                    if char is None:
                        raise self._error(
                            InvalidStringError, "invalid escape sequence"
                        )
                    chunks.append(char)
                elif byte == _QUOTE:
                    break
                elif byte < _CONTROL_LIMIT and not allow_control:
                    raise self._error(
                        InvalidStringError,
                        "invalid control character in string literal",
                    )
                else:
                    chunks.append(bytes((byte,)))
                self.advance()

            if not self.expect(b'"'):
                raise self._error(InvalidStringError, "missing double quote")

            try:
                text = "".join(
                    chunk if isinstance(chunk, str) else chunk.decode("utf-8")
                    for chunk in chunks
                )
            except UnicodeDecodeError as e:
                raise InvalidStringError(
                    "invalid UTF-8 in string literal", *start
                ) from e
            return JsonString(text)

    def parse_number(self) -> JsonNumber:
        """Parses a number into a double, guarding integer precision."""
        with ProfileContext("parse_number", self):
            sign = -1.0 if self.expect(b"-") else 1.0

            if self.cur == self.end or self.source[self.cur] not in _DIGITS:
                raise self._error(
                    InvalidNumberError, "missing integer part in number"
                )

            integer = 0
            if self.source[self.cur] == _ZERO:
                self.advance()
            else:
                while self.cur != self.end and self.source[self.cur] in _DIGITS:
                    integer = integer * 10 + (self.source[self.cur] - _ZERO)
                    if integer > _INT64_MAX:
                        raise self._error(
                            InvalidNumberError, "too large number"
                        )
                    self.advance()

            if integer != int(float(integer)):
                raise self._error(InvalidNumberError, "too large number")

            fraction = self._parse_fraction()
            exponent = self._parse_exponent()

            return JsonNumber(_scale(sign, integer + fraction, exponent))

    def _parse_fraction(self) -> float:
        fraction = 0.0
        if not self.expect(b"."):
            return fraction

        factor = 0.1
        length = 0
        while self.cur != self.end and self.source[self.cur] in _DIGITS:
            fraction += (self.source[self.cur] - _ZERO) * factor
            factor /= 10
            length += 1
            self.advance()

        if length == 0:
            raise self._error(
                InvalidNumberError, "insufficient fraction part in number"
            )
        return fraction

    def _parse_exponent(self) -> int:
        if not (self.expect(b"e") or self.expect(b"E")):
            return 0

        exp_sign = 1
        if self.expect(b"-"):
            exp_sign = -1
        else:
            self.expect(b"+")

        exponent = 0
        length = 0
        while self.cur != self.end and self.source[self.cur] in _DIGITS:
            if exponent < _EXPONENT_CAP:
                exponent = exponent * 10 + (self.source[self.cur] - _ZERO)
            length += 1
            self.advance()

        if length == 0:
            raise self._error(
                InvalidNumberError, "insufficient exponent part in number"
            )
        return exponent * exp_sign

    def parse_object(self) -> JsonObject:
        """Parses ``{...}``; duplicate keys keep the last value."""
        with ProfileContext("parse_object", self), self._nesting():
            self.advance()
            self.skip_whitespaces()

            members: dict[str, JsonValue] = {}
            if self.expect(b"}"):
                return JsonObject(members)

            while True:
                self.skip_whitespaces()
                key_position = (self.line, self.column, self.cur)
                key = self.parse_value()
                if not isinstance(key, JsonString):
                    raise NonStringKeyError(
                        "unexpected value for object key", *key_position
                    )

                self.skip_whitespaces()
                if not self.expect(b":"):
                    raise self._missing_delimiter("missing colon (:)")

                self.skip_whitespaces()
                members[key.value] = self.parse_value()
                self.skip_whitespaces()

                if self.expect(b","):
                    continue
                elif self.expect(b"}"):
                    break
                else:
                    raise self._missing_delimiter("missing comma (,)")

            return JsonObject(members)

    def parse_array(self) -> JsonArray:
        """Parses ``[...]``; a value is required after every comma."""
        with ProfileContext("parse_array", self), self._nesting():
            self.advance()
            self.skip_whitespaces()

            items: list[JsonValue] = []
            if self.expect(b"]"):
                return JsonArray(items)

            while True:
                value = self.parse_value()
                self.skip_whitespaces()
                items.append(value)

                if self.expect(b","):
                    continue
                elif self.expect(b"]"):
                    break
                else:
                    raise self._missing_delimiter(
                        f"missing comma (,) (token: {self.current_symbol})"
                    )

            return JsonArray(items)

    # Escapes

    def _parse_escaped_char(self) -> str | None:
        """
        Decodes the escape whose first byte is under the cursor.

        Leaves the cursor on the last byte of the escape. Returns None for an
        unknown or malformed escape.
        """
        byte = self.source[self.cur]
        if byte != _LOWER_U:
            return _UNESCAPES.get(byte)
        if self.config.lenient_unicode_escapes:
            return self._parse_lenient_unicode_escape()
        return self._parse_unicode_escape()

    def _peek_hex(self, offset: int, count: int) -> int | None:
        """Reads ``count`` hex digits starting ``offset`` bytes ahead."""
        start = self.cur + offset
        digits = self.source[start : start + count]
        if len(digits) != count or not all(d in _HEX_DIGITS for d in digits):
            return None
        return int(digits, 16)

    def _parse_unicode_escape(self) -> str | None:
        """Standard ``\\uXXXX`` with surrogate pair combination."""
        value = self._peek_hex(1, 4)
        if value is None:
            return None
        for _ in range(4):
            self.advance()

        followed_by_escape = self.source[self.cur + 1 : self.cur + 3] == rb"\u"
        if 0xD800 <= value <= 0xDBFF and followed_by_escape:
            low = self._peek_hex(3, 4)
            if low is not None and 0xDC00 <= low <= 0xDFFF:
                for _ in range(6):
                    self.advance()
                return chr(0x10000 + ((value - 0xD800) << 10) + (low - 0xDC00))

        return chr(value)

    def _parse_lenient_unicode_escape(self) -> str | None:
        """Legacy ``\\u`` form: 2 to 8 hex digits, surrogates kept as is."""
        length = 0
        value = 0
        while length < _MAX_LENIENT_HEX_DIGITS and self.cur + 1 != self.end:
            next_byte = self.source[self.cur + 1]
            if next_byte not in _HEX_DIGITS:
                break
            self.advance()
            length += 1
            value = (value << 4) | int(chr(next_byte), 16)

        if length < _MIN_LENIENT_HEX_DIGITS or value > _MAX_CODE_POINT:
            return None
        return chr(value)

    # Scanning primitives

    @property
    def current_symbol(self) -> str:
        """The byte under the cursor as a character, for messages."""
        if self.cur == self.end:
            return "end of input"
        return chr(self.source[self.cur])

    def advance(self) -> None:
        """Consumes one byte, updating line and column from that byte."""
        assert self.cur != self.end, "out of range"
        if self.source[self.cur] == _NEWLINE:
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.cur += 1

    def skip_whitespaces(self) -> None:
        """Advances past spaces, tabs, carriage returns and newlines."""
        while self.cur != self.end and self.source[self.cur] in _WHITESPACE:
            self.advance()

    def expect(self, target: bytes) -> bool:
        """
        Consumes ``target`` if the input continues with it.

        Punctuation is a single compare-and-advance. Keyword literals are
        matched byte by byte, and a partial match restores the cursor, line
        and column before returning False.
        """
        if self.cur == self.end:
            return False

        if not _is_identifier(target[0]):
            if self.source[self.cur] == target[0]:
                self.advance()
                return True
            return False

        snapshot = (self.cur, self.line, self.column)
        for byte in target:
            if self.cur == self.end or self.source[self.cur] != byte:
                self.cur, self.line, self.column = snapshot
                return False
            self.advance()
        return True

    # Helpers

    @contextmanager
    def _nesting(self) -> Iterator[None]:
        max_depth = self.config.max_depth
        self.depth += 1
        try:
            if max_depth is not None and self.depth > max_depth:
                raise self._error(NestingTooDeepError, "nesting too deep")
            yield
        finally:
            self.depth -= 1

    def _missing_delimiter(self, reason: str) -> ParseError:
        if self.cur == self.end:
            return self._error(
                InsufficientTokenError, "unexpected end of tokens"
            )
        return self._error(UnexpectedTokenError, reason)

    def _error(self, kind: type[ParseError], reason: str) -> ParseError:
        return kind(reason, self.line, self.column, self.cur)


def parse(source: Source, config: ParseConfig | None = None) -> JsonValue:
    """
    Parses one JSON document from bytes into a value tree.

    Raises a ParseError subclass carrying the line and column of the first
    problem found.
    """
    parser = JsonParser(source, config)
    try:
        return parser.parse()
    except ParseError as e:
        logger.debug(
            "JSON parse failed: %s (%s at byte %d)",
            e.reason,
            type(e).__name__,
            e.pos,
        )
        raise


__all__ = ["JsonParser", "Source", "parse"]
