"""
Byte-oriented recursive-descent JSON parser.

Parses raw JSON bytes into a tree of tagged JSON values, reporting the line
and column of the first problem on failure, and encodes strings and value
trees back into JSON text.
"""

from typing import IO
from typing import Any

from ._config import DEFAULT_MAX_DEPTH
from ._config import EncodeConfig
from ._config import ParseConfig
from ._encoder import dump
from ._encoder import dumps
from ._encoder import escape_as_json_string
from ._errors import ExtraTokenError
from ._errors import InsufficientTokenError
from ._errors import InvalidNumberError
from ._errors import InvalidStringError
from ._errors import NestingTooDeepError
from ._errors import NonStringKeyError
from ._errors import ParseError
from ._errors import UnexpectedTokenError
from ._parser import JsonParser
from ._parser import Source
from ._parser import parse as _parse_bytes
from ._profiling import HotPathStats
from ._profiling import clear_hot_path_stats
from ._profiling import get_hot_path_stats
from ._utf8_mapper import UTF8PositionMapper
from ._values import JsonArray
from ._values import JsonBoolean
from ._values import JsonNull
from ._values import JsonNumber
from ._values import JsonObject
from ._values import JsonString
from ._values import JsonValue
from ._values import from_python

__version__ = "0.1.0"


def _resolve_config(
    config: ParseConfig | None, kwargs: dict[str, Any]
) -> ParseConfig:
    if config is None:
        return ParseConfig(**kwargs)
    if kwargs:
        raise TypeError("pass either config or keyword options, not both")
    return config


def parse(
    source: Source, config: ParseConfig | None = None, **kwargs: Any
) -> JsonValue:
    """
    Parses JSON bytes into a value tree.

    Options are given either as a ParseConfig or as its keyword fields.
    """
    return _parse_bytes(source, _resolve_config(config, kwargs))


def parse_str(
    text: str, config: ParseConfig | None = None, **kwargs: Any
) -> JsonValue:
    """
    Parses JSON text by way of its UTF-8 encoding.

    Errors keep byte-based line and column numbers and additionally carry
    ``char_pos``, the offset of the failure within ``text``.
    """
    if not isinstance(text, str):
        raise TypeError(f"the JSON text must be str, not {type(text).__name__}")

    resolved = _resolve_config(config, kwargs)
    try:
        return _parse_bytes(text.encode("utf-8", "surrogatepass"), resolved)
    except ParseError as e:
        e.char_pos = UTF8PositionMapper(text).byte_to_char(e.pos)
        raise


def loads(s: str | bytes | bytearray, **kwargs: Any) -> Any:
    """
    Parses JSON into plain Python objects.

    Numbers always come back as floats, objects as dicts and arrays as lists.
    """
    if isinstance(s, str):
        value = parse_str(s, **kwargs)
    elif isinstance(s, bytes | bytearray):
        value = parse(s, **kwargs)
    else:
        raise TypeError(
            "the JSON object must be str, bytes or bytearray, "
            f"not {type(s).__name__}"
        )
    return value.to_python()


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> Any:
    """
    Parses JSON from a text or binary file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "EncodeConfig",
    "ExtraTokenError",
    "HotPathStats",
    "InsufficientTokenError",
    "InvalidNumberError",
    "InvalidStringError",
    "JsonArray",
    "JsonBoolean",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonParser",
    "JsonString",
    "JsonValue",
    "NestingTooDeepError",
    "NonStringKeyError",
    "ParseConfig",
    "ParseError",
    "UTF8PositionMapper",
    "UnexpectedTokenError",
    "clear_hot_path_stats",
    "dump",
    "dumps",
    "escape_as_json_string",
    "from_python",
    "get_hot_path_stats",
    "load",
    "loads",
    "parse",
    "parse_str",
]
