"""String escaping and compact serialization."""

import math
from typing import IO
from typing import Any

from ._config import EncodeConfig
from ._values import JsonArray
from ._values import JsonBoolean
from ._values import JsonNull
from ._values import JsonNumber
from ._values import JsonObject
from ._values import JsonString

_ESCAPES = {
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_CONTROL_LIMIT = 0x20
# Largest magnitude below which every integral float prints exactly as an int
_EXACT_INT_LIMIT = 2**53


def escape_as_json_string(source: str) -> str:
    """
    Quotes ``source`` as a JSON string literal.

    Line and paragraph separators are escaped so the result is also safe to
    embed in JavaScript source.
    """
    result = ['"']
    for char in source:
        escaped = _ESCAPES.get(char)
        if escaped is not None:
            result.append(escaped)
        elif ord(char) < _CONTROL_LIMIT:
            result.append(f"\\u{ord(char):04x}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _encode_number(n: int | float) -> str:
    """Encode numeric values with JSON compliance."""
    if isinstance(n, int):
        return str(n)
    if math.isnan(n) or math.isinf(n):
        msg = "Out of range float values are not JSON compliant"
        raise ValueError(msg)
    if n and n.is_integer() and abs(n) < _EXACT_INT_LIMIT:
        return str(int(n))
    return repr(n)


def _encode_key(key: Any, config: EncodeConfig) -> str | None:
    if isinstance(key, str):
        return escape_as_json_string(key)
    if config.skipkeys:
        return None
    msg = f"keys must be str, not {type(key).__name__}"
    raise TypeError(msg)


def _encode_dict(d: dict[Any, Any], config: EncodeConfig) -> str:
    items = []
    for key, value in d.items():
        encoded_key = _encode_key(key, config)
        if encoded_key is None:
            continue
        items.append((key, encoded_key, _encode_value(value, config)))

    if config.sort_keys:
        items.sort(key=lambda item: item[0])

    return "{" + ",".join(f"{k}:{v}" for _, k, v in items) + "}"


def _encode_array(
    arr: list[Any] | tuple[Any, ...], config: EncodeConfig
) -> str:
    return "[" + ",".join(_encode_value(item, config) for item in arr) + "]"


def _encode_value(obj: Any, config: EncodeConfig) -> str:  # noqa: PLR0911
    """Encode a value tree node or plain Python value."""
    match obj:
        case JsonNull() | None:
            return "null"
        case JsonBoolean(value):
            return "true" if value else "false"
        case bool():
            return "true" if obj else "false"
        case JsonNumber(value):
            return _encode_number(value)
        case int() | float():
            return _encode_number(obj)
        case JsonString(value) | str(value):
            return escape_as_json_string(value)
        case JsonArray(items):
            return _encode_array(items, config)
        case list() | tuple():
            return _encode_array(obj, config)
        case JsonObject(members):
            return _encode_dict(members, config)
        case dict():
            return _encode_dict(obj, config)

    if config.default is not None:
        return _encode_value(config.default(obj), config)

    msg = f"Object of type {type(obj).__name__} is not JSON serializable"
    raise TypeError(msg)


def dumps(obj: Any, **kwargs: Any) -> str:
    """
    Serializes a value tree or plain Python data to compact JSON text.
    """
    config = EncodeConfig(**kwargs)
    return _encode_value(obj, config)


def dump(obj: Any, fp: IO[str], **kwargs: Any) -> None:
    """
    Serializes to a text file-like object.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj, **kwargs))


__all__ = ["dump", "dumps", "escape_as_json_string"]
