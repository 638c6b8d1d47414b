"""
JSON value model.

A closed set of frozen dataclasses forming the tagged union the parser
builds. Each variant supports structural equality and ``match`` statements
through the generated ``__match_args__``.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from typing import Any


@dataclass(frozen=True, slots=True)
class JsonNull:
    """The ``null`` literal."""

    def to_python(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class JsonBoolean:
    """The ``true`` and ``false`` literals."""

    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True, slots=True)
class JsonNumber:
    """
    A JSON number, always held as a double-precision float.

    Integers beyond 2**53 that cannot round-trip through a float are rejected
    by the parser rather than silently rounded.
    """

    value: float

    def to_python(self) -> float:
        return self.value

    def is_close(self, other: JsonNumber, rel_tol: float = 1e-12) -> bool:
        """Compares with floating-point tolerance."""
        return math.isclose(self.value, other.value, rel_tol=rel_tol)


@dataclass(frozen=True, slots=True)
class JsonString:
    """A decoded JSON string literal."""

    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class JsonArray:
    """An ordered sequence of JSON values."""

    items: list[JsonValue] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> JsonValue:
        return self.items[index]

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, slots=True)
class JsonObject:
    """
    A mapping from string keys to JSON values.

    Duplicate keys in the source collapse to the last occurrence.
    """

    members: dict[str, JsonValue] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.members)

    def __getitem__(self, key: str) -> JsonValue:
        return self.members[key]

    def __contains__(self, key: object) -> bool:
        return key in self.members

    def get(
        self, key: str, default: JsonValue | None = None
    ) -> JsonValue | None:
        return self.members.get(key, default)

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.members.items()}


type JsonValue = (
    JsonNull | JsonBoolean | JsonNumber | JsonString | JsonArray | JsonObject
)

JSON_VALUE_TYPES = (
    JsonNull,
    JsonBoolean,
    JsonNumber,
    JsonString,
    JsonArray,
    JsonObject,
)

NULL = JsonNull()
TRUE = JsonBoolean(True)
FALSE = JsonBoolean(False)


_INT64_MAX = 2**63 - 1


def _exact_float(n: int) -> float:
    """Converts under the same limits the parser applies to integers."""
    if abs(n) <= _INT64_MAX:
        number = float(n)
        if int(number) == n:
            return number
    msg = "too large number: int has no exact double representation"
    raise ValueError(msg)


def from_python(  # noqa: PLR0911
    obj: Any, default: Callable[[Any], Any] | None = None
) -> JsonValue:
    """
    Builds a JSON value tree from plain Python data.

    ``default`` is called for objects with no JSON equivalent and must return
    something that can be converted.
    """
    if isinstance(obj, JSON_VALUE_TYPES):
        return obj
    if obj is None:
        return NULL
    if obj is True:
        return TRUE
    if obj is False:
        return FALSE
    if isinstance(obj, int):
        return JsonNumber(_exact_float(obj))
    if isinstance(obj, float):
        return JsonNumber(obj)
    if isinstance(obj, str):
        return JsonString(obj)
    if isinstance(obj, list | tuple):
        return JsonArray([from_python(item, default) for item in obj])
    if isinstance(obj, dict):
        members: dict[str, JsonValue] = {}
        for key, value in obj.items():
            if not isinstance(key, str):
                msg = f"keys must be str, not {type(key).__name__}"
                raise TypeError(msg)
            members[key] = from_python(value, default)
        return JsonObject(members)
    if default is not None:
        return from_python(default(obj), default)

    msg = f"Object of type {type(obj).__name__} is not JSON serializable"
    raise TypeError(msg)


__all__ = [
    "FALSE",
    "JSON_VALUE_TYPES",
    "NULL",
    "TRUE",
    "JsonArray",
    "JsonBoolean",
    "JsonNull",
    "JsonNumber",
    "JsonObject",
    "JsonString",
    "JsonValue",
    "from_python",
]
