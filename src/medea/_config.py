"""Immutable parse and encode settings."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

DEFAULT_MAX_DEPTH = 256


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    ``max_depth`` bounds object/array nesting (``None`` leaves only the
    interpreter's recursion limit). ``lenient_unicode_escapes`` accepts the
    legacy 2-8 hex digit ``\\u`` form without surrogate pairing.
    ``allow_control_characters`` lets raw bytes below 0x20 through inside
    string literals.
    """

    max_depth: int | None = DEFAULT_MAX_DEPTH
    lenient_unicode_escapes: bool = False
    allow_control_characters: bool = True

    def __post_init__(self) -> None:
        if self.max_depth is not None and (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or self.max_depth < 1
        ):
            raise TypeError("max_depth must be a positive integer or None")
        if not isinstance(self.lenient_unicode_escapes, bool):
            raise TypeError("lenient_unicode_escapes must be a boolean")
        if not isinstance(self.allow_control_characters, bool):
            raise TypeError("allow_control_characters must be a boolean")


@dataclass(frozen=True)
class EncodeConfig:
    """Configures compact serialization."""

    skipkeys: bool = False
    sort_keys: bool = False
    default: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.skipkeys, bool):
            raise TypeError("skipkeys must be a boolean")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")


__all__ = ["DEFAULT_MAX_DEPTH", "EncodeConfig", "ParseConfig"]
