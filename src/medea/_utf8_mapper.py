"""Maps byte offsets in UTF-8 encoded text back to character offsets."""

from __future__ import annotations

import bisect
from typing import Final

_ASCII_LIMIT = 127


class UTF8PositionMapper:
    """UTF-8 position mapping with a checkpoint system.

    Parse errors are located by byte offset. When the caller handed in a
    ``str``, this converts that offset to an index into the original text.
    Instead of a full map, checkpoints are recorded every
    ``checkpoint_interval`` characters and lookups walk forward from the
    nearest one.
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        """Initialize position mapper with checkpoint system.

        Args:
            text: The text whose UTF-8 encoding was parsed
            checkpoint_interval: Characters between checkpoints
        """
        if checkpoint_interval < 1:
            raise ValueError("checkpoint_interval must be positive")

        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        self._byte_checkpoints: list[int] = []
        self._char_checkpoints: list[int] = []
        self._is_ascii_only = text.isascii()

        if not self._is_ascii_only:
            self._build_checkpoints()

    def _build_checkpoints(self) -> None:
        byte_pos = 0
        for char_pos, char in enumerate(self.text):
            if char_pos % self.checkpoint_interval == 0:
                self._byte_checkpoints.append(byte_pos)
                self._char_checkpoints.append(char_pos)
            byte_pos += _utf8_width(char)

    def byte_to_char(self, byte_pos: int) -> int:
        """Convert a byte offset to a character offset.

        An offset inside a multi-byte sequence maps to the character that
        sequence encodes. Offsets past the end map to ``len(text)``.
        """
        if self._is_ascii_only:
            return min(byte_pos, len(self.text))

        index = bisect.bisect_right(self._byte_checkpoints, byte_pos) - 1
        if index < 0:
            return 0

        current_byte = self._byte_checkpoints[index]
        current_char = self._char_checkpoints[index]
        while current_char < len(self.text):
            width = _utf8_width(self.text[current_char])
            if current_byte + width > byte_pos:
                break
            current_byte += width
            current_char += 1

        return current_char


def _utf8_width(char: str) -> int:
    code_point = ord(char)
    if code_point <= _ASCII_LIMIT:
        return 1
    if code_point < 0x800:
        return 2
    if code_point < 0x10000:
        return 3
    return 4
