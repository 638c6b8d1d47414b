"""
Per-production profiling for the parser, enabled by ``MEDEA_PROFILE``.

Each grammar production runs inside a ``ProfileContext`` holding the parser
it belongs to. On exit the context records the elapsed time and how far the
parser's cursor moved, so ``bytes_processed`` is the input each production
actually consumed. Nested productions count their bytes again in every
enclosing production.
"""

import os
import time
from dataclasses import dataclass
from typing import Any
from typing import Protocol

# Read once at import; reload this module and _parser to switch modes
PROFILE_HOT_PATHS = __debug__ and "MEDEA_PROFILE" in os.environ


class Cursor(Protocol):
    """Anything with a byte offset into the source, like JsonParser."""

    cur: int


@dataclass
class HotPathStats:
    """Call count, time and consumed input for one production."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, nbytes: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += nbytes

    @property
    def bytes_per_call(self) -> float:
        if not self.call_count:
            return 0.0
        return self.bytes_processed / self.call_count


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Times one production call and measures the bytes it consumed."""

        def __init__(self, func_name: str, scanner: Cursor):
            self.func_name = func_name
            self.scanner = scanner
            self.start_time = 0
            self.start_pos = 0

        def __enter__(self) -> "ProfileContext":
            self.start_pos = self.scanner.cur
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            stats = _hot_path_stats.get(self.func_name)
            if stats is None:
                stats = _hot_path_stats[self.func_name] = HotPathStats(
                    self.func_name
                )
            stats.record_call(duration, self.scanner.cur - self.start_pos)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns a snapshot of the statistics gathered so far."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, scanner: Cursor) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


__all__ = [
    "PROFILE_HOT_PATHS",
    "Cursor",
    "HotPathStats",
    "ProfileContext",
    "clear_hot_path_stats",
    "get_hot_path_stats",
]
