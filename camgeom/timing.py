"""Wall-clock time helpers and clamped timestamp differences."""

from __future__ import annotations

import time

LONG_MAX = 2**63 - 1
LONG_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1


def time_in_microseconds() -> int:
    """Current wall-clock time in whole microseconds since the epoch."""
    return time.time_ns() // 1000


def time_in_seconds() -> float:
    """Current wall-clock time in seconds since the epoch."""
    return time.time_ns() / 1_000_000_000.0


def timestamp_diff(t1: int, t2: int) -> int:
    """Signed difference ``t2 - t1`` of two unsigned 64-bit timestamps.

    The result saturates to the signed 64-bit range.
    """
    for value in (t1, t2):
        if not 0 <= value <= _UINT64_MAX:
            raise ValueError(f"timestamp {value} is not an unsigned 64-bit value")
    if t2 > t1:
        return min(t2 - t1, LONG_MAX)
    d = t1 - t2
    if d > LONG_MAX:
        return LONG_MIN
    return -d