"""
UTC time helpers.

Service records carry createdAt as epoch milliseconds (the remote catalog
is ordered on that number), so the clock here hands out milliseconds.
"""

import threading
import time
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


class MonotonicMillisClock:
    """Epoch-millisecond clock that never hands out the same value twice.

    Each call returns max(now, last + 1), so two creations in the same
    millisecond still get distinct, increasing createdAt values. The
    guarantee is per process only; clients on other machines are not
    ordered against this one.
    """

    def __init__(self, now_ms=None) -> None:
        self._now_ms = now_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            value = max(int(self._now_ms()), self._last + 1)
            self._last = value
            return value
