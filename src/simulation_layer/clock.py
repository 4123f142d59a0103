"""
Time sources. All game timestamps are integer epoch milliseconds.
"""

import time
from datetime import datetime


class Clock:
    """Millisecond time source."""

    def now_ms(self) -> int:
        raise NotImplementedError

    def label(self) -> str:
        """Time-of-day label used for history samples."""
        return datetime.fromtimestamp(self.now_ms() / 1000).strftime("%H:%M:%S")


class SystemClock(Clock):
    def now_ms(self) -> int:
        return int(time.time() * 1000)


class ManualClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start_ms: int = 0):
        self._now = start_ms

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        self._now += ms
        return self._now

    def set(self, ms: int) -> None:
        self._now = ms
