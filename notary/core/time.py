"""notary.core.time

The chain counts whole seconds. So does every challenge.

This module is the *only* clock surface in the codebase.
"""

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], int]


def now_seconds() -> int:
    """Unix timestamp in whole seconds."""

    return int(time.time())


def minutes_to_seconds(minutes: int) -> int:
    return minutes * 60


class FrozenClock:
    """Settable clock for tests and replays."""

    def __init__(self, start: int) -> None:
        self.now = int(start)

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> int:
        self.now += int(seconds)
        return self.now
