"""
Trigger throttle for Live Scroll Transcript.
Decides when a caption view scroll should start a new caption round,
and guarantees at most one round is in flight.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Optional

from ..utils.constants import DEFAULT_SCROLL_THRESHOLD


class ThrottleState(Enum):
    """Whether a caption round is currently running."""

    IDLE = "idle"
    AWAITING_SNAPSHOT = "awaiting_snapshot"


class RoundLease:
    """
    Ownership of the single in-flight round.
    Leaving the `with` block (normally or by exception) returns the throttle to IDLE.
    """

    def __init__(self, throttle: "TriggerThrottle"):
        self._throttle = throttle
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._throttle._finish_round()

    def __enter__(self) -> "RoundLease":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class TriggerThrottle:
    """
    Debounces caption view scroll signals.

    Every signal is counted, including those arriving while a round is in
    flight. The threshold is only checked while IDLE.
    """

    def __init__(self, threshold: int = DEFAULT_SCROLL_THRESHOLD):
        if threshold < 1:
            raise ValueError("threshold must be at least 1")
        self.threshold = threshold
        # One below the threshold: the first signal reaches it and starts a round.
        self._scrolls = threshold - 1
        self._state = ThrottleState.IDLE
        self._lock = threading.Lock()

    @property
    def state(self) -> ThrottleState:
        return self._state

    @property
    def scroll_count(self) -> int:
        return self._scrolls

    def record_scroll(self) -> Optional[RoundLease]:
        """Count one scroll signal. Returns a lease if a new round should start now."""
        with self._lock:
            self._scrolls += 1
            if self._state is not ThrottleState.IDLE or self._scrolls < self.threshold:
                return None
            self._scrolls = 0
            self._state = ThrottleState.AWAITING_SNAPSHOT
            return RoundLease(self)

    def _finish_round(self) -> None:
        with self._lock:
            self._state = ThrottleState.IDLE
