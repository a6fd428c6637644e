"""
region_watcher.py - Caption view scroll signals
===============================================
Desktop caption windows do not tell us when they scroll, so we watch them:
the caption region is captured every `interval` seconds and a scroll signal
(carrying the region bounds) is emitted whenever its pixels changed.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Optional

from PIL import Image, ImageChops

from ..schemas.captions import ScreenRect
from ..utils.logger import get_logger
from .screenshot import GrabFn, capture_region

logger = get_logger(__name__)


def images_differ(previous: Optional[Image.Image], current: Image.Image) -> bool:
    """True if `current` differs from `previous` in size or any pixel."""
    if previous is None:
        return True
    if previous.size != current.size or previous.mode != current.mode:
        return True
    return ImageChops.difference(previous, current).getbbox() is not None


class RegionWatcher:
    """Async iterator of scroll signals for one caption region."""

    def __init__(self, region: ScreenRect, interval: float = 0.5,
                 grab: Optional[GrabFn] = None, max_polls: Optional[int] = None):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.region = region
        self.interval = interval
        self._grab = grab
        self._max_polls = max_polls
        self._previous: Optional[Image.Image] = None
        self._stopped = False

    def stop(self) -> None:
        self._stopped = True

    def poll(self) -> bool:
        """Capture once. True if the region changed since the last poll."""
        current = capture_region(self.region, self._grab)
        changed = images_differ(self._previous, current)
        self._previous = current
        return changed

    async def signals(self) -> AsyncIterator[ScreenRect]:
        polls = 0
        while not self._stopped:
            if self._max_polls is not None and polls >= self._max_polls:
                return
            polls += 1
            try:
                changed = await asyncio.to_thread(self.poll)
            except (RuntimeError, ValueError, OSError) as e:
                logger.warning("Caption region capture failed: %s", e)
                changed = False
            if changed:
                yield self.region
            await asyncio.sleep(self.interval)

    def __aiter__(self) -> AsyncIterator[ScreenRect]:
        return self.signals()
