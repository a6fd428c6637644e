"""
Service core for Live Scroll Transcript.
Implements SCROLL SIGNAL -> THROTTLE -> CAPTURE -> MATCH -> SHOW.

Scroll signals may arrive at any time; the throttle lets at most one caption
round run. Capturing the caption is asynchronous, matching is not.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import AsyncIterable, Awaitable, Callable, Deque, Optional, Set

from ..matching.matcher import Advisory, CaptionMatcher
from ..schemas.captions import MatchOutcome, RoundReport, ScreenRect
from ..tree.base import TreeProvider
from ..utils.constants import DEFAULT_HISTORY_SIZE, DEFAULT_SCROLL_THRESHOLD
from ..utils.logger import get_logger
from .throttle import TriggerThrottle

logger = get_logger(__name__)

CaptionSource = Callable[[ScreenRect], Awaitable[str]]


class LiveScrollService:
    """
    Keeps the document scrolled to whatever the captions are saying.

    Args:
        captions: Caption snapshot request, e.g. a CaptionReader.
        provider: Where the element tree comes from.
        threshold: Scroll signals needed before a new round.
        advisory: Called with the user-visible message when showing fails.
        history_size: How many recent RoundReports to keep.
    """

    def __init__(
        self,
        captions: CaptionSource,
        provider: TreeProvider,
        threshold: int = DEFAULT_SCROLL_THRESHOLD,
        advisory: Optional[Advisory] = None,
        matcher: Optional[CaptionMatcher] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ):
        self._captions = captions
        self._provider = provider
        self.throttle = TriggerThrottle(threshold)
        self._matcher = matcher or CaptionMatcher(advisory)
        self.history: Deque[RoundReport] = deque(maxlen=history_size)

    async def handle_scroll(self, bounds: ScreenRect) -> Optional[RoundReport]:
        """
        Respond to one caption view scroll signal.

        Returns the RoundReport if this signal started a round, else None.
        Never raises for round failures; they end up in the report.
        """
        lease = self.throttle.record_scroll()
        if lease is None:
            return None

        with lease:
            report = await self._run_round(bounds)

        self.history.append(report)
        logger.debug("Round finished: %s", report.to_dict())
        return report

    async def _run_round(self, bounds: ScreenRect) -> RoundReport:
        # bounds is frozen; this round keeps its own copy however the region moves
        try:
            caption = await self._captions(bounds)
            await self._provider.snapshot()
        except Exception as e:
            logger.warning("Caption snapshot failed: %s", e)
            return RoundReport(outcome=MatchOutcome.UPSTREAM_FAILURE, error=str(e))

        try:
            return self._matcher.scroll_to_text(caption, self._provider)
        except Exception as e:
            logger.error("Caption round failed: %s", e)
            return RoundReport(outcome=MatchOutcome.UPSTREAM_FAILURE, caption=caption, error=str(e))

    async def watch(self, signals: AsyncIterable[ScreenRect]) -> Deque[RoundReport]:
        """
        Drive handle_scroll from a stream of scroll signals until it ends.

        Each signal is handled in its own task so signals keep being counted
        while a round is capturing. Returns the most recent reports of this
        run, bounded like `history`.
        """
        reports: Deque[RoundReport] = deque(maxlen=self.history.maxlen)

        async def _handle(bounds: ScreenRect) -> None:
            report = await self.handle_scroll(bounds)
            if report is not None:
                reports.append(report)

        pending: Set[asyncio.Task] = set()
        async for bounds in signals:
            task = asyncio.create_task(_handle(bounds))
            pending.add(task)
            task.add_done_callback(pending.discard)
            await asyncio.sleep(0)  # let the task reach the throttle in signal order
        if pending:
            await asyncio.gather(*pending)
        return reports
