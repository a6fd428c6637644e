"""
matcher.py - One caption round
==============================
tokenize -> select anchor -> collect candidates -> disambiguate -> show

This part is synchronous: by the time it runs the caption text and the tree
are both available. Every node borrowed from the provider during a round is
released before the round returns, whatever the outcome.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..schemas.captions import MatchOutcome, MatchResult, RoundReport
from ..tree.base import TreeProvider
from ..utils.constants import TRY_REFRESH
from ..utils.logger import get_logger
from .disambiguator import narrow_candidates
from .keyword import select_anchor
from .tokenizer import tokenize
from .tree_matcher import collect_candidates

logger = get_logger(__name__)

Advisory = Callable[[str], None]


class CaptionMatcher:
    """Finds the element currently corresponding to a caption and shows it."""

    def __init__(self, advisory: Optional[Advisory] = None):
        self._advisory = advisory or _log_advisory

    def match(self, caption: str, provider: TreeProvider) -> MatchResult:
        """
        Match `caption` against the provider's current tree.

        A MATCHED result holds the unique node, which is still borrowed: the
        caller must pass it to provider.release(). scroll_to_text() does this.
        """
        words = tokenize(caption)
        if not words:
            logger.debug("Empty caption, nothing to match")
            return MatchResult(outcome=MatchOutcome.EMPTY_CAPTION)

        anchor_index = select_anchor(words)
        logger.debug("Caption words: %s", words)
        logger.debug("Anchor word: %s", words[anchor_index])

        candidates = collect_candidates(words[anchor_index], provider.root(), provider.release)
        initial = len(candidates)
        logger.debug("Nodes containing anchor: %d", initial)

        result = MatchResult(
            outcome=MatchOutcome.NO_CANDIDATES,
            words=words,
            anchor_index=anchor_index,
            initial_candidates=initial,
        )
        if initial == 0:
            return result

        try:
            result.steps = narrow_candidates(candidates, anchor_index, words, provider.release)
        except Exception:
            for node in candidates.drain():
                provider.release(node)
            raise
        result.remaining_candidates = len(candidates)

        if len(candidates) == 1:
            result.outcome = MatchOutcome.MATCHED
            result.node = candidates.only()
        else:
            # Candidates existed but none is a confident match: either several
            # survived the full scan or a neighbour word eliminated them all.
            result.outcome = MatchOutcome.AMBIGUOUS
            logger.debug("%d candidates left after scan of %r", len(candidates), caption)
            for node in candidates.drain():
                provider.release(node)
        return result

    def scroll_to_text(self, caption: str, provider: TreeProvider) -> RoundReport:
        """Match `caption` and, if a unique node is found, show it on screen."""
        result = self.match(caption, provider)
        if not result.matched:
            return RoundReport.from_result(caption, result)

        node = result.node
        try:
            scrolled = bool(node.show_on_screen())
        except Exception as e:
            logger.error("show_on_screen raised: %s", e)
            scrolled = False
        finally:
            provider.release(node)
            result.node = None

        logger.info("SCROLLED %s", scrolled)
        if scrolled:
            return RoundReport.from_result(caption, result, scrolled=True)

        self._advisory(TRY_REFRESH)
        report = RoundReport.from_result(caption, result, advisory=TRY_REFRESH)
        report.outcome = MatchOutcome.SCROLL_FAILED
        return report


def _log_advisory(message: str) -> None:
    logger.warning(message)
