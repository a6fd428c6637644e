"""Live Scroll Transcript: keep a document scrolled to the live captions."""

from .agent import LiveScrollService, TriggerThrottle
from .matching import CaptionMatcher
from .schemas import MatchOutcome, MatchResult, RoundReport, ScreenRect

__all__ = [
    "CaptionMatcher",
    "LiveScrollService",
    "MatchOutcome",
    "MatchResult",
    "RoundReport",
    "ScreenRect",
    "TriggerThrottle",
]
