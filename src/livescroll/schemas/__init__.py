"""Schemas module for Live Scroll Transcript."""

from .captions import MatchOutcome, MatchResult, RoundReport, ScreenRect

__all__ = [
    "MatchOutcome",
    "MatchResult",
    "RoundReport",
    "ScreenRect",
]
