"""
Caption round models for Live Scroll Transcript.
Defines the caption region bounds and the outcome of one caption round.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ScreenRect(BaseModel):
    """Bounds of the caption region on screen. Frozen: copied into each round."""

    model_config = ConfigDict(frozen=True)

    left: int = Field(ge=0)
    top: int = Field(ge=0)
    width: int = Field(ge=0)
    height: int = Field(ge=0)

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def as_box(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom) as PIL's crop() expects."""
        return (self.left, self.top, self.right, self.bottom)

    @classmethod
    def parse(cls, value: str) -> "ScreenRect":
        """Parse 'LEFT,TOP,WIDTH,HEIGHT'."""
        parts = [p.strip() for p in value.split(",")]
        if len(parts) != 4:
            raise ValueError(f"Expected LEFT,TOP,WIDTH,HEIGHT, got: {value!r}")
        left, top, width, height = (int(p) for p in parts)
        return cls(left=left, top=top, width=width, height=height)


class MatchOutcome(Enum):
    """How a caption round ended."""

    MATCHED = "matched"
    EMPTY_CAPTION = "empty_caption"
    NO_CANDIDATES = "no_candidates"
    AMBIGUOUS = "ambiguous"
    UPSTREAM_FAILURE = "upstream_failure"
    SCROLL_FAILED = "scroll_failed"


@dataclass
class MatchResult:
    """Result of matching one caption against one tree snapshot."""

    outcome: MatchOutcome
    words: List[str] = field(default_factory=list)
    anchor_index: Optional[int] = None
    node: Optional[Any] = None  # unique ElementNode, only when MATCHED
    initial_candidates: int = 0
    remaining_candidates: int = 0
    steps: int = 0

    @property
    def anchor(self) -> Optional[str]:
        if self.anchor_index is None:
            return None
        return self.words[self.anchor_index]

    @property
    def matched(self) -> bool:
        return self.outcome is MatchOutcome.MATCHED


@dataclass
class RoundReport:
    """What one full caption round did, for logging and the CLI."""

    outcome: MatchOutcome
    caption: Optional[str] = None
    anchor: Optional[str] = None
    candidates: int = 0
    steps: int = 0
    scrolled: bool = False
    advisory: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_result(cls, caption: str, result: MatchResult, scrolled: bool = False,
                    advisory: Optional[str] = None) -> "RoundReport":
        return cls(
            outcome=result.outcome,
            caption=caption,
            anchor=result.anchor,
            candidates=result.initial_candidates,
            steps=result.steps,
            scrolled=scrolled,
            advisory=advisory,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "caption": self.caption,
            "anchor": self.anchor,
            "candidates": self.candidates,
            "steps": self.steps,
            "scrolled": self.scrolled,
            "advisory": self.advisory,
            "error": self.error,
        }
