"""
disambiguator.py - Narrow candidates with neighbouring caption words
====================================================================
When the anchor word occurs in several nodes, the words around it in the
caption decide. Neighbours are tested outward, alternating sides:

    offsets: +1, -1, +2, -2, +3, -3, ...

Each test drops the candidates that lack that neighbour. The scan stops as
soon as one candidate is left or the caption is exhausted on both sides.
"""

from __future__ import annotations

from typing import Iterator, Optional, Sequence

from .tree_matcher import CandidateSet, ReleaseFn
from ..utils.logger import get_logger

logger = get_logger(__name__)


def next_offset(offset: int) -> int:
    """Negate the offset; add one if the result is positive."""
    flipped = -offset
    return flipped + 1 if flipped > 0 else flipped


def offsets(start: int = 1) -> Iterator[int]:
    """Endless scan order: +1, -1, +2, -2, ..."""
    offset = start
    while True:
        yield offset
        offset = next_offset(offset)


def offset_in_bounds(offset: int, anchor_index: int, length: int) -> bool:
    """True while |offset| still reaches a word on the left OR the right of the anchor."""
    distance = abs(offset)
    return anchor_index - distance >= 0 or anchor_index + distance < length


def narrow_candidates(
    candidates: CandidateSet,
    anchor_index: int,
    words: Sequence[str],
    release: Optional[ReleaseFn] = None,
) -> int:
    """
    Shrink `candidates` using the words around `words[anchor_index]`.

    Removed nodes are handed to `release`. Returns the number of offsets
    examined (out-of-range offsets on one side still count as a step).
    Never takes more than 2 * len(words) steps.
    """
    steps = 0
    for offset in offsets():
        if len(candidates) <= 1 or not offset_in_bounds(offset, anchor_index, len(words)):
            break
        steps += 1
        index = anchor_index + offset
        logger.debug("offset: %d candidates: %d", offset, len(candidates))
        if 0 <= index < len(words):
            removed = candidates.retain_containing(words[index])
            if release is not None:
                for node in removed:
                    release(node)
    logger.debug("Narrowed to %d candidates after %d steps", len(candidates), steps)
    return steps
