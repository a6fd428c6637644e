"""Caption-to-element matching."""

from .disambiguator import narrow_candidates, next_offset, offset_in_bounds, offsets
from .keyword import select_anchor
from .matcher import CaptionMatcher
from .tokenizer import tokenize
from .tree_matcher import CandidateSet, collect_candidates, contains_word

__all__ = [
    "CaptionMatcher",
    "CandidateSet",
    "collect_candidates",
    "contains_word",
    "narrow_candidates",
    "next_offset",
    "offset_in_bounds",
    "offsets",
    "select_anchor",
    "tokenize",
]
