from __future__ import annotations

import re
from typing import List, Optional

WHITESPACE = re.compile(r"\s+")


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split caption text into words on runs of whitespace.

    Order is kept: a word's index is its position in the caption.
    Returns an empty list for empty or blank text, meaning there is
    nothing to match this round.
    """
    if not text:
        return []
    return [word for word in WHITESPACE.split(text) if word]
