from __future__ import annotations

from typing import Sequence


def select_anchor(words: Sequence[str]) -> int:
    """
    Index of the word to search the tree for.

    The longest word wins since long words rarely appear elsewhere in the
    document by accident. Ties go to the first (lowest index) longest word.
    """
    if not words:
        raise ValueError("Cannot select an anchor from an empty word sequence")
    best = 0
    for index, word in enumerate(words):
        if len(word) > len(words[best]):
            best = index
    return best
