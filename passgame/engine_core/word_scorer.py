"""
Word Scorer - Per-letter classification of a guess against a target.

Two passes, so repeated letters are scored correctly:
1. Exact position matches consume one target occurrence each
2. Remaining letters, left to right, take a leftover occurrence (PARTIAL)
   or get ABSENT once the target has none left
"""

from __future__ import annotations
from collections import Counter
from enum import Enum


WORD_LENGTH = 5


class LetterScore(Enum):
    """Classification of one guessed letter."""
    EXACT = "exact"      # Right letter, right position
    PARTIAL = "partial"  # Right letter, wrong position
    ABSENT = "absent"    # Not in the target (or no occurrences left)


def score(guess: str, target: str) -> list[LetterScore]:
    """
    Score a 5-letter guess against a 5-letter target, case-insensitively.

    Raises ValueError when either word is not exactly 5 characters.
    """
    guess = guess.upper()
    target = target.upper()
    if len(guess) != WORD_LENGTH or len(target) != WORD_LENGTH:
        raise ValueError(
            f"Both words must have {WORD_LENGTH} letters: {guess!r}, {target!r}"
        )

    result = [LetterScore.ABSENT] * WORD_LENGTH
    remaining = Counter(target)

    for i, letter in enumerate(guess):
        if letter == target[i]:
            result[i] = LetterScore.EXACT
            remaining[letter] -= 1

    for i, letter in enumerate(guess):
        if result[i] is LetterScore.EXACT:
            continue
        if remaining[letter] > 0:
            result[i] = LetterScore.PARTIAL
            remaining[letter] -= 1

    return result
