"""
Progression - How many rules are revealed.

Two separate pieces of state:
- satisfied: recomputed on every evaluation, may flicker
- visible: a ratchet that only grows while the candidate is non-empty

Clearing the candidate collapses the reveal back to zero.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import AbstractSet

from .state import EvaluationResult


def satisfied_prefix(satisfied: AbstractSet[int], total: int) -> int:
    """Length of the longest run 1..k of satisfied rule ids."""
    k = 0
    while k < total and (k + 1) in satisfied:
        k += 1
    return k


def compute_visible(
    prev_visible: int,
    candidate: str,
    satisfied: AbstractSet[int],
    total: int,
) -> int:
    """
    Compute the visible rule count.

    One unsatisfied rule is always shown after the satisfied prefix,
    capped at total. The count never drops below prev_visible unless
    the candidate is empty.
    """
    if not candidate:
        return 0
    tentative = min(satisfied_prefix(satisfied, total) + 1, total)
    return max(prev_visible, tentative)


@dataclass
class RevealRatchet:
    """
    Holds the reveal state for one session.

    Usage:
        ratchet = RevealRatchet()
        visible = ratchet.advance(candidate, result)
    """
    visible: int = 0
    satisfied: frozenset[int] = field(default_factory=frozenset)

    def advance(self, candidate: str, result: EvaluationResult) -> int:
        """Record a new evaluation and return the updated visible count."""
        self.satisfied = result.satisfied
        self.visible = compute_visible(
            self.visible, candidate, result.satisfied, result.total
        )
        return self.visible

    def is_visible(self, rule_id: int) -> bool:
        return rule_id <= self.visible
