"""
Rule - A single constraint on the candidate string.

A rule is:
- A predicate over (candidate, env), total for every string input
- Metadata for display (description, tip, auxiliary display tags)
- Optionally a near-miss feedback function for plausible wrong answers

Rules are immutable; the catalog for a game is a module-level tuple.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

from .errors import ContextUnavailable
from .state import SessionContext


class DisplayTag(Enum):
    """Extra content the presentation layer shows next to a rule."""
    SHOW_MAP = "show_map"
    SHOW_CHESS = "show_chess"
    SHOW_MATH = "show_math"
    SHOW_WORD_GAME = "show_word_game"
    SHOW_WORDROW = "show_wordrow"
    SHOW_ROMAN_OVERLAY = "show_roman_overlay"


@dataclass(frozen=True)
class RuleEnv:
    """
    Everything a predicate may read besides the candidate.

    `now` is passed in by the caller so predicates stay pure.
    context is None only for rules that do not require it.
    """
    now: datetime
    context: SessionContext | None = None
    word_game_won: bool = False
    wordrow_completed: bool = False

    @property
    def ctx(self) -> SessionContext:
        """The context, for rules that declare requires_context."""
        if self.context is None:
            raise ContextUnavailable("context-requiring rule evaluated without context")
        return self.context


Predicate = Callable[[str, RuleEnv], bool]
Feedback = Callable[[str, RuleEnv], "str | None"]


@dataclass(frozen=True)
class Rule:
    """A rule definition."""
    rule_id: int
    description: str
    predicate: Predicate
    tip: str | None = None
    requires_context: bool = False
    near_miss_feedback: Feedback | None = None
    auxiliary_display: frozenset[DisplayTag] = field(default_factory=frozenset)

    def check(self, candidate: str, env: RuleEnv) -> bool:
        return bool(self.predicate(candidate, env))

    def feedback(self, candidate: str, env: RuleEnv) -> str | None:
        if self.near_miss_feedback is None:
            return None
        return self.near_miss_feedback(candidate, env)

    def shows(self, tag: DisplayTag) -> bool:
        return tag in self.auxiliary_display
