"""
Engine State - Value types the engine reads and produces.

Design principles:
- Immutable: a SessionContext is replaced on refresh, never edited
- Explicit: absent context is None, not an error
- Serializable: plain fields only, so the API can render them
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class RuleStatus(Enum):
    """Display status of a single rule."""
    SATISFIED = "satisfied"
    PENDING = "pending"  # Needs session context that is not available
    FAILED = "failed"


@dataclass(frozen=True)
class ArithmeticPuzzle:
    """A small arithmetic puzzle shown with rule 23."""
    expression: str
    answer: int


@dataclass(frozen=True)
class GeoTarget:
    """The country hidden behind the street-level imagery."""
    country_code: str
    country_name: str  # Lower-case, as matched against the candidate
    imagery_url: str


@dataclass(frozen=True)
class SessionContext:
    """
    Date-, weather- and puzzle-derived facts for one session.

    Produced by a context provider on startup and on every refresh.
    """
    day_of_year: int
    iso_weekday: int
    zodiac_glyph: str
    lunar_phase_glyph: str
    temperature_c: int
    target_word: str
    arithmetic_puzzle: ArithmeticPuzzle
    chess_best_move: str
    geo_target: GeoTarget
    generated_at: datetime | None = None


@dataclass(frozen=True)
class MiniGameFlags:
    """Completion flags of the two mini-games, fed into rule predicates."""
    word_game_won: bool = False
    wordrow_completed: bool = False


@dataclass(frozen=True)
class EvaluationResult:
    """
    Outcome of evaluating every rule against one candidate.

    satisfied and pending are disjoint; feedback only has entries
    for rules that are neither.
    """
    satisfied: frozenset[int]
    total: int
    feedback: dict[int, str] = field(default_factory=dict)
    pending: frozenset[int] = frozenset()

    @property
    def is_complete(self) -> bool:
        return len(self.satisfied) == self.total

    def is_satisfied(self, rule_id: int) -> bool:
        return rule_id in self.satisfied
