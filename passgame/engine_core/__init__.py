"""
Engine Core - Rule evaluation and reveal progression.

The engine is the runtime that:
1. Holds the Rule type and the evaluation inputs (RuleEnv)
2. Evaluates every rule against a candidate string
3. Computes how many rules are revealed (the ratchet)
4. Scores word-game guesses and values Roman-numeral runs
"""

from .state import (
    ArithmeticPuzzle,
    GeoTarget,
    SessionContext,
    MiniGameFlags,
    EvaluationResult,
    RuleStatus,
)
from .rule import Rule, RuleEnv, DisplayTag
from .evaluator import evaluate, rule_status
from .progression import compute_visible, RevealRatchet
from .roman import value_of, find_runs, highlight_segments, RomanRun, Segment
from .word_scorer import LetterScore, score
from .word_game import WordGame, GuessOutcome
from .errors import (
    PassGameError,
    ContextUnavailable,
    RefreshFailed,
    InvalidGuess,
    GuessRoundOver,
    GuessInFlight,
    SessionNotFound,
)

__all__ = [
    "ArithmeticPuzzle",
    "GeoTarget",
    "SessionContext",
    "MiniGameFlags",
    "EvaluationResult",
    "RuleStatus",
    "Rule",
    "RuleEnv",
    "DisplayTag",
    "evaluate",
    "rule_status",
    "compute_visible",
    "RevealRatchet",
    "value_of",
    "find_runs",
    "highlight_segments",
    "RomanRun",
    "Segment",
    "LetterScore",
    "score",
    "WordGame",
    "GuessOutcome",
    "PassGameError",
    "ContextUnavailable",
    "RefreshFailed",
    "InvalidGuess",
    "GuessRoundOver",
    "GuessInFlight",
    "SessionNotFound",
]
