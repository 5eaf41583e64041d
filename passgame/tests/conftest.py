"""
Pytest fixtures for Passgame tests.
"""

import pytest
from datetime import datetime, timezone

from ..engine_core.state import SessionContext, MiniGameFlags
from ..engine_core.rule import RuleEnv
from ..games.stapweekend import vocab
from ..games.stapweekend.dictionary import StaticDictionary
from ..games.stapweekend.rules import is_prime
from ..session import SessionManager, GameLoop


# 12:30 on the game clock (UTC+2)
FIXED_NOW = datetime(2025, 6, 21, 10, 30, tzinfo=timezone.utc)


class FakeProvider:
    """Context provider returning prepared contexts (or raising) in order."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def generate(self, now=None):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


def pad_to_prime(candidate: str) -> str:
    """Insert lower-case z's before the last character until the length is prime."""
    while not is_prime(len(candidate)):
        candidate = candidate[:-1] + "z" + candidate[-1]
    return candidate


def make_context(**overrides) -> SessionContext:
    fields = dict(
        day_of_year=172,
        iso_weekday=6,
        zodiac_glyph="♋",
        lunar_phase_glyph="🌕",
        temperature_c=18,
        target_word="WATER",
        arithmetic_puzzle=vocab.ARITHMETIC_PUZZLES[0],
        chess_best_move=vocab.CHESS_BEST_MOVE,
        geo_target=vocab.GEO_TARGETS[3],  # belgië
        generated_at=FIXED_NOW,
    )
    fields.update(overrides)
    return SessionContext(**fields)


@pytest.fixture
def fixed_now() -> datetime:
    """Evaluation time: 12:30 on the game clock."""
    return FIXED_NOW


@pytest.fixture
def context() -> SessionContext:
    """A fixed session context for 21 June 2025."""
    return make_context()


@pytest.fixture
def env(context, fixed_now) -> RuleEnv:
    """Rule inputs with context, no mini-game won."""
    return RuleEnv(now=fixed_now, context=context)


@pytest.fixture
def no_flags() -> MiniGameFlags:
    return MiniGameFlags()


@pytest.fixture
def dictionary() -> StaticDictionary:
    """Offline dictionary knowing a handful of 5-letter words."""
    return StaticDictionary(["water", "tafel", "appel", "groen", "licht", "stoel", "kaars"])


@pytest.fixture
def provider(context) -> FakeProvider:
    return FakeProvider(context)


@pytest.fixture
def session(provider, dictionary):
    """A fresh session with fake collaborators, no context yet."""
    manager = SessionManager()
    return manager.create_session(provider=provider, dictionary=dictionary)


@pytest.fixture
def game_loop(session, fixed_now) -> GameLoop:
    """A game loop with a fixed clock and its first context applied."""
    loop = GameLoop(session, clock=lambda: fixed_now)
    loop.refresh()
    return loop


@pytest.fixture
def winning_candidate() -> str:
    """
    A candidate satisfying rules 1-25 for the fixed context at 12:30.

    13 capitals (Q, XXXV, H, ABEFGJK) and 13 digits summing to 50.
    """
    return pad_to_prime(
        "Qb5+XXXVHe"
        "meiroodgeesttomorrowlandverkeerdebelgië"
        "12:3017264991"
        "♋🌕ABEFGJKz"
    )
