"""
Game Loop - Drives one session from discrete input events.

Events:
1. Candidate edit      -> re-evaluate, advance the reveal ratchet
2. Context refresh     -> begin (rules go pending) -> complete or fail
3. Guess submission    -> begin (in flight) -> dictionary -> complete
4. Wordrow completion  -> latch the flag, re-evaluate
5. Word-game reset     -> new round with the same target

Refreshes are ticketed: only the most recently initiated refresh may
install a context, so an older reply arriving late is discarded.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Sequence, TYPE_CHECKING
import logging

from ..engine_core.errors import ContextUnavailable, PassGameError, RefreshFailed
from ..engine_core.evaluator import evaluate
from ..engine_core.rule import Rule
from ..engine_core.state import EvaluationResult, MiniGameFlags, SessionContext
from ..engine_core.word_game import GuessOutcome
from ..games.stapweekend.rules import RULES, ROMAN_RULE_ID

if TYPE_CHECKING:
    from .manager import Session


logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    LOADING = "loading"  # No context yet, first generation pending or failed
    REFRESHING = "refreshing"  # A newer context is being generated
    PLAYING = "playing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class GuessTicket:
    """A guess handed to the dictionary, tied to the round it was made in."""
    round_id: int
    word: str


@dataclass
class RefreshOutcome:
    """
    Result of a context refresh.

    applied is False when the refresh failed or was superseded.
    """
    applied: bool
    ticket: int
    error: str | None = None
    error_code: str | None = None
    warnings: list[str] = field(default_factory=list)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GameLoop:
    """
    The session driver.

    Usage:
        loop = GameLoop(session)
        loop.refresh()                       # first context
        result = loop.edit_candidate("Abc")  # every keystroke
        outcome = loop.submit_guess("WATER")
    """

    def __init__(
        self,
        session: Session,
        rules: Sequence[Rule] = RULES,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.session = session
        self.rules = tuple(rules)
        self.clock = clock

    @property
    def state(self) -> LoopState:
        if self.session.game_complete:
            return LoopState.COMPLETE
        if self.session.context is None:
            return LoopState.LOADING
        if self.session.refresh_pending:
            return LoopState.REFRESHING
        return LoopState.PLAYING

    @property
    def result(self) -> EvaluationResult:
        """Latest evaluation, computing one if none exists yet."""
        if self.session.last_result is None:
            return self.reevaluate()
        return self.session.last_result

    # =========================================================================
    # Candidate
    # =========================================================================

    def edit_candidate(self, candidate: str, now: datetime | None = None) -> EvaluationResult:
        """Replace the candidate and re-evaluate."""
        self.session.candidate = candidate
        return self.reevaluate(now)

    def reevaluate(self, now: datetime | None = None) -> EvaluationResult:
        """
        Evaluate the current candidate and advance the ratchet.

        The only place where satisfied ids, visible count and the
        completion latch change.
        """
        from .manager import SessionState

        session = self.session
        result = evaluate(
            self.rules,
            session.candidate,
            session.effective_context,
            MiniGameFlags(
                word_game_won=session.word_game.won,
                wordrow_completed=session.wordrow_completed,
            ),
            now or self.clock(),
        )
        session.last_result = result
        session.ratchet.advance(session.candidate, result)

        if result.is_complete and not session.game_complete:
            session.game_complete = True
            session.state = SessionState.COMPLETE
            logger.info("Session %s completed every rule", session.session_id)

        session.touch()
        return result

    def roman_overlay_active(self) -> bool:
        """Highlight Roman runs while their rule is revealed but unsatisfied."""
        return (
            bool(self.session.candidate)
            and self.session.ratchet.is_visible(ROMAN_RULE_ID)
            and not self.result.is_satisfied(ROMAN_RULE_ID)
        )

    # =========================================================================
    # Context refresh
    # =========================================================================

    def begin_refresh(self) -> int:
        """
        Start a context refresh and return its ticket.

        Context-requiring rules are pending until a refresh resolves.
        """
        from .manager import SessionState

        session = self.session
        session.refresh_requested += 1
        session.refresh_pending = True
        if session.state == SessionState.CREATED:
            session.state = SessionState.ACTIVE
        self.reevaluate()
        return session.refresh_requested

    def complete_refresh(self, ticket: int, context: SessionContext) -> bool:
        """
        Install a generated context if ticket is the latest refresh.

        A new context starts a new word-game round with its target word.
        Returns False when the result was stale and discarded.
        """
        session = self.session
        if ticket != session.refresh_requested:
            logger.info(
                "Discarding stale context for session %s (ticket %s, latest %s)",
                session.session_id, ticket, session.refresh_requested,
            )
            return False

        session.context = context
        session.refresh_pending = False
        session.word_game.reset(target=context.target_word)
        self.reevaluate()
        return True

    def fail_refresh(self, ticket: int, error: str) -> bool:
        """
        Resolve the latest refresh as failed.

        The previous context (if any) stays in place; on first load the
        session stays without context and its rules stay pending.
        """
        session = self.session
        if ticket != session.refresh_requested:
            return False

        logger.warning("Context refresh failed for session %s: %s", session.session_id, error)
        session.refresh_pending = False
        self.reevaluate()
        return True

    def refresh(self, now: datetime | None = None) -> RefreshOutcome:
        """Generate a context synchronously through the session's provider."""
        ticket = self.begin_refresh()
        try:
            context = self.session.provider.generate(now=now)
        except Exception as e:
            self.fail_refresh(ticket, str(e))
            return RefreshOutcome(
                applied=False,
                ticket=ticket,
                error=f"Context generation failed: {e}",
                error_code=RefreshFailed.error_code,
            )

        applied = self.complete_refresh(ticket, context)
        return RefreshOutcome(
            applied=applied,
            ticket=ticket,
            warnings=[] if applied else ["Superseded by a newer refresh"],
        )

    # =========================================================================
    # Word game
    # =========================================================================

    def set_guess_entry(self, text: str):
        """Update the word being typed in the word game."""
        self.session.word_game.set_entry(text)
        self.session.touch()

    def begin_guess(self, word: str) -> GuessTicket:
        """
        Validate a guess's shape and mark it in flight.

        Raises ContextUnavailable, GuessRoundOver, GuessInFlight or InvalidGuess.
        """
        if self.session.effective_context is None:
            raise ContextUnavailable("Het woordspel wacht nog op live gegevens")
        game = self.session.word_game
        normalized = game.begin_guess(word)
        return GuessTicket(round_id=game.round_id, word=normalized)

    def complete_guess(self, ticket: GuessTicket, is_valid: bool) -> GuessOutcome:
        """
        Record the dictionary verdict for a guess.

        Verdicts for a round that has since been reset are discarded.
        """
        game = self.session.word_game
        if ticket.round_id != game.round_id:
            logger.info("Discarding verdict for %s from an old round", ticket.word)
            return GuessOutcome.failure(
                "Het spel is intussen opnieuw gestart",
                error_code="STALE_GUESS",
                word=ticket.word,
            )

        outcome = game.complete_guess(ticket.word, is_valid)
        if not outcome.success:
            logger.info("Rejected guess %s: %s", ticket.word, outcome.error)
        self.reevaluate()
        return outcome

    def submit_guess(self, word: str) -> GuessOutcome:
        """Begin, validate and complete a guess in one call."""
        try:
            ticket = self.begin_guess(word)
        except PassGameError as e:
            return GuessOutcome.failure(e.message, error_code=e.error_code, word=word.strip().upper())

        try:
            is_valid = self.session.dictionary.is_valid_word(ticket.word)
        except Exception:
            self.session.word_game.cancel_guess()
            raise
        return self.complete_guess(ticket, is_valid)

    def reset_word_game(self):
        """Play the word game again with the same target."""
        game = self.session.word_game
        game.reset()
        self.reevaluate()

    # =========================================================================
    # Wordrow
    # =========================================================================

    def mark_wordrow_completed(self) -> EvaluationResult:
        """Latch the Wordrow completion signal (never reverts)."""
        self.session.wordrow_completed = True
        return self.reevaluate()
