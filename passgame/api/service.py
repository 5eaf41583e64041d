"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to game-loop calls
2. Manages sessions and their game loops
3. Runs the slow collaborators (context provider, dictionary) outside
   the session lock
4. Formats the board for the front-end

This layer is framework-agnostic (can be used with FastAPI, the CLI, tests).

Each session has its own lock. Context refreshes and guesses are split
into begin / external call / complete, and only the begin and complete
steps hold the lock, so a refresh or guess started meanwhile is handled
by the game loop's tickets.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional, Sequence
import logging
import threading

from .schemas import (
    # Requests
    CandidateRequest,
    GuessEntryRequest,
    GuessRequest,
    # Responses
    BoardResponse,
    SessionResponse,
    RefreshResponse,
    GuessResponse,
    RulesResponse,
    EndSessionResponse,
    # Shared
    RuleInfo,
    RuleView,
    RomanSegment,
    ContextDisplay,
    WordGameCell,
    WordGameView,
    # Enums
    SessionStatus,
    RuleStatusValue,
    LetterScoreValue,
    ErrorCode,
)
from ..config import SESSION_MAX_AGE
from ..engine_core.errors import PassGameError, RefreshFailed, SessionNotFound
from ..engine_core.evaluator import rule_status
from ..engine_core.roman import highlight_segments
from ..engine_core.rule import Rule
from ..games.stapweekend import vocab
from ..games.stapweekend.rules import RULES
from ..session import SessionManager, Session, GameLoop


logger = logging.getLogger(__name__)


def rule_info(rule: Rule) -> RuleInfo:
    """Static metadata for one rule."""
    return RuleInfo(
        rule_id=rule.rule_id,
        description=rule.description,
        tip=rule.tip,
        requires_context=rule.requires_context,
        display=sorted(tag.value for tag in rule.auxiliary_display),
    )


@dataclass
class APIService:
    """
    Main API service for the game front-end.

    Usage:
        service = APIService()

        session = service.create_session()
        board = service.update_candidate(session.session_id, CandidateRequest(candidate="Abc"))
        guess = service.submit_guess(session.session_id, GuessRequest(word="WATER"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    rules: Sequence[Rule] = RULES

    # Evaluation clock for new game loops (defaults to the loop's UTC clock)
    clock: Optional[Callable[[], datetime]] = None

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    # One lock per session, plus one for the two dicts above
    _locks: dict[str, threading.Lock] = field(default_factory=dict)
    _registry_lock: threading.Lock = field(default_factory=threading.Lock)

    # =========================================================================
    # Rules
    # =========================================================================

    def list_rules(self) -> RulesResponse:
        """The full rule catalog, revealed or not."""
        rules = [rule_info(rule) for rule in self.rules]
        return RulesResponse(rules=rules, count=len(rules))

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, generate_context: bool = True) -> SessionResponse:
        """
        Create a new game session.

        The first context is generated right away unless generate_context
        is False; a failed first generation leaves the context-requiring
        rules pending until the next refresh.
        """
        self.cleanup_stale_sessions()

        session = self.session_manager.create_session()
        if self.clock is not None:
            game_loop = GameLoop(session, rules=self.rules, clock=self.clock)
        else:
            game_loop = GameLoop(session, rules=self.rules)

        with self._registry_lock:
            self._game_loops[session.session_id] = game_loop
            self._locks[session.session_id] = threading.Lock()

        if generate_context:
            self.refresh_context(session.session_id)

        board = self.get_board(session.session_id)
        return SessionResponse(
            session_id=session.session_id,
            status=board.status,
            created_at=session.created_at,
            board=board,
        )

    def get_board(self, session_id: str) -> BoardResponse:
        """Current board of a session. Raises SessionNotFound."""
        game_loop, lock = self._get(session_id)
        with lock:
            return self._build_board(game_loop)

    def end_session(self, session_id: str, reason: str = "user_ended") -> EndSessionResponse:
        """End a session and release its game loop."""
        with self._registry_lock:
            self._game_loops.pop(session_id, None)
            self._locks.pop(session_id, None)
        success = self.session_manager.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    def cleanup_stale_sessions(self, max_age_seconds: int = SESSION_MAX_AGE) -> list[str]:
        """End idle sessions and drop their game loops."""
        stale = self.session_manager.cleanup_stale_sessions(max_age_seconds)
        with self._registry_lock:
            for session_id in stale:
                self._game_loops.pop(session_id, None)
                self._locks.pop(session_id, None)
        return stale

    # =========================================================================
    # Candidate
    # =========================================================================

    def update_candidate(self, session_id: str, request: CandidateRequest) -> BoardResponse:
        """Replace the candidate and return the re-evaluated board."""
        game_loop, lock = self._get(session_id)
        with lock:
            game_loop.edit_candidate(request.candidate)
            return self._build_board(game_loop)

    # =========================================================================
    # Context refresh
    # =========================================================================

    def refresh_context(self, session_id: str) -> RefreshResponse:
        """Regenerate the session context (and restart the word game)."""
        game_loop, lock = self._get(session_id)
        with lock:
            ticket = game_loop.begin_refresh()

        try:
            context = game_loop.session.provider.generate()
        except Exception as e:
            logger.exception("Context provider failed for session %s", session_id)
            with lock:
                game_loop.fail_refresh(ticket, str(e))
                return RefreshResponse(
                    applied=False,
                    error=f"Context generation failed: {e}",
                    error_code=ErrorCode(RefreshFailed.error_code),
                    board=self._build_board(game_loop),
                )

        with lock:
            applied = game_loop.complete_refresh(ticket, context)
            return RefreshResponse(
                applied=applied,
                warnings=[] if applied else ["Superseded by a newer refresh"],
                board=self._build_board(game_loop),
            )

    # =========================================================================
    # Word game
    # =========================================================================

    def set_guess_entry(self, session_id: str, request: GuessEntryRequest) -> BoardResponse:
        """Update the word being typed."""
        game_loop, lock = self._get(session_id)
        with lock:
            game_loop.set_guess_entry(request.entry)
            return self._build_board(game_loop)

    def submit_guess(self, session_id: str, request: GuessRequest) -> GuessResponse:
        """
        Submit a word-game guess.

        Rejections come back as GuessResponse(success=False) with an
        error code; they do not raise.
        """
        game_loop, lock = self._get(session_id)
        with lock:
            try:
                ticket = game_loop.begin_guess(request.word)
            except PassGameError as e:
                return GuessResponse(
                    success=False,
                    word=request.word.strip().upper(),
                    error=e.message,
                    error_code=ErrorCode(e.error_code),
                    board=self._build_board(game_loop),
                )
            dictionary = game_loop.session.dictionary

        try:
            is_valid = dictionary.is_valid_word(ticket.word)
        except Exception:
            with lock:
                if ticket.round_id == game_loop.session.word_game.round_id:
                    game_loop.session.word_game.cancel_guess()
            raise

        with lock:
            outcome = game_loop.complete_guess(ticket, is_valid)
            return GuessResponse(
                success=outcome.success,
                word=outcome.word,
                scores=[LetterScoreValue(s.value) for s in outcome.scores],
                won=outcome.won,
                over=outcome.over,
                error=outcome.error,
                error_code=ErrorCode(outcome.error_code) if outcome.error_code else None,
                board=self._build_board(game_loop),
            )

    def reset_word_game(self, session_id: str) -> BoardResponse:
        """Play the word game again with the same target."""
        game_loop, lock = self._get(session_id)
        with lock:
            game_loop.reset_word_game()
            return self._build_board(game_loop)

    # =========================================================================
    # Wordrow
    # =========================================================================

    def complete_wordrow(self, session_id: str) -> BoardResponse:
        """Record that the embedded Wordrow puzzle was solved."""
        game_loop, lock = self._get(session_id)
        with lock:
            game_loop.mark_wordrow_completed()
            return self._build_board(game_loop)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get(self, session_id: str) -> tuple[GameLoop, threading.Lock]:
        with self._registry_lock:
            game_loop = self._game_loops.get(session_id)
            lock = self._locks.get(session_id)
        if game_loop is None or lock is None or not game_loop.session.is_active():
            raise SessionNotFound(session_id)
        return game_loop, lock

    def _build_board(self, game_loop: GameLoop) -> BoardResponse:
        """Render the board; caller holds the session lock."""
        session: Session = game_loop.session
        result = game_loop.result
        visible = session.visible_count

        rules = [
            RuleView(
                rule_id=rule.rule_id,
                description=rule.description,
                tip=rule.tip,
                status=RuleStatusValue(rule_status(rule.rule_id, result).value),
                feedback=result.feedback.get(rule.rule_id),
                display=sorted(tag.value for tag in rule.auxiliary_display),
            )
            for rule in self.rules
            if rule.rule_id <= visible
        ]

        context = session.effective_context
        context_display = None
        if context is not None:
            context_display = ContextDisplay(
                imagery_url=context.geo_target.imagery_url,
                arithmetic_expression=context.arithmetic_puzzle.expression,
                temperature_c=context.temperature_c,
                wordrow_url=vocab.WORDROW_URL,
                generated_at=context.generated_at.timestamp() if context.generated_at else None,
            )

        roman_overlay = None
        if game_loop.roman_overlay_active():
            roman_overlay = [
                RomanSegment(text=seg.text, is_run=seg.is_run, value=seg.value)
                for seg in highlight_segments(session.candidate)
            ]

        game = session.word_game
        word_game = WordGameView(
            rows=[
                [
                    WordGameCell(letter=letter, score=LetterScoreValue(s.value))
                    for letter, s in zip(guess, scores)
                ]
                for guess, scores in zip(game.guesses, game.grid())
            ],
            guesses=list(game.guesses),
            current_entry=game.current_entry,
            won=game.won,
            over=game.over,
            max_guesses=game.max_guesses,
            guesses_left=game.guesses_left,
            validating=game.is_validating,
            rejection_reason=game.rejection_reason,
        )

        return BoardResponse(
            session_id=session.session_id,
            status=SessionStatus(game_loop.state.value),
            candidate_length=len(session.candidate),
            visible_count=visible,
            satisfied_count=len(result.satisfied),
            total_rules=result.total,
            rules=rules,
            context=context_display,
            roman_overlay=roman_overlay,
            word_game=word_game,
            wordrow_completed=session.wordrow_completed,
            game_complete=session.game_complete,
            completion_message=vocab.COMPLETION_MESSAGE if session.game_complete else None,
        )
