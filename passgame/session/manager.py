"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Player opens the game -> session created, context generated
2. During play:
   - Every candidate edit re-evaluates all rules
   - Refresh regenerates the context (and resets the word game)
   - Word-game guesses are validated against the dictionary
   - The embedded Wordrow puzzle reports completion once
3. Player leaves -> session ended, ALL state dropped

PERSISTENCE RULES:
- Sessions are in-memory only
- Nothing survives the end of a session
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import time
import uuid

from ..config import SESSION_MAX_AGE
from ..engine_core.progression import RevealRatchet
from ..engine_core.state import EvaluationResult, SessionContext
from ..engine_core.word_game import WordGame
from ..games.stapweekend.context import SessionContextProvider
from ..games.stapweekend.dictionary import DictionaryValidator


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # No context requested yet
    ACTIVE = "active"  # Game in progress
    COMPLETE = "complete"  # All rules satisfied at least once
    ENDED = "ended"  # Player left or session expired


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The candidate string and the latest evaluation
    - The session context (and refresh bookkeeping)
    - The reveal ratchet
    - Word-game and Wordrow state
    - The collaborators that produce context and validate words

    Only the GameLoop writes to a session.
    """
    session_id: str
    created_at: float
    provider: Any  # SessionContextProvider-like: generate(now=None)
    dictionary: Any  # DictionaryValidator-like: is_valid_word(word)

    state: SessionState = SessionState.CREATED
    last_active: float = 0.0

    # Player input
    candidate: str = ""

    # Context and refresh tickets
    context: SessionContext | None = None
    refresh_requested: int = 0  # Ticket of the most recently initiated refresh
    refresh_pending: bool = False

    # Derived state
    ratchet: RevealRatchet = field(default_factory=RevealRatchet)
    last_result: EvaluationResult | None = None

    # Mini-games
    word_game: WordGame = field(default_factory=WordGame)
    wordrow_completed: bool = False

    # Latched once every rule was satisfied at the same time
    game_complete: bool = False

    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def effective_context(self) -> SessionContext | None:
        """The context rules may read; None while a refresh is pending."""
        if self.refresh_pending:
            return None
        return self.context

    @property
    def visible_count(self) -> int:
        return self.ratchet.visible

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state in {
            SessionState.CREATED,
            SessionState.ACTIVE,
            SessionState.COMPLETE,
        }

    def touch(self):
        self.last_active = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their collaborators
    - Track active sessions
    - Clean up ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, provider_factory=None, dictionary_factory=None):
        self._sessions: dict[str, Session] = {}
        self._provider_factory = provider_factory or SessionContextProvider
        self._dictionary_factory = dictionary_factory or DictionaryValidator

    def create_session(self, provider=None, dictionary=None) -> Session:
        """
        Create a new game session.

        Args:
            provider: Context provider (defaults to the factory's)
            dictionary: Dictionary validator (defaults to the factory's)

        Returns:
            New Session; its context is generated by the GameLoop
        """
        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            created_at=now,
            last_active=now,
            provider=provider or self._provider_factory(),
            dictionary=dictionary or self._dictionary_factory(),
        )
        self._sessions[session.session_id] = session
        logger.info("Session %s created", session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop its state.

        Returns False when the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        session.state = SessionState.ENDED
        session.candidate = ""
        session.context = None
        session.last_result = None
        session.word_game.reset()
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = SESSION_MAX_AGE) -> list[str]:
        """
        End sessions idle for longer than max_age_seconds.

        Returns the ended session IDs.
        """
        current_time = time.time()
        stale = [
            session_id
            for session_id, session in list(self._sessions.items())
            if current_time - session.last_active > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return stale
