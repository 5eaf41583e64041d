"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through:
- Created when a player opens the game
- Holds the candidate, the context and the mini-game state
- Driven by the GameLoop, one input event at a time
- Dropped when the player leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, GuessTicket, RefreshOutcome

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "GuessTicket",
    "RefreshOutcome",
]
