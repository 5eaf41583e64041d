"""
API Module - Front-end interface.

Exposes the engine via REST API. The front-end:
1. Creates a session (the context is generated right away)
2. Sends every candidate edit and renders the returned board
3. Drives the word game and reports Wordrow completion
4. Refreshes the context on demand

All state is session-scoped. No persistent user accounts required.
"""

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
    ErrorResponse,
    # Shared
    RuleInfo,
    RuleView,
    WordGameView,
    # Enums
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CandidateRequest",
    "GuessEntryRequest",
    "GuessRequest",
    # Responses
    "BoardResponse",
    "SessionResponse",
    "RefreshResponse",
    "GuessResponse",
    "RulesResponse",
    "ErrorResponse",
    # Shared
    "RuleInfo",
    "RuleView",
    "WordGameView",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
