"""
FastAPI Application - REST API for the game front-end.

Endpoints:
    GET    /api/v1/rules                              Full rule catalog
    POST   /api/v1/sessions                           Create game session
    GET    /api/v1/sessions                           List active sessions
    GET    /api/v1/sessions/{id}                      Get the board
    DELETE /api/v1/sessions/{id}                      End session
    PUT    /api/v1/sessions/{id}/candidate            Edit the candidate
    POST   /api/v1/sessions/{id}/refresh              Regenerate the context
    PUT    /api/v1/sessions/{id}/word-game/entry      Set the word being typed
    POST   /api/v1/sessions/{id}/word-game/guesses    Submit a guess
    POST   /api/v1/sessions/{id}/word-game/reset      Play the word game again
    POST   /api/v1/sessions/{id}/wordrow/complete     Wordrow completion signal

Endpoints are plain functions: FastAPI runs them in its thread pool, so
a slow weather or dictionary call only blocks its own request.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import logging

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ALLOWED_ORIGINS, PASSGAME_ENV, configure_logging
from ..engine_core.errors import SessionNotFound
from .service import APIService
from .schemas import (
    # Request models
    CandidateRequest,
    GuessEntryRequest,
    GuessRequest,
    # Response models
    BoardResponse,
    SessionResponse,
    RefreshResponse,
    GuessResponse,
    RulesResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
)


logger = logging.getLogger(__name__)

# HTTP status of a rejected guess, by error code
GUESS_REJECTION_STATUS = {
    ErrorCode.INVALID_GUESS: 422,
    ErrorCode.GUESS_ROUND_OVER: 409,
    ErrorCode.GUESS_IN_FLIGHT: 409,
    ErrorCode.STALE_GUESS: 409,
    ErrorCode.CONTEXT_UNAVAILABLE: 409,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    configure_logging()

    app = FastAPI(
        title="Passgame API",
        description="""
Progressive password game - satisfy every rule at the same time.

Rules are revealed one at a time: the board always shows the satisfied
prefix plus the next rule, and never hides a rule again until the
candidate is cleared.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `REFRESH_FAILED` | Context regeneration failed, previous context kept |
| `INVALID_GUESS` | Guess is not a 5-letter dictionary word |
| `GUESS_ROUND_OVER` | Word game already won or out of guesses |
| `GUESS_IN_FLIGHT` | Previous guess is still being validated |
| `CONTEXT_UNAVAILABLE` | Word game waits for the session context |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def session_not_found(e: SessionNotFound) -> JSONResponse:
        return make_error_response(
            ErrorCode.SESSION_NOT_FOUND,
            e.message,
            status_code=404,
            details={"session_id": e.session_id},
        )

    # =========================================================================
    # Rules Endpoint
    # =========================================================================

    @app.get(
        "/api/v1/rules",
        response_model=RulesResponse,
        tags=["Rules"],
        summary="Full rule catalog",
    )
    def list_rules() -> RulesResponse:
        """All rules in order, including the ones not yet revealed in any session."""
        return api_service.list_rules()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    def create_session() -> SessionResponse:
        """
        Create a new game session.

        The session context is generated immediately. If that fails the
        session is still created and context rules stay pending until
        a refresh succeeds.
        """
        return api_service.create_session()

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=BoardResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get the board",
    )
    def get_session(session_id: str) -> Union[BoardResponse, JSONResponse]:
        """Revealed rules with their status, context displays and mini-game state."""
        try:
            return api_service.get_board(session_id)
        except SessionNotFound as e:
            return session_not_found(e)

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session and drop all of its state."""
        return api_service.end_session(session_id, reason)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.put(
        "/api/v1/sessions/{session_id}/candidate",
        response_model=BoardResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Edit the candidate",
    )
    def update_candidate(
        session_id: str,
        body: CandidateRequest,
    ) -> Union[BoardResponse, JSONResponse]:
        """Replace the candidate; every rule is re-evaluated."""
        try:
            return api_service.update_candidate(session_id, body)
        except SessionNotFound as e:
            return session_not_found(e)

    @app.post(
        "/api/v1/sessions/{session_id}/refresh",
        response_model=RefreshResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Regenerate the session context",
    )
    def refresh_context(session_id: str) -> Union[RefreshResponse, JSONResponse]:
        """
        Regenerate the context: new date facts, temperature, puzzles and
        word-game target. A failed refresh keeps the previous context and
        reports `REFRESH_FAILED` in the body.
        """
        try:
            return api_service.refresh_context(session_id)
        except SessionNotFound as e:
            return session_not_found(e)

    @app.put(
        "/api/v1/sessions/{session_id}/word-game/entry",
        response_model=BoardResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Word Game"],
        summary="Set the word being typed",
    )
    def set_guess_entry(
        session_id: str,
        body: GuessEntryRequest,
    ) -> Union[BoardResponse, JSONResponse]:
        try:
            return api_service.set_guess_entry(session_id, body)
        except SessionNotFound as e:
            return session_not_found(e)

    @app.post(
        "/api/v1/sessions/{session_id}/word-game/guesses",
        response_model=GuessResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Session not found"},
            409: {"model": GuessResponse, "description": "Round over or guess in flight"},
            422: {"model": GuessResponse, "description": "Not a 5-letter dictionary word"},
        },
        tags=["Word Game"],
        summary="Submit a guess",
    )
    def submit_guess(
        session_id: str,
        body: GuessRequest,
    ) -> Union[GuessResponse, JSONResponse]:
        """
        Submit a 5-letter guess.

        Rejected guesses are not recorded. Their response still carries
        the board, with the rejection reason in `word_game`.
        """
        try:
            response = api_service.submit_guess(session_id, body)
        except SessionNotFound as e:
            return session_not_found(e)

        if response.success:
            return response
        return JSONResponse(
            status_code=GUESS_REJECTION_STATUS.get(response.error_code, 400),
            content=response.model_dump(mode="json"),
        )

    @app.post(
        "/api/v1/sessions/{session_id}/word-game/reset",
        response_model=BoardResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Word Game"],
        summary="Play the word game again",
    )
    def reset_word_game(session_id: str) -> Union[BoardResponse, JSONResponse]:
        try:
            return api_service.reset_word_game(session_id)
        except SessionNotFound as e:
            return session_not_found(e)

    @app.post(
        "/api/v1/sessions/{session_id}/wordrow/complete",
        response_model=BoardResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Wordrow"],
        summary="Report that the Wordrow puzzle was solved",
    )
    def complete_wordrow(session_id: str) -> Union[BoardResponse, JSONResponse]:
        """Latch the Wordrow flag; it never reverts for this session."""
        try:
            return api_service.complete_wordrow(session_id)
        except SessionNotFound as e:
            return session_not_found(e)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="passgame",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    def root():
        """Root endpoint with API info."""
        return {
            "name": "Passgame API",
            "version": __version__,
            "environment": PASSGAME_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    logger.info("Passgame API created (%s)", PASSGAME_ENV)
    return app


# For running directly: uvicorn passgame.api.app:app
app = create_app()
