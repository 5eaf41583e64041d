"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the game front-end and the engine.
Only revealed rules are ever rendered; context values that are answers
(zodiac glyph, country, best move, target word) are never exposed.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- CONTEXT_UNAVAILABLE: Session context not generated yet
- REFRESH_FAILED: Context regeneration failed, previous context kept
- INVALID_GUESS: Guess is malformed or not a dictionary word
- GUESS_ROUND_OVER: Word game already won or out of guesses
- GUESS_IN_FLIGHT: Another guess is still being validated
- STALE_GUESS: Verdict arrived for a round that was reset
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    LOADING = "loading"
    REFRESHING = "refreshing"
    PLAYING = "playing"
    COMPLETE = "complete"


class RuleStatusValue(str, Enum):
    """Per-rule display status."""
    SATISFIED = "satisfied"
    PENDING = "pending"
    FAILED = "failed"


class LetterScoreValue(str, Enum):
    """Word-game cell classification."""
    EXACT = "exact"
    PARTIAL = "partial"
    ABSENT = "absent"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    CONTEXT_UNAVAILABLE = "CONTEXT_UNAVAILABLE"
    REFRESH_FAILED = "REFRESH_FAILED"
    INVALID_GUESS = "INVALID_GUESS"
    GUESS_ROUND_OVER = "GUESS_ROUND_OVER"
    GUESS_IN_FLIGHT = "GUESS_IN_FLIGHT"
    STALE_GUESS = "STALE_GUESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class RuleInfo(BaseModel):
    """Static rule metadata."""
    rule_id: int
    description: str
    tip: Optional[str] = None
    requires_context: bool = False
    display: list[str] = Field(default_factory=list, description="Auxiliary display tags")

    model_config = {"from_attributes": True}


class RuleView(BaseModel):
    """A revealed rule with its current status."""
    rule_id: int
    description: str
    tip: Optional[str] = None
    status: RuleStatusValue
    feedback: Optional[str] = Field(None, description="Near-miss feedback, advisory only")
    display: list[str] = Field(default_factory=list)


class RomanSegment(BaseModel):
    """A piece of the candidate for the Roman-numeral overlay."""
    text: str
    is_run: bool = False
    value: Optional[int] = None


class ContextDisplay(BaseModel):
    """Context values the front-end shows next to rules."""
    imagery_url: str
    arithmetic_expression: str
    temperature_c: int
    wordrow_url: str
    generated_at: Optional[float] = None


class WordGameCell(BaseModel):
    """One letter of a recorded guess."""
    letter: str
    score: LetterScoreValue


class WordGameView(BaseModel):
    """Word-game state for rendering the grid."""
    rows: list[list[WordGameCell]] = Field(default_factory=list)
    guesses: list[str] = Field(default_factory=list)
    current_entry: str = ""
    won: bool = False
    over: bool = False
    max_guesses: int = 6
    guesses_left: int = 6
    validating: bool = False
    rejection_reason: Optional[str] = None


# =============================================================================
# Request Models
# =============================================================================

class CandidateRequest(BaseModel):
    """A candidate edit."""
    candidate: str = Field(..., description="The full current input")


class GuessEntryRequest(BaseModel):
    """The word being typed in the word game."""
    entry: str = Field("", description="Partial guess; upper-cased and cut to 5 letters")


class GuessRequest(BaseModel):
    """A word-game guess submission."""
    word: str = Field(..., description="A 5-letter word")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class BoardResponse(BaseModel):
    """Everything the front-end needs to render a session."""
    session_id: str
    status: SessionStatus
    candidate_length: int = 0
    visible_count: int = 0
    satisfied_count: int = 0
    total_rules: int = 0
    rules: list[RuleView] = Field(default_factory=list)
    context: Optional[ContextDisplay] = None
    roman_overlay: Optional[list[RomanSegment]] = Field(
        None, description="Present while the Roman-numeral rule is revealed and unsatisfied"
    )
    word_game: WordGameView = Field(default_factory=WordGameView)
    wordrow_completed: bool = False
    game_complete: bool = False
    completion_message: Optional[str] = None
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response after creating a session."""
    session_id: str
    status: SessionStatus
    created_at: float = 0.0
    board: BoardResponse
    api_version: str = "v1"


class RefreshResponse(BaseModel):
    """Response after a context refresh."""
    applied: bool
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    warnings: list[str] = Field(default_factory=list)
    board: BoardResponse
    api_version: str = "v1"


class GuessResponse(BaseModel):
    """Response after a guess submission; rejections are not HTTP errors."""
    success: bool
    word: Optional[str] = None
    scores: list[LetterScoreValue] = Field(default_factory=list)
    won: bool = False
    over: bool = False
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    board: BoardResponse
    api_version: str = "v1"


class RulesResponse(BaseModel):
    """The full rule catalog."""
    rules: list[RuleInfo]
    count: int


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
