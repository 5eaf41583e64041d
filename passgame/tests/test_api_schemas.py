"""
Tests for API Pydantic schemas.

Tests:
- Schema validation
- Serialization
- Error code mirroring
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    BoardResponse,
    CandidateRequest,
    ErrorCode,
    ErrorResponse,
    GuessRequest,
    GuessResponse,
    LetterScoreValue,
    RuleStatusValue,
    RuleView,
    SessionStatus,
    WordGameView,
)
from ..engine_core import errors
from ..engine_core.state import RuleStatus
from ..engine_core.word_scorer import LetterScore
from ..session import LoopState


class TestPydanticSchemas:
    """Tests for request/response models."""

    def test_candidate_request_requires_candidate(self):
        with pytest.raises(ValidationError):
            CandidateRequest()

    def test_guess_request(self):
        assert GuessRequest(word="water").word == "water"

    def test_board_defaults(self):
        board = BoardResponse(session_id="s1", status=SessionStatus.LOADING)

        assert board.rules == []
        assert board.context is None
        assert board.roman_overlay is None
        assert board.word_game == WordGameView()
        assert board.api_version == "v1"

    def test_board_serialization(self):
        board = BoardResponse(
            session_id="s1",
            status=SessionStatus.PLAYING,
            visible_count=1,
            rules=[RuleView(rule_id=1, description="d", status=RuleStatusValue.FAILED)],
        )
        data = board.model_dump(mode="json")

        assert data["status"] == "playing"
        assert data["rules"][0]["status"] == "failed"
        assert data["rules"][0]["feedback"] is None

    def test_guess_response(self):
        response = GuessResponse(
            success=False,
            error="nope",
            error_code=ErrorCode.GUESS_IN_FLIGHT,
            board=BoardResponse(session_id="s1", status=SessionStatus.PLAYING),
        )
        assert response.model_dump(mode="json")["error_code"] == "GUESS_IN_FLIGHT"

    def test_error_response(self):
        error = ErrorResponse(error="Session x not found", error_code=ErrorCode.SESSION_NOT_FOUND)
        data = error.model_dump(mode="json")

        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["details"] is None
        assert data["api_version"] == "v1"


class TestEnumMirroring:
    """API enums mirror the engine's values."""

    @pytest.mark.parametrize("error_class", [
        errors.ContextUnavailable,
        errors.RefreshFailed,
        errors.InvalidGuess,
        errors.GuessRoundOver,
        errors.GuessInFlight,
        errors.SessionNotFound,
    ])
    def test_error_codes(self, error_class):
        assert ErrorCode(error_class.error_code).value == error_class.error_code

    def test_rule_status(self):
        assert {s.value for s in RuleStatus} == {s.value for s in RuleStatusValue}

    def test_letter_score(self):
        assert {s.value for s in LetterScore} == {s.value for s in LetterScoreValue}

    def test_session_status(self):
        assert {s.value for s in LoopState} == {s.value for s in SessionStatus}
