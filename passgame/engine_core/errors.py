"""
Engine Errors - Recoverable failures raised by the engine and session layer.

Every error carries a machine-readable error_code that the API mirrors
in its ErrorCode enum. None of these is fatal to a session.
"""


class PassGameError(Exception):
    """Base class for engine errors."""

    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ContextUnavailable(PassGameError):
    """Raised when an operation needs a session context that does not exist yet."""

    error_code = "CONTEXT_UNAVAILABLE"


class RefreshFailed(PassGameError):
    """Raised when the session context could not be (re)generated."""

    error_code = "REFRESH_FAILED"


class InvalidGuess(PassGameError):
    """Raised when a guess is malformed or not a dictionary word."""

    error_code = "INVALID_GUESS"


class GuessRoundOver(PassGameError):
    """Raised when a guess is submitted after the round was won or exhausted."""

    error_code = "GUESS_ROUND_OVER"


class GuessInFlight(PassGameError):
    """Raised when a guess is submitted while another one is being validated."""

    error_code = "GUESS_IN_FLIGHT"


class SessionNotFound(PassGameError):
    """Raised when a session id is unknown or the session has ended."""

    error_code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")
