"""
Word Game - The word-guessing mini-game behind rule 26.

A round:
- Has one 5-letter target, taken from the session context
- Accepts up to six guesses, each validated against a dictionary first
- Ends when the target is guessed or the guesses run out

Dictionary validation happens outside this class. A guess goes through
begin_guess() (shape checks, marks it in flight) and complete_guess()
(records the dictionary verdict). While a guess is in flight no other
guess is accepted.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .errors import GuessInFlight, GuessRoundOver, InvalidGuess
from .word_scorer import WORD_LENGTH, LetterScore, score


MAX_GUESSES = 6

NOT_A_WORD_REASON = "Dit is geen geldig Nederlands woord volgens woordenlijst.org"
WRONG_SHAPE_REASON = f"Een gok moet uit precies {WORD_LENGTH} letters bestaan"
ROUND_OVER_REASON = "Dit spel is afgelopen, begin opnieuw om verder te raden"
IN_FLIGHT_REASON = "Even geduld, het vorige woord wordt nog gecontroleerd"


@dataclass
class GuessOutcome:
    """
    Result of submitting a guess.

    Contains:
    - Whether the guess was recorded
    - The per-letter scores (if recorded)
    - Round flags after the guess
    - Error and error code (if rejected)
    """
    success: bool
    word: str | None = None
    scores: list[LetterScore] = field(default_factory=list)
    won: bool = False
    over: bool = False
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None, word: str | None = None) -> GuessOutcome:
        """Create a rejection result."""
        return cls(success=False, word=word, error=error, error_code=error_code)

    @classmethod
    def accepted(cls, word: str, scores: list[LetterScore], won: bool, over: bool) -> GuessOutcome:
        """Create a result for a recorded guess."""
        return cls(success=True, word=word, scores=scores, won=won, over=over)


@dataclass
class WordGame:
    """
    State of one word-game round.

    guesses is append-only within a round; reset() starts a new round
    with a new round_id so late dictionary verdicts can be told apart.
    """
    target: str = ""
    guesses: list[str] = field(default_factory=list)
    current_entry: str = ""
    won: bool = False
    over: bool = False
    max_guesses: int = MAX_GUESSES
    rejection_reason: str | None = None
    pending_word: str | None = None
    round_id: int = 0

    @property
    def is_validating(self) -> bool:
        return self.pending_word is not None

    @property
    def guesses_left(self) -> int:
        return self.max_guesses - len(self.guesses)

    def set_entry(self, text: str):
        """Update the word being typed (upper-cased, at most 5 letters)."""
        self.current_entry = text.upper()[:WORD_LENGTH]
        self.rejection_reason = None

    def begin_guess(self, word: str) -> str:
        """
        Check a guess's shape and mark it in flight.

        Returns the normalised word to hand to the dictionary.
        Raises GuessRoundOver, GuessInFlight or InvalidGuess.
        """
        if self.over:
            raise GuessRoundOver(ROUND_OVER_REASON)
        if self.pending_word is not None:
            raise GuessInFlight(IN_FLIGHT_REASON)

        normalized = word.strip().upper()
        if len(normalized) != WORD_LENGTH or not normalized.isalpha():
            self.rejection_reason = WRONG_SHAPE_REASON
            raise InvalidGuess(WRONG_SHAPE_REASON)

        self.pending_word = normalized
        return normalized

    def complete_guess(self, word: str, is_valid: bool) -> GuessOutcome:
        """
        Record the dictionary verdict for the guess in flight.

        Invalid words are not recorded; the rejection reason is set.
        """
        normalized = word.strip().upper()
        if self.pending_word != normalized:
            return GuessOutcome.failure(
                f"No guess in flight for {normalized}",
                error_code="STALE_GUESS",
                word=normalized,
            )
        self.pending_word = None

        if not is_valid:
            self.rejection_reason = NOT_A_WORD_REASON
            return GuessOutcome.failure(
                NOT_A_WORD_REASON,
                error_code=InvalidGuess.error_code,
                word=normalized,
            )

        self.rejection_reason = None
        self.guesses.append(normalized)
        self.current_entry = ""
        self.won = normalized == self.target.upper()
        self.over = self.won or len(self.guesses) >= self.max_guesses

        return GuessOutcome.accepted(
            word=normalized,
            scores=score(normalized, self.target),
            won=self.won,
            over=self.over,
        )

    def cancel_guess(self):
        """Drop the guess in flight without recording anything."""
        self.pending_word = None

    def grid(self) -> list[list[LetterScore]]:
        """Scores for every recorded guess, in order."""
        return [score(guess, self.target) for guess in self.guesses]

    def reset(self, target: str | None = None):
        """Start a new round, optionally with a new target."""
        if target is not None:
            self.target = target.upper()
        self.guesses = []
        self.current_entry = ""
        self.won = False
        self.over = False
        self.rejection_reason = None
        self.pending_word = None
        self.round_id += 1
