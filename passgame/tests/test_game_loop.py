"""
Tests for the game loop.

Tests:
- Candidate edits and reveal progression
- Context refresh tickets (stale, failed, first load)
- Word-game guesses through the dictionary
- Wordrow and completion latches
"""

import pytest

from ..engine_core.errors import GuessInFlight
from ..session import GameLoop, LoopState, SessionManager
from ..session.manager import SessionState
from .conftest import FakeProvider, make_context


CONTEXT_IDS = {8, 9, 11, 12, 21, 22, 23, 26}


class TestCandidate:
    """Tests for candidate edits."""

    def test_first_refresh_starts_play(self, game_loop, context):
        assert game_loop.state == LoopState.PLAYING
        assert game_loop.session.context == context
        assert game_loop.session.state == SessionState.ACTIVE
        assert game_loop.session.word_game.target == "WATER"

    def test_edit_reveals_rules(self, game_loop, winning_candidate):
        game_loop.edit_candidate("abcdefgh")
        assert game_loop.session.visible_count == 2

        game_loop.edit_candidate(winning_candidate)
        assert game_loop.session.visible_count == 26

    def test_clearing_hides_everything(self, game_loop, winning_candidate):
        game_loop.edit_candidate(winning_candidate)
        game_loop.edit_candidate("")
        assert game_loop.session.visible_count == 0

    def test_loop_clock_feeds_time_rule(self, session, context):
        from datetime import datetime, timezone

        loop = GameLoop(session, clock=lambda: datetime(2025, 6, 21, 6, 5, tzinfo=timezone.utc))
        loop.refresh()
        assert loop.edit_candidate("x08:05x").is_satisfied(15)

    def test_roman_overlay(self, game_loop, winning_candidate):
        game_loop.edit_candidate(winning_candidate)
        assert not game_loop.roman_overlay_active()

        game_loop.edit_candidate(winning_candidate.replace("XXXV", "XX"))
        assert game_loop.roman_overlay_active()

    def test_roman_overlay_needs_rule_revealed(self, game_loop):
        game_loop.edit_candidate("abc")
        assert not game_loop.roman_overlay_active()


class TestRefresh:
    """Tests for context refresh tickets."""

    def test_rules_pending_while_refreshing(self, game_loop):
        game_loop.begin_refresh()

        assert game_loop.state == LoopState.REFRESHING
        assert game_loop.session.effective_context is None
        assert game_loop.result.pending == CONTEXT_IDS

    def test_latest_refresh_wins(self, game_loop):
        older = game_loop.begin_refresh()
        newer = game_loop.begin_refresh()
        newest_context = make_context(target_word="LICHT")

        assert not game_loop.complete_refresh(older, make_context(target_word="TAFEL"))
        assert game_loop.state == LoopState.REFRESHING

        assert game_loop.complete_refresh(newer, newest_context)
        assert game_loop.session.context == newest_context

    def test_late_reply_is_discarded(self, game_loop):
        older = game_loop.begin_refresh()
        newer = game_loop.begin_refresh()
        game_loop.complete_refresh(newer, make_context(target_word="LICHT"))

        assert not game_loop.complete_refresh(older, make_context(target_word="TAFEL"))
        assert game_loop.session.context.target_word == "LICHT"
        assert game_loop.session.word_game.target == "LICHT"

    def test_failed_refresh_keeps_context(self, session, context, fixed_now):
        session.provider = FakeProvider(context, RuntimeError("weather down"))
        loop = GameLoop(session, clock=lambda: fixed_now)
        loop.refresh()

        outcome = loop.refresh()

        assert not outcome.applied
        assert outcome.error_code == "REFRESH_FAILED"
        assert "weather down" in outcome.error
        assert session.context == context
        assert loop.state == LoopState.PLAYING
        assert not loop.result.pending

    def test_failed_first_load_stays_pending(self, dictionary, fixed_now):
        session = SessionManager().create_session(
            provider=FakeProvider(RuntimeError("offline")),
            dictionary=dictionary,
        )
        loop = GameLoop(session, clock=lambda: fixed_now)

        outcome = loop.refresh()

        assert not outcome.applied
        assert loop.state == LoopState.LOADING
        assert loop.result.pending == CONTEXT_IDS

    def test_stale_failure_is_ignored(self, game_loop):
        older = game_loop.begin_refresh()
        game_loop.begin_refresh()
        assert not game_loop.fail_refresh(older, "late")
        assert game_loop.state == LoopState.REFRESHING

    def test_refresh_restarts_word_game(self, session, dictionary, fixed_now):
        session.provider = FakeProvider(make_context(), make_context(target_word="LICHT"))
        loop = GameLoop(session, clock=lambda: fixed_now)
        loop.refresh()
        loop.submit_guess("tafel")

        loop.refresh()

        game = session.word_game
        assert game.guesses == []
        assert game.target == "LICHT"


class TestWordGame:
    """Tests for guesses through the loop."""

    def test_winning_guess_satisfies_rule(self, game_loop):
        outcome = game_loop.submit_guess("water")

        assert outcome.success and outcome.won
        assert game_loop.result.is_satisfied(26)

    def test_unknown_word_is_rejected(self, game_loop):
        outcome = game_loop.submit_guess("qqqqq")

        assert not outcome.success
        assert outcome.error_code == "INVALID_GUESS"
        assert game_loop.session.word_game.guesses == []

    def test_wrong_shape(self, game_loop):
        outcome = game_loop.submit_guess("wat")
        assert outcome.error_code == "INVALID_GUESS"

    def test_guess_without_context(self, session):
        loop = GameLoop(session)
        outcome = loop.submit_guess("water")
        assert outcome.error_code == "CONTEXT_UNAVAILABLE"

    def test_in_flight_guard(self, game_loop):
        ticket = game_loop.begin_guess("tafel")

        outcome = game_loop.submit_guess("appel")
        assert outcome.error_code == "GUESS_IN_FLIGHT"
        with pytest.raises(GuessInFlight):
            game_loop.begin_guess("appel")

        assert game_loop.complete_guess(ticket, True).success

    def test_dictionary_crash_releases_guess(self, game_loop, dictionary):
        """A failing dictionary propagates and leaves no guess in flight."""

        class BrokenDictionary:
            def is_valid_word(self, word):
                raise RuntimeError("dictionary down")

        game_loop.session.dictionary = BrokenDictionary()
        with pytest.raises(RuntimeError):
            game_loop.submit_guess("water")

        game = game_loop.session.word_game
        assert game.pending_word is None
        assert game.guesses == []

        game_loop.session.dictionary = dictionary
        assert game_loop.submit_guess("tafel").success

    def test_verdict_from_old_round_is_discarded(self, game_loop):
        ticket = game_loop.begin_guess("water")
        game_loop.refresh()

        outcome = game_loop.complete_guess(ticket, True)

        assert outcome.error_code == "STALE_GUESS"
        assert not game_loop.session.word_game.won
        assert not game_loop.result.is_satisfied(26)

    def test_round_over(self, game_loop):
        game_loop.submit_guess("water")
        outcome = game_loop.submit_guess("tafel")
        assert outcome.error_code == "GUESS_ROUND_OVER"

    def test_reset_word_game(self, game_loop):
        game_loop.submit_guess("water")
        game_loop.reset_word_game()

        game = game_loop.session.word_game
        assert game.target == "WATER"
        assert not game.won
        assert not game_loop.result.is_satisfied(26)

    def test_guess_entry(self, game_loop):
        game_loop.set_guess_entry("wat")
        assert game_loop.session.word_game.current_entry == "WAT"


class TestLatches:
    """Tests for the wordrow and completion latches."""

    def test_wordrow_latch(self, game_loop):
        game_loop.mark_wordrow_completed()
        assert game_loop.result.is_satisfied(27)

        game_loop.edit_candidate("")
        game_loop.refresh()
        assert game_loop.session.wordrow_completed
        assert game_loop.result.is_satisfied(27)

    def test_completion(self, game_loop, winning_candidate):
        game_loop.submit_guess("water")
        game_loop.mark_wordrow_completed()
        result = game_loop.edit_candidate(winning_candidate)

        assert result.is_complete
        assert game_loop.session.game_complete
        assert game_loop.state == LoopState.COMPLETE
        assert game_loop.session.state == SessionState.COMPLETE
        assert game_loop.session.visible_count == 27

    def test_completion_is_latched(self, game_loop, winning_candidate):
        game_loop.submit_guess("water")
        game_loop.mark_wordrow_completed()
        game_loop.edit_candidate(winning_candidate)

        game_loop.edit_candidate("a")
        assert game_loop.session.game_complete
        assert game_loop.state == LoopState.COMPLETE
