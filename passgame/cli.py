"""
Passgame CLI - Command-line interface for the engine.

Usage:
    passgame rules                      Print the rule catalog
    passgame check CANDIDATE            Evaluate one candidate
    passgame play                       Interactive game in the terminal
    passgame serve                      Run the REST API with uvicorn

check and play accept --offline: no weather lookup and a built-in word
list instead of woordenlijst.org.
"""

import argparse
import sys

from .config import configure_logging
from .engine_core.evaluator import rule_status
from .engine_core.roman import highlight_segments
from .engine_core.rule import DisplayTag
from .engine_core.state import RuleStatus
from .engine_core.word_scorer import LetterScore
from .games.stapweekend import vocab
from .games.stapweekend.rules import RULES


STATUS_MARKS = {
    RuleStatus.SATISFIED: "[x]",
    RuleStatus.PENDING: "[~]",
    RuleStatus.FAILED: "[ ]",
}

PLAY_HELP = """Type a password to check it. Commands:
  :refresh        new date facts, puzzles and word
  :entry TEXT     type in the word game
  :guess WORD     guess a 5-letter word
  :reset          play the word game again
  :wordrow        mark the Wordrow puzzle as solved
  :quit           stop"""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Passgame - Progressive password game",
        prog="passgame",
    )
    parser.add_argument("--log-level", help="Log level (default from PASSGAME_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Rules command
    subparsers.add_parser("rules", help="Print the rule catalog")

    # Check command
    check_parser = subparsers.add_parser("check", help="Evaluate one candidate")
    check_parser.add_argument("candidate", help="Password to evaluate")
    check_parser.add_argument("--offline", action="store_true", help="Do not use the network")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--offline", action="store_true", help="Do not use the network")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "rules":
        cmd_rules(args)
    elif args.command == "check":
        cmd_check(args)
    elif args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _create_loop(offline: bool):
    """A session with its game loop, context already generated."""
    from .games.stapweekend import StaticDictionary, offline_provider
    from .session import GameLoop, SessionManager

    manager = SessionManager()
    if offline:
        session = manager.create_session(
            provider=offline_provider(),
            dictionary=StaticDictionary(vocab.WORD_POOL),
        )
    else:
        session = manager.create_session()

    game_loop = GameLoop(session)
    outcome = game_loop.refresh()
    if not outcome.applied:
        print(f"Warning: {outcome.error}")
    return game_loop


def cmd_rules(args):
    """Print every rule."""
    for rule in RULES:
        marker = " (live)" if rule.requires_context else ""
        print(f"{rule.rule_id:2d}. {rule.description}{marker}")
        if rule.tip:
            print(f"    tip: {rule.tip}")


def cmd_check(args):
    """Evaluate one candidate against every rule."""
    game_loop = _create_loop(args.offline)
    result = game_loop.edit_candidate(args.candidate)

    for rule in RULES:
        status = rule_status(rule.rule_id, result)
        print(f"{STATUS_MARKS[status]} {rule.rule_id:2d}. {rule.description}")
        if rule.rule_id in result.feedback:
            print(f"         {result.feedback[rule.rule_id]}")

    print(f"\n{len(result.satisfied)}/{result.total} rules satisfied, "
          f"{game_loop.session.visible_count} revealed")


def _format_guess(word, scores):
    cells = []
    for letter, s in zip(word, scores):
        if s == LetterScore.EXACT:
            cells.append(f"[{letter}]")
        elif s == LetterScore.PARTIAL:
            cells.append(f"({letter})")
        else:
            cells.append(f" {letter} ")
    return "".join(cells)


def print_board(game_loop):
    """Print the revealed rules and whatever they display."""
    session = game_loop.session
    result = game_loop.result
    context = session.effective_context

    print()
    for rule in RULES:
        if rule.rule_id > session.visible_count:
            break
        status = rule_status(rule.rule_id, result)
        print(f"{STATUS_MARKS[status]} {rule.rule_id:2d}. {rule.description}")
        if rule.tip and status != RuleStatus.SATISFIED:
            print(f"         tip: {rule.tip}")
        if rule.rule_id in result.feedback:
            print(f"         {result.feedback[rule.rule_id]}")

        if context is None or status == RuleStatus.SATISFIED:
            continue
        if rule.shows(DisplayTag.SHOW_MAP):
            print(f"         streetview: {context.geo_target.imagery_url}")
        if rule.shows(DisplayTag.SHOW_MATH):
            print(f"         som: {context.arithmetic_puzzle.expression}")
        if rule.shows(DisplayTag.SHOW_WORDROW):
            print(f"         puzzel: {vocab.WORDROW_URL}")
        if rule.shows(DisplayTag.SHOW_WORD_GAME):
            game = session.word_game
            for word, scores in zip(game.guesses, game.grid()):
                print(f"         {_format_guess(word, scores)}")
            print(f"         {game.guesses_left} pogingen over")
            if game.rejection_reason:
                print(f"         {game.rejection_reason}")

    if game_loop.roman_overlay_active():
        overlay = "".join(
            f"<{seg.text}={seg.value}>" if seg.is_run else seg.text
            for seg in highlight_segments(session.candidate)
        )
        print(f"\nromeinse cijfers: {overlay}")

    if context is not None:
        print(f"\n{context.temperature_c}°C - {len(result.satisfied)}/{result.total} regels")
    if session.game_complete:
        print(f"\n{vocab.COMPLETION_MESSAGE}")


def cmd_play(args):
    """Interactive game: every line is a new candidate or a command."""
    game_loop = _create_loop(args.offline)
    print(PLAY_HELP)

    while True:
        try:
            line = input("\nwachtwoord> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line.startswith(":"):
            game_loop.edit_candidate(line)
            print_board(game_loop)
            continue

        command, _, argument = line[1:].partition(" ")
        if command == "quit":
            break
        elif command == "refresh":
            outcome = game_loop.refresh()
            if not outcome.applied:
                print(f"Error: {outcome.error}")
        elif command == "entry":
            game_loop.set_guess_entry(argument)
            print(f"invoer: {game_loop.session.word_game.current_entry}")
            continue
        elif command == "guess":
            outcome = game_loop.submit_guess(argument)
            if outcome.success:
                print(_format_guess(outcome.word, outcome.scores))
            else:
                print(f"Error: {outcome.error}")
        elif command == "reset":
            game_loop.reset_word_game()
        elif command == "wordrow":
            game_loop.mark_wordrow_completed()
        else:
            print(PLAY_HELP)
            continue
        print_board(game_loop)


def cmd_serve(args):
    """Run the REST API."""
    import uvicorn

    uvicorn.run("passgame.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
