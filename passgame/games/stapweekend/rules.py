"""
Stapweekend Rules - The rule catalog of the password game.

27 rules, ids 1..27, revealed in order. Rules 8-9, 11-12 and 21-23 and 26
read the session context; rule 15 reads the evaluation time; rules 26
and 27 read the mini-game flags.

Character classes are ASCII on purpose: "digit" means 0-9 and "capital"
means A-Z, so glyphs such as "²" or "É" never count.
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone

from ...config import TIME_OFFSET_HOURS
from ...engine_core.rule import DisplayTag, Rule, RuleEnv
from ...engine_core.roman import has_run_with_value
from . import vocab


DIGITS = frozenset("0123456789")
CAPITALS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")

GAME_TIMEZONE = timezone(timedelta(hours=TIME_OFFSET_HOURS))


# =============================================================================
# Helpers
# =============================================================================

def _digits(candidate: str) -> list[int]:
    return [int(ch) for ch in candidate if ch in DIGITS]


def _count_capitals(candidate: str) -> int:
    return sum(1 for ch in candidate if ch in CAPITALS)


def _contains_any(candidate: str, words, ignore_case: bool = True) -> bool:
    haystack = candidate.lower() if ignore_case else candidate
    return any(word in haystack for word in words)


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


def clock_strings(now: datetime) -> tuple[str, str]:
    """
    The two accepted HH:MM strings for rule 15.

    Both the current and the next minute in the game time zone are
    accepted, so a candidate typed right before a minute boundary still
    passes when evaluated right after it. Naive datetimes are taken as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(GAME_TIMEZONE)
    following = local + timedelta(minutes=1)
    return local.strftime("%H:%M"), following.strftime("%H:%M")


# =============================================================================
# Predicates
# =============================================================================

def _has_special(candidate: str, env: RuleEnv) -> bool:
    return any(ch in vocab.SPECIAL_CHARACTERS for ch in candidate)


def _digit_sum(candidate: str, env: RuleEnv) -> bool:
    digits = _digits(candidate)
    return bool(digits) and sum(digits) == vocab.DIGIT_SUM_TARGET


def _digit_free_edges(candidate: str, env: RuleEnv) -> bool:
    return bool(candidate) and candidate[0] not in DIGITS and candidate[-1] not in DIGITS


def _has_current_time(candidate: str, env: RuleEnv) -> bool:
    return any(stamp in candidate for stamp in clock_strings(env.now))


def _capitals_match_digits(candidate: str, env: RuleEnv) -> bool:
    capitals = _count_capitals(candidate)
    return capitals > 0 and capitals == len(_digits(candidate))


def _has_country(candidate: str, env: RuleEnv) -> bool:
    return env.ctx.geo_target.country_name.lower() in candidate.lower()


def _has_chess_move(candidate: str, env: RuleEnv) -> bool:
    return env.ctx.chess_best_move in candidate


# =============================================================================
# Near-miss feedback
# =============================================================================

def wrong_country_feedback(candidate: str, env: RuleEnv) -> str | None:
    """Name the first recognised country if none of those found is the target."""
    lowered = candidate.lower()
    found = [name for name in vocab.COUNTRY_NAMES if name in lowered]
    if found and env.ctx.geo_target.country_name.lower() not in found:
        return f"{found[0]} (Verkeerd land)"
    return None


def illegal_move_feedback(candidate: str, env: RuleEnv) -> str | None:
    """Name the first move-shaped substring that is not the best move."""
    moves = vocab.CHESS_MOVE_PATTERN.findall(candidate)
    wrong = [move for move in moves if move != env.ctx.chess_best_move]
    if wrong:
        return f"{wrong[0]} (Illegale zet)"
    return None


# =============================================================================
# Catalog
# =============================================================================

RULES: tuple[Rule, ...] = (
    Rule(
        rule_id=1,
        description=f"Je wachtwoord moet minimaal {vocab.MIN_LENGTH} tekens lang zijn",
        predicate=lambda pwd, env: len(pwd) >= vocab.MIN_LENGTH,
    ),
    Rule(
        rule_id=2,
        description="Je wachtwoord moet een hoofdletter bevatten",
        predicate=lambda pwd, env: _count_capitals(pwd) > 0,
    ),
    Rule(
        rule_id=3,
        description="Je wachtwoord moet een speciaal teken bevatten",
        predicate=_has_special,
        tip="Bijvoorbeeld !@#$",
    ),
    Rule(
        rule_id=4,
        description="Je wachtwoord mag geen spaties bevatten",
        predicate=lambda pwd, env: not any(ch.isspace() for ch in pwd),
    ),
    Rule(
        rule_id=5,
        description="Je wachtwoord moet een cijfer bevatten",
        predicate=lambda pwd, env: bool(_digits(pwd)),
    ),
    Rule(
        rule_id=6,
        description="Je wachtwoord moet een maand bevatten",
        predicate=lambda pwd, env: _contains_any(pwd, vocab.MONTHS),
        tip="Bijvoorbeeld maart",
    ),
    Rule(
        rule_id=7,
        description=f"De cijfers in je wachtwoord moeten optellen tot {vocab.DIGIT_SUM_TARGET}",
        predicate=_digit_sum,
    ),
    Rule(
        rule_id=8,
        description="Voeg het aantal dagen sinds 1 januari toe",
        predicate=lambda pwd, env: str(env.ctx.day_of_year) in pwd,
        tip="Tel de dagen vanaf nieuwjaarsdag tot vandaag",
        requires_context=True,
    ),
    Rule(
        rule_id=9,
        description="Voeg het getal van de dag van de week toe (maandag = 1, zondag = 7)",
        predicate=lambda pwd, env: str(env.ctx.iso_weekday) in pwd,
        requires_context=True,
    ),
    Rule(
        rule_id=10,
        description="Je wachtwoord mag niet beginnen of eindigen met een cijfer",
        predicate=_digit_free_edges,
    ),
    Rule(
        rule_id=11,
        description="Voeg het symbool van het sterrenbeeld van vandaag toe",
        predicate=lambda pwd, env: env.ctx.zodiac_glyph in pwd,
        tip="Bijvoorbeeld ♑ voor Steenbok of ♒ voor Waterman",
        requires_context=True,
    ),
    Rule(
        rule_id=12,
        description="Voeg het huidige maanfase-icoon toe",
        predicate=lambda pwd, env: env.ctx.lunar_phase_glyph in pwd,
        tip="Bijvoorbeeld 🌕 voor volle maan - check kalender-365.nl/maan/actuele-maanstand.html",
        requires_context=True,
    ),
    Rule(
        rule_id=13,
        description="Je wachtwoord moet een tweesymbool van het periodiek systeem bevatten",
        predicate=lambda pwd, env: _contains_any(pwd, vocab.ELEMENT_SYMBOLS, ignore_case=False),
        tip='Zoals "Fe" of "Na"',
    ),
    Rule(
        rule_id=14,
        description=f"Voeg romeinse cijfers toe die samen de waarde van {vocab.ROMAN_TARGET} hebben",
        predicate=lambda pwd, env: has_run_with_value(pwd, vocab.ROMAN_TARGET),
        tip="denk aan: I voor 1, V voor 5 of M voor 1000",
        auxiliary_display=frozenset({DisplayTag.SHOW_ROMAN_OVERLAY}),
    ),
    Rule(
        rule_id=15,
        description=f"Je wachtwoord moet de huidige tijd bevatten volgens Tijdzone (GMT+{TIME_OFFSET_HOURS})",
        predicate=_has_current_time,
        tip="De notatie moet zijn als xx:xx (bijvoorbeeld 08:23).",
    ),
    Rule(
        rule_id=16,
        description='Je wachtwoord moet het woord "Geest" bevatten',
        predicate=lambda pwd, env: vocab.SPIRIT_WORD in pwd.lower(),
        tip='Voeg het woord "Geest" toe aan je wachtwoord (hoofdletters maken niet uit).',
    ),
    Rule(
        rule_id=17,
        description="Benoem het thema van groep 7/8 met de Zomerspelen in 2001",
        predicate=lambda pwd, env: vocab.THEME_2001 in pwd.lower(),
        tip="Dit was het thema van jullie zomerspelen",
    ),
    Rule(
        rule_id=18,
        description="Je wachtwoord moet een kleur als woord bevatten",
        predicate=lambda pwd, env: _contains_any(pwd, vocab.COLORS),
        tip="Bijvoorbeeld blauw",
    ),
    Rule(
        rule_id=19,
        description="Benoem de hoeveelste editie dit jaar (2025) is van de Zomerspelen",
        predicate=lambda pwd, env: vocab.EDITION_2025 in pwd,
        tip="Als getal, dus 20 en niet 20e",
    ),
    Rule(
        rule_id=20,
        description="Benoem in je wachtwoord het 25e woord uit het refrein van ons 7/8 zomerspelen lied van dit jaar?",
        predicate=lambda pwd, env: vocab.ANTHEM_WORD in pwd.lower(),
        tip='Vanaf: "De geestwereld…"',
    ),
    Rule(
        rule_id=21,
        description="Benoem in welk land je bent op basis van de onderstaande streetview",
        predicate=_has_country,
        tip="Kijk goed naar de omgeving, verkeersborden en architectuur",
        requires_context=True,
        near_miss_feedback=wrong_country_feedback,
        auxiliary_display=frozenset({DisplayTag.SHOW_MAP}),
    ),
    Rule(
        rule_id=22,
        description="Je wachtwoord moet de beste zet in algebraïsche schaaknotatie bevatten",
        predicate=_has_chess_move,
        tip="In algebraïsche schaaknotatie - zie nextchessmove.com voor hulp",
        requires_context=True,
        near_miss_feedback=illegal_move_feedback,
        auxiliary_display=frozenset({DisplayTag.SHOW_CHESS}),
    ),
    Rule(
        rule_id=23,
        description="Je wachtwoord moet het antwoord van deze rekensom bevatten",
        predicate=lambda pwd, env: str(env.ctx.arithmetic_puzzle.answer) in pwd,
        tip="Let op de rekenregels",
        requires_context=True,
        auxiliary_display=frozenset({DisplayTag.SHOW_MATH}),
    ),
    Rule(
        rule_id=24,
        description="Je wachtwoord moet evenveel hoofdletters als cijfers hebben",
        predicate=_capitals_match_digits,
    ),
    Rule(
        rule_id=25,
        description="Je wachtwoord moet een lengte hebben die een priemgetal is",
        predicate=lambda pwd, env: is_prime(len(pwd)),
        tip="Dit gaat over het totaal aantal karakters",
    ),
    Rule(
        rule_id=26,
        description="Raad het Nederlandse woord van vijf letters in het woordspel",
        predicate=lambda pwd, env: env.word_game_won,
        tip="Groen = juiste letter op juiste plek, geel = juiste letter op verkeerde plek",
        requires_context=True,
        auxiliary_display=frozenset({DisplayTag.SHOW_WORD_GAME}),
    ),
    Rule(
        rule_id=27,
        description="Voltooi de Wordrow-puzzel",
        predicate=lambda pwd, env: env.wordrow_completed,
        tip="Voltooi de Wordrow-puzzel om deze regel te behalen.",
        auxiliary_display=frozenset({DisplayTag.SHOW_WORDROW}),
    ),
)

RULES_BY_ID = {rule.rule_id: rule for rule in RULES}

# Rule whose unsatisfied state turns on the Roman-numeral overlay
ROMAN_RULE_ID = 14


def get_rule(rule_id: int) -> Rule | None:
    """Get a rule by id."""
    return RULES_BY_ID.get(rule_id)
