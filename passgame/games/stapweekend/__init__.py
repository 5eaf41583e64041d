"""
Stapweekend password game.

The catalog is hand-authored; vocabularies are in vocab.py.
"""

from .rules import RULES, RULES_BY_ID, ROMAN_RULE_ID, get_rule
from .context import SessionContextProvider, WeatherClient, offline_provider
from .dictionary import DictionaryValidator, StaticDictionary

__all__ = [
    "RULES",
    "RULES_BY_ID",
    "ROMAN_RULE_ID",
    "get_rule",
    "SessionContextProvider",
    "WeatherClient",
    "offline_provider",
    "DictionaryValidator",
    "StaticDictionary",
]
