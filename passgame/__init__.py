"""
Passgame - Progressive Constraint Engine

A rules-driven engine for the "password game": the player types a single
string and an ordered list of rules must all hold at once. The engine provides:
- Rule evaluation against a session context
- A reveal ratchet that decides how many rules are shown
- Roman-numeral valuation and word-guess scoring
- A word-guessing mini-game with dictionary validation
"""

__version__ = "0.1.0"
