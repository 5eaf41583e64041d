"""
Stapweekend Vocabularies - Fixed tables used by the rules and the context provider.

Everything here is constant data. The rules only reference these tables,
so each table can be checked on its own.
"""

import re

from ...engine_core.state import ArithmeticPuzzle, GeoTarget


# Rule 3: any one of these characters counts as "special"
SPECIAL_CHARACTERS = frozenset("!@#$%^&*()_+-=[]{};':\"\\|,.<>/?")

# Rule 6 (matched case-insensitively)
MONTHS = (
    "januari", "februari", "maart", "april", "mei", "juni",
    "juli", "augustus", "september", "oktober", "november", "december",
)

# Rule 13: two-letter element symbols (matched case-sensitively)
ELEMENT_SYMBOLS = (
    "He", "Li", "Be", "Ne", "Na", "Mg", "Al", "Si", "Cl", "Ar",
    "Ca", "Sc", "Ti", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
    "Ga", "Ge", "As", "Se", "Br", "Kr", "Rb", "Sr", "Zr", "Nb",
    "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd", "In", "Sn", "Sb",
    "Te", "Xe", "Cs", "Ba", "La", "Ce", "Pr", "Nd", "Pm", "Sm",
    "Eu", "Gd", "Tb", "Dy", "Ho", "Er", "Tm", "Yb", "Lu", "Hf",
    "Ta", "Re", "Os", "Ir", "Pt", "Au", "Hg", "Tl", "Pb", "Bi",
    "Po", "At", "Rn", "Fr", "Ra", "Ac", "Th", "Pa", "Np", "Pu",
    "Am", "Cm", "Bk", "Cf", "Es", "Fm", "Md", "No", "Lr", "Rf",
    "Db", "Sg", "Bh", "Hs", "Mt", "Ds", "Rg", "Cn", "Nh", "Fl",
    "Mc", "Lv", "Ts", "Og",
)

# Rule 18 (matched case-insensitively)
COLORS = (
    "rood", "blauw", "groen", "geel", "oranje", "paars",
    "roze", "zwart", "wit", "bruin", "grijs",
)

# Fixed phrase rules: rule_id -> literal
ROMAN_TARGET = 35
DIGIT_SUM_TARGET = 50
MIN_LENGTH = 8
SPIRIT_WORD = "geest"           # Rule 16
THEME_2001 = "tomorrowland"     # Rule 17
EDITION_2025 = "64"             # Rule 19
ANTHEM_WORD = "verkeerde"       # Rule 20

# Rule 22: anything shaped like a move in algebraic notation
CHESS_MOVE_PATTERN = re.compile(r"[KQRBN]?[a-h]?[1-8]?x?[a-h][1-8][+#]?")
CHESS_BEST_MOVE = "Qb5+"

# Rule 21: geography targets, in the order feedback looks for them
_MAPS_EMBED = "https://www.google.com/maps/embed?pb=!4v{stamp}!6m8!1m7!1s{pano}!2m2!1d{lat}!2d{lng}!3f{heading}!4f0!5f0.4820865974627469!6i1"
_GENERIC_PANO = "CAoSLEFGMVFpcE5fVjBfSGVqVGVqVGVqVGVqVGVqVGVqVGVqVGVqVGVqVGVqVGVq"

GEO_TARGETS = (
    GeoTarget("NL", "nederland", _MAPS_EMBED.format(
        stamp=1750161674270, pano=_GENERIC_PANO, lat=52.3676, lng=4.9041, heading=0)),
    GeoTarget("DE", "duitsland", _MAPS_EMBED.format(
        stamp=1750161674271, pano=_GENERIC_PANO, lat=52.5200, lng=13.4050, heading=0)),
    GeoTarget("FR", "frankrijk", _MAPS_EMBED.format(
        stamp=1750161674272, pano=_GENERIC_PANO, lat=48.8566, lng=2.3522, heading=0)),
    GeoTarget("BE", "belgië", _MAPS_EMBED.format(
        stamp=1750161674270, pano="PObmoWuv4YsRK7s8AA3b0w",
        lat=50.84772347040428, lng=4.357206757549814, heading=144.22676)),
    GeoTarget("IT", "italië", _MAPS_EMBED.format(
        stamp=1750161674273, pano=_GENERIC_PANO, lat=41.9028, lng=12.4964, heading=0)),
    GeoTarget("ES", "spanje", _MAPS_EMBED.format(
        stamp=1750161674274, pano=_GENERIC_PANO, lat=40.4168, lng=-3.7038, heading=0)),
    GeoTarget("PT", "portugal", _MAPS_EMBED.format(
        stamp=1750161674275, pano=_GENERIC_PANO, lat=38.7223, lng=-9.1393, heading=0)),
)

COUNTRY_NAMES = tuple(target.country_name for target in GEO_TARGETS)

# Rule 23: every puzzle has the same answer
ARITHMETIC_PUZZLES = (
    ArithmeticPuzzle("(15 × 2) - (20 + 6)", 4),
    ArithmeticPuzzle("√36 - 2", 4),
    ArithmeticPuzzle("(3² × 2) - 14", 4),
    ArithmeticPuzzle("(48 ÷ 12) + 0", 4),
    ArithmeticPuzzle("(7 × 3) - 17", 4),
    ArithmeticPuzzle("(8 ÷ 2) × 1", 4),
    ArithmeticPuzzle("(5 + 3) ÷ 2", 4),
)

# Word game targets are drawn from the 5-letter entries
WORD_POOL = (
    "HUIS", "BOOM", "WATER", "LICHT", "GROEN", "ZWART", "ROOD", "BLAUW", "GEEL", "GROOT",
    "KLEIN", "MOOI", "LIEF", "GOED", "SLECHT", "NIEUW", "OUD", "WARM", "KOUD", "HARD",
    "ZACHT", "SNEL", "TRAAG", "HOOG", "LAAG", "BREED", "SMAL", "LANG", "KORT", "DICHT",
    "OPEN", "LEEG", "VOL", "STIL", "LUID", "ZOET", "ZUUR", "ZOUT", "BITTER", "SCHERP",
    "BOT", "GLAD", "ROUW", "DROOG", "NAT", "SCHOON", "VUIL", "RIJK", "ARM", "DUUR",
)

TARGET_WORDS = tuple(word for word in WORD_POOL if len(word) == 5)

# Zodiac: (start month, start day, end month, end day, glyph).
# Capricorn wraps the turn of the year.
ZODIAC_SIGNS = (
    (12, 22, 1, 19, "♑"),
    (1, 20, 2, 18, "♒"),
    (2, 19, 3, 20, "♓"),
    (3, 21, 4, 19, "♈"),
    (4, 20, 5, 20, "♉"),
    (5, 21, 6, 20, "♊"),
    (6, 21, 7, 22, "♋"),
    (7, 23, 8, 22, "♌"),
    (8, 23, 9, 22, "♍"),
    (9, 23, 10, 22, "♎"),
    (10, 23, 11, 21, "♏"),
    (11, 22, 12, 21, "♐"),
)
DEFAULT_ZODIAC = "♈"

# Lunar phases in cycle order, each covering 3.7 days
LUNAR_PHASES = ("🌑", "🌒", "🌓", "🌔", "🌕", "🌖", "🌗", "🌘")
LUNAR_BUCKET_DAYS = 3.7
LUNAR_CYCLE_DAYS = 29.53

# Embedded third-party puzzle for rule 27
WORDROW_URL = (
    "https://puzzleme.amuselabs.com/pmm/wordrow?id=abc1d1ef"
    "&set=7a4e8efe7a3cd99c74fba82206174ed7f74167bfd60132bc0b40a7094f116570&embed=1"
)
WORDROW_ORIGIN = "https://puzzleme.amuselabs.com"

COMPLETION_MESSAGE = (
    "GEFELICITEERD! Ga nu naar Uitkijktoren de Boersberg!"
)
