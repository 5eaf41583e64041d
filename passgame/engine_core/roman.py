"""
Roman Numerals - Run detection and best-effort valuation.

A "run" is a maximal stretch of upper-case Roman glyphs inside arbitrary
text. Runs are valued with a simple left-to-right scan:
- A smaller glyph followed by a larger one counts as a subtractive pair
- Anything else is added as-is

No canonical well-formedness is checked ("IIII", "IC" and "VX" all get a value).
"""

from __future__ import annotations
from dataclasses import dataclass
import re


ROMAN_VALUES = {
    "I": 1,
    "V": 5,
    "X": 10,
    "L": 50,
    "C": 100,
    "D": 500,
    "M": 1000,
}

# Case-sensitive: lower-case letters never form a run
_RUN_PATTERN = re.compile(r"[IVXLCDM]+")


@dataclass(frozen=True)
class RomanRun:
    """A run of Roman glyphs found in a text."""
    start: int
    length: int
    run: str
    value: int

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class Segment:
    """A piece of text for the highlighting overlay."""
    text: str
    is_run: bool = False
    value: int | None = None


def value_of(run: str) -> int:
    """
    Value a run of Roman glyphs.

    value_of("XXXV") == 35, value_of("IV") == 4, value_of("MCMXC") == 1990.
    """
    total = 0
    i = 0
    while i < len(run):
        current = ROMAN_VALUES[run[i]]
        following = ROMAN_VALUES[run[i + 1]] if i + 1 < len(run) else None
        if following is not None and current < following:
            total += following - current
            i += 2
        else:
            total += current
            i += 1
    return total


def find_runs(text: str) -> list[RomanRun]:
    """Locate every maximal run of Roman glyphs, in order of appearance."""
    return [
        RomanRun(
            start=match.start(),
            length=len(match.group()),
            run=match.group(),
            value=value_of(match.group()),
        )
        for match in _RUN_PATTERN.finditer(text)
    ]


def has_run_with_value(text: str, target: int) -> bool:
    """Check whether any single run in text values exactly target."""
    return any(run.value == target for run in find_runs(text))


def highlight_segments(text: str) -> list[Segment]:
    """
    Split text into plain and run segments for in-place decoration.

    Joining the segment texts always reproduces the input verbatim.
    """
    segments: list[Segment] = []
    last_index = 0
    for run in find_runs(text):
        if run.start > last_index:
            segments.append(Segment(text=text[last_index:run.start]))
        segments.append(Segment(text=run.run, is_run=True, value=run.value))
        last_index = run.end
    if last_index < len(text):
        segments.append(Segment(text=text[last_index:]))
    return segments
