"""
Tests for Roman-numeral valuation and highlighting.
"""

import pytest

from ..engine_core.roman import (
    value_of,
    find_runs,
    has_run_with_value,
    highlight_segments,
)


class TestValueOf:
    """Tests for the subtractive-pair scan."""

    @pytest.mark.parametrize("run,expected", [
        ("XXXV", 35),
        ("IV", 4),
        ("MCMXC", 1990),
        ("XXXIV", 34),
        ("I", 1),
        ("VX", 5),
    ])
    def test_known_values(self, run, expected):
        assert value_of(run) == expected

    def test_ill_formed_runs_are_still_valued(self):
        """No well-formedness check: IIII is simply 4, IC is 99."""
        assert value_of("IIII") == 4
        assert value_of("IC") == 99


class TestFindRuns:
    """Tests for locating runs."""

    def test_maximal_runs_in_order(self):
        runs = find_runs("abXXXVcdIV")
        assert [r.run for r in runs] == ["XXXV", "IV"]
        assert [r.start for r in runs] == [2, 8]
        assert runs[0].end == 6
        assert runs[0].value == 35

    def test_lower_case_is_not_roman(self):
        assert find_runs("xxxv mix") == []

    def test_empty_text(self):
        assert find_runs("") == []

    def test_has_run_with_value_needs_a_single_run(self):
        """Two runs adding up to 35 do not count."""
        assert has_run_with_value("aXXXVb", 35)
        assert not has_run_with_value("XXaXV", 35)
        assert not has_run_with_value("XXXVI", 35)


class TestHighlightSegments:
    """Tests for the overlay segmentation."""

    def test_concatenation_reproduces_text(self):
        text = "Hallo XXXV en MCM!"
        segments = highlight_segments(text)
        assert "".join(s.text for s in segments) == text

    def test_runs_are_flagged_with_values(self):
        segments = highlight_segments("aXXXVb")
        assert [(s.text, s.is_run, s.value) for s in segments] == [
            ("a", False, None),
            ("XXXV", True, 35),
            ("b", False, None),
        ]

    def test_text_without_runs_is_one_segment(self):
        segments = highlight_segments("abc")
        assert len(segments) == 1
        assert not segments[0].is_run

    def test_empty_text_has_no_segments(self):
        assert highlight_segments("") == []
