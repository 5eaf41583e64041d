"""
Tests for the command-line interface (offline only).
"""

import pytest

from .. import cli


class TestCLI:
    """Tests for passgame commands."""

    def test_rules(self, capsys):
        cli.main(["rules"])
        out = capsys.readouterr().out

        assert " 1. Je wachtwoord moet minimaal 8 tekens lang zijn" in out
        assert "27. " in out

    def test_check(self, capsys):
        cli.main(["check", "abcdefgh", "--offline"])
        out = capsys.readouterr().out

        assert "[x]  1." in out
        assert "[ ]  2." in out
        assert "rules satisfied" in out

    def test_check_feedback(self, capsys):
        cli.main(["check", "xKe2x", "--offline"])
        assert "Ke2 (Illegale zet)" in capsys.readouterr().out

    def test_play(self, capsys, monkeypatch):
        lines = iter([
            "abcdefgh",
            ":entry wat",
            ":guess zzzzz",
            ":wordrow",
            ":bogus",
            ":quit",
        ])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

        cli.main(["play", "--offline"])
        out = capsys.readouterr().out

        assert "[x]  1." in out
        assert "invoer: WAT" in out
        assert "Error: " in out
        assert ":refresh" in out

    def test_play_ends_on_eof(self, monkeypatch):
        def raise_eof(prompt=""):
            raise EOFError

        monkeypatch.setattr("builtins.input", raise_eof)
        cli.main(["play", "--offline"])

    def test_no_command(self):
        with pytest.raises(SystemExit) as exc:
            cli.main([])
        assert exc.value.code == 1
