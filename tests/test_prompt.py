"""
Tests for reading answers from a terminal.
"""

from __future__ import annotations

import io
import os

import pytest

from hookchain.formatting.prompt import ScriptedPrompter, TerminalPrompter

requires_pty = pytest.mark.skipif(not hasattr(os, "openpty"), reason="no pseudo-terminals")


@pytest.fixture
def pty():
    master, slave = os.openpty()
    yield master, os.ttyname(slave)
    os.close(slave)
    os.close(master)


@requires_pty
class TestTerminalPrompter:
    def test_reads_answer_from_terminal(self, pty):
        master, tty_path = pty
        os.write(master, b"y\n")

        assert TerminalPrompter(tty_path=tty_path).ask("? ") == "y"

    def test_question_goes_to_output(self, pty):
        master, tty_path = pty
        os.write(master, b"always\n")
        output = io.StringIO()

        answer = TerminalPrompter(tty_path=tty_path, output=output).ask("[Y/A/N/C] ? => ")

        assert answer == "always"
        assert output.getvalue() == "[Y/A/N/C] ? => "

    def test_end_of_input(self, pty):
        master, tty_path = pty
        os.write(master, b"\x04")

        assert TerminalPrompter(tty_path=tty_path).ask("? ") is None


class TestNoTerminal:
    def test_missing_terminal(self, tmp_path):
        assert TerminalPrompter(tty_path=str(tmp_path / "no-tty")).ask("? ") is None


class TestScriptedPrompter:
    def test_replays_answers(self):
        prompter = ScriptedPrompter(["n", "y"])

        assert prompter.ask("first") == "n"
        assert prompter.ask("second") == "y"
        assert prompter.ask("third") is None
        assert prompter.questions == ["first", "second", "third"]
