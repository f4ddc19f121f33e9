"""
Interactive prompting.

Git runs hooks with stdin redirected, so answers are read from the
controlling terminal rather than from the process's own input.
"""

from __future__ import annotations

import io
import os
from typing import Iterable, Optional, Protocol, TextIO

TTY_PATH = "/dev/tty"


class Prompter(Protocol):
    """Anything that can ask the user a question."""

    def ask(self, message: str) -> Optional[str]:
        """Return the answer, or None when no more input is available."""
        ...


class TerminalPrompter:
    """Reads answers from the controlling terminal."""

    def __init__(self, tty_path: str = TTY_PATH, output: Optional[TextIO] = None):
        self.tty_path = tty_path
        self.output = output

    def ask(self, message: str) -> Optional[str]:
        try:
            fd = os.open(self.tty_path, os.O_RDWR | os.O_NOCTTY)
        except OSError:
            # No controlling terminal (CI, GUI clients)
            return None
        # A tty is not seekable, so it cannot sit behind a buffered reader
        with io.TextIOWrapper(io.FileIO(fd, "r+")) as tty:
            out = self.output or tty
            out.write(message)
            out.flush()
            line = tty.readline()
        if not line:
            return None
        return line.rstrip("\r\n")


class ScriptedPrompter:
    """Replays canned answers; used in tests and non-interactive runs."""

    def __init__(self, answers: Iterable[str]):
        self.answers = list(answers)
        self.questions: list[str] = []

    def ask(self, message: str) -> Optional[str]:
        self.questions.append(message)
        if not self.answers:
            return None
        return self.answers.pop(0)
