"""hookchain exceptions.

All exceptions inherit from HookchainError so the CLI can report them
uniformly and exit non-zero.
"""

from __future__ import annotations

from typing import Optional, Sequence


class HookchainError(Exception):
    """Base exception for all hookchain errors."""

    pass


class ConfigError(HookchainError):
    """Raised when the configuration is invalid."""

    pass


class FormatterError(HookchainError):
    """Raised when the formatter exits with an error."""

    pass


class FormatterNotFoundError(FormatterError):
    """Raised when the formatter binary cannot be found or executed."""

    pass


class GitError(HookchainError):
    """Raised when a git command fails."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: Optional[str] = None):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"'{' '.join(self.command)}' failed with exit code {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)
