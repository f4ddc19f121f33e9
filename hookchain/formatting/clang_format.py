"""
clang-format integration for hookchain.

Locates the clang-format binary and runs it as a filter over source files.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from hookchain.errors import FormatterError, FormatterNotFoundError
from hookchain.formatting.patch import ENCODING, ENCODING_ERRORS

logger = logging.getLogger(__name__)


def find_executable(configured: Optional[str], default_name: str) -> Optional[str]:
    """Resolve a configured path or a name on PATH to an executable file."""
    candidate = configured or shutil.which(default_name)
    if not candidate:
        return None
    if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
        return candidate
    # A bare command name in the config still resolves through PATH
    return shutil.which(candidate)


class ClangFormatter:
    """Runs clang-format on a file and returns the formatted content."""

    def __init__(self, binary: str, style: str = "file"):
        self.binary = binary
        self.style = style

    @classmethod
    def locate(
        cls,
        configured: Optional[str] = None,
        style: str = "file",
        config_source: Optional[str] = None,
    ) -> ClangFormatter:
        """
        Find clang-format.

        Raises:
            FormatterNotFoundError: binary missing or not executable
        """
        binary = find_executable(configured, "clang-format")
        if binary is None:
            where = config_source or "the hookchain configuration"
            raise FormatterNotFoundError(
                "clang-format executable not found.\n"
                f"Set the correct path under [clang-format] binary in {where} "
                "or with the HOOKCHAIN_CLANG_FORMAT environment variable."
            )
        logger.debug(f"Using clang-format at {binary}")
        return cls(binary, style)

    def format(self, path: Path) -> str:
        """Format a file on disk, returning the formatted text."""
        # clang-format resolves -style=file relative to the input file
        result = subprocess.run(
            [self.binary, f"-style={self.style}", str(path)],
            capture_output=True,
        )
        if result.returncode != 0:
            stderr = result.stderr.decode(ENCODING, "replace").strip()
            raise FormatterError(
                f"clang-format failed on {path} (exit code {result.returncode}): {stderr}"
            )
        return result.stdout.decode(ENCODING, ENCODING_ERRORS)
