"""
Formatting checks for hookchain.

This module provides:
- Patch construction from in-memory diffs
- clang-format invocation
- The interactive pre-commit format check
"""

from hookchain.formatting.check import FormatCheck, matches_extension
from hookchain.formatting.clang_format import ClangFormatter
from hookchain.formatting.patch import diff_file, write_patch
from hookchain.formatting.prompt import ScriptedPrompter, TerminalPrompter

__all__ = [
    "FormatCheck",
    "matches_extension",
    "ClangFormatter",
    "diff_file",
    "write_patch",
    "ScriptedPrompter",
    "TerminalPrompter",
]
