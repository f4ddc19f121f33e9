"""
Data models for hookchain.

These models describe hook runs and formatting patches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class HookEvent(str, Enum):
    """Git lifecycle events that hookchain dispatches."""

    PRE_COMMIT = "pre-commit"
    PRE_PUSH = "pre-push"

    @property
    def action(self) -> str:
        """The Git operation this event guards, as used in messages."""
        return "commit" if self is HookEvent.PRE_COMMIT else "push"


class HookStatus(str, Enum):
    """Outcome of a single sub-hook."""

    PASSED = "passed"
    FAILED = "failed"
    MISSING = "missing"


@dataclass
class HookResult:
    """Result of running one sub-hook."""

    name: str
    status: HookStatus
    exit_code: Optional[int] = None

    @property
    def passed(self) -> bool:
        return self.status is HookStatus.PASSED


@dataclass
class DispatchResult:
    """Results of a dispatcher run, in execution order."""

    event: HookEvent
    results: list[HookResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    @property
    def failed_hook(self) -> Optional[HookResult]:
        """The hook that stopped the run, if any."""
        for result in self.results:
            if not result.passed:
                return result
        return None


class FormatChoice(str, Enum):
    """Answers to the apply-patch prompt."""

    YES = "yes"
    ALWAYS = "always"
    NO = "no"
    CANCEL = "cancel"

    @classmethod
    def parse(cls, answer: str) -> Optional[FormatChoice]:
        """Map user input (Y/A/N/C or the full word) to a choice."""
        answer = answer.strip().lower()
        if not answer:
            return None
        for choice in cls:
            if answer == choice.value or answer == choice.value[0]:
                return choice
        return None


@dataclass
class FileDiff:
    """Unified diff between a file and its formatted content."""

    path: str
    text: str


@dataclass
class Patch:
    """A patch accumulated from per-file diffs."""

    files: list[FileDiff] = field(default_factory=list)

    def add(self, diff: Optional[FileDiff]) -> None:
        if diff is not None and diff.text:
            self.files.append(diff)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    @property
    def is_empty(self) -> bool:
        return not self.files

    def to_text(self) -> str:
        return "".join(f.text for f in self.files)
