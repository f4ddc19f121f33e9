"""
hookchain: Git hook dispatching and clang-format checks.

This package runs ordered chains of git hooks for pre-commit and pre-push,
and provides a pre-commit hook that offers clang-format fixes for staged
files.
"""

__version__ = "0.1.0"

from hookchain.models import (
    DispatchResult,
    FileDiff,
    FormatChoice,
    HookEvent,
    HookResult,
    HookStatus,
    Patch,
)
from hookchain.config import HookchainConfig
from hookchain.dispatcher import Dispatcher, SubprocessHookRunner
from hookchain.formatting.check import FormatCheck
from hookchain.hooks.git import GitRepo

__all__ = [
    # Version
    "__version__",
    # Models
    "DispatchResult",
    "FileDiff",
    "FormatChoice",
    "HookEvent",
    "HookResult",
    "HookStatus",
    "Patch",
    # Core
    "HookchainConfig",
    "Dispatcher",
    "SubprocessHookRunner",
    "FormatCheck",
    "GitRepo",
]
