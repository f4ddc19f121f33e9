"""
Git hook installation utilities.
"""

from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import Optional

from hookchain.errors import GitError
from hookchain.hooks.git import GitRepo

logger = logging.getLogger(__name__)

MANAGED_MARKER = "# Managed by hookchain"

# Hook file name -> hookchain subcommand
HOOK_COMMANDS = {
    "pre-commit": "pre-commit",
    "pre-push": "pre-push",
    "pre-commit-clang-format": "clang-format",
}

HOOK_TEMPLATE = '''#!/bin/sh
{marker}
# Installed by: hookchain install --type {hook_type}
# Remove with:  hookchain install --type {hook_type} --uninstall

exec hookchain {command} "$@"
'''


def get_git_hooks_dir(repo: Optional[GitRepo] = None) -> Optional[Path]:
    """Find the directory git reads hooks from."""
    try:
        repo = repo or GitRepo()
        hooks_dir = repo.hooks_dir()
    except (GitError, FileNotFoundError) as e:
        logger.debug(f"Not in a git repository: {e}")
        return None

    hooks_dir.mkdir(parents=True, exist_ok=True)
    return hooks_dir


def is_managed(hook_path: Path) -> bool:
    try:
        return MANAGED_MARKER in hook_path.read_text()
    except (OSError, UnicodeDecodeError):
        return False


def install_hook(
    hook_type: str = "pre-commit",
    hooks_dir: Optional[Path] = None,
    force: bool = False,
) -> bool:
    """
    Install a git hook shim that runs hookchain.

    Args:
        hook_type: pre-commit, pre-push or pre-commit-clang-format
        hooks_dir: Target directory (defaults to the repository's hooks dir)
        force: Overwrite a hook that hookchain does not manage

    Returns:
        True if successful
    """
    if hook_type not in HOOK_COMMANDS:
        raise ValueError(f"Unknown hook type: {hook_type}")

    hooks_dir = hooks_dir or get_git_hooks_dir()
    if not hooks_dir:
        return False

    hook_path = hooks_dir / hook_type

    if hook_path.exists() and not force and not is_managed(hook_path):
        logger.warning(f"Refusing to overwrite existing hook {hook_path}")
        return False

    hook_content = HOOK_TEMPLATE.format(
        marker=MANAGED_MARKER,
        hook_type=hook_type,
        command=HOOK_COMMANDS[hook_type],
    )

    hook_path.write_text(hook_content)

    # Make executable
    hook_path.chmod(hook_path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    return True


def uninstall_hook(hook_type: str = "pre-commit", hooks_dir: Optional[Path] = None) -> bool:
    """
    Remove a git hook.

    Args:
        hook_type: Type of hook to remove
        hooks_dir: Directory holding the hook

    Returns:
        True if hook was removed
    """
    hooks_dir = hooks_dir or get_git_hooks_dir()
    if not hooks_dir:
        return False

    hook_path = hooks_dir / hook_type

    if not hook_path.exists():
        return False

    # Check if it's our hook
    if not is_managed(hook_path):
        return False

    hook_path.unlink()
    return True
