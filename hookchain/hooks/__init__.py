"""
Git integration for hookchain.

Provides utilities for:
- Querying and updating the repository the hooks run in
- Installing hook shims
"""

from hookchain.hooks.git import GitRepo
from hookchain.hooks.install import get_git_hooks_dir, install_hook, uninstall_hook

__all__ = [
    "GitRepo",
    "install_hook",
    "uninstall_hook",
    "get_git_hooks_dir",
]
