"""
Git utilities for hooks.

Wraps the plumbing commands the hooks rely on: history queries,
diff-index enumeration, config get/set and patch application.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from hookchain.errors import GitError

logger = logging.getLogger(__name__)

# Object id of the empty tree in SHA-1 repositories
EMPTY_TREE_SHA1 = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

PREFERENCE_KEY = "clangFormatOnCommit"
PREFERENCE_ALWAYS = "always"


class GitRepo:
    """A git working tree, addressed through the git command line."""

    def __init__(self, root: Optional[Path] = None, git: str = "git"):
        self.git = git
        self.root = Path(root) if root else self._discover_root()

    def _discover_root(self) -> Path:
        result = subprocess.run(
            [self.git, "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            raise GitError(["git", "rev-parse", "--show-toplevel"], result.returncode, result.stderr)
        return Path(result.stdout.strip())

    def _run(
        self,
        *args: str,
        check: bool = True,
        input: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        cmd = [self.git, *args]
        logger.debug(f"Running {' '.join(cmd)} in {self.root}")
        result = subprocess.run(
            cmd,
            cwd=self.root,
            capture_output=True,
            text=True,
            input=input,
        )
        if check and result.returncode != 0:
            raise GitError(cmd, result.returncode, result.stderr)
        return result

    def has_head(self) -> bool:
        """Check whether HEAD points at a commit."""
        result = self._run("rev-parse", "--verify", "-q", "HEAD", check=False)
        return result.returncode == 0

    def empty_tree(self) -> str:
        """Object id of the empty tree for this repository's hash algorithm."""
        result = self._run("hash-object", "-t", "tree", "--stdin", input="", check=False)
        object_id = result.stdout.strip()
        return object_id if result.returncode == 0 and object_id else EMPTY_TREE_SHA1

    def diff_base(self) -> str:
        """
        Reference the index is compared against.

        HEAD when there is history, otherwise the empty tree so the first
        commit can still be checked.
        """
        if self.has_head():
            return "HEAD"
        logger.debug("No HEAD yet, diffing against the empty tree")
        return self.empty_tree()

    def changed_files(self, against: str) -> list[str]:
        """
        List files added, copied, modified or renamed in the index.

        Args:
            against: Commit or tree to compare the index with

        Returns:
            Paths relative to the repository root
        """
        result = self._run(
            "diff-index", "--cached", "--diff-filter=ACMR", "--name-only", "-z", against, "--"
        )
        return [p for p in result.stdout.split("\0") if p]

    def current_branch(self) -> Optional[str]:
        """Get the current branch name, or None on a detached HEAD."""
        result = self._run("symbolic-ref", "--short", "-q", "HEAD", check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def config_get(self, key: str) -> Optional[str]:
        """Read a config value; None when unset."""
        result = self._run("config", "--get", key, check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip()

    def config_set(self, key: str, value: str) -> None:
        self._run("config", key, value)

    def branch_preference(self, branch: Optional[str]) -> Optional[str]:
        """Read the clang-format preference stored for a branch."""
        if not branch:
            return None
        return self.config_get(preference_key(branch))

    def remember_always(self, branch: str) -> None:
        self.config_set(preference_key(branch), PREFERENCE_ALWAYS)

    def apply_to_index(self, patch_path: Path) -> None:
        """Apply a patch to the working tree and the index together."""
        self._run("apply", "--index", str(patch_path))

    def hooks_dir(self) -> Path:
        """The directory git looks in for hooks (honours core.hooksPath)."""
        result = self._run("rev-parse", "--git-path", "hooks")
        path = Path(result.stdout.strip())
        return path if path.is_absolute() else self.root / path


def preference_key(branch: str) -> str:
    return f"branch.{branch}.{PREFERENCE_KEY}"
