"""
clang-format style check for staged files.

Builds a patch of the formatting changes clang-format would make to the
files being committed, shows it, and lets the user apply it, skip it or
cancel the commit. Applying can be remembered per branch.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from rich.console import Console
from rich.syntax import Syntax

from hookchain.config import HookchainConfig
from hookchain.formatting.clang_format import ClangFormatter, find_executable
from hookchain.formatting.patch import (
    ENCODING,
    ENCODING_ERRORS,
    delete_old_patches,
    diff_file,
    read_source,
    write_patch,
)
from hookchain.formatting.prompt import Prompter, TerminalPrompter
from hookchain.hooks.git import PREFERENCE_ALWAYS, GitRepo, preference_key
from hookchain.models import FormatChoice, Patch

logger = logging.getLogger(__name__)

PROMPT_TEXT = (
    "\nDo you want to install patch?\n"
    "    Yes - commit with patch,\n"
    "    Always - assume yes (don't ask again for this branch),\n"
    "    No - commit without patch,\n"
    "    Cancel - stop committing. "
    "[Y/A/N/C] ? => "
)


class Formatter(Protocol):
    def format(self, path: Path) -> str: ...


def matches_extension(path: str, extensions: list[str]) -> bool:
    """Check whether a file's final extension is in the allowlist."""
    name = os.path.basename(path)
    if "." not in name:
        return False
    return "." + name.rsplit(".", 1)[-1] in extensions


class FormatCheck:
    """
    The pre-commit clang-format hook.

    Usage:
        check = FormatCheck(config, GitRepo())
        sys.exit(check.run())
    """

    def __init__(
        self,
        config: HookchainConfig,
        repo: GitRepo,
        formatter: Optional[Formatter] = None,
        prompter: Optional[Prompter] = None,
        console: Optional[Console] = None,
    ):
        self.config = config
        self.repo = repo
        self.formatter = formatter
        self.prompter = prompter or TerminalPrompter()
        self.console = console or Console(highlight=False)

    def run(self) -> int:
        """Run the check; returns the hook's exit code."""
        # Fail before touching any file if clang-format is unavailable
        formatter = self.formatter or ClangFormatter.locate(
            self.config.clang_format,
            self.config.clang_format_style,
            config_source=self.config.describe_source(),
        )

        against = self.repo.diff_base()
        files = self.select_files(self.repo.changed_files(against))
        patch = self.build_patch(files, formatter)

        if patch.is_empty:
            self.console.print("Files in this commit comply with the clang-format rules.")
            return 0

        patch_dir = self._patch_dir()
        if self.config.delete_old_patches:
            delete_old_patches(patch_dir)
        patch_path = write_patch(patch, patch_dir)
        logger.debug(f"Wrote patch for {len(patch.files)} file(s) to {patch_path}")

        self.show_patch(patch)

        branch = self.repo.current_branch()
        if self.repo.branch_preference(branch) == PREFERENCE_ALWAYS:
            self.console.print(
                "Git config set to always apply clang formatted patch. Applying..."
            )
            self.repo.apply_to_index(patch_path)
            return 0

        return self.ask_and_apply(patch_path, branch)

    def select_files(self, files: list[str]) -> list[str]:
        """Drop files outside the extension allowlist when filtering is on."""
        if not self.config.parse_extensions:
            return list(files)
        selected = [f for f in files if matches_extension(f, self.config.file_extensions)]
        skipped = len(files) - len(selected)
        if skipped:
            logger.debug(f"Skipping {skipped} file(s) without a checked extension")
        return selected

    def build_patch(self, files: list[str], formatter: Formatter) -> Patch:
        """Format each file and collect the differences into one patch."""
        patch = Patch()
        for path in files:
            source = self.repo.root / path
            if not source.is_file():
                # Staged, then removed from the working tree
                logger.debug(f"Skipping {path}: not a file in the working tree")
                continue
            original = read_source(source)
            formatted = formatter.format(source)
            patch.add(diff_file(path, original, formatted))
        return patch

    def show_patch(self, patch: Patch) -> None:
        self.console.print(
            "\nThe following differences were found between the code to commit "
            "and the clang-format rules:\n"
        )
        data = patch.to_text().encode(ENCODING, ENCODING_ERRORS)

        color_diff = find_executable(self.config.color_diff, "colordiff")
        if color_diff and self.console.is_terminal:
            self.console.file.flush()
            subprocess.run([color_diff], input=data)
            return

        # Undecodable source bytes are shown as replacement characters
        text = data.decode(ENCODING, "replace")

        if self.console.is_terminal:
            self.console.print(Syntax(text, "diff", theme="ansi_dark", background_color="default"))
        else:
            self.console.print(text, markup=False, highlight=False, emoji=False, end="")
        if color_diff is None:
            self.console.print("\nTip: Install colordiff to get better diff output")

    def ask_and_apply(self, patch_path: Path, branch: Optional[str]) -> int:
        while True:
            answer = self.prompter.ask(PROMPT_TEXT)
            if answer is None:
                # No terminal to ask on
                self.console.print("\nNo answer available, stopping.")
                return 1

            choice = FormatChoice.parse(answer)
            if choice is None:
                self.console.print("Please select a valid choice.")
                continue

            if choice is FormatChoice.YES:
                self.repo.apply_to_index(patch_path)
                return 0

            if choice is FormatChoice.ALWAYS:
                self.repo.apply_to_index(patch_path)
                self._remember(branch)
                return 0

            if choice is FormatChoice.NO:
                self.console.print(
                    f"\nCommitting without the formatting changes. You can apply them later with:\n"
                    f"    git apply {patch_path}\n"
                    "(may need to be called from the root directory of your repository)",
                    markup=False,
                )
                return 0

            return 1

    def _remember(self, branch: Optional[str]) -> None:
        if branch is None:
            self.console.print(
                "\n[yellow]HEAD is detached; the choice cannot be remembered "
                "for a branch.[/yellow]"
            )
            return

        self.repo.remember_always(branch)
        key = preference_key(branch)
        self.console.print(
            "\nAutomatic clang formatting is now enabled for this branch.\n"
            "You will no longer be prompted to re-format code on checkin.\n"
            f"To reset this, remove the '{key}'\n"
            "option from your repo's gitconfig (normally GIT_DIR/config)",
            markup=False,
        )

    def _patch_dir(self) -> Path:
        if self.config.patch_dir:
            return Path(self.config.patch_dir)
        return Path(tempfile.gettempdir())
