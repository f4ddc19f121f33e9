"""
Patch construction.

Builds git-applicable unified diffs from two in-memory versions of a file,
so both sides of each hunk already name the real path.
"""

from __future__ import annotations

import difflib
import logging
import time
from pathlib import Path
from typing import Optional

from hookchain.models import FileDiff, Patch

logger = logging.getLogger(__name__)

PATCH_PREFIX = "pre-commit-clang-format"
NO_NEWLINE_MARKER = "\\ No newline at end of file\n"

# Round-trips undecodable bytes so the patch reproduces the file exactly
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


def split_lines(text: str) -> list[str]:
    """Split on newlines only, keeping them; a final unterminated line stays bare."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def diff_file(path: str, original: str, formatted: str) -> Optional[FileDiff]:
    """
    Diff a file's content against its formatted version.

    Args:
        path: Repository-relative path, used for both sides of the diff
        original: Current content
        formatted: Formatter output

    Returns:
        FileDiff, or None if the contents are identical
    """
    if original == formatted:
        return None

    hunks = difflib.unified_diff(
        split_lines(original),
        split_lines(formatted),
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
    )

    lines = [f"diff --git a/{path} b/{path}\n"]
    for line in hunks:
        if line.endswith("\n"):
            lines.append(line)
        else:
            lines.append(line + "\n")
            lines.append(NO_NEWLINE_MARKER)

    return FileDiff(path=path, text="".join(lines))


def read_source(path: Path) -> str:
    return path.read_bytes().decode(ENCODING, ENCODING_ERRORS)


def patch_filename(now: Optional[float] = None) -> str:
    """Name of the patch file for this run, timestamped to the second."""
    suffix = time.strftime("%Y%m%d-%H%M%S", time.localtime(now))
    return f"{PATCH_PREFIX}-{suffix}.patch"


def write_patch(patch: Patch, directory: Path, now: Optional[float] = None) -> Path:
    """Write the patch to directory and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    patch_path = directory / patch_filename(now)
    patch_path.write_bytes(patch.to_text().encode(ENCODING, ENCODING_ERRORS))
    return patch_path


def delete_old_patches(directory: Path) -> int:
    """Remove patches left by earlier runs. Best effort; returns the count removed."""
    removed = 0
    for stale in directory.glob(f"{PATCH_PREFIX}*.patch"):
        try:
            stale.unlink()
            removed += 1
        except OSError as e:
            logger.warning(f"Could not remove old patch {stale}: {e}")
    if removed:
        logger.debug(f"Removed {removed} old patch(es) from {directory}")
    return removed
