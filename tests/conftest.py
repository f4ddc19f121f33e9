"""
Shared fixtures for hookchain tests.
"""

from __future__ import annotations

import io
import shutil
import stat
import subprocess
from pathlib import Path

import pytest
from rich.console import Console

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def run_git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout


def write_script(path: Path, body: str) -> Path:
    """Write an executable shell script."""
    path.write_text("#!/bin/sh\n" + body + "\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def console():
    """A console that records output instead of writing to a terminal."""
    return Console(file=io.StringIO(), width=200, soft_wrap=True, highlight=False)


def output_of(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture
def git_repo(tmp_path):
    """An empty git repository with an identity configured."""
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    run_git(repo, "config", "user.email", "dev@example.com")
    run_git(repo, "config", "user.name", "Dev")
    run_git(repo, "config", "commit.gpgsign", "false")
    run_git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    return repo
