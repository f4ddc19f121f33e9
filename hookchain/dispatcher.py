"""
Hook dispatcher.

Runs an ordered list of sub-hooks for one Git lifecycle event and stops
at the first hook that is missing or fails.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console

from hookchain.models import DispatchResult, HookEvent, HookResult, HookStatus

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 70

# Exit status reported when a hook cannot be launched at all
LAUNCH_FAILURE_EXIT_CODE = 126

HookRunner = Callable[[str, Path], HookResult]


class SubprocessHookRunner:
    """Run a hook executable with no arguments, inheriting env, cwd and stdio."""

    def __call__(self, name: str, path: Path) -> HookResult:
        try:
            completed = subprocess.run([str(path)])
        except OSError as e:
            logger.warning(f"Could not launch hook {name}: {e}")
            return HookResult(name=name, status=HookStatus.FAILED, exit_code=LAUNCH_FAILURE_EXIT_CODE)

        status = HookStatus.PASSED if completed.returncode == 0 else HookStatus.FAILED
        return HookResult(name=name, status=status, exit_code=completed.returncode)


def is_runnable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


class Dispatcher:
    """
    Sequences the sub-hooks configured for one lifecycle event.

    Usage:
        dispatcher = Dispatcher(HookEvent.PRE_COMMIT, ["lint", "tests"], hooks_dir)
        result = dispatcher.run()
        sys.exit(result.exit_code)
    """

    def __init__(
        self,
        event: HookEvent,
        hooks: list[str],
        hooks_dir: Path,
        runner: Optional[HookRunner] = None,
        console: Optional[Console] = None,
        config_source: Optional[str] = None,
    ):
        self.event = event
        self.hooks = list(hooks)
        self.hooks_dir = Path(hooks_dir)
        self.runner = runner or SubprocessHookRunner()
        self.console = console or Console(highlight=False)
        self.config_source = config_source or "the hookchain configuration"

    def run(self) -> DispatchResult:
        """Run every hook in order; stop on the first missing or failing one."""
        dispatch = DispatchResult(event=self.event)

        for name in self.hooks:
            self.console.print(SEPARATOR, markup=False)
            self.console.print(f"Running hook: {name}", markup=False)

            path = self.hooks_dir / name
            if not is_runnable(path):
                dispatch.results.append(HookResult(name=name, status=HookStatus.MISSING))
                self._report_missing(name)
                break

            result = self.runner(name, path)
            dispatch.results.append(result)
            logger.debug(f"Hook {name} exited with {result.exit_code}")

            if not result.passed:
                self.console.print(f"Hook '{name}' failed.", markup=False)
                break

            self.console.print("OK.")
            self.console.print()

        return dispatch

    def _report_missing(self, name: str) -> None:
        action = self.event.action
        for line in (
            f"Error: file {name} not found.",
            f"Aborting {action}. Make sure the hook is in {self.hooks_dir} and executable.",
            f"You can disable it by removing it from the list in {self.config_source}.",
            f"You can skip all {self.event.value} hooks with --no-verify (not recommended).",
        ):
            self.console.print(line, markup=False)
