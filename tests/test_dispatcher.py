"""
Tests for the hook dispatcher.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from hookchain.dispatcher import Dispatcher, SubprocessHookRunner
from hookchain.models import HookEvent, HookResult, HookStatus
from tests.conftest import output_of, write_script


class RecordingRunner:
    """Fake runner returning canned exit codes and recording calls."""

    def __init__(self, exit_codes: dict[str, int]):
        self.exit_codes = exit_codes
        self.calls: list[str] = []

    def __call__(self, name: str, path: Path) -> HookResult:
        self.calls.append(name)
        code = self.exit_codes.get(name, 0)
        status = HookStatus.PASSED if code == 0 else HookStatus.FAILED
        return HookResult(name=name, status=status, exit_code=code)


@pytest.fixture
def hooks_dir(tmp_path):
    path = tmp_path / "hooks"
    path.mkdir()
    return path


def make_hooks(hooks_dir: Path, *names: str) -> None:
    for name in names:
        write_script(hooks_dir / name, "exit 0")


class TestDispatchOrder:
    """Tests for ordering and short-circuiting."""

    def test_all_hooks_pass(self, hooks_dir, console):
        make_hooks(hooks_dir, "a", "b", "c")
        runner = RecordingRunner({})

        result = Dispatcher(HookEvent.PRE_COMMIT, ["a", "b", "c"], hooks_dir, runner, console).run()

        assert result.success
        assert result.exit_code == 0
        assert runner.calls == ["a", "b", "c"]
        assert output_of(console).count("OK.") == 3

    def test_stops_after_failing_hook(self, hooks_dir, console):
        make_hooks(hooks_dir, "a", "b", "c")
        runner = RecordingRunner({"b": 3})

        result = Dispatcher(HookEvent.PRE_COMMIT, ["a", "b", "c"], hooks_dir, runner, console).run()

        assert result.exit_code == 1
        assert runner.calls == ["a", "b"]
        assert result.failed_hook.name == "b"
        assert result.failed_hook.exit_code == 3
        assert "Hook 'b' failed." in output_of(console)

    def test_last_hook_fails(self, hooks_dir, console):
        make_hooks(hooks_dir, "a", "b")
        runner = RecordingRunner({"b": 1})

        result = Dispatcher(HookEvent.PRE_COMMIT, ["a", "b"], hooks_dir, runner, console).run()

        assert result.exit_code == 1
        assert runner.calls == ["a", "b"]
        assert [r.status for r in result.results] == [HookStatus.PASSED, HookStatus.FAILED]

    def test_missing_hook_stops_before_running(self, hooks_dir, console):
        make_hooks(hooks_dir, "a", "c")
        runner = RecordingRunner({})

        result = Dispatcher(HookEvent.PRE_COMMIT, ["a", "b", "c"], hooks_dir, runner, console).run()

        assert result.exit_code == 1
        assert runner.calls == ["a"]
        assert result.results[-1].status == HookStatus.MISSING
        output = output_of(console)
        assert "Error: file b not found." in output
        assert "Aborting commit." in output
        assert str(hooks_dir) in output
        assert "--no-verify" in output

    def test_non_executable_hook_counts_as_missing(self, hooks_dir, console):
        (hooks_dir / "a").write_text("#!/bin/sh\nexit 0\n")
        runner = RecordingRunner({})

        result = Dispatcher(HookEvent.PRE_COMMIT, ["a"], hooks_dir, runner, console).run()

        assert result.exit_code == 1
        assert runner.calls == []

    def test_empty_hook_list_succeeds(self, hooks_dir, console):
        result = Dispatcher(HookEvent.PRE_COMMIT, [], hooks_dir, RecordingRunner({}), console).run()

        assert result.success
        assert result.results == []

    def test_pre_push_wording(self, hooks_dir, console):
        Dispatcher(HookEvent.PRE_PUSH, ["gone"], hooks_dir, RecordingRunner({}), console).run()

        output = output_of(console)
        assert "Aborting push." in output
        assert "skip all pre-push hooks" in output

    def test_config_source_in_remediation(self, hooks_dir, console):
        Dispatcher(
            HookEvent.PRE_COMMIT,
            ["gone"],
            hooks_dir,
            RecordingRunner({}),
            console,
            config_source="/repo/.hookchain.toml",
        ).run()

        assert "removing it from the list in /repo/.hookchain.toml" in output_of(console)


class TestSubprocessHookRunner:
    """Tests running real hook executables."""

    def test_runs_hooks_in_order(self, hooks_dir, tmp_path, console):
        log = tmp_path / "log.txt"
        for name in ("first", "second"):
            write_script(hooks_dir / name, f'echo {name} >> "{log}"')

        result = Dispatcher(HookEvent.PRE_COMMIT, ["first", "second"], hooks_dir, console=console).run()

        assert result.exit_code == 0
        assert log.read_text().split() == ["first", "second"]

    def test_failing_hook_blocks_the_rest(self, hooks_dir, tmp_path, console):
        log = tmp_path / "log.txt"
        write_script(hooks_dir / "a", f'echo a >> "{log}"')
        write_script(hooks_dir / "b", f'echo b >> "{log}"\nexit 1')
        write_script(hooks_dir / "c", f'echo c >> "{log}"')

        result = Dispatcher(HookEvent.PRE_COMMIT, ["a", "b", "c"], hooks_dir, console=console).run()

        assert result.exit_code == 1
        assert log.read_text().split() == ["a", "b"]

    def test_hook_receives_no_arguments(self, hooks_dir, tmp_path):
        log = tmp_path / "args.txt"
        hook = write_script(hooks_dir / "count", f'echo $# > "{log}"')

        result = SubprocessHookRunner()("count", hook)

        assert result.passed
        assert log.read_text().strip() == "0"

    def test_launch_failure_is_a_failure(self, hooks_dir):
        hook = hooks_dir / "broken"
        hook.write_text("#!/nonexistent/interpreter\n")
        hook.chmod(0o755)

        result = SubprocessHookRunner()("broken", hook)

        assert result.status == HookStatus.FAILED
        assert result.exit_code == 126
