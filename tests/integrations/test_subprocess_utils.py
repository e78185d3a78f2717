"""Tests for run_subprocess_with_context."""

import sys

import pytest

from agent_cli.subprocess_utils import run_subprocess_with_context


def test_success_returns_captured_output() -> None:
    result = run_subprocess_with_context(
        [sys.executable, "-c", "print('hello')"], "print a greeting"
    )

    assert result.stdout == "hello\n"


def test_failure_includes_context_and_stderr() -> None:
    with pytest.raises(RuntimeError) as exc_info:
        run_subprocess_with_context(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad thing'); sys.exit(3)"],
            "run the failing step",
        )

    message = str(exc_info.value)
    assert "Failed to run the failing step" in message
    assert "Exit code: 3" in message
    assert "stderr: bad thing" in message


def test_check_false_returns_nonzero_result() -> None:
    result = run_subprocess_with_context(
        [sys.executable, "-c", "import sys; sys.exit(1)"], "exit", check=False
    )

    assert result.returncode == 1


def test_missing_binary_is_reported() -> None:
    with pytest.raises(RuntimeError, match="Command not found while trying to run nothing"):
        run_subprocess_with_context(["definitely-not-a-real-binary-xyz"], "run nothing")
