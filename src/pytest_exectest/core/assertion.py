"""Comparison of expected and actual execution outcomes.

The return code, stdout and stderr checks are independent: all of them
run on every invocation and every mismatch is reported.
"""

from difflib import unified_diff
from os import linesep
from typing import TYPE_CHECKING

from pytest_exectest.schema import Report

from .lines import to_lines

if TYPE_CHECKING:
    from pytest_exectest.schema import ExecutionResult, TestPlan

DIFF_CONTEXT = 3


def assert_return_code(want: int, got: int) -> str | None:
    """Compare exit codes.

    Returns:
        Mismatch message or `None`.
    """
    if got != want:
        return f'Failed to match return code: want {want}, got {got}'

    return None


def assert_no_diff(name: str, want: str, got: str) -> str | None:
    """Compare two outputs as sequences of lines.

    Both sides go through the same line normalization as the scheme,
    so trailing newline and CRLF differences do not matter.

    Args:
        name: Stream name used in the message.
        want: Expected content.
        got: Actual content.

    Returns:
        Mismatch message with a unified diff (`-` missing line,
        `+` extra line) followed by the actual output, or `None`.
    """
    want_lines = [line.removesuffix('\n') for line in to_lines(want)]
    got_lines = [line.removesuffix('\n') for line in to_lines(got)]
    if want_lines == got_lines:
        return None

    diff = unified_diff(
        want_lines,
        got_lines,
        fromfile=f'want {name}',
        tofile=f'got {name}',
        n=DIFF_CONTEXT,
        lineterm='',
    )

    message = f'Failed matching {name} (-missing line, +extra line):{linesep}'
    message += linesep.join(diff)
    message += f'{linesep}{name}:{linesep}{got}'

    return message


def compare(plan: 'TestPlan', result: 'ExecutionResult') -> Report:
    """Run every check of a plan against an execution result."""
    checks = (
        assert_return_code(plan.return_code, result.return_code),
        assert_no_diff('stdout', plan.stdout, result.stdout),
        assert_no_diff('stderr', plan.stderr, result.stderr),
    )

    return Report(failures=tuple(
        failure
        for failure in checks
        if failure is not None
    ))
