"""Invocation orchestration.

Ties the pipeline together for one scheme: allocate a fixture root,
interpret the scheme, materialize files, run the program and compare
the outcome.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from pytest_exectest.errors import ErrorContext, SchemeError
from pytest_exectest.settings import ExectestSettings

from .assertion import compare
from .execution import build_command, run, spawn_subprocess
from .fixture import materialize
from .interpreter import SchemeInterpreter

if TYPE_CHECKING:
    from collections.abc import Callable
    from os import PathLike

if TYPE_CHECKING:
    from pytest_exectest.schema import ExecutionResult, TestPlan

    from .execution import CommandOption, Spawner

#: Capability returning a fresh, empty directory exclusive to one invocation.
type RootFactory = Callable[[], Path]


def read_scheme(path: 'str | PathLike[str]', encoding: str) -> str:
    """Read scheme text from a file, keeping line endings intact.

    Raises:
        SchemeError: If the file can not be read or decoded.
    """
    path = Path(path)

    try:
        with path.open('rt', encoding=encoding, newline='') as content:
            return content.read()

    except (OSError, UnicodeError) as base:
        raise SchemeError(
            f'Failed to read test file: {base}',
            context=ErrorContext(filename=f'{path}'),
        ) from base


class Executor:
    """Runs schemes against programs.

    Each call is single-shot and synchronous: a new fixture root is
    requested from `root_factory`, so concurrent executors never share
    state. Cleaning up roots is the job of whoever provides them.
    """

    def __init__(self, root_factory: RootFactory, *,
                 spawner: 'Spawner' = spawn_subprocess,
                 settings: ExectestSettings | None = None) -> None:
        """Initialize an executor.

        Args:
            root_factory: Fixture root allocator.
            spawner: Process-start primitive.
            settings: Harness settings, resolved from the environment
                when omitted.
        """
        self.root_factory = root_factory
        self.spawner = spawner
        self.settings = settings or ExectestSettings()

    def prepare(self, scheme: str, *, filename: str | None = None) -> 'TestPlan':
        """Allocate a fixture root, parse the scheme and write its files.

        Raises:
            SchemeError: If the scheme is malformed.
            FixtureError: If the files can not be written.
        """
        interpreter = SchemeInterpreter(
            self.root_factory(),
            strict=self.settings.strict,
            max_line_size=self.settings.max_line_size,
            filename=filename,
        )

        plan = interpreter.parse(scheme)
        materialize(plan, encoding=self.settings.encoding)

        return plan

    def execute(self, program: str, scheme: str, *options: 'CommandOption',
                filename: str | None = None) -> 'ExecutionResult':
        """Run one scheme against a program.

        Args:
            program: Program under test.
            scheme: Scheme text.
            *options: Execution options applied to the command before start.
            filename: Scheme file name used in diagnostics.

        Returns:
            Captured execution result (on success).

        Raises:
            AssertionError: If the return code, stdout or stderr do not
                match; all mismatches are reported together with the scheme.
            SchemeError: If the scheme is malformed.
            FixtureError: If the files can not be written.
            ExecutionError: If the program can not be started.
        """
        plan = self.prepare(scheme, filename=filename)

        command = build_command(program, plan, options, encoding=self.settings.encoding)
        result = run(command, self.spawner)

        report = compare(plan, result)
        if not report.passed:
            raise AssertionError(report.format(scheme=scheme, filename=filename))

        return result

    __call__ = execute

    def execute_file(self, program: str, path: 'str | PathLike[str]',
                     *options: 'CommandOption') -> 'ExecutionResult':
        """Read a scheme from a file, then behave as `execute`.

        Raises:
            SchemeError: If the file can not be read.
        """
        scheme = read_scheme(path, self.settings.encoding)

        return self.execute(program, scheme, *options, filename=f'{path}')
