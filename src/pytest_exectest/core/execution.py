"""Process execution.

The operating-system primitive is hidden behind the `Spawner` protocol,
so the engine can run against an in-memory double. The default spawner
is backed by `subprocess.Popen`.

There is no timeout: a program that never exits, or never closes its
output streams, blocks the caller indefinitely.
"""

import os
from pathlib import Path
from subprocess import PIPE, Popen
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field

from pytest_exectest.errors import ExecutionError
from pytest_exectest.schema import ExecutionResult
from pytest_exectest.settings import DEFAULT_ENCODING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping, Sequence
    from os import PathLike

if TYPE_CHECKING:
    from pytest_exectest.schema import TestPlan


class Command(BaseModel):
    """Mutable descriptor of a process that is about to be started.

    Execution options receive this descriptor and may change any field
    before the process is spawned.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )

    program: str = Field(
        min_length=1,
        title='Program',
        description='Executable name (looked up in PATH) or path.',
    )

    args: list[str] = Field(
        default_factory=list,
        title='Arguments',
    )

    cwd: Path = Field(
        title='Working directory',
    )

    env: dict[str, str] = Field(
        default_factory=dict,
        title='Complete child environment',
    )

    stdin: str = Field(
        default='',
        title='Standard input',
    )

    encoding: str = Field(
        default=DEFAULT_ENCODING,
        title='Stream encoding',
    )

    @property
    def argv(self) -> list[str]:
        """Full argument vector, program name first."""
        return [self.program, *self.args]


#: Execution option: mutates a command before it is started.
type CommandOption = Callable[[Command], None]


class Process(Protocol):
    """Started process as seen by the execution engine."""

    def communicate(self, stdin: bytes, /) -> tuple[bytes, bytes]:
        """Feed stdin, close it and drain stdout and stderr to the end."""
        ...  # pragma: no cover

    def wait(self) -> int:
        """Wait for termination and return the exit code."""
        ...  # pragma: no cover


class Spawner(Protocol):
    """Process-start primitive."""

    def __call__(self, program: str, argv: 'Sequence[str]',
                 env: 'Mapping[str, str]', cwd: Path) -> Process:
        """Start `program` and return a handle to it.

        Raises:
            OSError: If the program can not be started.
            ValueError: If the environment holds NUL characters.
        """
        ...  # pragma: no cover


def spawn_subprocess(program: str, argv: 'Sequence[str]',
                     env: 'Mapping[str, str]', cwd: Path) -> Process:
    """Start a child process with all three standard streams piped."""
    return Popen(  # noqa: S603
        list(argv),
        executable=None if program == argv[0] else program,
        cwd=cwd,
        env=dict(env),
        stdin=PIPE,
        stdout=PIPE,
        stderr=PIPE,
    )


def resolve_program(program: str, base: 'str | PathLike[str] | None' = None) -> str:
    """Anchor a relative program path outside of the fixture root.

    Programs are started inside the fixture root, so a relative path
    such as `./build/tool` would otherwise be looked up there. Bare
    names are left for the PATH lookup.

    Args:
        program: Program name or path.
        base: Directory relative paths are resolved against, the
            current working directory when omitted.

    Returns:
        Absolute program path, or the bare name unchanged.
    """
    separators = tuple(sep for sep in (os.sep, os.altsep) if sep)
    if not any(sep in program for sep in separators):
        return program

    path = Path(program)
    if path.is_absolute():
        return program

    return f'{Path(base or Path.cwd()) / path}'


def build_command(program: str, plan: 'TestPlan',
                  options: 'Iterable[CommandOption]' = (), *,
                  encoding: str = DEFAULT_ENCODING) -> Command:
    """Build the command descriptor for a plan.

    The child environment is the ambient environment overlaid with the
    plan entries. A relative program path is resolved against the
    current working directory. Options are applied last, in order.

    Args:
        program: Program under test.
        plan: Parsed test plan.
        options: Execution options.
        encoding: Stream encoding.

    Returns:
        Command ready to be run.
    """
    command = Command(
        program=resolve_program(program),
        args=list(plan.args),
        cwd=plan.root_dir,
        env={**os.environ, **plan.environ},
        stdin=plan.stdin,
        encoding=encoding,
    )

    for option in options:
        option(command)

    return command


def run(command: Command, spawner: Spawner = spawn_subprocess) -> ExecutionResult:
    """Run a command to completion and capture its outcome.

    A nonzero exit code is returned as data. A process killed by a
    signal reports the negative signal number.

    Args:
        command: Command descriptor.
        spawner: Process-start primitive.

    Returns:
        Captured stdout, stderr and exit code.

    Raises:
        ExecutionError: If the program can not be started.
    """
    try:
        process = spawner(command.program, command.argv, command.env, command.cwd)

    except (OSError, ValueError) as base:
        raise ExecutionError(
            f'Failed to start {command.program!r} in {command.cwd}: {base}',
        ) from base

    stdout, stderr = process.communicate(command.stdin.encode(command.encoding))
    return_code = process.wait()

    return ExecutionResult(
        stdout=stdout.decode(command.encoding, errors='surrogateescape'),
        stderr=stderr.decode(command.encoding, errors='surrogateescape'),
        return_code=return_code,
    )
