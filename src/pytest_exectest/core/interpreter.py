"""Scheme interpreter.

A single-pass state machine over the segmented scheme. Every line is
first matched against an ordered table of directive prefixes; the first
match wins and either switches the open block or records a scalar.
Lines that match no directive are payload of the open block.

Recognized directives, in priority order:

    --stderr            opens the expected-stderr block
    --stdout            opens the expected-stdout block
    --file:<path>       opens a fixture file block
    --stdin             opens the stdin block
    --return-code:<n>   sets the expected exit code (default 0)
    --arg:<value>       appends one program argument
    --env:<KEY=VALUE>   appends one environment overlay entry

Any other line starting with `--` is an unknown directive and is ignored.

Example:

    --file:a.txt
    --file:.b.txt
    --arg:-a
    --stdout
    .
    ..
    .b.txt
    a.txt

describes `ls -a` run in a directory with `a.txt` and `.b.txt` files.
"""

from enum import StrEnum
from re import ASCII
from re import compile as regexp
from typing import TYPE_CHECKING
from warnings import warn

from pytest_exectest.errors import ErrorContext, ErrorFormatter, SchemeError, SchemeWarning
from pytest_exectest.schema import TestPlan
from pytest_exectest.settings import DEFAULT_MAX_LINE_SIZE
from pytest_exectest.variables import substitute

from .lines import to_lines

if TYPE_CHECKING:
    from collections.abc import Callable
    from os import PathLike

# Also the comment start in Lua and SQL schemes, so payload of such
# files can not begin with it.
DIRECTIVE_PREFIX = '--'

STDERR_PREFIX = '--stderr'
STDOUT_PREFIX = '--stdout'
FILE_PREFIX = '--file:'
STDIN_PREFIX = '--stdin'
RETURN_CODE_PREFIX = '--return-code:'
ARG_PREFIX = '--arg:'
ENV_PREFIX = '--env:'

RETURN_CODE_PATTERN = regexp(r'^[+-]?[0-9]+$', flags=ASCII)

#: Directive handler: receives the text after the prefix and the line number.
type DirectiveHandler = Callable[[str, int], None]


class BlockState(StrEnum):
    """Block currently receiving payload lines."""

    NONE = 'none'
    FILE = 'file'
    STDOUT = 'stdout'
    STDERR = 'stderr'
    STDIN = 'stdin'


class SchemeInterpreter:
    """Stateful scheme parser producing a `TestPlan`.

    The fixture root is known before parsing starts, so placeholders
    are substituted while lines are consumed. The interpreter may be
    reused: every `parse` call starts from a clean state.
    """

    def __init__(self, root_dir: 'str | PathLike[str]', *,
                 strict: bool = False,
                 max_line_size: int = DEFAULT_MAX_LINE_SIZE,
                 filename: str | None = None) -> None:
        """Initialize the interpreter.

        Args:
            root_dir: Fixture root used for `{dir}` substitution.
            strict: Whether to emit `SchemeWarning` for unknown
                directives and repeated declarations.
            max_line_size: Maximum scheme line size in characters.
            filename: Scheme file name used in diagnostics.
        """
        self.root_dir = root_dir

        self.strict_mode = strict
        self.max_line_size = max_line_size
        self.filename = filename

        self.directives: tuple[tuple[str, DirectiveHandler], ...] = (
            (STDERR_PREFIX, self.open_stderr),
            (STDOUT_PREFIX, self.open_stdout),
            (FILE_PREFIX, self.open_file),
            (STDIN_PREFIX, self.open_stdin),
            (RETURN_CODE_PREFIX, self.set_return_code),
            (ARG_PREFIX, self.add_arg),
            (ENV_PREFIX, self.add_env),
        )

        self.reset()

    def reset(self) -> None:
        """Drop everything accumulated by a previous parse."""
        self.state = BlockState.NONE

        self.files: dict[str, str] = {}
        self.args: list[str] = []
        self.env: list[str] = []

        self.stdin: list[str] = []
        self.stdout: list[str] = []
        self.stderr: list[str] = []

        self.return_code = 0
        self.return_code_line: int | None = None

        self.pending_file = ''
        self.pending_line = 0
        self.pending_content: list[str] = []

    def parse(self, scheme: str) -> TestPlan:
        """Interpret a scheme into a test plan.

        Args:
            scheme: Scheme text.

        Returns:
            Fully resolved test plan.

        Raises:
            SchemeError: If a line is too long, a return code is not
                an integer or an env entry is not `KEY=VALUE`.
        """
        self.reset()

        lines = to_lines(scheme, self.max_line_size, filename=self.filename)
        for line_num, line in enumerate(lines):
            self.feed(line, line_num)

        # a trailing file block is not closed by any directive
        self.flush_file()

        return TestPlan(
            root_dir=self.root_dir,
            files=self.files,
            args=tuple(self.args),
            env=tuple(self.env),
            stdin=''.join(self.stdin),
            stdout=''.join(self.stdout),
            stderr=''.join(self.stderr),
            return_code=self.return_code,
            scheme=scheme,
        )

    def feed(self, line: str, line_num: int) -> None:
        """Consume one newline-terminated scheme line."""
        for prefix, handler in self.directives:
            if line.startswith(prefix):
                handler(line.removeprefix(prefix), line_num)
                return

        if line.startswith(DIRECTIVE_PREFIX):
            self.emit_scheme_issue(f'Unknown directive {line.strip()!r} is ignored', line_num)
            return

        match self.state:
            case BlockState.STDERR:
                self.stderr.append(substitute(line, self.root_dir))
            case BlockState.STDOUT:
                self.stdout.append(substitute(line, self.root_dir))
            case BlockState.FILE:
                self.pending_content.append(substitute(line, self.root_dir))
            case BlockState.STDIN:
                self.stdin.append(line)
            case BlockState.NONE:
                pass

    def flush_file(self) -> None:
        """Store the open file block into the file map, if any."""
        if self.state is not BlockState.FILE:
            return

        if self.pending_file in self.files:
            self.emit_scheme_issue(
                f'File {self.pending_file!r} is declared more than once',
                self.pending_line,
            )

        self.files[self.pending_file] = ''.join(self.pending_content)
        self.pending_content = []

    def open_block(self, state: BlockState) -> None:
        """Close any open file block and switch to another block."""
        self.flush_file()
        self.state = state

    def open_stderr(self, value: str, line_num: int) -> None:  # noqa: ARG002
        """Handle `--stderr`."""
        self.open_block(BlockState.STDERR)

    def open_stdout(self, value: str, line_num: int) -> None:  # noqa: ARG002
        """Handle `--stdout`."""
        self.open_block(BlockState.STDOUT)

    def open_stdin(self, value: str, line_num: int) -> None:  # noqa: ARG002
        """Handle `--stdin`."""
        self.open_block(BlockState.STDIN)

    def open_file(self, value: str, line_num: int) -> None:
        """Handle `--file:<path>`."""
        self.open_block(BlockState.FILE)

        self.pending_file = value.strip()
        self.pending_line = line_num

    def set_return_code(self, value: str, line_num: int) -> None:
        """Handle `--return-code:<n>`; the open block is kept."""
        text = value.strip()
        if not RETURN_CODE_PATTERN.match(text):
            raise SchemeError.from_line(
                f'Failed to convert return code {text!r} to int',
                f'{RETURN_CODE_PREFIX}{value}',
                line_num,
                filename=self.filename,
                state=self.state,
            )

        if self.return_code_line is not None:
            self.emit_scheme_issue('Return code is declared more than once', line_num)

        self.return_code = int(text)
        self.return_code_line = line_num

    def add_arg(self, value: str, line_num: int) -> None:  # noqa: ARG002
        """Handle `--arg:<value>`; the open block is kept."""
        self.args.append(substitute(value.strip(), self.root_dir))

    def add_env(self, value: str, line_num: int) -> None:
        """Handle `--env:<KEY=VALUE>`; the open block is kept."""
        entry = substitute(value.strip(), self.root_dir)

        key, separator, _ = entry.partition('=')
        if not separator or not key:
            raise SchemeError.from_line(
                f'Malformed env entry {entry!r}, expected KEY=VALUE',
                f'{ENV_PREFIX}{value}',
                line_num,
                filename=self.filename,
                state=self.state,
            )

        self.env.append(entry)

    def emit_scheme_issue(self, message: str, line_num: int) -> None:
        """Emit a strict-mode warning; silent otherwise.

        Args:
            message: Warning message to emit.
            line_num: Zero-based scheme line the issue refers to.
        """
        if not self.strict_mode:
            return

        warn(
            ErrorFormatter.format(message, ErrorContext(
                filename=self.filename,
                line_num=line_num,
            )),
            category=SchemeWarning,
            stacklevel=3,
        )
