"""Pytest item executing one scheme file."""

from pathlib import Path
from tempfile import TemporaryDirectory
from typing import TYPE_CHECKING

import pytest

from pytest_exectest.core import Executor
from pytest_exectest.errors import ExectestError

if TYPE_CHECKING:
    from typing import Any

if TYPE_CHECKING:
    from _pytest._code.code import ExceptionInfo, TerminalRepr

if TYPE_CHECKING:
    from pytest_exectest.settings import ExectestSettings


class SchemeCase(pytest.Item):
    """Pytest item running a scheme file against a program.

    The fixture root is a temporary directory removed after the run.
    """

    __test__ = False

    def __init__(self, *,
                 program: str,
                 settings: 'ExectestSettings',
                 **kwargs: 'Any') -> None:
        """Initialize a scheme test case.

        Args:
            program: Program under test.
            settings: Harness settings.
            **kwargs: Keyword pytest.Item arguments.
        """
        super().__init__(**kwargs)

        self.program = program
        self.settings = settings

    def runtest(self) -> None:
        """Execute the scheme file."""
        with TemporaryDirectory(prefix='exectest-') as root:
            executor = Executor(
                lambda: Path(root),
                settings=self.settings,
            )
            executor.execute_file(self.program, self.path)

    def repr_failure(self, excinfo: 'ExceptionInfo[BaseException]',
                     style: 'Any' = None) -> 'str | TerminalRepr':
        """Render mismatches and fatal errors without a traceback."""
        if isinstance(excinfo.value, (AssertionError, ExectestError)):
            return f'{excinfo.value}'

        return super().repr_failure(excinfo, style=style)

    def reportinfo(self) -> tuple[Path, int, str]:
        """Describe the item in reports."""
        return self.path, 0, f'scheme: {self.name}'
