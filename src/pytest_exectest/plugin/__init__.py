"""Pytest plugin for running schemes against executables.

This module integrates the harness with pytest by:
- registering custom command-line options and ini keys;
- resolving shared harness settings;
- providing the `exectest` fixture;
- collecting scheme files as executable test items.

Scheme files matching the pattern `test_*.scheme` are collected only
when a program is configured (`--exectest-program` or the
`exectest_program` ini key).
"""

from functools import partial
from re import match
from typing import TYPE_CHECKING

import pytest

from pytest_exectest.core import Executor, resolve_program
from pytest_exectest.settings import ExectestSettings

from .spec import SchemeFile

if TYPE_CHECKING:
    from pathlib import Path

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.nodes import Node


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-exectest.

    Args:
        parser: Pytest argument parser.
    """
    group = parser.getgroup('exectest')
    group.addoption(
        '--exectest-strict',
        action='store_true',
        dest='exectest_strict',
        default=False,
        help=(
            'Emit SchemeWarning for unknown directives and for files or '
            'return codes declared more than once.'
        ),
    )
    group.addoption(
        '--exectest-program',
        action='store',
        dest='exectest_program',
        default=None,
        help='Program to run collected test_*.scheme files against.',
    )

    parser.addini(
        'exectest_strict',
        type='bool',
        default=False,
        help='Enable strict scheme diagnostics.',
    )
    parser.addini(
        'exectest_program',
        default='',
        help='Program to run collected test_*.scheme files against.',
    )


def pytest_configure(config: 'Config') -> None:
    """Resolve harness settings.

    The settings are attached to the pytest configuration object as
    `config.exectest_settings`; the program for collected files is
    attached as `config.exectest_program`. A relative program path is
    resolved against the invocation directory when given on the command
    line, and against the root directory when read from the ini file.

    Args:
        config: Pytest configuration object.
    """
    settings = ExectestSettings()
    if config.getoption('exectest_strict') or config.getini('exectest_strict'):
        settings = settings.model_copy(update={'strict': True})

    program = config.getoption('exectest_program')
    if program:
        program = resolve_program(program, config.invocation_params.dir)
    elif program := config.getini('exectest_program'):
        program = resolve_program(program, config.rootpath)

    config.exectest_settings = settings  # type: ignore[attr-defined]
    config.exectest_program = program or None  # type: ignore[attr-defined]


def pytest_collect_file(parent: 'Node', file_path: 'Path') -> SchemeFile | None:
    """Collect scheme files.

    Args:
        parent: Parent pytest collection node.
        file_path: Path to the file being considered.

    Returns:
        A `SchemeFile` collector if the file matches the pattern and
        a program is configured, otherwise `None`.
    """
    if not parent.config.exectest_program:  # type: ignore[attr-defined]
        return None

    if match(r'^test_.+\.scheme$', file_path.name):
        return SchemeFile.from_parent(
            parent,
            path=file_path,
        )

    return None


@pytest.fixture
def exectest(pytestconfig: pytest.Config,
             tmp_path_factory: pytest.TempPathFactory) -> Executor:
    """Provide an executor allocating a fresh fixture root per call.

    Example:
        def test_ls(exectest):
            exectest('ls', '--file:a.txt\\n--stdout\\na.txt\\n')
    """
    return Executor(
        partial(tmp_path_factory.mktemp, 'exectest'),
        settings=pytestconfig.exectest_settings,  # type: ignore[attr-defined]
    )
