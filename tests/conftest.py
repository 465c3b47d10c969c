"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from pytest_exectest.core import Executor
from pytest_exectest.settings import ExectestSettings
from tests.examples.processes import FakeProcess

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

if TYPE_CHECKING:
    from pytest_mock import MockerFixture, MockType


@pytest.fixture
def root(tmp_path: 'Path') -> 'Path':
    """Provide an empty fixture root exclusive to the test."""
    path = tmp_path / 'root'
    path.mkdir()

    return path


@pytest.fixture
def fake_spawner(mocker: 'MockerFixture') -> 'Callable[..., MockType]':
    """Provide a factory for in-memory spawners.

    The returned factory builds a mock following the `Spawner` protocol
    whose started process replays the given output and return code.
    The process is available as `spawner.process`.
    """
    def make(stdout: bytes = b'', stderr: bytes = b'',
             return_code: int = 0, raises: Exception | None = None) -> 'MockType':
        """Build a spawner double.

        Args:
            stdout: Bytes written by the fake program to stdout.
            stderr: Bytes written by the fake program to stderr.
            return_code: Exit code of the fake program.
            raises: Exception raised instead of starting the process.

        Returns:
            A mock callable usable as a spawner.
        """
        process = FakeProcess(stdout, stderr, return_code)

        spawner = mocker.Mock(return_value=process)
        spawner.process = process
        if raises is not None:
            spawner.side_effect = raises

        return spawner

    return make


@pytest.fixture
def executor(root: 'Path') -> Executor:
    """Provide an executor bound to the `root` fixture directory."""
    return Executor(lambda: root, settings=ExectestSettings())
