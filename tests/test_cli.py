"""Tests for the command-line utilities."""

from json import loads
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner
from yaml import safe_load

from pytest_exectest.__main__ import EXIT_FATAL, EXIT_MISMATCH, cli

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def runner() -> CliRunner:
    """Provide a click test runner."""
    return CliRunner()


@pytest.fixture
def scheme(tmp_path: 'Path') -> 'Path':
    """Provide a scheme file fed to `cat`."""
    path = tmp_path / 'test_cat.scheme'
    path.write_text(
        '--file:sub/a.txt\n'
        'in {dir}\n'
        '--arg:-\n'
        '--env:HOME={dir}\n'
        '--stdin\n'
        'hello {dir}\n'
        '--stdout\n'
        'hello {dir}\n',
    )

    return path


def test_parse_yaml(runner: CliRunner, scheme: 'Path') -> None:
    """Print the plan with placeholders kept by default."""
    result = runner.invoke(cli, ['parse', f'{scheme}'])

    assert result.exit_code == 0, result.output
    plan = safe_load(result.output)
    assert plan['root_dir'] == '{dir}'
    assert plan['files'] == {'sub/a.txt': 'in {dir}\n'}
    assert plan['args'] == ['-']
    assert plan['env'] == ['HOME={dir}']
    assert plan['stdin'] == 'hello {dir}\n'
    assert plan['return_code'] == 0
    assert 'scheme' not in plan


def test_parse_json_with_root(runner: CliRunner, scheme: 'Path') -> None:
    """Substitute the given root and print JSON."""
    result = runner.invoke(cli, ['parse', '--root', '/srv', '--format', 'json', f'{scheme}'])

    assert result.exit_code == 0, result.output
    plan = loads(result.output)
    assert plan['files'] == {'sub/a.txt': 'in /srv\n'}
    assert plan['stdin'] == 'hello {dir}\n'
    assert plan['stdout'] == 'hello /srv\n'


def test_parse_malformed(runner: CliRunner, tmp_path: 'Path') -> None:
    """Exit with the fatal code on malformed schemes."""
    path = tmp_path / 'broken.scheme'
    path.write_text('--return-code:many\n')

    result = runner.invoke(cli, ['parse', f'{path}'])

    assert result.exit_code == EXIT_FATAL
    assert "Failed to convert return code 'many' to int" in result.output


def test_parse_undecodable(runner: CliRunner, tmp_path: 'Path') -> None:
    """Exit with the fatal code on schemes that can not be decoded."""
    path = tmp_path / 'broken.scheme'
    path.write_bytes(b'--stdout\n\xff\xfe\n')

    result = runner.invoke(cli, ['parse', f'{path}'])

    assert result.exit_code == EXIT_FATAL
    assert 'Failed to read test file' in result.output


def test_run_pass(runner: CliRunner, tmp_path: 'Path') -> None:
    """Run a passing scheme."""
    path = tmp_path / 'test_cat.scheme'
    path.write_text('--stdin\nhello\n--stdout\nhello\n')

    result = runner.invoke(cli, ['run', 'cat', f'{path}'])

    assert result.exit_code == 0, result.output
    assert result.output == f'PASS {path}\n'


def test_run_mismatch(runner: CliRunner, tmp_path: 'Path') -> None:
    """Exit with the mismatch code and print the report."""
    path = tmp_path / 'test_cat.scheme'
    path.write_text('--stdin\nhello\n--stdout\nbye\n')

    result = runner.invoke(cli, ['run', 'cat', f'{path}'])

    assert result.exit_code == EXIT_MISMATCH
    assert 'Failed matching stdout' in result.output
    assert 'Test scheme:' in result.output


def test_run_missing_program(runner: CliRunner, tmp_path: 'Path') -> None:
    """Exit with the fatal code when the program can not start."""
    path = tmp_path / 'test_cat.scheme'
    path.write_text('--stdout\n')

    result = runner.invoke(cli, ['run', 'exectest-missing-program', f'{path}'])

    assert result.exit_code == EXIT_FATAL
    assert "Failed to start 'exectest-missing-program'" in result.output


def test_schema(runner: CliRunner) -> None:
    """Print the JSON Schema of a test plan."""
    result = runner.invoke(cli, ['schema'])

    assert result.exit_code == 0, result.output
    schema = loads(result.output)
    assert schema['title'] == 'TestPlan'
    assert {'files', 'args', 'env', 'stdin', 'stdout', 'stderr', 'return_code'} <= set(schema['properties'])
