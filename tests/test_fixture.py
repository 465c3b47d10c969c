"""Tests for fixture materialization."""

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from pytest_exectest.core import SchemeInterpreter, materialize
from pytest_exectest.errors import FixtureError
from pytest_exectest.schema import TestPlan

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


def test_materialize_nested(root: Path) -> None:
    """Create intermediate directories shared by several files."""
    plan = TestPlan(root_dir=root, files={
        'dir/a.txt': 'a\n',
        'dir/b.txt': 'b\n',
        'dir/sub/c.txt': '',
        '.hidden': 'secret\n',
    })

    written = materialize(plan)

    assert written == [
        (root / 'dir/a.txt').resolve(),
        (root / 'dir/b.txt').resolve(),
        (root / 'dir/sub/c.txt').resolve(),
        (root / '.hidden').resolve(),
    ]
    assert (root / 'dir/a.txt').read_text() == 'a\n'
    assert (root / 'dir/sub/c.txt').read_bytes() == b''
    assert (root / '.hidden').read_text() == 'secret\n'


@pytest.mark.parametrize('content', (
    pytest.param('no newline', id='no trailing newline'),
    pytest.param('crlf\r\nkept\r\n', id='crlf kept'),
    pytest.param('ünïcödé\n', id='unicode'),
))
def test_materialize_exact_bytes(root: Path, content: str) -> None:
    """Write contents verbatim, without newline translation."""
    materialize(TestPlan(root_dir=root, files={'f': content}))

    assert (root / 'f').read_bytes() == content.encode('utf-8')


def test_materialize_encoding(root: Path) -> None:
    """Encode contents with the requested encoding."""
    materialize(TestPlan(root_dir=root, files={'f': 'é'}), encoding='latin-1')

    assert (root / 'f').read_bytes() == b'\xe9'


def test_materialize_scheme_blocks(root: Path) -> None:
    """Store exactly the concatenated payload of each file block."""
    plan = SchemeInterpreter(root).parse(
        '--file:a.txt\n'
        'line 1\n'
        '\n'
        'path {dir}\n'
        '--stdout\n'
        'ignored\n'
        '--file:nested/b.txt\n'
        'b',
    )

    materialize(plan)

    assert (root / 'a.txt').read_text() == f'line 1\n\npath {root}\n'
    assert (root / 'nested/b.txt').read_text() == 'b\n'


@pytest.mark.parametrize('name, expect_message', (
    pytest.param('', r'^File name must not be empty', id='empty name'),
    pytest.param('../escape.txt', r'is outside of the fixture root', id='parent escape'),
    pytest.param('/etc/passwd', r'is outside of the fixture root', id='absolute path'),
    pytest.param('.', r'is outside of the fixture root', id='root itself'),
))
def test_materialize_invalid_name(root: Path, name: str, expect_message: str) -> None:
    """Reject names that do not point to a file inside the root."""
    with pytest.raises(FixtureError, match=expect_message):
        materialize(TestPlan(root_dir=root, files={name: 'x'}))


def test_materialize_directory_failure(root: Path) -> None:
    """Fail when a directory is needed where a file already exists."""
    plan = TestPlan(root_dir=root, files={'a': 'file', 'a/b': 'nested'})

    with pytest.raises(FixtureError, match=r'^Failed to create directory'):
        materialize(plan)


def test_materialize_write_failure(root: Path) -> None:
    """Fail when a file can not be written."""
    (root / 'taken').mkdir()

    with pytest.raises(FixtureError, match=r"^Failed to write test file 'taken'"):
        materialize(TestPlan(root_dir=root, files={'taken': 'x'}))


def test_materialize_fake_filesystem(fs: 'FakeFilesystem') -> None:
    """Materialize into an isolated filesystem."""
    fs.create_dir('/fixture')

    materialize(TestPlan(root_dir=Path('/fixture'), files={
        'a.txt': '',
        '.b.txt': '',
        'deep/er/c.txt': 'c\n',
    }))

    assert sorted(path.name for path in Path('/fixture').iterdir()) == ['.b.txt', 'a.txt', 'deep']
    assert Path('/fixture/deep/er/c.txt').read_text() == 'c\n'
