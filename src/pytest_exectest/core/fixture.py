"""Fixture materialization.

Writes the files declared by a plan under its fixture root. The root is
expected to be fresh, empty and exclusive to one invocation.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from pytest_exectest.errors import FixtureError
from pytest_exectest.settings import DEFAULT_ENCODING

if TYPE_CHECKING:
    from pytest_exectest.schema import TestPlan


def resolve_fixture_path(root_dir: Path, name: str) -> Path:
    """Resolve a declared file name inside the fixture root.

    Args:
        root_dir: Fixture root directory.
        name: Relative file path as declared in the scheme.

    Returns:
        Absolute path of the file.

    Raises:
        FixtureError: If the name is empty or escapes the root.
    """
    if not name:
        raise FixtureError('File name must not be empty')

    root = root_dir.resolve()
    path = (root / name).resolve()
    if path == root or not path.is_relative_to(root):
        raise FixtureError(f'File {name!r} is outside of the fixture root {root_dir}')

    return path


def materialize(plan: 'TestPlan', *, encoding: str = DEFAULT_ENCODING) -> list[Path]:
    """Create every declared file under the plan fixture root.

    Intermediate directories are created as needed; file contents are
    written verbatim, without newline translation.

    Args:
        plan: Parsed test plan.
        encoding: Encoding used to turn contents into bytes.

    Returns:
        Paths of the written files, in declaration order.

    Raises:
        FixtureError: If a directory or a file can not be created.
    """
    root_dir = Path(plan.root_dir)
    written = []

    for name, content in plan.files.items():
        path = resolve_fixture_path(root_dir, name)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)

        except OSError as base:
            raise FixtureError(
                f'Failed to create directory {path.parent} for test file {name!r}: {base}',
            ) from base

        try:
            path.write_bytes(content.encode(encoding))

        except (OSError, UnicodeError) as base:
            raise FixtureError(
                f'Failed to write test file {name!r}: {base}',
            ) from base

        written.append(path)

    return written
