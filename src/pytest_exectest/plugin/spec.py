"""Pytest collector for scheme files.

Each collected file yields a single `SchemeCase` running the scheme
against the configured program.
"""

from typing import TYPE_CHECKING

import pytest

from .case import SchemeCase

if TYPE_CHECKING:
    from collections.abc import Iterable


class SchemeFile(pytest.File):
    """Pytest file collector for `test_*.scheme` files."""

    __test__ = False

    def collect(self) -> 'Iterable[SchemeCase]':
        """Collect the test case of a scheme file.

        The scheme itself is read and interpreted when the item runs,
        so malformed schemes are reported as test errors rather than
        collection errors.
        """
        yield SchemeCase.from_parent(
            self,
            name=self.path.stem,
            program=self.config.exectest_program,  # type: ignore[attr-defined]
            settings=self.config.exectest_settings,  # type: ignore[attr-defined]
        )
