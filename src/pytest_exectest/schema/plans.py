"""Parsed test plan definition.

A plan is produced by the scheme interpreter, fully resolved (every
placeholder already substituted), and determines exactly one process
execution.
"""

from pathlib import Path  # noqa: TC003
from typing import Annotated

from pydantic import Field

from pytest_exectest.models import SchemaModel

EnvEntry = Annotated[
    str, Field(
        pattern=r'^[^=]+=',
        title='Environment entry',
        description=(
            'Environment overlay entry in `KEY=VALUE` form. '
            'The key must be non-empty; the entry is split on the first `=` sign.'
        ),
        examples=[
            'LANG=C',
            'HOME={dir}',
        ],
    ),
]


class TestPlan(SchemaModel):
    """Fully parsed, substitution-resolved scheme.

    Attributes:
        root_dir: Fixture root the plan was resolved against.
        files: Relative file path to exact file content.
        args: Program arguments, excluding the program itself.
        env: Environment overlay entries, later entries win.
        stdin: Exact content fed to the program input.
        stdout: Expected standard output.
        stderr: Expected standard error.
        return_code: Expected exit code.
        scheme: Original scheme text, kept for diagnostics.
    """

    __test__ = False

    root_dir: Path = Field(
        title='Fixture root',
    )

    files: dict[str, str] = Field(
        default_factory=dict,
        title='Fixture files',
        description='Relative file path to exact file content.',
    )

    args: tuple[str, ...] = Field(
        default=(),
        title='Arguments',
    )

    env: tuple[EnvEntry, ...] = Field(
        default=(),
        title='Environment overlay',
    )

    stdin: str = Field(
        default='',
        title='Standard input',
    )

    stdout: str = Field(
        default='',
        title='Expected standard output',
    )

    stderr: str = Field(
        default='',
        title='Expected standard error',
    )

    return_code: int = Field(
        default=0,
        title='Expected return code',
    )

    scheme: str = Field(
        default='',
        title='Scheme source',
    )

    @property
    def environ(self) -> dict[str, str]:
        """Environment overlay as a mapping (later entries win)."""
        return dict(entry.split('=', 1) for entry in self.env)  # type: ignore[misc]
