"""Execution results and assertion reports."""

from os import linesep

from pydantic import Field

from pytest_exectest.errors import ErrorContext, ErrorFormatter
from pytest_exectest.models import SchemaModel


class ExecutionResult(SchemaModel):
    """Captured outcome of one program run.

    A nonzero return code is data, not an error.
    """

    stdout: str = Field(
        default='',
        title='Captured standard output',
    )

    stderr: str = Field(
        default='',
        title='Captured standard error',
    )

    return_code: int = Field(
        default=0,
        title='Return code',
    )


class Report(SchemaModel):
    """Outcome of comparing a plan against an execution result."""

    failures: tuple[str, ...] = Field(
        default=(),
        title='Mismatch diagnostics',
    )

    @property
    def passed(self) -> bool:
        """True when no mismatch was found."""
        return not self.failures

    def format(self, *, scheme: str | None = None,
               filename: str | None = None) -> str:
        """Render every mismatch in a single message.

        Args:
            scheme: Scheme text to attach to the message.
            filename: Scheme file name, if any.

        Returns:
            A formatted multi-line message.
        """
        message = 'Execution mismatch'
        if self.failures:
            message += linesep
            message += linesep.join(self.failures)

        if scheme is None and filename is None:
            return message

        return ErrorFormatter.format(message, ErrorContext(
            filename=filename,
            scheme=scheme,
        ))
