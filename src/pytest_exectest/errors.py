"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report malformed schemes, fixture materialization failures, and
process start failures in a structured and extensible way.

Assertion mismatches are deliberately not part of this hierarchy: they
are reported as plain `AssertionError` so that pytest marks the test
as failed rather than errored.
"""

from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import safe_dump

if TYPE_CHECKING:
    from typing import Self

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4

SCALARS = (str, bytes, int, float, bool)


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the scheme file where the error occurred.
    filename: str | None

    #: Zero-based line number in the scheme.
    line_num: int | None

    #: Element associated with the error (rendered as YAML).
    element: Any

    #: Full scheme text attached to the message.
    scheme: str | None


class ErrorFormatter:
    """Utility class for formatting exectest errors.

    This formatter is responsible for producing human-readable
    error messages with optional source location, YAML-based
    contextual snippets and the scheme text.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)
        message += cls.get_scheme_string(context, indent=FORMAT_INDENT * 2)

        return message

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename and line.
        """
        indent = cls._ensure_indent(indent)

        filename = context.get('filename')
        if not filename:
            filename = FORMAT_FILENAME

        message = f'{indent}in "{filename}"'
        if (line_num := context.get('line_num')) is not None:
            message += f', line {line_num + 1}'
        message += linesep

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the error context.

        Args:
            context: Error context containing element data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if not (element := context.get('element')):
            return ''

        snippet = f'{indent}{SNIPPET_ELLIPSIS}'
        snippet += cls._make_yaml(element, indent)
        snippet += linesep

        return snippet

    @classmethod
    def get_scheme_string(cls, context: ErrorContext, *,
                          indent: str | int | None = None) -> str:
        """Render the scheme text attached to the context.

        Args:
            context: Error context containing the scheme.
            indent: Optional indentation (string or number of spaces).

        Returns:
            The indented scheme preceded by a caption, or an empty string.
        """
        indent = cls._ensure_indent(indent)

        if not (scheme := context.get('scheme')):
            return ''

        caption = cls._ensure_indent(FORMAT_INDENT)
        lines = linesep.join(f'{indent}{line}' for line in scheme.splitlines())

        return f'{caption}Test scheme:{linesep}{lines}{linesep}'

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, dict):
            return {
                f'{key}': cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, (list, tuple)):
            return [cls._filter_unsafe(item) for item in value]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to a YAML-formatted string.

        Args:
            value: Arbitrary value to serialize.
            indent: Optional indentation prefix.

        Returns:
            A YAML-formatted string representation of the value.
        """
        data = safe_dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string.

        Empty or whitespace-only lines are omitted.
        """
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation input."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class SchemeWarning(UserWarning):
    """Warning emitted for suspicious but valid scheme content.

    Only emitted in strict mode: unknown directives and repeated
    declarations of a file or of the expected return code.
    """


class ExectestError(Exception, ErrorFormatter):
    """Base exception for all pytest-exectest errors.

    Every error of this family is fatal for the invocation: it is
    raised before the assertion phase and no partial run happens.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String represenatation."""
        return self.format(self.message, self.context)


class SchemeError(ExectestError):
    """Error raised when a scheme can not be read or interpreted."""

    @classmethod
    def from_line(cls, message: str, line: str, line_num: int, *,
                  filename: str | None = None,
                  state: str | None = None) -> 'Self':
        """Create a scheme error pointing to a specific scheme line.

        Args:
            message: Human-readable error message.
            line: Offending scheme line (with or without terminator).
            line_num: Zero-based line number.
            filename: Name of the scheme file, if any.
            state: Block state of the interpreter at that line.

        Returns:
            An initialized SchemeError with location context.
        """
        element: dict[str, Any] = {'line': line.rstrip('\n')}
        if state is not None:
            element['block'] = f'{state}'

        return cls(message, context=ErrorContext(
            filename=filename,
            line_num=line_num,
            element=element,
        ))


class FixtureError(ExectestError):
    """Error raised when the fixture directory can not be materialized."""


class ExecutionError(ExectestError):
    """Error raised when the program under test can not be started."""
