"""Tests for error formatting."""

from pytest_exectest.errors import ErrorContext, ExectestError, FixtureError, SchemeError


def test_plain_message() -> None:
    """Render a message without context as is."""
    error = FixtureError('Failed to write test file')

    assert f'{error}' == 'Failed to write test file'
    assert isinstance(error, ExectestError)


def test_scheme_error_from_line() -> None:
    """Render the location and a snippet of the offending line."""
    error = SchemeError.from_line(
        'Malformed env entry',
        '--env:BROKEN\n',
        2,
        filename='case.scheme',
        state='stdout',
    )

    lines = f'{error}'.splitlines()

    assert lines[0] == 'Malformed env entry'
    assert lines[1] == '    in "case.scheme", line 3'
    assert lines[2] == '         ...'
    assert any('--env:BROKEN' in line and line.startswith('        line:') for line in lines)
    assert '        block: stdout' in lines
    assert error.message == 'Malformed env entry'


def test_unknown_filename() -> None:
    """Fall back to a placeholder name for inline schemes."""
    error = SchemeError('Bad', context=ErrorContext(line_num=0))

    assert f'{error}'.splitlines()[1] == '    in "<unicode string>", line 1'


def test_scheme_attached() -> None:
    """Append the scheme text under a caption."""
    message = ExectestError.format('Mismatch', ErrorContext(
        filename='case.scheme',
        scheme='--stdout\nout\n',
    ))

    assert message.splitlines() == [
        'Mismatch',
        '    in "case.scheme"',
        '    Test scheme:',
        '        --stdout',
        '        out',
    ]


def test_context_fields() -> None:
    """Expose only the fields the formatter renders."""
    assert set(ErrorContext.__annotations__) == {'filename', 'line_num', 'element', 'scheme'}
