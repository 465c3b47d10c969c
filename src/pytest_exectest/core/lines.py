"""Line segmentation shared by the interpreter and the assertions."""

from pytest_exectest.errors import SchemeError


def to_lines(text: str, max_line_size: int | None = None, *,
             filename: str | None = None) -> list[str]:
    """Split text into lines, each terminated by exactly one newline.

    Lines are separated on `\\n` only. A single trailing `\\r` is dropped
    from each line, the final line gets a newline even if the source
    lacks one, and a trailing newline never yields an extra empty line.

    Args:
        text: Raw text.
        max_line_size: Optional per-line ceiling in characters.
        filename: Source name used in error messages.

    Returns:
        Ordered list of newline-terminated lines.

    Raises:
        SchemeError: If a line exceeds `max_line_size`.
    """
    if not text:
        return []

    chunks = text.split('\n')
    if chunks[-1] == '':
        chunks.pop()

    lines = []
    for line_num, chunk in enumerate(chunks):
        line = chunk.removesuffix('\r')
        if max_line_size is not None and len(line) > max_line_size:
            raise SchemeError.from_line(
                f'Line is longer than {max_line_size} characters',
                line[:80],
                line_num,
                filename=filename,
            )
        lines.append(f'{line}\n')

    return lines
