"""Placeholder substitution for scheme payloads.

The vocabulary is intentionally small: `{dir}` expands to the absolute
path of the fixture root allocated for the current invocation.

Substitution is applied to arguments, environment entries, file
contents and output expectations, but never to stdin.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from os import PathLike

#: Placeholder name expanded to the fixture root.
ROOT_DIR_VARIABLE = 'dir'

#: Literal token written in schemes.
ROOT_DIR_PLACEHOLDER = f'{{{ROOT_DIR_VARIABLE}}}'


def make_variables(root_dir: 'str | PathLike[str]') -> dict[str, str]:
    """Build the placeholder vocabulary for a fixture root.

    Args:
        root_dir: Fixture root directory.

    Returns:
        Mapping of placeholder names to concrete values.
    """
    return {ROOT_DIR_VARIABLE: f'{root_dir}'}


def expand(text: str, variables: 'Mapping[str, str]') -> str:
    """Replace every `{name}` occurrence for each known variable.

    Unknown placeholders are left untouched.
    """
    for name, value in variables.items():
        text = text.replace(f'{{{name}}}', value)

    return text


def substitute(text: str, root_dir: 'str | PathLike[str]') -> str:
    """Replace every literal `{dir}` with the fixture root path.

    Args:
        text: Text to rewrite.
        root_dir: Fixture root directory.

    Returns:
        Rewritten text.
    """
    return expand(text, make_variables(root_dir))
