"""Built-in execution options.

An execution option is any callable taking the `Command` descriptor;
these factories cover the common cases.
"""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from os import PathLike

if TYPE_CHECKING:
    from .execution import Command, CommandOption


def with_env(values: 'Mapping[str, str] | None' = None, /, **kwargs: str) -> 'CommandOption':
    """Overlay environment variables on the child environment.

    Example:
        exectest('env', scheme, with_env(LANG='C'))
    """
    overlay = {**(values or {}), **kwargs}

    def option(command: 'Command') -> None:
        command.env = {**command.env, **overlay}

    return option


def without_env(*names: str) -> 'CommandOption':
    """Remove variables from the child environment."""
    def option(command: 'Command') -> None:
        command.env = {
            key: value
            for key, value in command.env.items()
            if key not in names
        }

    return option


def with_cwd(path: 'str | PathLike[str]') -> 'CommandOption':
    """Run the program in another directory.

    Relative paths are resolved against the fixture root.
    """
    def option(command: 'Command') -> None:
        command.cwd = command.cwd / Path(path)

    return option


def with_args(*args: str) -> 'CommandOption':
    """Prepend arguments before the ones declared in the scheme."""
    def option(command: 'Command') -> None:
        command.args = [*args, *command.args]

    return option
