"""Scheme interpretation and execution runtime.

This package implements the harness pipeline:
- line segmentation of scheme text and program output;
- interpretation of schemes into immutable test plans;
- materialization of fixture files;
- process execution behind a replaceable spawner;
- comparison of expected and actual outcomes.

The primary public entry point is `Executor`.
"""

from .assertion import assert_no_diff, assert_return_code, compare
from .execution import (
    Command,
    CommandOption,
    Process,
    Spawner,
    build_command,
    resolve_program,
    run,
    spawn_subprocess,
)
from .executor import Executor, RootFactory, read_scheme
from .fixture import materialize
from .interpreter import BlockState, SchemeInterpreter
from .lines import to_lines
from .options import with_args, with_cwd, with_env, without_env

__all__ = (
    'BlockState',
    'Command',
    'CommandOption',
    'Executor',
    'Process',
    'RootFactory',
    'SchemeInterpreter',
    'Spawner',
    'assert_no_diff',
    'assert_return_code',
    'build_command',
    'compare',
    'materialize',
    'read_scheme',
    'resolve_program',
    'run',
    'spawn_subprocess',
    'to_lines',
    'with_args',
    'with_cwd',
    'with_env',
    'without_env',
)
