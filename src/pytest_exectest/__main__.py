"""CLI utilities for pytest-exectest.

Allows inspecting how a scheme is interpreted and running a scheme
outside of a pytest session.
"""

from json import dumps
from pathlib import Path
from tempfile import TemporaryDirectory

from click import Choice, argument, echo, group, option
from click import Path as PathParam
from click.exceptions import Exit
from yaml import safe_dump

from pytest_exectest.core import Executor, SchemeInterpreter, read_scheme
from pytest_exectest.errors import ExectestError
from pytest_exectest.schema import TestPlan
from pytest_exectest.settings import ExectestSettings
from pytest_exectest.variables import ROOT_DIR_PLACEHOLDER

EXIT_MISMATCH = 1
EXIT_FATAL = 2

SchemeFilepath = PathParam(
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
)


@group(help='Command-line utilities for pytest-exectest schemes.')
def cli() -> None:
    """Root CLI group for pytest-exectest tools."""
    return None


@cli.command(
    name='schema',
    help='Print the JSON Schema of a parsed test plan to standard output.',
)
def print_schema() -> None:
    """Generate and print the JSON Schema."""
    echo(dumps(TestPlan.model_json_schema(), ensure_ascii=False, indent=2))


@cli.command(
    name='parse',
    help='Interpret a scheme file and print the resulting test plan.',
)
@option(
    '-r', '--root',
    default=ROOT_DIR_PLACEHOLDER,
    show_default=True,
    help='Fixture root substituted for placeholders.',
)
@option(
    '-f', '--format', 'output_format',
    type=Choice(['yaml', 'json']),
    default='yaml',
    show_default=True,
    help='Output format.',
)
@argument('scheme', type=SchemeFilepath)
def parse_scheme(root: str, output_format: str, scheme: Path) -> None:
    """Print the plan of a scheme file.

    Args:
        root: Fixture root used for substitution.
        output_format: `yaml` or `json`.
        scheme: Scheme file path.
    """
    settings = ExectestSettings()
    interpreter = SchemeInterpreter(
        root,
        strict=settings.strict,
        max_line_size=settings.max_line_size,
        filename=f'{scheme}',
    )

    try:
        plan = interpreter.parse(read_scheme(scheme, settings.encoding))

    except ExectestError as error:
        echo(f'{error}', err=True)
        raise Exit(EXIT_FATAL) from error

    data = plan.model_dump(mode='json', exclude={'scheme'})
    if output_format == 'json':
        echo(dumps(data, ensure_ascii=False, indent=2))
    else:
        echo(safe_dump(data, sort_keys=False, allow_unicode=True), nl=False)


@cli.command(
    name='run',
    help='Run a scheme file against a program in a temporary directory.',
)
@option(
    '--strict',
    is_flag=True,
    default=False,
    help='Warn about unknown directives and repeated declarations.',
)
@argument('program')
@argument('scheme', type=SchemeFilepath)
def run_scheme(strict: bool, program: str, scheme: Path) -> None:
    """Execute a scheme file.

    Exits with 1 on mismatch and 2 on fatal errors.

    Args:
        strict: Enable strict diagnostics.
        program: Program under test.
        scheme: Scheme file path.
    """
    settings = ExectestSettings()
    if strict:
        settings = settings.model_copy(update={'strict': True})

    with TemporaryDirectory(prefix='exectest-') as root:
        executor = Executor(lambda: Path(root), settings=settings)

        try:
            executor.execute_file(program, scheme)

        except AssertionError as error:
            echo(f'{error}', err=True)
            raise Exit(EXIT_MISMATCH) from error

        except ExectestError as error:
            echo(f'{error}', err=True)
            raise Exit(EXIT_FATAL) from error

    echo(f'PASS {scheme}')


if __name__ == '__main__':
    cli()
