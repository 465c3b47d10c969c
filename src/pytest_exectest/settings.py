"""Runtime settings resolved from the environment.

Every option may be set through an `EXECTEST_`-prefixed environment
variable; explicit keyword arguments take precedence.
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from pytest_exectest.models import SettingsModel

#: Default ceiling for a single scheme line (1 MiB).
DEFAULT_MAX_LINE_SIZE = 1024 * 1024

#: Default encoding for files, stdin and captured output.
DEFAULT_ENCODING = 'utf-8'


class ExectestSettings(SettingsModel):
    """Harness settings.

    Attributes:
        strict: Emit `SchemeWarning` for unknown directives and repeated
            declarations instead of silently ignoring them.
        max_line_size: Maximum size of one scheme line, in characters.
        encoding: Text encoding used for fixture files, stdin and output.
    """

    model_config = SettingsConfigDict(
        env_prefix='EXECTEST_',
    )

    strict: bool = Field(
        default=False,
        title='Strict mode',
        description='Report suspicious scheme content as warnings.',
    )

    max_line_size: int = Field(
        default=DEFAULT_MAX_LINE_SIZE,
        gt=0,
        title='Maximum scheme line size',
    )

    encoding: str = Field(
        default=DEFAULT_ENCODING,
        min_length=1,
        title='Text encoding',
    )
