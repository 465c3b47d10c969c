"""Base Pydantic models for harness records.

This module defines the foundational model classes used by all parsed
and produced records. It enforces immutability and strict schema
validation so that a test plan can not drift between parsing and
execution.
"""

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all harness records.

    Design principles enforced by this model:
        - Immutability: records can not be modified after creation.
          A plan fully determines one execution and is discarded after it.
        - Strict schema validation: unknown or extra fields are rejected.

    All record models must inherit from this class.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings can not be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored,
          so unrelated environment variables never break resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
