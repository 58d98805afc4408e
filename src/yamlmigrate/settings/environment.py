"""
Environment configuration for the command line, using pydantic-settings.

Variables (all optional):
  YAMLMIGRATE_SEPARATOR  Separator for string routes (default ".")
  YAMLMIGRATE_VERBOSE    Enable debug logging (default false)
  YAMLMIGRATE_MANIFEST   Manifest used when --manifest is not given

Command-line options take precedence over these values.
"""

from __future__ import annotations

import pathlib as _pathlib

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import yamlmigrate.constants as constants


class EnvironmentSettings(_pydantic_settings.BaseSettings):
    """Defaults for the yamlmigrate command, read from the environment."""

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        extra="ignore",
    )

    separator: str = constants.DEFAULT_SEPARATOR
    """Separator for string routes."""

    verbose: bool = False
    """Enable debug logging."""

    manifest: _pathlib.Path | None = None
    """Default manifest path."""

    @_pydantic.field_validator("separator")
    @classmethod
    def _check_separator(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("separator must be a single character")
        return value
