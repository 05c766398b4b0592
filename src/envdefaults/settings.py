"""Library configuration using Pydantic settings.

Settings are loaded from environment variables with the ``ENVDEFAULTS_``
prefix.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvDefaultsSettings(BaseSettings):
    """Configuration for ``.env`` discovery and the help printer.

    Environment Variables:
        ENVDEFAULTS_FILE_NAME: File name looked up in the home and working
            directories (default: .env)
        ENVDEFAULTS_LOAD_HOME: Whether the home-directory file is applied
            (default: true)
        ENVDEFAULTS_HELP_DESCRIPTION_WIDTH: Maximum description column
            width (default: 40)
        ENVDEFAULTS_HELP_MIN_DEFAULT_WIDTH: Narrowest default-value column
            on small terminals (default: 10)

    Example:
        >>> settings = EnvDefaultsSettings()
        >>> settings.file_name
        '.env'
    """

    model_config = SettingsConfigDict(
        env_prefix="ENVDEFAULTS_",
        extra="ignore",
    )

    file_name: str = Field(
        default=".env",
        min_length=1,
        description="File name looked up in the home and working directories",
    )
    load_home: bool = Field(
        default=True,
        description="Apply the file found in the user's home directory",
    )
    help_description_width: int = Field(
        default=40,
        ge=10,
        le=200,
        description="Maximum width of the help description column",
    )
    help_min_default_width: int = Field(
        default=10,
        ge=4,
        le=200,
        description="Narrowest width of the help default-value column",
    )


@lru_cache(maxsize=1)
def get_settings() -> EnvDefaultsSettings:
    """Get cached settings singleton.

    Clear with ``get_settings.cache_clear()`` in tests.

    Returns:
        EnvDefaultsSettings instance loaded from environment.
    """
    return EnvDefaultsSettings()
