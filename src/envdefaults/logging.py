"""Structured logging configuration using structlog.

envdefaults modules log through the standard library (``logging.getLogger``)
and stay silent unless the host application configures logging. This
module routes the ``envdefaults`` logger through structlog with:

- Console output with colors for development
- JSON output when ``ENVDEFAULTS_LOG_FORMAT=json``
- Redaction of values assigned to secret-looking variables

Usage:
    # During application startup
    from envdefaults.logging import configure_logging
    configure_logging()

    # In application code
    from envdefaults.logging import get_logger
    logger = get_logger(__name__)
    logger.info("settings_loaded", files=2)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Literal

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import MutableMapping

# Type alias for structlog processor
Processor = structlog.types.Processor

LOGGER_NAME = "envdefaults"

# Fragments of variable names whose values must never reach the logs
SENSITIVE_FRAGMENTS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "token",
        "secret",
        "api_key",
        "apikey",
        "credential",
        "private_key",
        "dsn",
    }
)

REDACTED_VALUE: str = "***REDACTED***"


class LoggingSettings(BaseSettings):
    """Logging configuration settings from environment variables.

    Loads configuration from environment variables:
    - ENVDEFAULTS_LOG_LEVEL: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVDEFAULTS_LOG_FORMAT: ``console`` or ``json``

    Example:
        >>> LoggingSettings(log_level="debug").log_level
        'DEBUG'
    """

    model_config = SettingsConfigDict(
        env_prefix="ENVDEFAULTS_",
        extra="ignore",
    )

    log_level: str = Field(
        default="WARNING",
        description="Minimum log level to output",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Renderer for log records",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return str(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level.

        Raises:
            ValueError: If log level is not a valid Python logging level.
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            msg = f"log_level must be one of {valid_levels}"
            raise ValueError(msg)
        return v

    @property
    def use_json_logs(self) -> bool:
        return self.log_format == "json"

    @property
    def log_level_int(self) -> int:
        """Convert log level string to logging module constant."""
        return getattr(logging, self.log_level, logging.WARNING)


def is_sensitive(name: str) -> bool:
    """Check if a variable name suggests a secret value."""
    lowered = name.lower()
    return any(fragment in lowered for fragment in SENSITIVE_FRAGMENTS)


class SecretValueProcessor:
    """Structlog processor to redact values of secret-looking variables.

    The loader logs each assignment with ``env_key`` and ``env_value``
    fields; the value is replaced when the key looks sensitive.

    Example:
        >>> processor = SecretValueProcessor()
        >>> event = {"event": "applied", "env_key": "DB_PASSWORD", "env_value": "hunter2"}
        >>> processor(None, "debug", event)["env_value"]
        '***REDACTED***'
    """

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        key = event_dict.get("env_key")
        if isinstance(key, str) and "env_value" in event_dict and is_sensitive(key):
            event_dict["env_value"] = REDACTED_VALUE
        return event_dict


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached LoggingSettings instance.

    Clear cache with ``get_logging_settings.cache_clear()`` for testing.
    """
    return LoggingSettings()


def configure_logging(
    settings: LoggingSettings | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Route the ``envdefaults`` logger through structlog.

    Installs a single handler (replacing any previously installed one) with
    a :class:`structlog.stdlib.ProcessorFormatter`, so stdlib records from
    the loader and registry render like structlog events.

    Args:
        settings: Optional LoggingSettings. Loaded from environment if omitted.
        handler: Handler to install. Defaults to a ``StreamHandler`` on stderr.

    Returns:
        The configured ``envdefaults`` stdlib logger.
    """
    if settings is None:
        settings = get_logging_settings()

    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        SecretValueProcessor(),
    ]

    renderer: Processor
    if settings.use_json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    structlog.configure(
        processors=[
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    target = logging.getLogger(LOGGER_NAME)
    for existing in list(target.handlers):
        target.removeHandler(existing)
    target.addHandler(handler)
    target.setLevel(settings.log_level_int)
    target.propagate = False
    return target


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to the given name.

    Args:
        name: Logger name (typically ``__name__``). Defaults to ``envdefaults``.
    """
    return structlog.stdlib.get_logger(name or LOGGER_NAME)
