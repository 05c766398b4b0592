"""Exception hierarchy for settings registration and ``.env`` loading.

Errors carry a machine-readable ``error_code`` and a structured ``context``
so callers can report exactly which file and line needs fixing.

Example:
    >>> from envdefaults import load
    >>> from envdefaults.errors import BadLocalFileError
    >>> try:
    ...     load()
    ... except BadLocalFileError as exc:
    ...     print(exc, exc.__cause__)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

__all__ = [
    "BadLocalFileError",
    "BadUserFileError",
    "EnvAssignmentError",
    "EnvDefaultsError",
    "EnvFileError",
    "EnvFileSyntaxError",
    "LoadError",
    "RegistrationError",
]


class EnvDefaultsError(Exception):
    """Base class for all envdefaults errors.

    Attributes:
        error_code: Machine-readable error code.
        message: Human-readable error description.
        context: Structured debugging information (paths, keys, line numbers).
    """

    error_code: str = "ENVDEFAULTS_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class RegistrationError(EnvDefaultsError, TypeError):
    """Raised when a default cannot be registered.

    A programming error: the default's type is not one of the supported
    setting kinds, or the descriptor itself is invalid. The registry is
    never modified when this is raised.
    """

    error_code: str = "INVALID_DEFAULT"

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f"cannot register default for {name!r}: {reason}", {"name": name})


class EnvFileError(EnvDefaultsError):
    """Raised when a ``.env`` file cannot be read or applied.

    Attributes:
        path: File being processed.
        line_number: 1-based line number, or None for whole-file failures.
    """

    error_code: str = "ENV_FILE_ERROR"

    def __init__(
        self,
        message: str,
        path: Path | str,
        line_number: int | None = None,
        **extra_context: Any,
    ) -> None:
        self.path = Path(path)
        self.line_number = line_number
        location = str(self.path) if line_number is None else f"{self.path}:{line_number}"
        super().__init__(f"{message} {location}", dict(extra_context))


class EnvFileSyntaxError(EnvFileError):
    """Raised for a line that is not a ``KEY=VALUE`` assignment."""

    error_code: str = "ENV_FILE_SYNTAX"


class EnvAssignmentError(EnvFileError):
    """Raised when the environment refuses a variable assignment."""

    error_code: str = "ENV_ASSIGNMENT_FAILED"

    def __init__(self, key: str, value: str, path: Path | str, line_number: int) -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"failed to assign {key} value {value}",
            path,
            line_number,
            key=key,
        )


class LoadError(EnvDefaultsError):
    """Base class for failures surfaced by :func:`envdefaults.loader.load`.

    The underlying :class:`EnvFileError` is chained as ``__cause__``.
    """

    error_code: str = "ENV_LOAD_FAILED"
    description: str = "unable to parse .env file"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(self.description, {"path": str(self.path)})


class BadUserFileError(LoadError):
    """Raised when the ``.env`` file in the user's home directory is invalid."""

    error_code: str = "BAD_USER_ENV_FILE"
    description: str = "unable to parse $HOME/.env file"


class BadLocalFileError(LoadError):
    """Raised when the ``.env`` file in the working directory is invalid."""

    error_code: str = "BAD_LOCAL_ENV_FILE"
    description: str = "unable to parse .env file"
