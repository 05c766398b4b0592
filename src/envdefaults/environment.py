"""Environment sources read by the resolver and written by the loader.

:class:`ProcessEnvironment` is the real process environment. Tests and
embedders can inject a :class:`MappingEnvironment` instead, so ``.env``
overlays and lookups never touch ``os.environ``.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping


class EnvironmentSource(Protocol):
    """Read/write access to a set of environment variables."""

    def lookup(self, key: str) -> str | None:
        """Return the raw value, or None when the variable is unset."""
        ...

    def set(self, key: str, value: str) -> None:
        """Set a variable, overwriting any prior value.

        Raises:
            ValueError: If the platform refuses the key or value.
            OSError: If the platform refuses the assignment.
        """
        ...


class ProcessEnvironment:
    """Environment source backed by ``os.environ``."""

    def lookup(self, key: str) -> str | None:
        return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value

    def __repr__(self) -> str:
        return "ProcessEnvironment()"


class MappingEnvironment:
    """Environment source backed by an in-memory mapping.

    Args:
        values: Initial variables; copied.

    Example:
        >>> env = MappingEnvironment({"DB_MAX": "6"})
        >>> env.set("DB_MAX", "8")
        >>> env.lookup("DB_MAX")
        '8'
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def lookup(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def as_dict(self) -> dict[str, str]:
        """Return a copy of the current variables."""
        return dict(self._values)

    def __repr__(self) -> str:
        return f"MappingEnvironment({len(self._values)} variables)"
