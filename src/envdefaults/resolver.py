"""Typed setting resolution.

Implements the resolution chain: environment value -> registered default
-> zero value. An environment value that fails to parse is treated as
unset, except for booleans: any set value other than ``"true"`` resolves
to ``False`` without consulting the default.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING, Any, TypeVar

from envdefaults.descriptors import SettingType
from envdefaults.environment import ProcessEnvironment
from envdefaults.parsing import (
    parse_bool,
    parse_duration,
    parse_float,
    parse_int,
    parse_string_list,
)
from envdefaults.registry import DefaultRegistry

if TYPE_CHECKING:
    from collections.abc import Callable

    from envdefaults.environment import EnvironmentSource

T = TypeVar("T")


class ConfigResolver:
    """Resolve settings from an environment source and a default registry.

    Args:
        registry: Registry of defaults. A private empty registry if omitted.
        environment: Environment to read. The process environment if omitted.

    Example:
        >>> from envdefaults.environment import MappingEnvironment
        >>> resolver = ConfigResolver(environment=MappingEnvironment({"MAX_CONNS": "10"}))
        >>> resolver.get_int("MAX_CONNS")
        10
    """

    def __init__(
        self,
        registry: DefaultRegistry | None = None,
        environment: EnvironmentSource | None = None,
    ) -> None:
        self.registry = registry if registry is not None else DefaultRegistry()
        self.environment = environment if environment is not None else ProcessEnvironment()

    def _resolve(
        self,
        name: str,
        parse: Callable[[str], T],
        kinds: tuple[SettingType, ...],
        zero: T,
    ) -> T:
        raw = self.environment.lookup(name)
        if raw is not None:
            try:
                return parse(raw)
            except ValueError:
                pass

        return self._default(name, kinds, zero)

    def _default(self, name: str, kinds: tuple[SettingType, ...], zero: Any) -> Any:
        descriptor = self.registry.default(name)
        if descriptor is not None and descriptor.type in kinds:
            return descriptor.default
        return zero

    def get_string(self, name: str) -> str:
        """Return the variable as-is, else the string default, else ``""``."""
        return self._resolve(name, str, (SettingType.STRING,), "")

    def get_string_list(self, name: str) -> list[str]:
        """Return the variable split on commas, else the list default, else ``[]``.

        Elements are not trimmed and commas cannot be escaped.
        """
        value = self._resolve(name, parse_string_list, (SettingType.STRING_LIST,), [])
        return list(value)

    def get_int(self, name: str) -> int:
        """Return the variable as an integer.

        Falls back to an ``integer`` default, then 0, when the variable is
        unset or not a base-10 integer.
        """
        return self._resolve(name, parse_int, (SettingType.INTEGER,), 0)

    def get_int64(self, name: str) -> int:
        """Return the variable as a 64-bit integer.

        Falls back to an ``int64`` or ``integer`` default, then 0.
        """
        return self._resolve(name, parse_int, (SettingType.INT64, SettingType.INTEGER), 0)

    def get_float(self, name: str) -> float:
        """Return the variable as a float, else the float default, else 0.0."""
        return float(self._resolve(name, parse_float, (SettingType.FLOAT,), 0.0))

    def get_bool(self, name: str) -> bool:
        """Return the variable as a boolean.

        A set variable is True only when it equals ``"true"`` in any case;
        every other set value is False and the default is not consulted.
        An unset variable falls back to the boolean default, then False.
        """
        raw = self.environment.lookup(name)
        if raw is not None:
            return parse_bool(raw)
        return self._default(name, (SettingType.BOOLEAN,), False)

    def get_duration(self, name: str) -> timedelta:
        """Return the variable as a duration such as ``"1m30s"``.

        Falls back to the duration default, then a zero timedelta, when the
        variable is unset or not a valid duration.
        """
        return self._resolve(name, parse_duration, (SettingType.DURATION,), timedelta(0))
