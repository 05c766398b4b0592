"""Process-wide registry and accessors.

Module-level functions over a single cached :class:`DefaultRegistry` and a
:class:`ConfigResolver` reading the real process environment. Applications
that prefer explicit wiring construct their own ``ConfigResolver`` instead.

Usage:
    import envdefaults

    envdefaults.register("DB_MAX", 8, "Maximum database connections")
    envdefaults.load()
    pool_size = envdefaults.get_int("DB_MAX")
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from envdefaults import help as _help
from envdefaults import loader as _loader
from envdefaults.environment import ProcessEnvironment
from envdefaults.registry import DefaultRegistry
from envdefaults.resolver import ConfigResolver

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from envdefaults.descriptors import SettingDescriptor


@lru_cache(maxsize=1)
def get_registry() -> DefaultRegistry:
    """Get the process-wide registry.

    Clear with ``get_registry.cache_clear()`` (and
    ``get_resolver.cache_clear()``) in tests.
    """
    return DefaultRegistry()


@lru_cache(maxsize=1)
def get_resolver() -> ConfigResolver:
    """Get the process-wide resolver over ``os.environ``."""
    return ConfigResolver(get_registry(), ProcessEnvironment())


def register(name: str, default: Any, description: str = "") -> SettingDescriptor:
    """Register a default for an environment variable.

    When the variable is unset, accessors return this default instead of
    the zero value.

    Raises:
        RegistrationError: If the default's type is unsupported.
    """
    return get_registry().register(name, default, description)


def register_setting(descriptor: SettingDescriptor) -> SettingDescriptor:
    return get_registry().register_setting(descriptor)


def default(name: str) -> SettingDescriptor | None:
    """Return the descriptor registered for ``name``, or None."""
    return get_registry().default(name)


def load(
    *,
    home: Path | str | None = None,
    workdir: Path | str | None = None,
) -> list[Path]:
    """Load the home and working-directory ``.env`` files into ``os.environ``.

    Raises:
        BadUserFileError: If the home-directory file is invalid.
        BadLocalFileError: If the working-directory file is invalid.
    """
    return _loader.load(get_resolver().environment, home=home, workdir=workdir)


def get_string(name: str) -> str:
    return get_resolver().get_string(name)


def get_string_list(name: str) -> list[str]:
    return get_resolver().get_string_list(name)


def get_int(name: str) -> int:
    return get_resolver().get_int(name)


def get_int64(name: str) -> int:
    return get_resolver().get_int64(name)


def get_float(name: str) -> float:
    return get_resolver().get_float(name)


def get_bool(name: str) -> bool:
    return get_resolver().get_bool(name)


def get_duration(name: str) -> timedelta:
    return get_resolver().get_duration(name)


def print_help(console: Console | None = None) -> None:
    """Print the registered settings to stdout."""
    _help.print_help(get_registry(), console)
