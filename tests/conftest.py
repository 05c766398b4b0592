"""Shared fixtures for envdefaults tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from envdefaults.environment import MappingEnvironment
from envdefaults.logging import get_logging_settings
from envdefaults.process import get_registry, get_resolver
from envdefaults.registry import DefaultRegistry
from envdefaults.resolver import ConfigResolver
from envdefaults.settings import EnvDefaultsSettings, get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clear_cached_singletons() -> Iterator[None]:
    """Start every test with fresh process-wide registry and settings."""
    get_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_registry.cache_clear()
    get_resolver.cache_clear()
    yield
    get_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_registry.cache_clear()
    get_resolver.cache_clear()


@pytest.fixture()
def registry() -> DefaultRegistry:
    return DefaultRegistry()


@pytest.fixture()
def environment() -> MappingEnvironment:
    return MappingEnvironment()


@pytest.fixture()
def resolver(registry: DefaultRegistry, environment: MappingEnvironment) -> ConfigResolver:
    return ConfigResolver(registry, environment)


@pytest.fixture()
def settings() -> EnvDefaultsSettings:
    """Library settings with documented defaults, independent of os.environ."""
    return EnvDefaultsSettings(
        file_name=".env",
        load_home=True,
        help_description_width=40,
        help_min_default_width=10,
    )


@pytest.fixture()
def home_dir(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture()
def work_dir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path
