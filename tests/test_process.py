"""Tests for the process-wide envdefaults API."""

from __future__ import annotations

import io
import os
from datetime import timedelta
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from rich.console import Console

import envdefaults
from envdefaults.process import get_registry, get_resolver

if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.unit
class TestSingletons:
    def test_registry_cached(self) -> None:
        assert get_registry() is get_registry()

    def test_resolver_uses_process_registry(self) -> None:
        assert get_resolver().registry is get_registry()

    def test_cache_clear_gives_fresh_registry(self) -> None:
        envdefaults.register("DB_MAX", 8)
        get_registry.cache_clear()
        get_resolver.cache_clear()
        assert envdefaults.default("DB_MAX") is None


@pytest.mark.integration
class TestModuleLevelApi:
    def test_register_and_default(self) -> None:
        envdefaults.register("DB_MAX", 8, "Maximum database connections")
        descriptor = envdefaults.default("DB_MAX")
        assert descriptor is not None
        assert descriptor.default == 8

    def test_register_setting(self) -> None:
        envdefaults.register_setting(envdefaults.Int64Setting(name="MAX_BYTES", default=2**40))
        with patch.dict("os.environ", {}, clear=True):
            assert envdefaults.get_int64("MAX_BYTES") == 2**40

    def test_accessors_read_os_environ(self) -> None:
        env = {
            "APP_HOST": "db.internal",
            "APP_HOSTS": "a,b,c",
            "APP_MAX_CONNS": "10",
            "APP_MAX_BYTES": "4096",
            "APP_RATIO": "0.5",
            "APP_DEBUG": "True",
            "APP_TIMEOUT": "1m30s",
        }
        with patch.dict("os.environ", env, clear=True):
            assert envdefaults.get_string("APP_HOST") == "db.internal"
            assert envdefaults.get_string_list("APP_HOSTS") == ["a", "b", "c"]
            assert envdefaults.get_int("APP_MAX_CONNS") == 10
            assert envdefaults.get_int64("APP_MAX_BYTES") == 4096
            assert envdefaults.get_float("APP_RATIO") == 0.5
            assert envdefaults.get_bool("APP_DEBUG") is True
            assert envdefaults.get_duration("APP_TIMEOUT") == timedelta(seconds=90)

    def test_registered_defaults_when_unset(self) -> None:
        envdefaults.register("APP_TIMEOUT", timedelta(seconds=5))
        envdefaults.register("APP_DEBUG", True)
        with patch.dict("os.environ", {}, clear=True):
            assert envdefaults.get_duration("APP_TIMEOUT") == timedelta(seconds=5)
            assert envdefaults.get_bool("APP_DEBUG") is True

    def test_load_applies_files_to_os_environ(self, home_dir: Path, work_dir: Path) -> None:
        (home_dir / ".env").write_text("DB_MAX=6\n", encoding="utf-8")
        (work_dir / ".env").write_text("DB_MAX=8\n", encoding="utf-8")
        envdefaults.register("DB_MAX", 2)
        with patch.dict("os.environ", {"DB_MAX": "4"}, clear=True):
            applied = envdefaults.load(home=home_dir, workdir=work_dir)
            assert len(applied) == 2
            assert os.environ["DB_MAX"] == "8"
            assert envdefaults.get_int("DB_MAX") == 8

    def test_load_reports_bad_local_file(self, home_dir: Path, work_dir: Path) -> None:
        (work_dir / ".env").write_text("GOOD=1\nBADLINE\n", encoding="utf-8")
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(envdefaults.BadLocalFileError):
                envdefaults.load(home=home_dir, workdir=work_dir)
            assert os.environ["GOOD"] == "1"

    def test_print_help(self) -> None:
        envdefaults.register("DB_MAX", 8, "Maximum database connections")
        envdefaults.register("APP_HOST", "localhost", "Database host")
        buffer = io.StringIO()
        with patch.dict("os.environ", {}, clear=True):
            envdefaults.print_help(Console(file=buffer, width=100, color_system=None))
        lines = buffer.getvalue().splitlines()
        assert [line.split()[0] for line in lines] == ["APP_HOST", "DB_MAX"]

    def test_print_help_empty_registry(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict("os.environ", {}, clear=True):
            envdefaults.print_help()
        assert capsys.readouterr().out == ""

    def test_unsupported_default_raises(self) -> None:
        with pytest.raises(envdefaults.RegistrationError):
            envdefaults.register("PORTS", [80, 443], "Ports")
        assert envdefaults.default("PORTS") is None
