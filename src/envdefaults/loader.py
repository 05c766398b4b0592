"""Overlay ``.env`` files onto the environment.

The developer keeps a ``.env`` file locally (never committed) with database
connections, log verbosity and other development overrides. At start-up
:func:`load` applies, in order:

1. ``<home>/.env``
2. ``<working directory>/.env``

Each assignment overwrites whatever the environment already held, so the
working-directory file wins over the home file, and both win over
pre-existing variables. In production no file is present and deployments
configure the process through real environment variables.

File format: one ``KEY=VALUE`` per line, ``#`` starts a comment, blank lines
are ignored. Values are raw text: no quoting, escaping or interpolation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from envdefaults.environment import ProcessEnvironment
from envdefaults.errors import (
    BadLocalFileError,
    BadUserFileError,
    EnvAssignmentError,
    EnvFileError,
    EnvFileSyntaxError,
)
from envdefaults.settings import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from envdefaults.environment import EnvironmentSource
    from envdefaults.settings import EnvDefaultsSettings

logger = logging.getLogger(__name__)


def parse_lines(lines: Iterable[str], path: Path | str) -> Iterator[tuple[int, str, str]]:
    """Yield ``(line_number, key, value)`` for each assignment in ``lines``.

    Parsing is lazy: assignments before a malformed line are yielded before
    the error is raised.

    Args:
        lines: File lines, with or without trailing newlines.
        path: File name used in error messages.

    Yields:
        1-based line number, trimmed key and trimmed value.

    Raises:
        EnvFileSyntaxError: If a line has no ``=`` or an empty key or value.
    """
    for line_number, line in enumerate(lines, start=1):
        comment = line.find("#")
        if comment == 0:
            continue
        if comment != -1:
            line = line[:comment]

        if not line.strip():
            continue

        key, sep, value = line.partition("=")
        if not sep:
            raise EnvFileSyntaxError("unable to parse line", path, line_number)

        key = key.strip()
        value = value.strip()
        if not key or not value:
            raise EnvFileSyntaxError("invalid environment variable assignment", path, line_number)

        yield line_number, key, value


def load_file(path: Path | str, environment: EnvironmentSource | None = None) -> int:
    """Apply every assignment in one file to ``environment``.

    Assignments are applied as they are read; a failure leaves earlier
    assignments in place.

    Args:
        path: File to read (UTF-8).
        environment: Target environment. Defaults to the process environment.

    Returns:
        Number of assignments applied.

    Raises:
        EnvFileSyntaxError: On a malformed line.
        EnvAssignmentError: If the environment refuses an assignment.
        EnvFileError: If the file cannot be read or decoded.
    """
    path = Path(path)
    env = environment if environment is not None else ProcessEnvironment()
    applied = 0

    try:
        with path.open(encoding="utf-8") as handle:
            for line_number, key, value in parse_lines(handle, path):
                try:
                    env.set(key, value)
                except (ValueError, OSError) as exc:
                    raise EnvAssignmentError(key, value, path, line_number) from exc
                logger.debug(
                    "Applied %s from %s:%d",
                    key,
                    path,
                    line_number,
                    extra={"env_key": key, "env_value": value},
                )
                applied += 1
    except UnicodeDecodeError as exc:
        raise EnvFileError("unable to decode", path) from exc
    except OSError as exc:
        raise EnvFileError("unable to read", path) from exc

    return applied


def _exists(path: Path) -> bool:
    """True for an existing regular file; directories are skipped."""
    return path.is_file()


def _home_directory() -> Path | None:
    try:
        return Path.home()
    except (RuntimeError, KeyError):
        logger.warning("Unable to determine home directory, skipping user .env file")
        return None


def load(
    environment: EnvironmentSource | None = None,
    *,
    home: Path | str | None = None,
    workdir: Path | str | None = None,
    settings: EnvDefaultsSettings | None = None,
) -> list[Path]:
    """Load ``.env`` files from the home and working directories.

    Missing files are not an error. Each file is applied in full before
    the next one is read.

    Args:
        environment: Target environment. Defaults to the process environment.
        home: Home directory. Defaults to the current user's home.
        workdir: Working directory. Defaults to the current directory.
        settings: Library settings (file name, whether to read the home
            file). Defaults to :func:`~envdefaults.settings.get_settings`.

    Returns:
        The files that were applied, in order.

    Raises:
        BadUserFileError: If the home-directory file is invalid. The
            working-directory file is not processed.
        BadLocalFileError: If the working-directory file is invalid.
    """
    if settings is None:
        settings = get_settings()
    env = environment if environment is not None else ProcessEnvironment()
    applied: list[Path] = []

    home_dir = Path(home) if home is not None else None
    if home_dir is None and settings.load_home:
        home_dir = _home_directory()

    if settings.load_home and home_dir is not None:
        user_file = home_dir / settings.file_name
        if _exists(user_file):
            try:
                count = load_file(user_file, env)
            except EnvFileError as exc:
                logger.debug("Failed to load %s: %s", user_file, exc)
                raise BadUserFileError(user_file) from exc
            logger.info("Loaded %d settings from %s", count, user_file)
            applied.append(user_file)
        else:
            logger.debug("No user settings file at %s", user_file)

    local_dir = Path(workdir) if workdir is not None else Path.cwd()
    local_file = local_dir / settings.file_name
    if _exists(local_file):
        try:
            count = load_file(local_file, env)
        except EnvFileError as exc:
            logger.debug("Failed to load %s: %s", local_file, exc)
            raise BadLocalFileError(local_file) from exc
        logger.info("Loaded %d settings from %s", count, local_file)
        applied.append(local_file)
    else:
        logger.debug("No local settings file at %s", local_file)

    return applied
