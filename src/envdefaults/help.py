"""Help output listing every registered setting.

May be wired to a ``--help`` flag, or printed when a setting is invalid.
Produces one colorized row per setting on stdout::

    DB_MAX     integer       Maximum database connections    8
    LOG_LEVEL  string        Minimum log level               info

Colors and terminal width come from a :class:`rich.console.Console`, which
falls back to plain text and 80 columns when stdout is not a terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from envdefaults.settings import get_settings

if TYPE_CHECKING:
    from envdefaults.registry import DefaultRegistry
    from envdefaults.settings import EnvDefaultsSettings

NAME_STYLE = "yellow"
TYPE_STYLE = "cyan"
DESCRIPTION_STYLE = "white"
DEFAULT_STYLE = "dim white"

TYPE_WIDTH = 12
ELLIPSIS = "..."

# Separators between the four columns.
_GAPS = ("  ", "  ", "    ")


def pad(value: str, width: int) -> str:
    """Left-align ``value`` in ``width`` columns, truncating with ``...``."""
    if len(value) > width:
        return value[: max(width - len(ELLIPSIS), 0)] + ELLIPSIS
    return value.ljust(width)


def format_rows(
    registry: DefaultRegistry,
    width: int,
    settings: EnvDefaultsSettings | None = None,
) -> list[Text]:
    """Build the styled help rows for a terminal ``width`` columns wide.

    Args:
        registry: Registry to describe.
        width: Terminal width in columns.
        settings: Library settings for column limits.

    Returns:
        One row per descriptor, sorted by name. Empty for an empty registry.
    """
    if settings is None:
        settings = get_settings()

    descriptors = registry.descriptors()
    if not descriptors:
        return []

    name_width = max(len(d.name) for d in descriptors)
    desc_width = min(
        max(len(d.description) for d in descriptors),
        settings.help_description_width,
    )
    used = name_width + TYPE_WIDTH + desc_width + sum(len(gap) for gap in _GAPS)
    default_width = max(width - used, settings.help_min_default_width)

    rows: list[Text] = []
    for descriptor in descriptors:
        rows.append(
            Text.assemble(
                (pad(descriptor.name, name_width), NAME_STYLE),
                _GAPS[0],
                (pad(descriptor.type_label, TYPE_WIDTH), TYPE_STYLE),
                _GAPS[1],
                (pad(descriptor.description, desc_width), DESCRIPTION_STYLE),
                _GAPS[2],
                (pad(descriptor.render_default(), default_width).rstrip(), DEFAULT_STYLE),
            )
        )
    return rows


def print_help(
    registry: DefaultRegistry,
    console: Console | None = None,
    settings: EnvDefaultsSettings | None = None,
) -> None:
    """Print every registered setting as a column-aligned table.

    Args:
        registry: Registry to describe.
        console: Output console. Defaults to a stdout console without
            syntax highlighting.
        settings: Library settings for column limits.
    """
    if console is None:
        console = Console(highlight=False)

    for row in format_rows(registry, console.width, settings):
        console.print(row, soft_wrap=True)
