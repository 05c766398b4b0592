"""Coercion of raw environment strings into typed setting values.

Every ``parse_*`` function raises ``ValueError`` when the raw string is not
a valid value of its type; the resolver treats that as "not set". The
``format_*`` helpers render values back into the form they would be
written in a ``.env`` file.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from datetime import timedelta
from decimal import Decimal, InvalidOperation

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE | re.ASCII,
)
_INFINITY_WORDS = frozenset({"inf", "infinity"})

# One duration component: a decimal number followed by a unit suffix.
_DURATION_PART_RE = re.compile(r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)")

_NANOS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_MAX_DURATION_NANOS = INT64_MAX


def parse_string_list(raw: str) -> list[str]:
    """Split a comma-separated value; elements are not trimmed."""
    return raw.split(",")


def parse_int(raw: str) -> int:
    """Parse a base-10 signed 64-bit integer.

    Raises:
        ValueError: On anything other than an optional sign and ASCII digits,
            or when the value does not fit in 64 bits.
    """
    if not _INTEGER_RE.fullmatch(raw):
        msg = f"invalid integer: {raw!r}"
        raise ValueError(msg)
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        msg = f"integer out of range: {raw!r}"
        raise ValueError(msg)
    return value


def parse_float(raw: str) -> float:
    """Parse a decimal or exponential float, including ``inf`` and ``nan``.

    Raises:
        ValueError: On anything outside the ASCII float grammar (whitespace,
            digit separators, non-ASCII digits), or when a finite literal
            overflows to infinity.
    """
    if not _FLOAT_RE.fullmatch(raw):
        msg = f"invalid float: {raw!r}"
        raise ValueError(msg)
    value = float(raw)
    if math.isinf(value) and raw.lstrip("+-").lower() not in _INFINITY_WORDS:
        msg = f"float out of range: {raw!r}"
        raise ValueError(msg)
    return value


def parse_bool(raw: str) -> bool:
    """Return True only for a case-insensitive ``"true"``; never fails."""
    return raw.casefold() == "true"


def parse_duration(raw: str) -> timedelta:
    """Parse a duration such as ``"300ms"``, ``"1h30m"`` or ``"-1.5h"``.

    A sequence of decimal numbers, each with a unit suffix, optionally
    preceded by a sign. The bare string ``"0"`` is also accepted. Valid
    units are ``ns``, ``us`` (or ``µs``), ``ms``, ``s``, ``m`` and ``h``.
    Precision below one microsecond is truncated.

    Raises:
        ValueError: If the string is not a duration or overflows.
    """
    text = raw
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        msg = f"invalid duration: {raw!r}"
        raise ValueError(msg)

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_PART_RE.match(text, pos)
        if match is None:
            msg = f"invalid duration: {raw!r}"
            raise ValueError(msg)
        number, unit = match.groups()
        try:
            total += Decimal(number) * _NANOS_PER_UNIT[unit]
        except InvalidOperation as exc:
            msg = f"invalid duration: {raw!r}"
            raise ValueError(msg) from exc
        pos = match.end()

    nanos = int(total)
    # the negative range reaches one further than the positive
    limit = _MAX_DURATION_NANOS + 1 if negative else _MAX_DURATION_NANOS
    if nanos > limit:
        msg = f"duration out of range: {raw!r}"
        raise ValueError(msg)

    micros = nanos // 1_000
    return timedelta(microseconds=-micros if negative else micros)


def _trim_fraction(amount: int, unit: int) -> str:
    """Render ``amount / unit`` with trailing zeros removed."""
    whole, frac = divmod(amount, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{frac:0{width}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """Render a timedelta the way :func:`parse_duration` reads it.

    Example:
        >>> format_duration(timedelta(minutes=1, seconds=30))
        '1m30s'
        >>> format_duration(timedelta(milliseconds=1.5))
        '1.5ms'
    """
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim_fraction(micros, 1_000)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)

    parts = [sign]
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{_trim_fraction(rest, 1_000_000)}s")
    return "".join(parts)


def format_string_list(value: Sequence[str]) -> str:
    return ",".join(value)


def format_bool(value: bool) -> str:
    return "true" if value else "false"
