"""Byte size formatting and parsing utilities."""

import re
from typing import Optional, Tuple

from ..core.errors import ParameterError, ParseSizeError
from ..core.models import MaxSize

KIB = 1024
MIB = 1024 * KIB
GIB = 1024 * MIB

_UNITS = {
    'b': 1,
    'k': KIB,
    'm': MIB,
    'g': GIB,
}

_UNIT_LABELS = {
    'k': 'Kb',
    'm': 'Mb',
    'g': 'Gb',
}

_NUMBER = re.compile(r'\+?[0-9]+')

DEFAULT_LIMIT = MaxSize(limit=10 * MIB, label="10Mb")


def size_convert(size: int, div: int) -> float:
    """Divide ``size`` by ``div``, keeping the integer part exact."""
    whole, remainder = divmod(size, div)
    return whole + remainder / div


def format_size(size: int) -> str:
    """
    Render a byte count with the largest fitting unit.

    Examples:
        1023 -> "1023 bytes", 2048 -> "2.00Kb", 1073741824 -> "1.00Gb"
    """
    if size >= GIB:
        return f"{size_convert(size, GIB):.2f}Gb"
    if size >= MIB:
        return f"{size_convert(size, MIB):.2f}Mb"
    if size >= KIB:
        return f"{size_convert(size, KIB):.2f}Kb"
    return f"{size} bytes"


def split_size(value: str) -> Tuple[str, Optional[str]]:
    """Split a size argument into its numeric part and lowercase unit suffix."""
    value = value.lower()
    if not value:
        return "", None
    return value[:-1], value[-1]


def parse_max_size(value: Optional[str]) -> MaxSize:
    """
    Parse a ``-m`` argument such as ``26b``, ``78k``, ``98m`` or ``4g``.

    A number of zero means unlimited, whatever the unit. A missing or empty
    value gives the 10Mb default.

    Raises:
        ParseSizeError: If the numeric part is not an unsigned integer.
        ParameterError: If the unit suffix is not one of b, k, m, g.
    """
    if value is None:
        return DEFAULT_LIMIT

    number, unit = split_size(value)
    if unit is None:
        return DEFAULT_LIMIT

    if not _NUMBER.fullmatch(number):
        reason = "cannot parse integer from empty string" if not number else "invalid digit found in string"
        raise ParseSizeError(value, ValueError(reason))
    n = int(number)

    if unit not in _UNITS:
        raise ParameterError(f"-m suffix only support b, k, m, g, not {unit}")

    if n == 0:
        return MaxSize(limit=None, label="unlimited")
    if unit == 'b':
        return MaxSize(limit=n, label=f"{n} bytes")
    return MaxSize(limit=n * _UNITS[unit], label=f"{n}{_UNIT_LABELS[unit]}")
