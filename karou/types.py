"""Runtime value helpers for Karou Script.

Karou values are plain Python objects of exactly three kinds: `float`
for numbers, `str` for strings and `bool` for booleans. There is no null
value; an unbound name is an error, not a value. The conversion helpers
below are total: they never raise, so the interpreter can always carry
on with some value.
"""

from __future__ import annotations

import re
from typing import Union

Value = Union[float, str, bool]

# Longest numeric prefix accepted when a string is used as a number.
_NUMBER_PREFIX = re.compile(r'\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def format_number(value: float) -> str:
    """Render a number with six decimals, then drop trailing zeros and dot.

    `14.0` becomes `'14'`, `2.5` becomes `'2.5'` and `1/3` becomes
    `'0.333333'`.
    """
    text = '%f' % value
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def type_name(value: Value) -> str:
    """Return the Karou kind name of a runtime value."""
    # bool before float: True is not a number here
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, (int, float)):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    return type(value).__name__


def to_string(value: Value) -> str:
    """Convert a value to its printed text."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return format_number(float(value))
    if isinstance(value, str):
        return value
    return str(value)


def to_number(value: Value) -> float:
    """Convert a value to a number.

    Strings contribute their longest leading numeric prefix, so `'12abc'`
    is 12 and `'abc'` is 0.
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if match is None:
            return 0.0
        return float(match.group(0))
    return 0.0


def to_boolean(value: Value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0.0
    if isinstance(value, str):
        return value != ''
    return False
