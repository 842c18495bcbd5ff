"""Normalization helpers.

Centralizes lenient numeric parsing and the unit conversions applied to
every record.
"""

from __future__ import annotations

import math
import re
from enum import StrEnum
from typing import Any

# Offset and scale of the Kelvin -> Fahrenheit conversion.
_KELVIN_SCALE = 1.8
_KELVIN_OFFSET = 459.67

# Longest leading number, as read by C strtod/strtol.
_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")


class CoercionPolicy(StrEnum):
    """What to do with a numeric field that does not parse."""

    COERCE_TO_ZERO = "coerce-to-zero"
    REJECT = "reject"


def safe_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    """Parse an integer, truncating decimal representations toward zero."""
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    parsed = safe_float(value)
    if parsed is None or math.isinf(parsed):
        return None
    return int(parsed)


def kelvin_to_fahrenheit(kelvin: float) -> float:
    return kelvin * _KELVIN_SCALE - _KELVIN_OFFSET


def ms_to_seconds(timestamp_ms: int) -> int:
    """Truncate a millisecond epoch timestamp to whole seconds (toward zero)."""
    if timestamp_ms >= 0:
        return timestamp_ms // 1000
    return -(-timestamp_ms // 1000)


def leading_float(value: str) -> float | None:
    """Parse the longest numeric prefix of *value* (``"12abc"`` -> ``12.0``)."""
    match = _FLOAT_PREFIX.match(value)
    if match is None:
        return None
    return safe_float(match.group())


def leading_int(value: str) -> int | None:
    """Parse the longest integer prefix of *value* (``"1428x"`` -> ``1428``)."""
    match = _INT_PREFIX.match(value)
    if match is None:
        return None
    return int(match.group())
