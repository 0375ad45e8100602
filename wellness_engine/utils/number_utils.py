"""Defensive coercion of untrusted form values"""

import math
from typing import Any


def parse_number(value: Any) -> float | None:
    """
    Parse a form value into a finite float.

    Accepts ints, floats and numeric strings (surrounding whitespace, thousands
    separators and a leading pound sign are tolerated). Returns None for
    anything else, including booleans, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "").lstrip("£").strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_non_negative_float(value: Any, default: float = 0.0) -> float:
    """Coerce to a non-negative float, falling back to default"""
    number = parse_number(value)
    if number is None or number < 0:
        return default
    return number


def to_non_negative_int(value: Any, default: int = 0) -> int:
    """Coerce to a non-negative whole number (truncating), falling back to default"""
    number = parse_number(value)
    if number is None or number < 0:
        return default
    return int(number)


def to_flag(value: Any) -> bool:
    """Interpret yes/no style form answers"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("yes", "true", "y", "1")
    return False


def round_half_up(value: float) -> int:
    """Round to the nearest whole number with halves going up (not banker's rounding); 0 for NaN or infinity"""
    if not math.isfinite(value):
        return 0
    return math.floor(value + 0.5)
