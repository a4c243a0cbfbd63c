"""Validation guards for numeric fields entered by the player.

Malformed input is coerced rather than rejected: every guard returns a value
inside its range, or None where the caller decides what a non-numeric input
means (see `coerce_int`).
"""
import math

MIN_LEVEL = 1
MAX_LEVEL = 60
MIN_STARS = 0
MAX_STARS = 6
MIN_PROGRESS = 0
MAX_PROGRESS = 100


def coerce_int(value) -> int | None:
    """Round a number or numeric string half-up. None when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return math.floor(number + 0.5)


def clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


def sanitize_level(value, default: int = MIN_LEVEL) -> int:
    """Level clamped into [1, 60]; `default` for non-numeric input."""
    number = coerce_int(value)
    if number is None:
        return default
    return clamp(number, MIN_LEVEL, MAX_LEVEL)


def sanitize_stars(value, default: int = MIN_STARS) -> int:
    """Ascension / soul / rank stars clamped into [0, 6]."""
    number = coerce_int(value)
    if number is None:
        return default
    return clamp(number, MIN_STARS, MAX_STARS)


def sanitize_count(value) -> int:
    """Resource and gear counts: non-negative integers, 0 otherwise."""
    number = coerce_int(value)
    if number is None or number < 0:
        return 0
    return number


def sanitize_progress(value) -> int:
    number = coerce_int(value)
    if number is None:
        return MIN_PROGRESS
    return clamp(number, MIN_PROGRESS, MAX_PROGRESS)
