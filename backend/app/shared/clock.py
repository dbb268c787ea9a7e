"""
Wall-clock helpers.

Race time is tracked as elapsed minutes from the start gun. These helpers
turn an elapsed offset into the time of day a rider reaches a point.
The calendar date is never reported, only "HH:MM".
"""

import math
import re

MINUTES_PER_DAY = 24 * 60

# Absorbs float noise such as 224.99999999 for a 225-minute target
_FLOOR_EPSILON = 1e-6

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_clock(value: str) -> int:
    """
    Parse "HH:MM" into minutes since midnight.

    Raises:
        ValueError: If the string is not a valid 24h clock time
    """
    match = _CLOCK_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time of day: {value!r} (expected HH:MM)")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time of day: {value!r} (expected HH:MM)")
    return hours * 60 + minutes


def format_clock(minutes_since_midnight: int) -> str:
    """Format minutes since midnight as "HH:MM", wrapping past 24:00."""
    minutes = minutes_since_midnight % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def time_of_day(start_time: str, elapsed_minutes: float) -> str:
    """
    Wall-clock time reached after riding for elapsed_minutes.

    Fractional minutes are truncated, not rounded.

    Args:
        start_time: Race start in "HH:MM"
        elapsed_minutes: Race-elapsed minutes (>= 0)

    Returns:
        "HH:MM" (e.g. "06:00" + 225 -> "09:45", "23:30" + 45 -> "00:15")
    """
    start = parse_clock(start_time)
    return format_clock(start + math.floor(elapsed_minutes + _FLOOR_EPSILON))


def hour_key(clock: str) -> str:
    """Truncate "HH:MM" to its forecast bucket "HH:00"."""
    return format_clock(parse_clock(clock) // 60 * 60)
