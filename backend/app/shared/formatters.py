"""
Formatting utilities for display.

Used by the API CSV export and the CLI script.
"""

import math


def format_duration(total_minutes: float) -> str:
    """
    Format minutes as 'HH:MM:SS'.

    Args:
        total_minutes: Duration in minutes (e.g., 225.5)

    Returns:
        Formatted string (e.g., '03:45:30'), '00:00:00' for NaN
    """
    if total_minutes is None or math.isnan(total_minutes):
        return "00:00:00"

    total_seconds = total_minutes * 60
    hours = int(total_seconds // 3600)
    minutes = int((total_seconds % 3600) // 60)
    seconds = int(total_seconds % 60)

    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_target(target_hours: int, target_minutes: int) -> str:
    """Format a target finish time as 'H:MM:00'."""
    return f"{target_hours}:{target_minutes:02d}:00"


def format_speed(speed_kmh: float, digits: int = 2) -> str:
    """Format speed as '28.45 km/h'."""
    return f"{speed_kmh:.{digits}f} km/h"
