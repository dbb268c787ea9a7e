"""
Shared utilities (NOT business logic).

Usage:
    from app.shared import time_of_day, format_duration
    from app.shared.constants import RiderProfile
"""
from .clock import (
    MINUTES_PER_DAY,
    parse_clock,
    format_clock,
    time_of_day,
    hour_key,
)
from .formatters import (
    format_duration,
    format_target,
    format_speed,
)
from .constants import (
    RiderProfile,
    NutritionStrategyName,
    NutritionEventType,
    JudgmentLevel,
    TerrainDifficulty,
    DEFAULT_RIDER_PROFILE,
    DEFAULT_NUTRITION_STRATEGY,
)

__all__ = [
    # clock
    "MINUTES_PER_DAY",
    "parse_clock",
    "format_clock",
    "time_of_day",
    "hour_key",
    # formatters
    "format_duration",
    "format_target",
    "format_speed",
    # constants
    "RiderProfile",
    "NutritionStrategyName",
    "NutritionEventType",
    "JudgmentLevel",
    "TerrainDifficulty",
    "DEFAULT_RIDER_PROFILE",
    "DEFAULT_NUTRITION_STRATEGY",
]
