"""
Pacing calculators.

Components:
- SplitCalculator: terrain-adjusted, normalized checkpoint splits
- PaceValidator: target finish time judgment
- NutritionScheduler: fuel/hydration timetable over splits
- WeatherCorrelator: hourly conditions attached by arrival hour
"""

from .splits import SplitCalculator
from .validator import PaceValidator, PACE_RULES
from .nutrition import (
    NutritionScheduler,
    NutritionStrategy,
    NUTRITION_STRATEGIES,
    fuel_times,
    hydration_times,
)
from .weather import WeatherCorrelator

__all__ = [
    "SplitCalculator",
    "PaceValidator",
    "PACE_RULES",
    "NutritionScheduler",
    "NutritionStrategy",
    "NUTRITION_STRATEGIES",
    "fuel_times",
    "hydration_times",
    "WeatherCorrelator",
]
