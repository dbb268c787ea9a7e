"""
Unified constants for rider profiles, nutrition strategies and judgments.

This module provides a single source of truth for the enum values
accepted by the API, the CLI and the planning engine.
"""

from enum import Enum


class RiderProfile(str, Enum):
    """
    Coarse skill category of the rider.

    Shifts the pace-judgment thresholds (see PaceValidator).
    """
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    PRO = "pro"


class NutritionStrategyName(str, Enum):
    """Named fueling presets."""
    AGGRESSIVE = "aggressive"
    STANDARD = "standard"
    CONSERVATIVE = "conservative"
    NONE = "none"


class NutritionEventType(str, Enum):
    """Kind of a scheduled nutrition event."""
    FUEL = "fuel"
    HYDRATION = "hydration"


class JudgmentLevel(str, Enum):
    """Severity of a pace judgment."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


class TerrainDifficulty(str, Enum):
    """Terrain category derived from a checkpoint's terrain factor."""
    FAST = "fast"
    MODERATE = "moderate"
    HILLS = "hills"


DEFAULT_RIDER_PROFILE = RiderProfile.INTERMEDIATE
DEFAULT_NUTRITION_STRATEGY = NutritionStrategyName.STANDARD
