"""
Race pacing module.

Usage:
    from app.features.pacing import PlanningService, RacePlan
    from app.features.pacing.calculators import SplitCalculator

Components:
- PlanningService: Main planning entry point (plan_race)
- RacePlanner: Drops superseded requests
- SplitCalculator: Terrain-adjusted splits
- PaceValidator: Target time judgment
- NutritionScheduler: Fuel/hydration timetable
- WeatherCorrelator: Hourly weather by arrival hour
"""

from .models import Split, NutritionEvent, PaceJudgment, RacePlan
from .schemas import PlanRequest, RacePlanResponse
from .service import PlanningService, RacePlanner
from .export import render_csv, save_csv, CSV_HEADERS

__all__ = [
    # Models
    "Split",
    "NutritionEvent",
    "PaceJudgment",
    "RacePlan",
    # Schemas
    "PlanRequest",
    "RacePlanResponse",
    # Service
    "PlanningService",
    "RacePlanner",
    # Export
    "render_csv",
    "save_csv",
    "CSV_HEADERS",
]
