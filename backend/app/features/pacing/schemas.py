"""
Race plan schemas.

Pydantic schemas for API request/response serialization.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from app.features.weather.schemas import HourlyForecast
from app.shared.constants import (
    DEFAULT_NUTRITION_STRATEGY,
    DEFAULT_RIDER_PROFILE,
    JudgmentLevel,
    NutritionEventType,
    NutritionStrategyName,
    RiderProfile,
)


class PlanRequest(BaseModel):
    """Request for a race plan."""
    course_id: str
    target_hours: int = Field(ge=0, le=23)
    target_minutes: int = Field(default=0, ge=0, le=59)
    start_time: Optional[str] = Field(
        default=None,
        pattern=r"^([01]?\d|2[0-3]):[0-5]\d$",
        description="Race start HH:MM (course default if omitted)",
    )
    rider_profile: RiderProfile = DEFAULT_RIDER_PROFILE
    nutrition_strategy: NutritionStrategyName = DEFAULT_NUTRITION_STRATEGY


class NutritionEventSchema(BaseModel):
    """Single fuel/hydration event."""
    time_minutes: float
    time_of_day: str
    type: NutritionEventType
    details: str
    distance: float
    associated_checkpoint_name: str
    is_pre_hill_warning: bool


class SplitSchema(BaseModel):
    """Single checkpoint split."""
    checkpoint_name: str
    distance: float
    split_distance: float
    split_time_minutes: float
    cumulative_time_minutes: float
    time_of_day: str
    speed_on_split: float
    moving_average_speed: float
    terrain_factor: float
    description: str
    nutrition_events: List[NutritionEventSchema] = []
    weather: Optional[HourlyForecast] = None


class PaceJudgmentSchema(BaseModel):
    level: JudgmentLevel
    title: str
    message: str


class RacePlanResponse(BaseModel):
    """Complete race plan."""
    course_id: str
    target_total_minutes: int
    start_time: str
    splits: List[SplitSchema]
    nutrition_events: List[NutritionEventSchema]
    pace_judgment: PaceJudgmentSchema
    overall_average_speed: float = Field(..., description="km/h over the whole course")
    weather_available: bool
    warnings: List[str] = []
