"""Pacing data models (dataclasses, no I/O).

All values are owned by the planning computation that created them and
are never mutated afterwards: annotation steps return new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.features.weather.schemas import HourlyForecast
from app.shared.constants import JudgmentLevel, NutritionEventType


@dataclass(frozen=True)
class NutritionEvent:
    """
    A timed fuel or hydration reminder.

    A fuel event landing on a hydration tick carries both: type is FUEL
    and details end with the drink reminder.
    """

    time_minutes: float  # race-elapsed
    time_of_day: str  # "HH:MM"
    type: NutritionEventType
    details: str
    distance: float  # interpolated km
    associated_checkpoint_name: str  # enclosing split's checkpoint
    is_pre_hill_warning: bool = False

    def to_dict(self) -> dict:
        return {
            "time_minutes": round(self.time_minutes, 2),
            "time_of_day": self.time_of_day,
            "type": self.type.value,
            "details": self.details,
            "distance": round(self.distance, 2),
            "associated_checkpoint_name": self.associated_checkpoint_name,
            "is_pre_hill_warning": self.is_pre_hill_warning,
        }


@dataclass(frozen=True)
class Split:
    """Computed performance record for the segment ending at a checkpoint."""

    checkpoint_name: str
    distance: float  # cumulative km
    split_distance: float  # km since previous checkpoint
    split_time_minutes: float
    cumulative_time_minutes: float
    time_of_day: str  # arrival "HH:MM"
    speed_on_split: float  # km/h
    moving_average_speed: float  # km/h, cumulative distance / cumulative time
    terrain_factor: float
    description: str
    nutrition_events: tuple[NutritionEvent, ...] = ()
    weather: HourlyForecast | None = None

    def to_dict(self) -> dict:
        return {
            "checkpoint_name": self.checkpoint_name,
            "distance": round(self.distance, 2),
            "split_distance": round(self.split_distance, 2),
            "split_time_minutes": round(self.split_time_minutes, 4),
            "cumulative_time_minutes": round(self.cumulative_time_minutes, 4),
            "time_of_day": self.time_of_day,
            "speed_on_split": round(self.speed_on_split, 2),
            "moving_average_speed": round(self.moving_average_speed, 2),
            "terrain_factor": self.terrain_factor,
            "description": self.description,
            "nutrition_events": [e.to_dict() for e in self.nutrition_events],
            "weather": self.weather.model_dump() if self.weather else None,
        }


@dataclass(frozen=True)
class PaceJudgment:
    """Qualitative verdict on a target finish time."""

    level: JudgmentLevel
    title: str
    message: str

    def to_dict(self) -> dict:
        return {"level": self.level.value, "title": self.title, "message": self.message}


@dataclass(frozen=True)
class RacePlan:
    """Complete result of one planning request."""

    course_id: str
    target_total_minutes: int
    start_time: str
    splits: tuple[Split, ...]
    nutrition_events: tuple[NutritionEvent, ...]
    pace_judgment: PaceJudgment
    overall_average_speed: float  # km/h
    weather_available: bool = False
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "course_id": self.course_id,
            "target_total_minutes": self.target_total_minutes,
            "start_time": self.start_time,
            "splits": [s.to_dict() for s in self.splits],
            "nutrition_events": [e.to_dict() for e in self.nutrition_events],
            "pace_judgment": self.pace_judgment.to_dict(),
            "overall_average_speed": round(self.overall_average_speed, 2),
            "weather_available": self.weather_available,
            "warnings": list(self.warnings),
        }
