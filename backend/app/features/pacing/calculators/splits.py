"""
Split Calculator

Turns a race course and a target finish time into terrain-adjusted
checkpoint splits.

Each segment is ridden at the course average speed scaled by its terrain
factor. Terrain factors do not average to 1 across a course, so the raw
segment times are rescaled by one normalization factor to make them sum
to the target exactly.

Example (947 Ride Joburg, target 3:45):
    base speed  = 98 km / 3.75 h = 26.13 km/h
    M1 17km     = 1.00 x base -> raw 39.0 min
    ...
    raw total   = 265.2 min -> factor 0.849 -> normalized total 225.0 min
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from app.features.courses.models import RaceCourse
from app.features.pacing.models import Split
from app.shared.clock import time_of_day

logger = logging.getLogger(__name__)


@dataclass
class _RawSegment:
    """Terrain-adjusted segment before normalization."""
    split_distance: float
    raw_time_minutes: float


class SplitCalculator:
    """
    Terrain-adjusted split calculator.

    Example usage:
        calc = SplitCalculator(course)
        splits = calc.calculate(target_total_minutes=225, start_time="06:00")
    """

    def __init__(self, course: RaceCourse):
        self.course = course

    @staticmethod
    def base_average_speed(total_distance_km: float, target_total_minutes: float) -> float:
        """Average speed (km/h) needed to finish in the target time."""
        return total_distance_km / (target_total_minutes / 60)

    def calculate(
        self,
        target_total_minutes: float,
        start_time: Optional[str] = None,
    ) -> List[Split]:
        """
        Calculate normalized splits for every checkpoint.

        Args:
            target_total_minutes: Target finish time in minutes
            start_time: Race start "HH:MM" (course default if None)

        Returns:
            One Split per checkpoint, or an empty list when the target
            is not positive (nothing to plan).
        """
        if target_total_minutes <= 0:
            logger.debug(f"Skipping split calculation for target {target_total_minutes}min")
            return []

        start = start_time or self.course.default_start_time
        base_speed = self.base_average_speed(self.course.total_distance, target_total_minutes)

        raw = self._raw_segments(base_speed)
        raw_total = sum(seg.raw_time_minutes for seg in raw)
        normalization_factor = target_total_minutes / raw_total

        splits = []
        cumulative_time = 0.0
        for checkpoint, seg in zip(self.course.checkpoints, raw):
            split_time = seg.raw_time_minutes * normalization_factor
            cumulative_time += split_time

            splits.append(Split(
                checkpoint_name=checkpoint.name,
                distance=checkpoint.distance,
                split_distance=seg.split_distance,
                split_time_minutes=split_time,
                cumulative_time_minutes=cumulative_time,
                time_of_day=time_of_day(start, cumulative_time),
                speed_on_split=seg.split_distance / (split_time / 60),
                moving_average_speed=checkpoint.distance / (cumulative_time / 60),
                terrain_factor=checkpoint.terrain_factor,
                description=checkpoint.description,
            ))

        logger.debug(
            f"{self.course.id}: {len(splits)} splits, "
            f"normalization factor {normalization_factor:.4f}"
        )
        return splits

    def _raw_segments(self, base_speed: float) -> List[_RawSegment]:
        """Un-normalized segment times at terrain-adjusted speed."""
        segments = []
        prev_distance = 0.0

        for checkpoint in self.course.checkpoints:
            split_distance = checkpoint.distance - prev_distance
            adjusted_speed = base_speed * checkpoint.terrain_factor
            segments.append(_RawSegment(
                split_distance=split_distance,
                raw_time_minutes=(split_distance / adjusted_speed) * 60,
            ))
            prev_distance = checkpoint.distance

        return segments
