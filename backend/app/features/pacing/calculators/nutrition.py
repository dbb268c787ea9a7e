"""
Nutrition Scheduler

Lays a fuel and hydration timetable over computed splits.

Fuel:       first at 15 min, then every strategy interval, stops 10 min
            before the finish.
Hydration:  first at 10 min, then every 20 min regardless of strategy,
            stops 5 min before the finish.

Every event is pinned to the split whose segment it falls in and gets a
linearly interpolated distance. Events in the last 15 minutes before a
major climb checkpoint are flagged as pre-hill warnings.

References:
- Jeukendrup (2014), carbohydrate intake during endurance exercise
"""

import bisect
import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional

from app.features.pacing.models import NutritionEvent, Split
from app.shared.clock import time_of_day
from app.shared.constants import NutritionEventType, NutritionStrategyName

logger = logging.getLogger(__name__)


# Fuel timing
FIRST_FUEL_MINUTES = 15
FUEL_CUTOFF_MINUTES = 10        # no fuel in the last 10 minutes

# Hydration timing
FIRST_HYDRATION_MINUTES = 10
HYDRATION_INTERVAL_MINUTES = 20
HYDRATION_CUTOFF_MINUTES = 5    # no bottle reminders in the last 5 minutes

PRE_HILL_WINDOW_MINUTES = 15

HYDRATION_DETAILS = "Drink 150-250ml with electrolytes"


@dataclass(frozen=True)
class NutritionStrategy:
    """Fueling preset."""
    name: NutritionStrategyName
    fueling_interval_minutes: int
    carbs_per_hour: float           # used for dose arithmetic
    carbs_per_hour_label: str       # shown to the rider ("40-50g")

    @property
    def carbs_per_dose(self) -> int:
        """Grams per fuel event, e.g. 60g/hr every 30min -> 30g."""
        doses_per_hour = 60 / self.fueling_interval_minutes
        return round(self.carbs_per_hour / doses_per_hour)

    def fuel_details(self) -> str:
        return (
            f"Take {self.carbs_per_dose}g carbs "
            f"({self.fueling_interval_minutes}min interval, "
            f"{self.carbs_per_hour_label} carbs/hr)"
        )


NUTRITION_STRATEGIES: Dict[NutritionStrategyName, NutritionStrategy] = {
    NutritionStrategyName.AGGRESSIVE: NutritionStrategy(
        NutritionStrategyName.AGGRESSIVE, 20, 90, "90g"
    ),
    NutritionStrategyName.STANDARD: NutritionStrategy(
        NutritionStrategyName.STANDARD, 30, 60, "60g"
    ),
    NutritionStrategyName.CONSERVATIVE: NutritionStrategy(
        NutritionStrategyName.CONSERVATIVE, 45, 45, "40-50g"
    ),
}


def fuel_times(target_total_minutes: float, interval_minutes: int) -> List[float]:
    """15, 15+interval, ... strictly before target - 10."""
    times = []
    t = FIRST_FUEL_MINUTES
    while t < target_total_minutes - FUEL_CUTOFF_MINUTES:
        times.append(float(t))
        t += interval_minutes
    return times


def hydration_times(target_total_minutes: float) -> List[float]:
    """10, 30, 50, ... strictly before target - 5."""
    times = []
    t = FIRST_HYDRATION_MINUTES
    while t < target_total_minutes - HYDRATION_CUTOFF_MINUTES:
        times.append(float(t))
        t += HYDRATION_INTERVAL_MINUTES
    return times


class NutritionScheduler:
    """
    Builds the nutrition timetable for one plan.

    Example usage:
        scheduler = NutritionScheduler(
            NutritionStrategyName.STANDARD,
            hill_warning_checkpoints=course.hill_warning_checkpoints,
        )
        events = scheduler.schedule(splits, 225, start_time="06:00")
        splits = NutritionScheduler.attach(splits, events)
    """

    def __init__(
        self,
        strategy: NutritionStrategyName,
        hill_warning_checkpoints: Iterable[str] = (),
    ):
        self.strategy_name = NutritionStrategyName(strategy)
        self.strategy: Optional[NutritionStrategy] = NUTRITION_STRATEGIES.get(self.strategy_name)
        self.hill_warning_checkpoints = frozenset(hill_warning_checkpoints)

    def schedule(
        self,
        splits: List[Split],
        target_total_minutes: float,
        start_time: str,
    ) -> List[NutritionEvent]:
        """
        Generate fuel and hydration events sorted by race time.

        A hydration tick landing on the same minute as a fuel event is
        folded into that fuel event, so event times are strictly increasing.

        Returns:
            Events sorted ascending by time_minutes; empty for the
            "none" strategy or when there are no splits.
        """
        if self.strategy is None or not splits:
            return []

        # time -> (type, details)
        planned: Dict[float, tuple] = {}
        for t in hydration_times(target_total_minutes):
            planned[t] = (NutritionEventType.HYDRATION, HYDRATION_DETAILS)

        fuel_details = self.strategy.fuel_details()
        for t in fuel_times(target_total_minutes, self.strategy.fueling_interval_minutes):
            if t in planned:
                # Merged tick: stays a FUEL event, the drink rides along in details
                planned[t] = (NutritionEventType.FUEL, f"{fuel_details} + {HYDRATION_DETAILS.lower()}")
            else:
                planned[t] = (NutritionEventType.FUEL, fuel_details)

        cumulative_times = [s.cumulative_time_minutes for s in splits]
        events = []
        for t in sorted(planned):
            event_type, details = planned[t]
            event = self._build_event(splits, cumulative_times, t, event_type, details, start_time)
            if event is not None:
                events.append(event)

        logger.debug(
            f"Scheduled {len(events)} nutrition events "
            f"({self.strategy_name.value}, {target_total_minutes}min)"
        )
        return events

    def _build_event(
        self,
        splits: List[Split],
        cumulative_times: List[float],
        t: float,
        event_type: NutritionEventType,
        details: str,
        start_time: str,
    ) -> Optional[NutritionEvent]:
        """Pin one event to its enclosing split, None if there is none."""
        index = bisect.bisect_left(cumulative_times, t)
        if index >= len(splits):
            return None

        split = splits[index]
        prev_time = splits[index - 1].cumulative_time_minutes if index > 0 else 0.0
        prev_distance = splits[index - 1].distance if index > 0 else 0.0

        fraction = (t - prev_time) / split.split_time_minutes
        distance = prev_distance + fraction * split.split_distance

        time_to_checkpoint = split.cumulative_time_minutes - t
        is_pre_hill = (
            split.checkpoint_name in self.hill_warning_checkpoints
            and time_to_checkpoint < PRE_HILL_WINDOW_MINUTES
        )
        if is_pre_hill:
            details = f"{details}. Climb ahead at {split.checkpoint_name}"

        return NutritionEvent(
            time_minutes=t,
            time_of_day=time_of_day(start_time, t),
            type=event_type,
            details=details,
            distance=distance,
            associated_checkpoint_name=split.checkpoint_name,
            is_pre_hill_warning=is_pre_hill,
        )

    @staticmethod
    def attach(splits: List[Split], events: List[NutritionEvent]) -> List[Split]:
        """
        Return new splits carrying the events of their own segment.

        An event belongs to a split when its time falls in
        (previous cumulative time, this cumulative time].
        """
        result = []
        prev_time = 0.0
        for split in splits:
            own = tuple(
                e for e in events
                if prev_time < e.time_minutes <= split.cumulative_time_minutes
            )
            result.append(replace(split, nutrition_events=own))
            prev_time = split.cumulative_time_minutes
        return result
