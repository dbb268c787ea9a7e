"""
Race Planning Service

Orchestrates all pacing components for one planning request:
- Course lookup
- Pace judgment
- Hourly weather fetch (the only async step)
- Terrain-adjusted splits
- Nutrition timetable
- Weather correlation

This is the main entry point for race plans.
"""

import asyncio
import logging
from typing import Optional, Union

from pydantic import ValidationError

from app.config import settings
from app.features.courses.catalog import CourseCatalog
from app.features.courses.models import RaceCourse
from app.features.pacing.calculators import (
    NutritionScheduler,
    PaceValidator,
    SplitCalculator,
    WeatherCorrelator,
)
from app.features.pacing.models import RacePlan
from app.features.weather.client import WeatherError, WeatherProvider
from app.features.weather.schemas import WeatherForecast, WeatherRequest
from app.shared.clock import format_clock, parse_clock
from app.shared.constants import (
    DEFAULT_NUTRITION_STRATEGY,
    DEFAULT_RIDER_PROFILE,
    NutritionStrategyName,
    RiderProfile,
)

logger = logging.getLogger(__name__)

WEATHER_UNAVAILABLE = "Weather forecast unavailable"


class PlanningService:
    """
    Stateless race planner.

    Every call is an independent computation over its inputs, so one
    service can serve concurrent requests.

    Example usage:
        service = PlanningService(catalog, weather_provider=OpenMeteoWeatherProvider())
        plan = await service.plan_race("947-joburg", 3, 45)
    """

    def __init__(
        self,
        catalog: CourseCatalog,
        weather_provider: Optional[WeatherProvider] = None,
        weather_timeout_seconds: Optional[float] = None,
        weather_strict: Optional[bool] = None,
    ):
        """
        Args:
            catalog: Course registry
            weather_provider: Async forecast source (no weather if None)
            weather_timeout_seconds: Upper bound for one forecast fetch
            weather_strict: Propagate forecast failures instead of
                planning without weather
        """
        self.catalog = catalog
        self.weather_provider = weather_provider
        self.weather_timeout_seconds = (
            settings.weather_timeout_seconds if weather_timeout_seconds is None else weather_timeout_seconds
        )
        self.weather_strict = settings.weather_strict if weather_strict is None else weather_strict

    async def plan_race(
        self,
        course_id: str,
        target_hours: int,
        target_minutes: int,
        start_time: Optional[str] = None,
        rider_profile: Union[RiderProfile, str] = DEFAULT_RIDER_PROFILE,
        nutrition_strategy: Union[NutritionStrategyName, str] = DEFAULT_NUTRITION_STRATEGY,
    ) -> Optional[RacePlan]:
        """
        Build a complete race plan.

        Args:
            course_id: Course identifier from the catalog
            target_hours: Target finish, hours part
            target_minutes: Target finish, minutes part
            start_time: Race start "HH:MM" (course default if None)
            rider_profile: beginner / intermediate / pro
            nutrition_strategy: aggressive / standard / conservative / none

        Returns:
            RacePlan, or None when the target time is not positive

        Raises:
            ConfigurationNotFound: Unknown course_id
            ValueError: Malformed start_time, profile or strategy
            WeatherError: Forecast failed and weather_strict is set
        """
        course = self.catalog.require_course(course_id)
        profile = RiderProfile(rider_profile)
        strategy = NutritionStrategyName(nutrition_strategy)

        target_total_minutes = target_hours * 60 + target_minutes
        if target_total_minutes <= 0:
            logger.info(f"{course_id}: target {target_total_minutes}min, nothing to plan")
            return None

        start = format_clock(parse_clock(start_time or course.default_start_time))

        logger.info(
            f"Planning {course_id}: target {target_total_minutes}min, start {start}, "
            f"profile={profile.value}, nutrition={strategy.value}"
        )

        judgment = PaceValidator(course.pace_validation).judge(target_total_minutes, profile)

        forecast = await self._fetch_weather(course, start, target_total_minutes)

        splits = SplitCalculator(course).calculate(target_total_minutes, start)

        scheduler = NutritionScheduler(strategy, course.hill_warning_checkpoints)
        events = scheduler.schedule(splits, target_total_minutes, start)
        splits = NutritionScheduler.attach(splits, events)

        warnings = []
        if forecast is not None:
            splits = WeatherCorrelator(forecast).annotate(splits)
        elif self.weather_provider is not None:
            warnings.append(WEATHER_UNAVAILABLE)

        return RacePlan(
            course_id=course.id,
            target_total_minutes=target_total_minutes,
            start_time=start,
            splits=tuple(splits),
            nutrition_events=tuple(events),
            pace_judgment=judgment,
            overall_average_speed=SplitCalculator.base_average_speed(
                course.total_distance, target_total_minutes
            ),
            weather_available=forecast is not None,
            warnings=tuple(warnings),
        )

    async def _fetch_weather(
        self,
        course: RaceCourse,
        start_time: str,
        target_total_minutes: int,
    ) -> Optional[WeatherForecast]:
        """
        Fetch the hourly forecast for the race window.

        Returns None (and logs) on any provider failure unless strict.
        """
        if self.weather_provider is None:
            return None

        request = WeatherRequest(
            location=course.location or course.name,
            month=course.month or None,
            race_start_time=start_time,
            race_hours=target_total_minutes / 60,
            latitude=course.latitude,
            longitude=course.longitude,
            regional_context=course.regional_context,
        )

        try:
            result = await asyncio.wait_for(
                self.weather_provider(request),
                timeout=self.weather_timeout_seconds,
            )
            if isinstance(result, WeatherForecast):
                return result
            return WeatherForecast.model_validate(result)
        except Exception as e:
            if isinstance(e, asyncio.TimeoutError):
                reason = f"timed out after {self.weather_timeout_seconds}s"
            elif isinstance(e, ValidationError):
                reason = f"malformed forecast ({e.error_count()} errors)"
            else:
                reason = str(e) or type(e).__name__

            if self.weather_strict:
                if isinstance(e, WeatherError):
                    raise
                raise WeatherError(f"Weather forecast failed: {reason}") from e

            logger.warning(f"Weather forecast failed for {course.id}: {reason}")
            return None


class RacePlanner:
    """
    Keeps the newest plan when requests overlap.

    Submitting a request cancels the previous one if it is still in
    flight (usually waiting on the weather fetch). A superseded request
    resolves to None and never replaces `latest`. A request that yields
    no plan (non-positive target) leaves the previous `latest` in place.

    Example usage:
        planner = RacePlanner(service)
        await planner.submit("947-joburg", 3, 45)
        planner.latest
    """

    def __init__(self, service: PlanningService):
        self.service = service
        self.latest: Optional[RacePlan] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    async def submit(self, course_id: str, target_hours: int, target_minutes: int, **kwargs) -> Optional[RacePlan]:
        self._generation += 1
        generation = self._generation

        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.info(f"Planning request #{generation - 1} superseded by #{generation}")

        task = asyncio.ensure_future(
            self.service.plan_race(course_id, target_hours, target_minutes, **kwargs)
        )
        self._task = task

        try:
            plan = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                return None
            raise

        if generation != self._generation:
            return None
        if plan is not None:
            self.latest = plan
        return plan
