"""
Tests for PlanningService and RacePlanner.

Weather providers are plain async callables, so fakes stand in for
Open-Meteo. Async code is driven with asyncio.run from sync tests.
"""

import asyncio

import pytest

from app.config import settings
from app.features.courses import ConfigurationNotFound
from app.features.pacing import PlanningService, RacePlanner
from app.features.pacing.service import WEATHER_UNAVAILABLE
from app.features.weather import WeatherAPIError, WeatherError
from app.features.weather.schemas import HourlyForecast, WeatherForecast
from app.shared.constants import JudgmentLevel, NutritionEventType


def _forecast(start_hour=5, hours=6):
    return WeatherForecast(hourly=[
        HourlyForecast(
            time=f"{h % 24:02d}:00",
            temperature=14.0 + h,
            wind_speed=10.0,
            wind_direction="NW",
            condition="Clear",
            icon="sunny",
        )
        for h in range(start_hour, start_hour + hours)
    ])


def _service(catalog, provider=None, strict=False, timeout=1.0):
    return PlanningService(
        catalog,
        weather_provider=provider,
        weather_timeout_seconds=timeout,
        weather_strict=strict,
    )


async def _failing_provider(request):
    raise WeatherAPIError("Open-Meteo returned 503")


# =============================================================================
# Test plan_race
# =============================================================================

class TestPlanRace:
    """End-to-end planning without network."""

    def test_standard_plan(self, catalog):
        plan = asyncio.run(_service(catalog).plan_race("947-joburg", 3, 45))

        assert plan.course_id == "947-joburg"
        assert plan.target_total_minutes == 225
        assert plan.start_time == "06:00"
        assert len(plan.splits) == 5
        assert plan.splits[-1].cumulative_time_minutes == pytest.approx(225)
        assert plan.overall_average_speed == pytest.approx(98 / 3.75)
        assert plan.pace_judgment.level == JudgmentLevel.SUCCESS
        assert plan.weather_available is False
        assert plan.warnings == ()

    def test_nutrition_attached_to_splits(self, catalog):
        plan = asyncio.run(_service(catalog).plan_race("947-joburg", 3, 45))
        attached = [e for s in plan.splits for e in s.nutrition_events]
        assert attached == list(plan.nutrition_events)
        first_fuel = next(e for e in plan.nutrition_events if e.type == NutritionEventType.FUEL)
        assert first_fuel.time_minutes == 15
        assert "30g" in first_fuel.details

    def test_string_enums_accepted(self, catalog):
        plan = asyncio.run(_service(catalog).plan_race(
            "947-joburg", 3, 45, rider_profile="pro", nutrition_strategy="none",
        ))
        assert plan.nutrition_events == ()

    def test_custom_start_time(self, catalog):
        plan = asyncio.run(_service(catalog).plan_race("ctct", 5, 0, start_time="07:15"))
        assert plan.start_time == "07:15"
        assert plan.splits[-1].time_of_day == "12:15"

    def test_start_time_zero_padded(self, catalog):
        plan = asyncio.run(_service(catalog).plan_race("ctct", 5, 0, start_time="7:05"))
        assert plan.start_time == "07:05"
        assert plan.splits[-1].time_of_day == "12:05"

    def test_explicit_zero_timeout_kept(self, catalog):
        assert PlanningService(catalog, weather_timeout_seconds=0).weather_timeout_seconds == 0

    def test_timeout_defaults_to_settings(self, catalog):
        service = PlanningService(catalog)
        assert service.weather_timeout_seconds == settings.weather_timeout_seconds

    def test_course_default_start_time(self, catalog):
        plan = asyncio.run(_service(catalog).plan_race("ctct", 5, 0))
        assert plan.start_time == "06:30"

    def test_unknown_course(self, catalog):
        with pytest.raises(ConfigurationNotFound):
            asyncio.run(_service(catalog).plan_race("nope", 3, 45))

    def test_unknown_course_checked_before_target(self, catalog):
        with pytest.raises(ConfigurationNotFound):
            asyncio.run(_service(catalog).plan_race("nope", 0, 0))

    def test_zero_target_is_noop(self, catalog):
        assert asyncio.run(_service(catalog).plan_race("947-joburg", 0, 0)) is None

    def test_invalid_start_time(self, catalog):
        with pytest.raises(ValueError):
            asyncio.run(_service(catalog).plan_race("947-joburg", 3, 45, start_time="25:00"))

    def test_invalid_profile(self, catalog):
        with pytest.raises(ValueError):
            asyncio.run(_service(catalog).plan_race("947-joburg", 3, 45, rider_profile="elite"))


# =============================================================================
# Test weather integration
# =============================================================================

class TestPlanWeather:
    """Forecast fetch, correlation and failure policy."""

    def test_weather_attached(self, catalog):
        requests = []

        async def provider(request):
            requests.append(request)
            return _forecast()

        plan = asyncio.run(_service(catalog, provider).plan_race("947-joburg", 3, 45))

        assert plan.weather_available is True
        assert [s.weather.time for s in plan.splits] == ["06:00", "07:00", "07:00", "09:00", "09:00"]
        request = requests[0]
        assert request.race_start_time == "06:00"
        assert request.race_hours == pytest.approx(3.75)
        assert request.latitude == pytest.approx(-26.2041)
        assert request.month == "November"

    def test_dict_forecast_validated(self, catalog):
        async def provider(request):
            return _forecast().model_dump()

        plan = asyncio.run(_service(catalog, provider).plan_race("947-joburg", 3, 45))
        assert plan.splits[0].weather.temperature == 20.0

    def test_failure_degrades(self, catalog):
        plan = asyncio.run(_service(catalog, _failing_provider).plan_race("947-joburg", 3, 45))

        assert len(plan.splits) == 5
        assert all(s.weather is None for s in plan.splits)
        assert len(plan.nutrition_events) == 18
        assert plan.weather_available is False
        assert plan.warnings == (WEATHER_UNAVAILABLE,)

    def test_failure_strict(self, catalog):
        service = _service(catalog, _failing_provider, strict=True)
        with pytest.raises(WeatherAPIError):
            asyncio.run(service.plan_race("947-joburg", 3, 45))

    def test_non_weather_error_wrapped_when_strict(self, catalog):
        async def provider(request):
            raise RuntimeError("boom")

        service = _service(catalog, provider, strict=True)
        with pytest.raises(WeatherError, match="boom"):
            asyncio.run(service.plan_race("947-joburg", 3, 45))

    def test_timeout_degrades(self, catalog):
        async def provider(request):
            await asyncio.sleep(5)
            return _forecast()

        service = _service(catalog, provider, timeout=0.01)
        plan = asyncio.run(service.plan_race("947-joburg", 3, 45))
        assert plan.weather_available is False
        assert plan.warnings == (WEATHER_UNAVAILABLE,)

    def test_malformed_forecast_degrades(self, catalog):
        async def provider(request):
            return {"hourly": [{"time": "06:00"}]}

        plan = asyncio.run(_service(catalog, provider).plan_race("947-joburg", 3, 45))
        assert plan.weather_available is False

    def test_zero_target_skips_fetch(self, catalog):
        calls = []

        async def provider(request):
            calls.append(request)
            return _forecast()

        assert asyncio.run(_service(catalog, provider).plan_race("947-joburg", 0, 0)) is None
        assert calls == []


# =============================================================================
# Test RacePlanner
# =============================================================================

class TestRacePlanner:
    """Newest request wins."""

    def test_latest_set(self, catalog):
        planner = RacePlanner(_service(catalog))
        plan = asyncio.run(planner.submit("947-joburg", 3, 45))
        assert planner.latest is plan

    def test_superseded_request_discarded(self, catalog):
        async def scenario():
            started = asyncio.Event()
            release = asyncio.Event()

            async def provider(request):
                if request.race_hours == pytest.approx(4.0):
                    started.set()
                    await release.wait()
                return _forecast()

            planner = RacePlanner(_service(catalog, provider, timeout=5))
            first = asyncio.ensure_future(planner.submit("947-joburg", 4, 0))
            await started.wait()

            second = await planner.submit("947-joburg", 3, 45)
            first_result = await first
            return planner, first_result, second

        planner, first_result, second = asyncio.run(scenario())

        assert first_result is None
        assert second.target_total_minutes == 225
        assert planner.latest is second

    def test_zero_target_keeps_previous(self, catalog):
        async def scenario():
            planner = RacePlanner(_service(catalog))
            previous = await planner.submit("947-joburg", 3, 45)
            result = await planner.submit("947-joburg", 0, 0)
            return planner, previous, result

        planner, previous, result = asyncio.run(scenario())
        assert result is None
        assert planner.latest is previous

    def test_error_propagates(self, catalog):
        planner = RacePlanner(_service(catalog))
        with pytest.raises(ConfigurationNotFound):
            asyncio.run(planner.submit("nope", 3, 45))
        assert planner.latest is None
