#!/usr/bin/env python3
"""CLI script for terrain-adjusted race splits with nutrition and weather.

Usage:
    # 947 Ride Joburg in 3:45, standard fueling
    python backend/scripts/plan_race.py --course 947-joburg --target 3:45

    # Cape Town Cycle Tour, beginner, conservative fueling, no weather
    python backend/scripts/plan_race.py --course ctct --target 5:30 \
        --profile beginner --nutrition conservative --no-weather

    # Write the splits CSV as well
    python backend/scripts/plan_race.py --course 947-joburg --target 3:45 --csv ./out

    # List courses
    python backend/scripts/plan_race.py --list
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.features.courses import CourseCatalog, ConfigurationNotFound, terrain_label
from app.features.pacing import PlanningService, RacePlan, save_csv
from app.features.weather import OpenMeteoWeatherProvider, WeatherError
from app.shared import format_duration, format_speed, format_target, NutritionStrategyName, RiderProfile


JUDGMENT_ICONS = {
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "success": "✅",
}


def parse_target(target: str) -> tuple[int, int]:
    """Parse target finish time. '3:45' -> (3, 45), '4' -> (4, 0)"""
    if ":" in target:
        hours, minutes = target.split(":", 1)
        return int(hours), int(minutes)
    return int(target), 0


def print_courses(catalog: CourseCatalog) -> None:
    for course in catalog.courses:
        print(f"{course.id:15s} {course.name} ({course.total_distance:g} km, {course.location})")


def print_plan(plan: RacePlan, catalog: CourseCatalog) -> None:
    """Print splits, nutrition timetable and judgment."""
    course = catalog.require_course(plan.course_id)
    judgment = plan.pace_judgment

    print(f"\n=== {course.name} — target {format_target(*divmod(plan.target_total_minutes, 60))} ===")
    if course.info_banner:
        print(course.info_banner)
    print(f"Start {plan.start_time} | Average {format_speed(plan.overall_average_speed)}")
    print(f"\n{JUDGMENT_ICONS.get(judgment.level.value, '')} {judgment.title}: {judgment.message}")

    print(f"\n--- Splits ---")
    for split in plan.splits:
        weather = ""
        if split.weather:
            weather = (
                f"  {split.weather.temperature:.0f}°C "
                f"{split.weather.wind_direction} {split.weather.wind_speed:.0f}km/h "
                f"{split.weather.condition}"
            )
        print(
            f"  {split.checkpoint_name:28s} {split.distance:6.1f}km  "
            f"{format_duration(split.cumulative_time_minutes)} ({split.time_of_day})  "
            f"split {format_duration(split.split_time_minutes)}  "
            f"{split.speed_on_split:5.1f}km/h  avg {split.moving_average_speed:5.1f}  "
            f"[{terrain_label(split.terrain_factor)}]{weather}"
        )

    if plan.nutrition_events:
        print(f"\n--- Nutrition ---")
        for event in plan.nutrition_events:
            marker = " ⛰" if event.is_pre_hill_warning else ""
            print(
                f"  {event.time_of_day}  {format_duration(event.time_minutes)}  "
                f"{event.distance:5.1f}km  {event.type.value:9s} {event.details}{marker}"
            )

    for warning in plan.warnings:
        print(f"\n⚠️ {warning}")


async def _run(course_id, hours, minutes, start, profile, nutrition, weather):
    catalog = CourseCatalog(settings.content_dir)
    provider = OpenMeteoWeatherProvider() if weather else None
    service = PlanningService(catalog, weather_provider=provider)
    plan = await service.plan_race(course_id, hours, minutes, start, profile, nutrition)
    return catalog, plan


@click.command()
@click.option("--course", "course_id", default="947-joburg", help="Course id from the catalog")
@click.option("--target", default=None, help="Target finish time H:MM")
@click.option("--start", default=None, help="Start time HH:MM (course default if omitted)")
@click.option(
    "--profile",
    default=RiderProfile.INTERMEDIATE.value,
    type=click.Choice([p.value for p in RiderProfile]),
    help="Rider profile",
)
@click.option(
    "--nutrition",
    default=NutritionStrategyName.STANDARD.value,
    type=click.Choice([s.value for s in NutritionStrategyName]),
    help="Nutrition strategy",
)
@click.option("--weather/--no-weather", default=settings.weather_enabled, help="Fetch hourly weather")
@click.option("--csv", "csv_dir", default=None, type=click.Path(file_okay=False), help="Write splits CSV here")
@click.option("--list", "list_courses", is_flag=True, help="List courses and exit")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(course_id, target, start, profile, nutrition, weather, csv_dir, list_courses, verbose):
    """Plan pacing, fueling and hydration for a race."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    if list_courses:
        print_courses(CourseCatalog(settings.content_dir))
        return

    if not target:
        raise click.UsageError("--target is required (e.g. --target 3:45)")

    try:
        hours, minutes = parse_target(target)
    except ValueError:
        raise click.BadParameter(f"Invalid target {target!r}, expected H:MM", param_hint="--target")

    try:
        catalog, plan = asyncio.run(_run(course_id, hours, minutes, start, profile, nutrition, weather))
    except ConfigurationNotFound as e:
        raise click.ClickException(str(e))
    except WeatherError as e:
        raise click.ClickException(f"Weather unavailable: {e}")
    except ValueError as e:
        raise click.ClickException(str(e))

    if plan is None:
        print("Target time must be greater than zero, nothing to plan.")
        return

    print_plan(plan, catalog)

    if csv_dir:
        course = catalog.require_course(course_id)
        path = Path(csv_dir) / course.csv_filename(hours, minutes)
        save_csv(plan.splits, path)
        print(f"\nCSV saved: {path}")


if __name__ == "__main__":
    main()
