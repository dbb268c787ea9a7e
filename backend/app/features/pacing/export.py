"""CSV export of race plans.

One row per split, each followed by the nutrition events of its segment.
Event rows only fill the time, distance and description columns.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, List

from app.features.pacing.models import NutritionEvent, Split
from app.shared.constants import NutritionEventType
from app.shared.formatters import format_duration

CSV_HEADERS = [
    "Point on Route",
    "Distance (km)",
    "Time of Day",
    "Time to Point",
    "Split Time",
    "Split Distance (km)",
    "Speed on Split (km/h)",
    "Moving Average Speed (km/h)",
    "Terrain Description",
]

EVENT_LABELS = {
    NutritionEventType.FUEL: "Fuel",
    NutritionEventType.HYDRATION: "Hydration",
}


def split_row(split: Split) -> list[str]:
    return [
        split.checkpoint_name,
        f"{split.distance:.1f}",
        split.time_of_day,
        format_duration(split.cumulative_time_minutes),
        format_duration(split.split_time_minutes),
        f"{split.split_distance:.1f}",
        f"{split.speed_on_split:.2f}",
        f"{split.moving_average_speed:.2f}",
        split.description,
    ]


def event_row(event: NutritionEvent) -> list[str]:
    label = EVENT_LABELS[event.type]
    if event.is_pre_hill_warning:
        label = f"{label} (pre-hill)"
    return [
        "",
        f"{event.distance:.1f}",
        event.time_of_day,
        format_duration(event.time_minutes),
        "",
        "",
        "",
        "",
        f"{label}: {event.details}",
    ]


def build_rows(splits: Iterable[Split]) -> List[list[str]]:
    """Flatten splits and their events, dropping exact duplicate rows."""
    rows = []
    seen = set()
    for split in splits:
        for row in [split_row(split), *(event_row(e) for e in split.nutrition_events)]:
            key = tuple(row)
            if key in seen:
                continue
            seen.add(key)
            rows.append(row)
    return rows


def render_csv(splits: Iterable[Split]) -> str:
    """Plan as CSV text (header + rows)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADERS)
    writer.writerows(build_rows(splits))
    return buffer.getvalue()


def save_csv(splits: Iterable[Split], path: Path) -> None:
    """Write the plan CSV to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write(render_csv(splits))
