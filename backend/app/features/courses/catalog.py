"""Course catalog loader — reads courses.yaml and provides access to race courses."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .errors import ConfigurationNotFound, InvalidCourseError
from .models import Checkpoint, PaceThresholds, RaceCourse

logger = logging.getLogger(__name__)


class CourseCatalog:
    """Loads and provides access to the race course registry from YAML."""

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir
        self._courses: list[RaceCourse] | None = None

    @property
    def yaml_path(self) -> Path:
        return self.content_dir / "races" / "courses.yaml"

    def load(self) -> list[RaceCourse]:
        """Load catalog from courses.yaml."""
        if not self.yaml_path.exists():
            logger.warning(f"Course catalog not found: {self.yaml_path}")
            self._courses = []
            return []

        with open(self.yaml_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        courses = [parse_course(c) for c in data.get("courses", [])]
        logger.info(f"Loaded {len(courses)} race courses from {self.yaml_path}")

        self._courses = courses
        return courses

    @property
    def courses(self) -> list[RaceCourse]:
        if self._courses is None:
            self.load()
        return self._courses or []

    def get_course(self, course_id: str) -> RaceCourse | None:
        return next((c for c in self.courses if c.id == course_id), None)

    def require_course(self, course_id: str) -> RaceCourse:
        """Course lookup that fails loudly.

        Raises:
            ConfigurationNotFound: If no course has this id
        """
        course = self.get_course(course_id)
        if course is None:
            raise ConfigurationNotFound(course_id)
        return course


def parse_course(raw: dict) -> RaceCourse:
    """Build a validated RaceCourse from one YAML mapping."""
    try:
        checkpoints = [
            Checkpoint(
                name=cp["name"],
                distance=float(cp["distance"]),
                terrain_factor=float(cp["terrain_factor"]),
                description=cp.get("description", ""),
            )
            for cp in raw.get("checkpoints", [])
        ]
        thresholds = raw["pace_validation"]
        pace_validation = PaceThresholds(
            min_minutes=float(thresholds["min_minutes"]),
            elite_minutes=float(thresholds["elite_minutes"]),
            beginner_warning_minutes=float(thresholds["beginner_warning_minutes"]),
        )
        course_id = raw["id"]
        total_distance = float(raw["distance"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidCourseError(f"Malformed course entry {raw.get('id', '?')}: {e}") from e

    return RaceCourse(
        id=course_id,
        name=raw.get("name", course_id),
        short_name=raw.get("short_name", ""),
        total_distance=total_distance,
        location=raw.get("location", ""),
        latitude=raw.get("latitude"),
        longitude=raw.get("longitude"),
        default_start_time=raw.get("default_start_time", "06:00"),
        month=raw.get("month", ""),
        checkpoints=tuple(checkpoints),
        pace_validation=pace_validation,
        hill_warning_checkpoints=frozenset(raw.get("hill_warning_checkpoints", [])),
        csv_filename_prefix=raw.get("csv_filename_prefix", f"{course_id}_splits"),
        info_banner=raw.get("info_banner", ""),
        regional_context=raw.get("regional_context"),
    )
