"""Courses feature module — race course registry and terrain classification."""

from .errors import CourseError, ConfigurationNotFound, InvalidCourseError
from .models import Checkpoint, PaceThresholds, RaceCourse
from .catalog import CourseCatalog, parse_course
from .terrain import classify_terrain, terrain_label, TERRAIN_DIFFICULTY_BANDS

__all__ = [
    "CourseError",
    "ConfigurationNotFound",
    "InvalidCourseError",
    "Checkpoint",
    "PaceThresholds",
    "RaceCourse",
    "CourseCatalog",
    "parse_course",
    "classify_terrain",
    "terrain_label",
    "TERRAIN_DIFFICULTY_BANDS",
]
