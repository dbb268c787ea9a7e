"""
Shared fixtures: real course catalog plus a factory for ad-hoc courses.
"""

import pytest

from app.config import CONTENT_DIR
from app.features.courses import Checkpoint, CourseCatalog, PaceThresholds, RaceCourse


@pytest.fixture
def catalog():
    """Catalog backed by content/races/courses.yaml."""
    return CourseCatalog(CONTENT_DIR)


@pytest.fixture
def joburg(catalog):
    """947 Ride Joburg (98 km, 5 checkpoints)."""
    return catalog.require_course("947-joburg")


@pytest.fixture
def ctct(catalog):
    """Cape Town Cycle Tour (109 km, 9 checkpoints)."""
    return catalog.require_course("ctct")


@pytest.fixture
def course_factory():
    """Build a RaceCourse from (name, distance, terrain_factor) triples."""

    def make(points, hill_warnings=(), total_distance=None, thresholds=None):
        checkpoints = tuple(
            Checkpoint(name=name, distance=distance, terrain_factor=factor)
            for name, distance, factor in points
        )
        return RaceCourse(
            id="test-course",
            name="Test Course",
            total_distance=total_distance if total_distance is not None else points[-1][1],
            checkpoints=checkpoints,
            pace_validation=thresholds or PaceThresholds(100, 120, 150),
            hill_warning_checkpoints=frozenset(hill_warnings),
        )

    return make
