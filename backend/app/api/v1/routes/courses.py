"""
Courses API Routes

Endpoints for the race course catalog.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.v1.routes.deps import get_catalog
from app.features.courses import CourseCatalog, RaceCourse, classify_terrain, terrain_label

router = APIRouter()


# === Pydantic schemas ===


class CheckpointSchema(BaseModel):
    name: str
    distance: float
    split_distance: float
    terrain_factor: float
    terrain: str  # fast / moderate / hills
    terrain_label: str
    description: str
    hill_warning: bool = False


class PaceThresholdsSchema(BaseModel):
    min_minutes: float
    elite_minutes: float
    beginner_warning_minutes: float


class CourseSchema(BaseModel):
    id: str
    name: str
    short_name: str
    distance: float
    location: str
    default_start_time: str
    month: str
    info_banner: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    pace_validation: PaceThresholdsSchema
    checkpoints: list[CheckpointSchema] = []


def _course_schema(course: RaceCourse) -> CourseSchema:
    checkpoints = []
    prev_distance = 0.0
    for cp in course.checkpoints:
        checkpoints.append(CheckpointSchema(
            name=cp.name,
            distance=cp.distance,
            split_distance=round(cp.distance - prev_distance, 2),
            terrain_factor=cp.terrain_factor,
            terrain=classify_terrain(cp.terrain_factor).value,
            terrain_label=terrain_label(cp.terrain_factor),
            description=cp.description,
            hill_warning=cp.name in course.hill_warning_checkpoints,
        ))
        prev_distance = cp.distance

    thresholds = course.pace_validation
    return CourseSchema(
        id=course.id,
        name=course.name,
        short_name=course.short_name,
        distance=course.total_distance,
        location=course.location,
        default_start_time=course.default_start_time,
        month=course.month,
        info_banner=course.info_banner,
        latitude=course.latitude,
        longitude=course.longitude,
        pace_validation=PaceThresholdsSchema(
            min_minutes=thresholds.min_minutes,
            elite_minutes=thresholds.elite_minutes,
            beginner_warning_minutes=thresholds.beginner_warning_minutes,
        ),
        checkpoints=checkpoints,
    )


# === Endpoints ===


@router.get("", response_model=list[CourseSchema])
async def list_courses(catalog: CourseCatalog = Depends(get_catalog)):
    """Get course catalog (all courses with checkpoints)."""
    return [_course_schema(c) for c in catalog.courses]


@router.get("/{course_id}", response_model=CourseSchema)
async def get_course(course_id: str, catalog: CourseCatalog = Depends(get_catalog)):
    """Get single course details."""
    course = catalog.get_course(course_id)
    if not course:
        raise HTTPException(status_code=404, detail=f"Course not found: {course_id}")
    return _course_schema(course)
