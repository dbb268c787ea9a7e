"""
Race Plan Routes

Endpoints for pacing, nutrition and weather plans.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.v1.routes.deps import get_planning_service
from app.features.courses import ConfigurationNotFound, InvalidCourseError
from app.features.pacing import PlanRequest, PlanningService, RacePlan, RacePlanResponse, render_csv
from app.features.weather import WeatherError

logger = logging.getLogger(__name__)

router = APIRouter()


async def _plan_or_raise(request: PlanRequest, service: PlanningService) -> RacePlan | None:
    """Run plan_race and translate domain errors into HTTP errors."""
    try:
        return await service.plan_race(
            course_id=request.course_id,
            target_hours=request.target_hours,
            target_minutes=request.target_minutes,
            start_time=request.start_time,
            rider_profile=request.rider_profile,
            nutrition_strategy=request.nutrition_strategy,
        )
    except ConfigurationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidCourseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except WeatherError as e:
        logger.error(f"Plan aborted, weather unavailable: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=RacePlanResponse)
async def create_plan(
    request: PlanRequest,
    service: PlanningService = Depends(get_planning_service),
):
    """
    Build a race plan: splits, nutrition timetable, pace judgment, weather.

    A zero target time yields 204 No Content.
    """
    plan = await _plan_or_raise(request, service)
    if plan is None:
        return Response(status_code=204)
    return plan.to_dict()


@router.post("/csv")
async def create_plan_csv(
    request: PlanRequest,
    service: PlanningService = Depends(get_planning_service),
):
    """Race plan as a downloadable CSV (splits followed by their events)."""
    plan = await _plan_or_raise(request, service)
    if plan is None:
        return Response(status_code=204)

    course = service.catalog.require_course(plan.course_id)
    filename = course.csv_filename(request.target_hours, request.target_minutes)
    return Response(
        content=render_csv(plan.splits),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
