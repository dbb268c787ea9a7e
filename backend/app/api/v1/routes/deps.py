"""
Shared route dependencies.

The course catalog is loaded once and cached; overridable in tests via
app.dependency_overrides.
"""

from app.config import settings
from app.features.courses import CourseCatalog
from app.features.pacing import PlanningService
from app.features.weather import OpenMeteoWeatherProvider

# Singleton catalog (loaded once, cached)
_catalog = CourseCatalog(settings.content_dir)


def get_catalog() -> CourseCatalog:
    return _catalog


def get_planning_service() -> PlanningService:
    """Planning service with the configured weather provider."""
    provider = OpenMeteoWeatherProvider() if settings.weather_enabled else None
    return PlanningService(_catalog, weather_provider=provider)
