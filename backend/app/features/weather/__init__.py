"""
Weather feature module.

Usage:
    from app.features.weather import OpenMeteoWeatherProvider, WeatherRequest

Components:
- OpenMeteoWeatherProvider: hourly conditions for a race window
- conditions: WMO code and wind bearing lookups
"""

from .schemas import WeatherRequest, HourlyForecast, WeatherForecast
from .client import (
    OpenMeteoWeatherProvider,
    WeatherProvider,
    WeatherError,
    WeatherAPIError,
    WeatherTimeoutError,
)

__all__ = [
    # Schemas
    "WeatherRequest",
    "HourlyForecast",
    "WeatherForecast",
    # Provider
    "OpenMeteoWeatherProvider",
    "WeatherProvider",
    "WeatherError",
    "WeatherAPIError",
    "WeatherTimeoutError",
]
