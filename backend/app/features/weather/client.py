"""
Hourly weather provider backed by Open-Meteo.

Race dates are usually weeks away, beyond any real forecast horizon, so the
provider returns what the weather actually did at the course on a reference
day in the race month one year earlier. That is a typical-conditions proxy,
not a forecast.

Any async callable taking a WeatherRequest and returning a WeatherForecast
can be used instead (see WeatherProvider).

API docs: https://open-meteo.com/en/docs/historical-weather-api
"""

import logging
import math
from datetime import date, datetime, timedelta
from typing import Awaitable, Callable, Optional

import httpx

from app.config import settings
from app.shared.clock import parse_clock
from .conditions import describe_weather_code, degrees_to_compass
from .schemas import HourlyForecast, WeatherForecast, WeatherRequest

logger = logging.getLogger(__name__)


WeatherProvider = Callable[[WeatherRequest], Awaitable[WeatherForecast]]


# =============================================================================
# Exceptions
# =============================================================================

class WeatherError(Exception):
    """Base weather provider error."""
    pass


class WeatherAPIError(WeatherError):
    """Weather API returned an error or an unusable payload."""
    pass


class WeatherTimeoutError(WeatherError):
    """Weather API did not answer in time."""
    pass


# =============================================================================
# Open-Meteo Provider
# =============================================================================

MONTHS = {
    "january": 1, "february": 2, "march": 3, "april": 4,
    "may": 5, "june": 6, "july": 7, "august": 8,
    "september": 9, "october": 10, "november": 11, "december": 12,
}

# Day of the month used as the reference race day
REFERENCE_DAY = 15

HOURLY_FIELDS = "temperature_2m,wind_speed_10m,wind_direction_10m,weather_code"


def parse_month(month: Optional[str]) -> Optional[int]:
    """'November' / 'nov' / '11' -> 11, None if unrecognised."""
    if not month:
        return None
    value = month.strip().lower()
    if value.isdigit():
        number = int(value)
        return number if 1 <= number <= 12 else None
    for name, number in MONTHS.items():
        if name.startswith(value[:3]):
            return number
    return None


class OpenMeteoWeatherProvider:
    """
    Weather provider using the Open-Meteo archive.

    Returns hourly entries from one hour before the start until one hour
    after the expected finish, keyed "HH:00".

    Example usage:
        provider = OpenMeteoWeatherProvider()
        forecast = await provider(WeatherRequest(
            location="Johannesburg, South Africa",
            month="November",
            race_start_time="06:00",
            race_hours=3.75,
            latitude=-26.2041,
            longitude=28.0473,
        ))
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        reference_year: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.weather_api_url
        self.timeout_seconds = timeout_seconds or settings.weather_timeout_seconds
        self.reference_year = reference_year
        self._transport = transport

    def reference_date(self, month: Optional[str]) -> date:
        """Race-month reference day in the previous year."""
        today = datetime.now().date()
        year = self.reference_year or today.year - 1
        return date(year, parse_month(month) or today.month, REFERENCE_DAY)

    async def __call__(self, request: WeatherRequest) -> WeatherForecast:
        """
        Fetch hourly conditions for the race window.

        Raises:
            WeatherError: If the course has no coordinates
            WeatherTimeoutError: If the API times out
            WeatherAPIError: If the API fails or returns a malformed payload
        """
        if request.latitude is None or request.longitude is None:
            raise WeatherError(f"No coordinates for {request.location}")

        day = self.reference_date(request.month)
        params = {
            "latitude": request.latitude,
            "longitude": request.longitude,
            "start_date": day.isoformat(),
            # Next day too, for races finishing after midnight
            "end_date": (day + timedelta(days=1)).isoformat(),
            "hourly": HOURLY_FIELDS,
            "wind_speed_unit": "kmh",
            "timezone": "auto",
        }

        logger.debug(f"Fetching weather for {request.location} on {day}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.TimeoutException as e:
            raise WeatherTimeoutError(
                f"Weather API timed out after {self.timeout_seconds}s"
            ) from e
        except httpx.RequestError as e:
            raise WeatherAPIError(f"Weather API request failed: {e}") from e

        if response.status_code != 200:
            raise WeatherAPIError(
                f"API error: {response.status_code} - {response.text}"
            )

        try:
            hourly = response.json()["hourly"]
        except (ValueError, KeyError, TypeError) as e:
            raise WeatherAPIError(f"Malformed weather payload: {e}") from e

        return self._build_forecast(hourly, request)

    def _build_forecast(self, hourly: dict, request: WeatherRequest) -> WeatherForecast:
        """Cut the race window out of the hourly arrays."""
        try:
            temperatures = hourly["temperature_2m"]
            wind_speeds = hourly["wind_speed_10m"]
            wind_directions = hourly["wind_direction_10m"]
            codes = hourly["weather_code"]
        except KeyError as e:
            raise WeatherAPIError(f"Missing hourly field: {e}") from e

        start_hour = parse_clock(request.race_start_time) // 60
        first = max(start_hour - 1, 0)
        last = min(start_hour + math.ceil(request.race_hours) + 1, first + 23)

        entries = []
        for index in range(first, last + 1):
            if index >= len(temperatures):
                break
            if temperatures[index] is None or wind_speeds[index] is None:
                continue

            condition, icon = describe_weather_code(codes[index])
            entries.append(HourlyForecast(
                time=f"{index % 24:02d}:00",
                temperature=round(temperatures[index], 1),
                wind_speed=round(wind_speeds[index], 1),
                wind_direction=degrees_to_compass(wind_directions[index]),
                condition=condition,
                icon=icon,
            ))

        return WeatherForecast(hourly=entries)
