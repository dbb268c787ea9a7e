"""
Weather forecast schemas.

Pydantic schemas shared by forecast providers, the correlator and the API.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class WeatherRequest(BaseModel):
    """Input for a forecast provider."""
    location: str = Field(..., description="City and country of the race")
    month: Optional[str] = Field(None, description="Month the race takes place")
    race_start_time: str = Field(..., description="Race start in HH:MM")
    race_hours: float = Field(..., gt=0, description="Approximate race duration in hours")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    regional_context: Optional[str] = Field(
        None, description="Meteorological context for the region and time of year"
    )


class HourlyForecast(BaseModel):
    """Forecast for one clock hour."""
    time: str = Field(..., description="Hour in HH:00 format")
    temperature: float = Field(..., description="Temperature in Celsius")
    wind_speed: float = Field(..., description="Wind speed in km/h")
    wind_direction: str = Field(..., description="Compass direction (N, SW, ENE)")
    condition: str = Field(..., description="Short condition (Sunny, Light Rain)")
    icon: str = Field(..., description="Material Symbols icon name (sunny, rainy)")

    model_config = {"frozen": True}


class WeatherForecast(BaseModel):
    """Hourly forecast covering the race window."""
    hourly: List[HourlyForecast] = Field(default_factory=list)
