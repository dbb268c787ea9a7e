"""
Weather Correlator

Attaches hourly conditions to splits by arrival hour. A rider reaching a
checkpoint at 08:59 gets the 08:00 entry: minutes are dropped, never
rounded, and nothing is interpolated between hours.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from app.features.pacing.models import Split
from app.shared.clock import hour_key
from app.features.weather.schemas import HourlyForecast, WeatherForecast

logger = logging.getLogger(__name__)


class WeatherCorrelator:
    """Hour-bucket lookup over one forecast."""

    def __init__(self, forecast: WeatherForecast):
        self._by_hour: Dict[str, HourlyForecast] = {}
        for entry in forecast.hourly:
            try:
                key = hour_key(entry.time)
            except ValueError:
                logger.debug(f"Ignoring forecast entry with bad time {entry.time!r}")
                continue
            self._by_hour.setdefault(key, entry)

    def lookup(self, clock: str) -> Optional[HourlyForecast]:
        """Forecast for the hour containing clock ("08:59" -> "08:00")."""
        return self._by_hour.get(hour_key(clock))

    def annotate(self, splits: List[Split]) -> List[Split]:
        """New splits with weather set where an hour matches."""
        return [replace(s, weather=self.lookup(s.time_of_day)) for s in splits]
