"""
Tests for WeatherCorrelator (arrival hour -> hourly forecast).
"""

from app.features.pacing.calculators import SplitCalculator, WeatherCorrelator
from app.features.weather.schemas import HourlyForecast, WeatherForecast


def _hour(time, temperature):
    return HourlyForecast(
        time=time,
        temperature=temperature,
        wind_speed=12.0,
        wind_direction="NW",
        condition="Clear",
        icon="sunny",
    )


def _forecast(*hours):
    return WeatherForecast(hourly=[_hour(f"{h:02d}:00", float(h)) for h in hours])


class TestLookup:
    """Tests for WeatherCorrelator.lookup."""

    def test_truncates_to_hour(self):
        correlator = WeatherCorrelator(_forecast(8, 9))
        assert correlator.lookup("08:59").temperature == 8.0
        assert correlator.lookup("09:00").temperature == 9.0

    def test_no_interpolation(self):
        correlator = WeatherCorrelator(_forecast(6, 8))
        assert correlator.lookup("07:30") is None

    def test_unpadded_forecast_time(self):
        correlator = WeatherCorrelator(WeatherForecast(hourly=[_hour("7:00", 15.0)]))
        assert correlator.lookup("07:10").temperature == 15.0

    def test_first_entry_wins(self):
        correlator = WeatherCorrelator(
            WeatherForecast(hourly=[_hour("06:00", 10.0), _hour("06:00", 20.0)])
        )
        assert correlator.lookup("06:45").temperature == 10.0

    def test_bad_time_ignored(self):
        correlator = WeatherCorrelator(
            WeatherForecast(hourly=[_hour("noon", 30.0), _hour("12:00", 25.0)])
        )
        assert correlator.lookup("12:30").temperature == 25.0


class TestAnnotate:
    """Tests for WeatherCorrelator.annotate."""

    def test_annotates_by_arrival_hour(self, joburg):
        splits = SplitCalculator(joburg).calculate(225)
        annotated = WeatherCorrelator(_forecast(5, 6, 7, 8, 9, 10)).annotate(splits)
        # arrivals 06:33, 07:15, 07:28, 09:13, 09:45
        assert [s.weather.temperature for s in annotated] == [6.0, 7.0, 7.0, 9.0, 9.0]

    def test_missing_hour_leaves_none(self, joburg):
        splits = SplitCalculator(joburg).calculate(225)
        annotated = WeatherCorrelator(_forecast(6, 7)).annotate(splits)
        assert annotated[0].weather is not None
        assert annotated[-1].weather is None

    def test_returns_new_splits(self, joburg):
        splits = SplitCalculator(joburg).calculate(225)
        WeatherCorrelator(_forecast(6, 7, 8, 9)).annotate(splits)
        assert all(s.weather is None for s in splits)
