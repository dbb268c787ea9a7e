"""
WMO weather code and wind direction lookups.

Open-Meteo reports conditions as WMO 4677 codes and wind as degrees.
Both are translated through ordered tables evaluated top-down.
"""

from typing import Optional, Tuple

# (highest code in band, condition, Material Symbols icon)
WMO_CONDITION_BANDS = [
    (0, "Clear", "sunny"),
    (1, "Mainly Clear", "sunny"),
    (2, "Partly Cloudy", "partly_cloudy_day"),
    (3, "Overcast", "cloud"),
    (48, "Fog", "foggy"),
    (57, "Drizzle", "rainy"),
    (67, "Rain", "rainy"),
    (77, "Snow", "weather_snowy"),
    (82, "Rain Showers", "rainy"),
    (86, "Snow Showers", "weather_snowy"),
    (99, "Thunderstorm", "thunderstorm"),
]

UNKNOWN_CONDITION = ("Unknown", "help")

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]


def describe_weather_code(code: Optional[int]) -> Tuple[str, str]:
    """
    Map a WMO code to (condition, icon).

    Examples:
        0  -> ("Clear", "sunny")
        63 -> ("Rain", "rainy")
        95 -> ("Thunderstorm", "thunderstorm")
    """
    if code is None or code < 0:
        return UNKNOWN_CONDITION
    for upper, condition, icon in WMO_CONDITION_BANDS:
        if code <= upper:
            return condition, icon
    return UNKNOWN_CONDITION


def degrees_to_compass(degrees: Optional[float]) -> str:
    """Wind bearing to a 16-point compass label (0 -> N, 225 -> SW)."""
    if degrees is None:
        return "-"
    index = int((degrees % 360) / 22.5 + 0.5) % 16
    return COMPASS_POINTS[index]
