"""Current-conditions document parsing."""

from typing import Any

from weatherdash.ingest.openweather_client import ResponseFormatError
from weatherdash.models.weather import WeatherSnapshot


def parse_current_conditions(raw: dict) -> WeatherSnapshot:
    """Build a WeatherSnapshot from an OpenWeatherMap /weather document."""
    try:
        weather0 = raw["weather"][0]
        main = raw["main"]
        wind = raw.get("wind") or {}
        sys = raw.get("sys") or {}
        return WeatherSnapshot(
            location=raw.get("name", ""),
            country=sys.get("country", ""),
            condition=weather0["main"],
            description=weather0.get("description", ""),
            temperature=float(main["temp"]),
            feels_like=float(main.get("feels_like", main["temp"])),
            humidity=int(main.get("humidity", 0)),
            wind_speed=_float_or_none(wind.get("speed")),
            icon=weather0.get("icon", ""),
        )
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
        raise ResponseFormatError("Unexpected current-conditions shape") from e


def _float_or_none(v: Any) -> float | None:
    if v is None:
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None
