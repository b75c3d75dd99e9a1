"""Weather data models: current conditions and reduced daily forecast."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherSnapshot:
    location: str
    country: str
    condition: str
    description: str
    temperature: float
    feels_like: float
    humidity: int
    wind_speed: float | None
    icon: str


@dataclass(frozen=True)
class ForecastPoint:
    day: str  # short weekday, e.g. "Mon"
    temperature: float
    icon: str
    condition: str
