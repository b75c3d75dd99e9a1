"""Common types and helpers shared across models."""

from enum import StrEnum


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def temperature_suffix(self) -> str:
        return "°C" if self is Units.METRIC else "°F"

    @property
    def wind_label(self) -> str:
        return "m/s" if self is Units.METRIC else "mph"


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class Variant(StrEnum):
    COMPACT = "A"
    RICH = "B"
