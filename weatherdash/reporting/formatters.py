"""Output formatters for the coordinator's view state."""

import json
import math
from dataclasses import asdict

from weatherdash.config.schema import OPENWEATHER_ICON_URL
from weatherdash.models.common import Units, Variant
from weatherdash.models.view import ViewState

VARIANT_NAMES = {Variant.COMPACT: "Compact", Variant.RICH: "Rich"}


def round_half_up(value: float) -> int:
    """Round like a browser's Math.round (halves go up, including negatives)."""
    return math.floor(value + 0.5)


def format_temperature(value: float, units: Units) -> str:
    return f"{round_half_up(value)}{units.temperature_suffix}"


def icon_url(icon: str, icon_base_url: str = OPENWEATHER_ICON_URL, large: bool = True) -> str:
    suffix = "@2x" if large else ""
    return f"{icon_base_url.rstrip('/')}/{icon}{suffix}.png"


def format_header(variant: Variant) -> str:
    return f"Weather Dashboard - {VARIANT_NAMES[variant]} View ({variant.value})"


def format_view_text(
    view: ViewState,
    units: Units,
    variant: Variant = Variant.RICH,
    icon_base_url: str = OPENWEATHER_ICON_URL,
) -> str:
    """Plain text rendering for the terminal."""
    lines = [format_header(variant)]
    if view.loading:
        lines.append("Loading weather…")
        return "\n".join(lines)
    if view.error:
        lines.append(f"⚠️ {view.error}")
        return "\n".join(lines)
    s = view.snapshot
    if s is None:
        lines.append("No data yet. Try searching for a city.")
        return "\n".join(lines)

    lines.append(f"{s.location}, {s.country}")
    lines.append(f"{s.condition} - {s.description}")
    lines.append(f"Temperature: {format_temperature(s.temperature, units)}")
    wind = "-" if s.wind_speed is None else f"{s.wind_speed:g}"
    lines.append(f"Feels like: {format_temperature(s.feels_like, units)}")
    lines.append(f"Humidity: {s.humidity}% | Wind: {wind} {units.wind_label}")
    lines.append(f"Icon: {icon_url(s.icon, icon_base_url)}")

    if view.forecast:
        lines.append("5-Day Forecast")
        for f in view.forecast:
            lines.append(
                f"  {f.day}: {format_temperature(f.temperature, units)} {f.condition}"
            )
    return "\n".join(lines)


def format_view_json(view: ViewState, units: Units) -> str:
    """JSON rendering for programmatic consumption."""
    data = {
        "loading": view.loading,
        "error": view.error,
        "units": units.value,
        "query": view.query,
        "snapshot": asdict(view.snapshot) if view.snapshot is not None else None,
        "forecast": [asdict(f) for f in view.forecast],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
