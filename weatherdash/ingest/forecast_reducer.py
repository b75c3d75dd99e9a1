"""Collapse the 3-hourly forecast feed into one sample per day."""

import logging
from datetime import UTC, datetime, timedelta

from weatherdash.ingest.openweather_client import ResponseFormatError
from weatherdash.models.weather import ForecastPoint

logger = logging.getLogger(__name__)

REFERENCE_HOUR = 12


def reduce_forecast(raw: dict, reference_hour: int = REFERENCE_HOUR) -> list[ForecastPoint]:
    """Pick the first sample at `reference_hour` for each day label.

    Samples are visited in feed order. Days with no sample at the reference
    hour are omitted, and output order is acceptance order.
    """
    try:
        samples = raw["list"]
    except (KeyError, TypeError) as e:
        raise ResponseFormatError("Forecast response has no sample list") from e
    if not isinstance(samples, list):
        raise ResponseFormatError("Forecast sample list is not a list")

    try:
        city = raw.get("city") or {}
        offset_seconds = int(city.get("timezone") or 0)
    except (AttributeError, TypeError, ValueError) as e:
        raise ResponseFormatError("Unexpected forecast city shape") from e

    daily: list[ForecastPoint] = []
    used_days: set[str] = set()
    for item in samples:
        try:
            local = sample_local_time(item, offset_seconds)
            day = local.strftime("%a")
            if local.hour != reference_hour or day in used_days:
                continue
            weather0 = item["weather"][0]
            point = ForecastPoint(
                day=day,
                temperature=float(item["main"]["temp"]),
                icon=weather0.get("icon", ""),
                condition=weather0.get("main", ""),
            )
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            raise ResponseFormatError("Unexpected forecast sample shape") from e
        used_days.add(day)
        daily.append(point)

    logger.debug(
        "Reduced %d forecast samples to %d days", len(samples), len(daily)
    )
    return daily


def sample_local_time(item: dict, offset_seconds: int = 0) -> datetime:
    """Local wall-clock time of a feed sample.

    `dt_txt` ("2026-10-17 12:00:00") is used as-is. Without it, the unix
    `dt` is shifted by the city's UTC offset.
    """
    dt_txt = item.get("dt_txt")
    if dt_txt:
        return datetime.fromisoformat(dt_txt)
    ts = datetime.fromtimestamp(int(item["dt"]), tz=UTC)
    return (ts + timedelta(seconds=offset_seconds)).replace(tzinfo=None)
