"""Fetch current conditions and forecast together for one query."""

import asyncio
import logging

from weatherdash.ingest.conditions import parse_current_conditions
from weatherdash.ingest.forecast_reducer import REFERENCE_HOUR, reduce_forecast
from weatherdash.ingest.openweather_client import OpenWeatherClient
from weatherdash.models.common import Units
from weatherdash.models.weather import ForecastPoint, WeatherSnapshot

logger = logging.getLogger(__name__)


async def fetch_weather(
    client: OpenWeatherClient,
    query: str,
    units: Units,
    reference_hour: int = REFERENCE_HOUR,
) -> tuple[WeatherSnapshot, list[ForecastPoint]]:
    """Issue both provider calls concurrently; both must succeed.

    Raises WeatherClientError (or a subclass) on any failure.
    """
    current_raw, forecast_raw = await asyncio.gather(
        client.get_current_weather(query, units),
        client.get_forecast(query, units),
    )
    snapshot = parse_current_conditions(current_raw)
    forecast = reduce_forecast(forecast_raw, reference_hour)
    logger.debug(
        "Fetched %s, %s: %.1f with %d forecast days",
        snapshot.location, snapshot.country, snapshot.temperature, len(forecast),
    )
    return snapshot, forecast
