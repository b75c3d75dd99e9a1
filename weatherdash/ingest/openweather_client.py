"""OpenWeatherMap API client for current conditions and the 5-day forecast."""

import logging

import httpx

from weatherdash.config.schema import OPENWEATHER_BASE_URL
from weatherdash.models.common import Units

logger = logging.getLogger(__name__)


class WeatherClientError(Exception):
    """Raised when weather data cannot be obtained."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(WeatherClientError):
    """Raised when the client is missing its API credential."""


class TransportError(WeatherClientError):
    """Raised on network failure or a non-success HTTP status."""


class ResponseFormatError(WeatherClientError):
    """Raised when a provider document does not have the expected shape."""


class OpenWeatherClient:
    """Async wrapper around the two read-only OpenWeatherMap endpoints.

    Owns its httpx.AsyncClient unless one is passed in.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "OpenWeatherClient":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_current_weather(self, query: str, units: Units) -> dict:
        """Fetch the current-conditions document for a city."""
        return await self._get("/weather", query, units)

    async def get_forecast(self, query: str, units: Units) -> dict:
        """Fetch the 5-day / 3-hour forecast document for a city."""
        return await self._get("/forecast", query, units)

    async def _get(self, endpoint: str, query: str, units: Units) -> dict:
        if not self.api_key:
            raise ConfigurationError("Missing OpenWeather API key.")

        url = f"{self.base_url}{endpoint}"
        params = {"q": query, "units": units.value, "appid": self.api_key}
        try:
            resp = await self._client.get(url, params=params, timeout=self.timeout)
        except httpx.RequestError as e:
            logger.error("OpenWeather request failed: %s q=%r -> %s", endpoint, query, e)
            raise TransportError(f"Request failed: {e}") from e

        if resp.status_code >= 400:
            logger.error(
                "OpenWeather %d: %s q=%r -> %s",
                resp.status_code, endpoint, query, resp.text[:200],
            )
            raise TransportError(f"HTTP {resp.status_code}", resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise ResponseFormatError(f"Invalid JSON from {endpoint}") from e
