"""Search request coordinator: debounce, dispatch gating, and result application.

Sits between user input events and the weather provider. All state is
mutated on a single event loop, so no locking is needed.
"""

import logging
import time
from collections.abc import Callable

from weatherdash.config.schema import CoordinatorConfig
from weatherdash.guards.gate import DispatchGate
from weatherdash.ingest.openweather_client import (
    ConfigurationError,
    OpenWeatherClient,
    WeatherClientError,
)
from weatherdash.ingest.weather_fetcher import fetch_weather
from weatherdash.models.common import Units
from weatherdash.models.dispatch import DispatchOutcome, DropReason, OutcomeStatus
from weatherdash.models.view import RequestState, ViewState
from weatherdash.pipeline.debouncer import Debouncer

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please enter a city name."
FETCH_FAILED_MESSAGE = "Failed to load weather data."

ViewListener = Callable[[ViewState], None]


class SearchCoordinator:
    def __init__(
        self,
        client: OpenWeatherClient,
        config: CoordinatorConfig,
        units: Units = Units.METRIC,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.config = config
        self.units = units
        self.view = ViewState()
        self.requests = RequestState()
        self.gate = DispatchGate(config)
        self._clock = clock
        self._debouncer = Debouncer(config.debounce_ms)
        self._listeners: list[ViewListener] = []

    def subscribe(self, listener: ViewListener) -> None:
        """Register a callback invoked with the view after every change."""
        self._listeners.append(listener)

    # --- Input ---

    def on_query_changed(self, text: str) -> None:
        """Restart the debounce timer with the latest input text."""
        self._debouncer.schedule(self._dispatch_debounced, text)

    def cancel_pending(self) -> bool:
        return self._debouncer.cancel()

    async def drain(self) -> None:
        """Wait for any pending debounced dispatch to run to completion."""
        await self._debouncer.drain()

    def set_units(self, units: Units) -> None:
        """Switch unit system; an outstanding request is superseded."""
        if units == self.units:
            return
        self.units = units
        if self.requests.in_flight:
            logger.info(
                "Units changed to %s, superseding request #%d",
                units, self.requests.sequence,
            )
            self.requests.supersede()
            self.view.loading = False
            self._notify()

    async def _dispatch_debounced(self, text: str) -> DispatchOutcome | None:
        query = text.strip()
        if not query:
            return None
        if self.view.shows_location(query):
            logger.debug("Skipping %r: already displayed", query)
            return None
        return await self.dispatch(query)

    # --- Dispatch ---

    async def dispatch(self, query: str) -> DispatchOutcome:
        """Look up weather for `query` unless the gate rejects it."""
        query = query.strip()
        now = self._clock()
        verdict = self.gate.evaluate(query, self.requests, now)
        if not verdict.accepted:
            return self._reject(query, verdict.drop_reason, verdict.checks)

        sequence = self.requests.begin(now)
        units = self.units
        self.view.loading = True
        self.view.error = ""
        self._notify()
        logger.info("Dispatch #%d q=%r units=%s", sequence, query, units)

        outcome = DispatchOutcome(OutcomeStatus.FAILED, query, sequence)
        try:
            snapshot, forecast = await fetch_weather(
                self.client, query, units, self.config.reference_hour
            )
            if self.requests.is_current(sequence):
                self.view.snapshot = snapshot
                self.view.forecast = forecast
                self.view.query = query
                outcome = DispatchOutcome(OutcomeStatus.SUCCEEDED, query, sequence)
        except ConfigurationError as e:
            logger.error("Dispatch #%d: %s", sequence, e)
            outcome = self._fail(query, sequence, str(e))
        except WeatherClientError as e:
            logger.warning("Dispatch #%d failed: %s", sequence, e)
            outcome = self._fail(query, sequence, FETCH_FAILED_MESSAGE)
        finally:
            current = self.requests.is_current(sequence)
            if current:
                self.requests.in_flight = False
                self.view.loading = False
                self._notify()

        if not current:
            logger.info("Dispatch #%d superseded, result discarded", sequence)
            return DispatchOutcome(OutcomeStatus.SUPERSEDED, query, sequence)
        return outcome

    def _reject(self, query, reason, checks) -> DispatchOutcome:
        if reason == DropReason.EMPTY_QUERY:
            self.view.error = EMPTY_QUERY_MESSAGE
            self.view.clear_results()
            self._notify()
        else:
            detail = "; ".join(c.detail for c in checks if not c.passed)
            logger.debug("Dropped %r: %s", query, detail)
        return DispatchOutcome(OutcomeStatus.REJECTED, query, drop_reason=reason)

    def _fail(self, query: str, sequence: int, message: str) -> DispatchOutcome:
        if self.requests.is_current(sequence):
            self.view.error = message
            self.view.clear_results()
        return DispatchOutcome(OutcomeStatus.FAILED, query, sequence, error=message)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self.view)
