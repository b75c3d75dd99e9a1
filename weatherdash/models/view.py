"""Coordinator state: request bookkeeping and the observable view."""

from dataclasses import dataclass, field

from weatherdash.models.weather import ForecastPoint, WeatherSnapshot


@dataclass
class RequestState:
    last_request_at: float | None = None  # monotonic seconds
    in_flight: bool = False
    sequence: int = 0

    def ms_since_last_request(self, now: float) -> float | None:
        if self.last_request_at is None:
            return None
        return (now - self.last_request_at) * 1000

    def begin(self, now: float) -> int:
        """Mark a request as accepted and return its sequence number."""
        self.last_request_at = now
        self.in_flight = True
        self.sequence += 1
        return self.sequence

    def is_current(self, sequence: int) -> bool:
        return sequence == self.sequence

    def supersede(self) -> None:
        """Invalidate the outstanding request so its result is discarded."""
        self.sequence += 1
        self.in_flight = False


@dataclass
class ViewState:
    loading: bool = False
    error: str = ""
    snapshot: WeatherSnapshot | None = None
    forecast: list[ForecastPoint] = field(default_factory=list)
    query: str = ""

    def clear_results(self) -> None:
        self.snapshot = None
        self.forecast = []
        self.query = ""

    def shows_location(self, query: str) -> bool:
        if self.snapshot is None or not self.snapshot.location:
            return False
        return self.snapshot.location.lower() == query.strip().lower()
