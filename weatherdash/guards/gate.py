"""Dispatch gate: runs all acceptance checks (no short-circuit) and returns a verdict."""

from weatherdash.config.schema import CoordinatorConfig
from weatherdash.guards.checks import empty_query, in_flight, rate_limit
from weatherdash.models.dispatch import DispatchVerdict, GuardResult
from weatherdash.models.view import RequestState


class DispatchGate:
    def __init__(self, config: CoordinatorConfig):
        self.config = config

    def evaluate(self, query: str, state: RequestState, now: float) -> DispatchVerdict:
        """Run every check; the first failing one decides the drop reason."""
        checks: list[GuardResult] = []

        # 1. Empty query (the only visible rejection)
        checks.append(empty_query.check(query))

        # 2. Rate limit
        checks.append(
            rate_limit.check(
                state.ms_since_last_request(now), self.config.min_interval_ms
            )
        )

        # 3. In flight
        checks.append(in_flight.check(state.in_flight))

        accepted = all(c.passed for c in checks)
        return DispatchVerdict(accepted=accepted, checks=checks)
