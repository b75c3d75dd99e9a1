"""Dispatch gate models."""

from dataclasses import dataclass
from enum import StrEnum


class DropReason(StrEnum):
    EMPTY_QUERY = "EMPTY_QUERY"
    RATE_LIMITED = "RATE_LIMITED"
    IN_FLIGHT = "IN_FLIGHT"


class OutcomeStatus(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REJECTED = "rejected"
    SUPERSEDED = "superseded"


@dataclass(frozen=True)
class GuardResult:
    check_name: str
    passed: bool
    drop_reason: DropReason | None
    detail: str


@dataclass(frozen=True)
class DispatchVerdict:
    accepted: bool
    checks: list[GuardResult]

    @property
    def drop_reasons(self) -> list[DropReason]:
        return [c.drop_reason for c in self.checks if c.drop_reason is not None]

    @property
    def drop_reason(self) -> DropReason | None:
        reasons = self.drop_reasons
        return reasons[0] if reasons else None


@dataclass(frozen=True)
class DispatchOutcome:
    status: OutcomeStatus
    query: str
    sequence: int | None = None
    drop_reason: DropReason | None = None
    error: str | None = None

    @property
    def accepted(self) -> bool:
        return self.status != OutcomeStatus.REJECTED
