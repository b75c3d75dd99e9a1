"""Rate limit check: blocks if the last accepted request was too recent."""

from weatherdash.models.dispatch import DropReason, GuardResult


def check(ms_since_last_request: float | None, min_interval_ms: int) -> GuardResult:
    if ms_since_last_request is not None and ms_since_last_request < min_interval_ms:
        return GuardResult(
            check_name="rate_limit",
            passed=False,
            drop_reason=DropReason.RATE_LIMITED,
            detail=f"{ms_since_last_request:.0f}ms < {min_interval_ms}ms interval",
        )
    return GuardResult(
        check_name="rate_limit", passed=True, drop_reason=None, detail="ok"
    )
