"""In-flight check: blocks while another request sequence is outstanding."""

from weatherdash.models.dispatch import DropReason, GuardResult


def check(in_flight: bool) -> GuardResult:
    if in_flight:
        return GuardResult(
            check_name="in_flight",
            passed=False,
            drop_reason=DropReason.IN_FLIGHT,
            detail="request already in flight",
        )
    return GuardResult(
        check_name="in_flight", passed=True, drop_reason=None, detail="ok"
    )
