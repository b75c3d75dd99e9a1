"""Empty query check: blocks blank or whitespace-only searches."""

from weatherdash.models.dispatch import DropReason, GuardResult


def check(query: str) -> GuardResult:
    if not query.strip():
        return GuardResult(
            check_name="empty_query",
            passed=False,
            drop_reason=DropReason.EMPTY_QUERY,
            detail="query is blank",
        )
    return GuardResult(
        check_name="empty_query", passed=True, drop_reason=None, detail="ok"
    )
