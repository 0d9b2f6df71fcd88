# This project was developed with assistance from AI tools.
"""Deadline urgency for proposals.

Pure function of (due date, now, threshold). ``now`` is always supplied by
the caller; nothing here reads the clock.
"""

from datetime import UTC, datetime

from ..schemas.urgency import UrgencyInfo

DEFAULT_URGENCY_THRESHOLD_HOURS = 24.0


def _ensure_tz(dt: datetime) -> datetime:
    """Ensure a datetime is timezone-aware (UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def evaluate_urgency(
    due_date: datetime | None,
    now: datetime,
    *,
    threshold_hours: float = DEFAULT_URGENCY_THRESHOLD_HOURS,
) -> UrgencyInfo:
    """Compute urgency for a deadline.

    Args:
        due_date: When the pending action is due, or None for no deadline.
        now: Evaluation time.
        threshold_hours: Deadlines closer than this (but not passed) are urgent.

    Returns:
        UrgencyInfo with signed ``hours_remaining`` (negative once past due).
        Overdue wins over urgent; the two are never both set.
    """
    if due_date is None:
        return UrgencyInfo()

    delta = _ensure_tz(due_date) - _ensure_tz(now)
    hours_remaining = delta.total_seconds() / 3600

    is_overdue = hours_remaining <= 0
    is_urgent = not is_overdue and hours_remaining <= threshold_hours

    rounded = round(hours_remaining, 2)
    if not is_overdue:
        # A deadline still ahead never reports zero hours left
        rounded = max(rounded, 0.01)

    return UrgencyInfo(
        is_urgent=is_urgent,
        is_overdue=is_overdue,
        hours_remaining=rounded,
    )
