# This project was developed with assistance from AI tools.
"""Deadline urgency schemas."""

from pydantic import BaseModel, ConfigDict


class UrgencyInfo(BaseModel):
    """Urgency of one proposal relative to a fixed evaluation time.

    ``is_urgent`` and ``is_overdue`` are never both true.
    """

    model_config = ConfigDict(frozen=True)

    is_urgent: bool = False
    is_overdue: bool = False
    hours_remaining: float | None = None
