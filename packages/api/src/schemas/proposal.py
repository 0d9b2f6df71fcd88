# This project was developed with assistance from AI tools.
"""Unified proposal schemas.

A Proposal is the viewer-relative projection of one Application. It is
built per request and never persisted.
"""

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from . import Pagination


class ProposalType(str, enum.Enum):
    JOB_OPPORTUNITY = "job_opportunity"
    DIRECT_APPLICATION = "direct_application"
    APPLICATION_SCREEN = "application_screen"
    APPLICATION_REVIEW = "application_review"
    INTERVIEW_INVITATION = "interview_invitation"
    JOB_OFFER = "job_offer"
    CLOSED = "closed"


class ActionParty(str, enum.Enum):
    CANDIDATE = "candidate"
    COMPANY = "company"
    RECRUITER = "recruiter"
    NONE = "none"


class ProposalState(str, enum.Enum):
    """Viewer-relative worklist bucket used by the ``state`` filter."""

    ACTIONABLE = "actionable"
    WAITING = "waiting"
    COMPLETED = "completed"


class StatusBadge(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    tone: str


class PartySummary(BaseModel):
    id: str
    name: str


class JobSummary(BaseModel):
    id: str
    title: str
    location: str | None = None


class Proposal(BaseModel):
    """Enriched, viewer-relative view of one Application."""

    id: str
    type: ProposalType
    stage: str
    pending_action_by: ActionParty
    can_current_user_act: bool
    is_urgent: bool
    is_overdue: bool
    hours_remaining: float | None = None
    action_due_date: datetime | None = None
    status_badge: StatusBadge
    action_label: str
    subtitle: str = ""

    candidate: PartySummary
    recruiter: PartySummary
    company: PartySummary
    job: JobSummary

    proposal_notes: str | None = None
    response_notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    responded_at: datetime | None = None


class ProposalSummary(BaseModel):
    """Overlapping counts over a set of proposals (not a partition)."""

    actionable_count: int = 0
    waiting_count: int = 0
    urgent_count: int = 0
    overdue_count: int = 0


class ProposalFilters(BaseModel):
    """Caller-supplied listing filters.

    ``state`` and ``urgent_only`` are applied after enrichment; everything
    else is pushed to the repository. The explicit owner ids are honored for
    admins only.
    """

    state: ProposalState | None = None
    type: ProposalType | None = None
    job_id: str | None = None
    search: str | None = None
    urgent_only: bool = False
    created_after: datetime | None = None
    created_before: datetime | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
    recruiter_id: str | None = None
    company_id: str | None = None
    candidate_id: str | None = None


class ProposalListResponse(BaseModel):
    """Page of proposals.

    ``pagination.total`` counts the repository population before the
    post-enrichment filters; ``filtered_count`` is how many items of this
    page survived them.
    """

    data: list[Proposal]
    pagination: Pagination
    filtered_count: int
    summary: ProposalSummary


class ProposalListItems(BaseModel):
    """Unpaginated list used by dashboard worklists."""

    data: list[Proposal]
    count: int


class ProposalActionRequest(BaseModel):
    notes: str | None = Field(default=None, max_length=5000)
    expected_stage: str | None = Field(
        default=None,
        description="Stage the client last displayed; a mismatch is rejected with 409.",
    )


class ProposalActionResponse(BaseModel):
    """Result of an accept/decline: the updated Application and its new view."""

    application_id: str
    previous_stage: str
    stage: str
    proposal: Proposal | None = None
