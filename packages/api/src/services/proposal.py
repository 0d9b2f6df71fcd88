# This project was developed with assistance from AI tools.
"""Proposal enrichment.

Turns one ApplicationRecord into a viewer-relative Proposal by combining
stage classification, deadline urgency and the permission check. The source
record is never modified.
"""

import logging
from datetime import datetime

from db.enums import UserRole

from ..schemas.application import ApplicationRecord
from ..schemas.proposal import (
    ActionParty,
    JobSummary,
    PartySummary,
    Proposal,
    ProposalType,
    StatusBadge,
)
from .classifier import classify
from .errors import EnrichmentError
from .permissions import can_act
from .urgency import DEFAULT_URGENCY_THRESHOLD_HOURS, evaluate_urgency

logger = logging.getLogger(__name__)

REQUIRED_OWNER_FIELDS = ("recruiter_id", "candidate_id", "company_id", "job_id")

_ACTION_LABELS: dict[ProposalType, str] = {
    ProposalType.JOB_OPPORTUNITY: "Review Opportunity",
    ProposalType.DIRECT_APPLICATION: "Complete Application",
    ProposalType.APPLICATION_SCREEN: "Conduct Screen",
    ProposalType.APPLICATION_REVIEW: "Review Application",
    ProposalType.INTERVIEW_INVITATION: "Schedule Interview",
    ProposalType.JOB_OFFER: "Review Offer",
    ProposalType.CLOSED: "View Details",
}

_BADGE_TONES: dict[ProposalType, str] = {
    ProposalType.JOB_OPPORTUNITY: "warning",
    ProposalType.JOB_OFFER: "success",
    ProposalType.CLOSED: "neutral",
}


def status_badge(proposal_type: ProposalType, pending_action_by: ActionParty) -> StatusBadge:
    """Badge derived only from type and pending party."""
    if pending_action_by == ActionParty.NONE:
        return StatusBadge(text="Completed", tone="neutral")
    return StatusBadge(text="Pending Response", tone=_BADGE_TONES.get(proposal_type, "info"))


def action_label(proposal_type: ProposalType) -> str:
    return _ACTION_LABELS.get(proposal_type, "Take Action")


def _subtitle(
    proposal_type: ProposalType,
    candidate_name: str,
    recruiter_name: str,
    company_name: str,
    viewer_role: UserRole,
) -> str:
    if proposal_type == ProposalType.JOB_OPPORTUNITY:
        if viewer_role == UserRole.RECRUITER:
            return f"Sent to {candidate_name}"
        return f"From {recruiter_name}"
    if proposal_type == ProposalType.DIRECT_APPLICATION:
        return f"Applied by {candidate_name}"
    if proposal_type == ProposalType.APPLICATION_SCREEN:
        return f"Screen: {candidate_name}"
    if proposal_type in (ProposalType.APPLICATION_REVIEW, ProposalType.INTERVIEW_INVITATION):
        if viewer_role == UserRole.RECRUITER:
            return f"Submitted to {company_name}"
        return f"From {recruiter_name}"
    if proposal_type == ProposalType.JOB_OFFER:
        if viewer_role == UserRole.CANDIDATE:
            return f"Offer from {company_name}"
        return f"Offer to {candidate_name}"
    return ""


def missing_owner_fields(application: ApplicationRecord) -> list[str]:
    """Names of required party ids that are absent on the application."""
    return [field for field in REQUIRED_OWNER_FIELDS if not getattr(application, field)]


def enrich_application(
    application: ApplicationRecord,
    viewer_id: str,
    viewer_role: UserRole,
    now: datetime,
    *,
    threshold_hours: float = DEFAULT_URGENCY_THRESHOLD_HOURS,
) -> Proposal:
    """Build the viewer-relative Proposal for one application.

    Args:
        application: Repository snapshot.
        viewer_id: Acting identity of the viewer (company id for company users).
        viewer_role: Authenticated role of the viewer.
        now: Evaluation time for urgency.
        threshold_hours: Urgency window.

    Raises:
        ClassificationError: stage is unknown.
        EnrichmentError: a required party id is missing.
    """
    classification = classify(application.stage)

    missing = missing_owner_fields(application)
    if missing:
        raise EnrichmentError(application.id, missing)

    urgency = evaluate_urgency(
        application.action_due_date or application.expires_at,
        now,
        threshold_hours=threshold_hours,
    )
    actionable = can_act(
        classification.pending_action_by,
        application.owners,
        viewer_id,
        viewer_role,
    )

    candidate_name = (application.candidate and application.candidate.name) or "Unknown"
    recruiter_name = (application.recruiter and application.recruiter.name) or "Recruiter"
    company_name = (application.company and application.company.name) or "Company"
    job_title = (application.job and application.job.title) or "Position"

    return Proposal(
        id=application.id,
        type=classification.type,
        stage=application.stage,
        pending_action_by=classification.pending_action_by,
        can_current_user_act=actionable,
        is_urgent=urgency.is_urgent,
        is_overdue=urgency.is_overdue,
        hours_remaining=urgency.hours_remaining,
        action_due_date=application.action_due_date or application.expires_at,
        status_badge=status_badge(classification.type, classification.pending_action_by),
        action_label=action_label(classification.type),
        subtitle=_subtitle(
            classification.type, candidate_name, recruiter_name, company_name, viewer_role
        ),
        candidate=PartySummary(id=application.candidate_id, name=candidate_name),
        recruiter=PartySummary(id=application.recruiter_id, name=recruiter_name),
        company=PartySummary(id=application.company_id, name=company_name),
        job=JobSummary(
            id=application.job_id,
            title=job_title,
            location=application.job.location if application.job else None,
        ),
        proposal_notes=application.recruiter_notes,
        response_notes=application.response_notes,
        created_at=application.created_at,
        updated_at=application.updated_at,
        responded_at=application.responded_at,
    )
