# This project was developed with assistance from AI tools.
"""Unified proposal routes: worklists, summary counts, accept/decline."""

import logging
from datetime import UTC, datetime

from db import get_db
from db.enums import UserRole
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import acting_identity
from ..core.config import settings
from ..middleware.auth import CurrentUser, require_roles
from ..schemas.auth import UserContext
from ..schemas.proposal import (
    Proposal,
    ProposalActionRequest,
    ProposalActionResponse,
    ProposalFilters,
    ProposalListItems,
    ProposalListResponse,
    ProposalState,
    ProposalSummary,
    ProposalType,
)
from ..services.actions import ProposalAction, respond_to_proposal
from ..services.errors import EnrichmentError
from ..services.listing import (
    get_actionable_proposals,
    get_proposal,
    get_proposal_summary,
    get_waiting_proposals,
    list_proposals_for_user,
)
from ..services.proposal import enrich_application
from ..services.repository import ApplicationRepository, SqlApplicationRepository

logger = logging.getLogger(__name__)

router = APIRouter()

_ALL_ROLES = (UserRole.ADMIN, UserRole.CANDIDATE, UserRole.RECRUITER, UserRole.COMPANY)


async def get_application_repository(
    session: AsyncSession = Depends(get_db),
) -> ApplicationRepository:
    """FastAPI dependency: repository bound to the request's DB session."""
    return SqlApplicationRepository(session)


def _now() -> datetime:
    return datetime.now(UTC)


@router.get(
    "/",
    response_model=ProposalListResponse,
    dependencies=[Depends(require_roles(*_ALL_ROLES))],
)
async def list_proposals(
    user: CurrentUser,
    repository: ApplicationRepository = Depends(get_application_repository),
    state: ProposalState | None = None,
    type: ProposalType | None = None,  # noqa: A002
    job_id: str | None = None,
    search: str | None = Query(default=None, max_length=200),
    urgent_only: bool = Query(default=False),
    created_after: datetime | None = None,
    created_before: datetime | None = None,
    sort_by: str = Query(default="created_at", pattern="^(created_at|updated_at|action_due_date)$"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc|ASC|DESC)$"),
    recruiter_id: str | None = None,
    company_id: str | None = None,
    candidate_id: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.PROPOSAL_PAGE_SIZE_DEFAULT, ge=1),
) -> ProposalListResponse:
    """List proposals visible to the caller.

    ``state`` and ``urgent_only`` filter the fetched page after enrichment,
    so ``pagination.total`` counts the unfiltered scope; see
    ``filtered_count`` and ``/summary`` for exact counts.
    """
    filters = ProposalFilters(
        state=state,
        type=type,
        job_id=job_id,
        search=search,
        urgent_only=urgent_only,
        created_after=created_after,
        created_before=created_before,
        sort_by=sort_by,
        sort_order=sort_order,
        recruiter_id=recruiter_id,
        company_id=company_id,
        candidate_id=candidate_id,
    )
    return await list_proposals_for_user(
        repository,
        user,
        _now(),
        filters,
        page=page,
        limit=limit,
        max_limit=settings.PROPOSAL_PAGE_SIZE_MAX,
        threshold_hours=settings.URGENCY_THRESHOLD_HOURS,
    )


@router.get(
    "/summary",
    response_model=ProposalSummary,
    dependencies=[Depends(require_roles(*_ALL_ROLES))],
)
async def proposal_summary(
    user: CurrentUser,
    repository: ApplicationRepository = Depends(get_application_repository),
) -> ProposalSummary:
    """Exact worklist counts over the caller's whole scope."""
    return await get_proposal_summary(
        repository,
        user,
        _now(),
        batch_size=settings.PROPOSAL_SCAN_BATCH_SIZE,
        max_items=settings.PROPOSAL_SCAN_MAX_ITEMS,
        threshold_hours=settings.URGENCY_THRESHOLD_HOURS,
    )


@router.get(
    "/actionable",
    response_model=ProposalListItems,
    dependencies=[Depends(require_roles(*_ALL_ROLES))],
)
async def actionable_proposals(
    user: CurrentUser,
    repository: ApplicationRepository = Depends(get_application_repository),
) -> ProposalListItems:
    """Every proposal the caller can act on right now."""
    items = await get_actionable_proposals(
        repository,
        user,
        _now(),
        batch_size=settings.PROPOSAL_SCAN_BATCH_SIZE,
        max_items=settings.PROPOSAL_SCAN_MAX_ITEMS,
        threshold_hours=settings.URGENCY_THRESHOLD_HOURS,
    )
    return ProposalListItems(data=items, count=len(items))


@router.get(
    "/waiting",
    response_model=ProposalListItems,
    dependencies=[Depends(require_roles(*_ALL_ROLES))],
)
async def waiting_proposals(
    user: CurrentUser,
    repository: ApplicationRepository = Depends(get_application_repository),
) -> ProposalListItems:
    """Every open proposal the caller is waiting on another party for."""
    items = await get_waiting_proposals(
        repository,
        user,
        _now(),
        batch_size=settings.PROPOSAL_SCAN_BATCH_SIZE,
        max_items=settings.PROPOSAL_SCAN_MAX_ITEMS,
        threshold_hours=settings.URGENCY_THRESHOLD_HOURS,
    )
    return ProposalListItems(data=items, count=len(items))


@router.get(
    "/{proposal_id}",
    response_model=Proposal,
    dependencies=[Depends(require_roles(*_ALL_ROLES))],
)
async def get_single_proposal(
    proposal_id: str,
    user: CurrentUser,
    repository: ApplicationRepository = Depends(get_application_repository),
) -> Proposal:
    """Get one proposal. Returns 404 for out-of-scope applications."""
    return await get_proposal(
        repository,
        user,
        proposal_id,
        _now(),
        threshold_hours=settings.URGENCY_THRESHOLD_HOURS,
    )


async def _respond(
    action: ProposalAction,
    proposal_id: str,
    body: ProposalActionRequest,
    user: UserContext,
    repository: ApplicationRepository,
) -> ProposalActionResponse:
    before, after = await respond_to_proposal(
        repository,
        user,
        proposal_id,
        action,
        body.notes,
        seen_stage=body.expected_stage,
    )
    try:
        proposal = enrich_application(
            after,
            acting_identity(user),
            user.role,
            _now(),
            threshold_hours=settings.URGENCY_THRESHOLD_HOURS,
        )
    except EnrichmentError:
        # The write succeeded; only the follow-up view is unavailable.
        logger.warning("Updated application %s could not be enriched", proposal_id)
        proposal = None
    return ProposalActionResponse(
        application_id=after.id,
        previous_stage=before.stage,
        stage=after.stage,
        proposal=proposal,
    )


@router.post(
    "/{proposal_id}/accept",
    response_model=ProposalActionResponse,
    dependencies=[Depends(require_roles(*_ALL_ROLES))],
)
async def accept(
    proposal_id: str,
    body: ProposalActionRequest,
    user: CurrentUser,
    repository: ApplicationRepository = Depends(get_application_repository),
) -> ProposalActionResponse:
    """Accept the proposal on behalf of the caller's party."""
    return await _respond(ProposalAction.ACCEPT, proposal_id, body, user, repository)


@router.post(
    "/{proposal_id}/decline",
    response_model=ProposalActionResponse,
    dependencies=[Depends(require_roles(*_ALL_ROLES))],
)
async def decline(
    proposal_id: str,
    body: ProposalActionRequest,
    user: CurrentUser,
    repository: ApplicationRepository = Depends(get_application_repository),
) -> ProposalActionResponse:
    """Decline the proposal on behalf of the caller's party."""
    return await _respond(ProposalAction.DECLINE, proposal_id, body, user, repository)
