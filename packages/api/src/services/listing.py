# This project was developed with assistance from AI tools.
"""Role-scoped proposal listing.

Resolves the caller's ownership scope, fetches a page of applications from
the repository, enriches each into a Proposal and applies the
post-enrichment filters.

Pagination caveat: ``state`` and ``urgent_only`` depend on the viewer and
on the evaluation time, so they cannot be pushed into the repository query.
``pagination.total`` is therefore the repository's count for the ownership
scope and pushed-down filters, not the number of items that pass the
post-enrichment filters. Exact worklist counts come from
``get_proposal_summary``, which scans the whole scope.
"""

import logging
from datetime import datetime

from db.enums import UserRole

from ..core.auth import acting_identity
from ..schemas import Pagination
from ..schemas.application import ApplicationQuery, ApplicationRecord
from ..schemas.auth import UserContext
from ..schemas.proposal import (
    Proposal,
    ProposalFilters,
    ProposalListResponse,
    ProposalState,
    ProposalSummary,
)
from .classifier import stages_for_type
from .errors import EnrichmentError, ProposalNotFoundError
from .proposal import enrich_application
from .repository import ApplicationRepository
from .summary import is_waiting, matches_state, summarize
from .urgency import DEFAULT_URGENCY_THRESHOLD_HOURS

logger = logging.getLogger(__name__)

DEFAULT_SCAN_BATCH_SIZE = 100
DEFAULT_SCAN_MAX_ITEMS = 1000

_SORT_FIELDS = ("created_at", "updated_at", "action_due_date")


def ownership_filter(user: UserContext, filters: ProposalFilters | None = None) -> dict[str, str]:
    """Owner-id constraints for the repository query, derived from the caller.

    Non-admin callers are always pinned to their own scope; explicit owner
    ids in ``filters`` are only honored for admins.
    """
    scope = user.data_scope
    if user.role == UserRole.ADMIN:
        if filters is None:
            return {}
        explicit = {
            "recruiter_id": filters.recruiter_id,
            "company_id": filters.company_id,
            "candidate_id": filters.candidate_id,
        }
        return {k: v for k, v in explicit.items() if v is not None}
    if user.role == UserRole.RECRUITER:
        return {"recruiter_id": scope.recruiter_id or user.user_id}
    if user.role == UserRole.CANDIDATE:
        return {"candidate_id": scope.candidate_id or user.user_id}
    if user.role == UserRole.COMPANY:
        return {"company_id": scope.company_id or user.company_id or ""}
    # Unknown role: match nothing.
    return {"candidate_id": ""}


def build_query(
    user: UserContext,
    filters: ProposalFilters,
    *,
    page: int,
    limit: int,
) -> ApplicationQuery:
    """Translate caller + filters into the repository query."""
    return ApplicationQuery(
        **ownership_filter(user, filters),
        job_id=filters.job_id,
        stages=stages_for_type(filters.type) if filters.type is not None else None,
        search=filters.search or None,
        created_after=filters.created_after,
        created_before=filters.created_before,
        sort_by=filters.sort_by if filters.sort_by in _SORT_FIELDS else "created_at",
        sort_order="asc" if filters.sort_order.lower() == "asc" else "desc",
        page=page,
        limit=limit,
    )


def _enrich_many(
    records: list[ApplicationRecord],
    user: UserContext,
    now: datetime,
    threshold_hours: float,
) -> list[Proposal]:
    """Enrich records, skipping (and logging) the ones missing party ids."""
    viewer_id = acting_identity(user)
    proposals: list[Proposal] = []
    for record in records:
        try:
            proposals.append(
                enrich_application(
                    record, viewer_id, user.role, now, threshold_hours=threshold_hours
                )
            )
        except EnrichmentError as exc:
            logger.warning(
                "Skipping application %s in proposal list: missing %s",
                exc.application_id,
                exc.missing,
            )
    return proposals


def _post_filter(proposals: list[Proposal], filters: ProposalFilters) -> list[Proposal]:
    result = proposals
    if filters.state is not None:
        result = [p for p in result if matches_state(p, filters.state)]
    if filters.urgent_only:
        result = [p for p in result if p.is_urgent or p.is_overdue]
    return result


async def list_proposals_for_user(
    repository: ApplicationRepository,
    user: UserContext,
    now: datetime,
    filters: ProposalFilters | None = None,
    *,
    page: int = 1,
    limit: int = 25,
    max_limit: int = 100,
    threshold_hours: float = DEFAULT_URGENCY_THRESHOLD_HOURS,
) -> ProposalListResponse:
    """Return one page of proposals visible to ``user``.

    The summary is computed over the returned (post-filter) items only.
    """
    filters = filters or ProposalFilters()
    page = max(page, 1)
    limit = min(max(limit, 1), max_limit)

    query = build_query(user, filters, page=page, limit=limit)
    result = await repository.find_applications_paginated(query)

    proposals = _post_filter(_enrich_many(result.data, user, now, threshold_hours), filters)

    return ProposalListResponse(
        data=proposals,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
        filtered_count=len(proposals),
        summary=summarize(proposals),
    )


async def _scan_scope(
    repository: ApplicationRepository,
    user: UserContext,
    now: datetime,
    *,
    batch_size: int,
    max_items: int,
    threshold_hours: float,
) -> list[Proposal]:
    """Enrich every application in the caller's scope, page by page."""
    filters = ProposalFilters()
    proposals: list[Proposal] = []
    fetched = 0
    page = 1
    while True:
        query = build_query(user, filters, page=page, limit=batch_size)
        result = await repository.find_applications_paginated(query)
        records = result.data[: max(max_items - fetched, 0)]
        fetched += len(records)
        proposals.extend(_enrich_many(records, user, now, threshold_hours))

        if fetched >= max_items and result.total > fetched:
            logger.warning(
                "Proposal scan for user=%s truncated at %d of %d applications",
                user.user_id,
                fetched,
                result.total,
            )
            break
        if not result.data or page >= result.total_pages:
            break
        page += 1
    return proposals


async def get_proposal_summary(
    repository: ApplicationRepository,
    user: UserContext,
    now: datetime,
    *,
    batch_size: int = DEFAULT_SCAN_BATCH_SIZE,
    max_items: int = DEFAULT_SCAN_MAX_ITEMS,
    threshold_hours: float = DEFAULT_URGENCY_THRESHOLD_HOURS,
) -> ProposalSummary:
    """Summary counts over the caller's whole ownership scope."""
    proposals = await _scan_scope(
        repository,
        user,
        now,
        batch_size=batch_size,
        max_items=max_items,
        threshold_hours=threshold_hours,
    )
    return summarize(proposals)


async def get_actionable_proposals(
    repository: ApplicationRepository,
    user: UserContext,
    now: datetime,
    *,
    batch_size: int = DEFAULT_SCAN_BATCH_SIZE,
    max_items: int = DEFAULT_SCAN_MAX_ITEMS,
    threshold_hours: float = DEFAULT_URGENCY_THRESHOLD_HOURS,
) -> list[Proposal]:
    """Every proposal in scope the caller may act on right now."""
    proposals = await _scan_scope(
        repository,
        user,
        now,
        batch_size=batch_size,
        max_items=max_items,
        threshold_hours=threshold_hours,
    )
    return [p for p in proposals if matches_state(p, ProposalState.ACTIONABLE)]


async def get_waiting_proposals(
    repository: ApplicationRepository,
    user: UserContext,
    now: datetime,
    *,
    batch_size: int = DEFAULT_SCAN_BATCH_SIZE,
    max_items: int = DEFAULT_SCAN_MAX_ITEMS,
    threshold_hours: float = DEFAULT_URGENCY_THRESHOLD_HOURS,
) -> list[Proposal]:
    """Every proposal in scope that is waiting on another party."""
    proposals = await _scan_scope(
        repository,
        user,
        now,
        batch_size=batch_size,
        max_items=max_items,
        threshold_hours=threshold_hours,
    )
    return [p for p in proposals if is_waiting(p)]


def in_scope(record: ApplicationRecord, user: UserContext) -> bool:
    """True if the record falls inside the caller's ownership scope."""
    constraints = ownership_filter(user)
    return all(getattr(record, field) == value for field, value in constraints.items())


async def get_proposal(
    repository: ApplicationRepository,
    user: UserContext,
    application_id: str,
    now: datetime,
    *,
    threshold_hours: float = DEFAULT_URGENCY_THRESHOLD_HOURS,
) -> Proposal:
    """Return one enriched proposal, 404 for out-of-scope applications."""
    record = await repository.find_application_by_id(application_id)
    if record is None or not in_scope(record, user):
        raise ProposalNotFoundError(application_id)
    return enrich_application(
        record, acting_identity(user), user.role, now, threshold_hours=threshold_hours
    )
