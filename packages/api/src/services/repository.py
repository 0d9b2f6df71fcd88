# This project was developed with assistance from AI tools.
"""Application repository: the persistence collaborator of the proposal core.

The core only depends on the ``ApplicationRepository`` protocol.
``SqlApplicationRepository`` is the SQLAlchemy implementation used by the
API; tests substitute an in-memory one.
"""

import logging
import math
from datetime import UTC, datetime
from typing import Protocol

from db import Application, ApplicationStageTransition, Candidate, Company, Job
from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..schemas.application import (
    ApplicationPage,
    ApplicationQuery,
    ApplicationRecord,
    JobRef,
    PartyRef,
)
from .scope import apply_data_scope

logger = logging.getLogger(__name__)


class ApplicationRepository(Protocol):
    async def find_applications_paginated(self, query: ApplicationQuery) -> ApplicationPage: ...

    async def find_application_by_id(self, application_id: str) -> ApplicationRecord | None: ...

    async def transition_stage(
        self,
        application_id: str,
        new_stage: str,
        actor_id: str,
        notes: str | None,
        *,
        expected_stage: str,
        actor_role: str | None = None,
    ) -> ApplicationRecord | None:
        """Move the application to ``new_stage`` iff it is still at ``expected_stage``.

        Returns the updated record, or None when the stage had already changed.
        """
        ...


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


_SORT_COLUMNS = {
    "created_at": Application.created_at,
    "updated_at": Application.updated_at,
    "action_due_date": Application.action_due_date,
}

_EAGER = (
    selectinload(Application.candidate),
    selectinload(Application.recruiter),
    selectinload(Application.company),
    selectinload(Application.job),
)


def to_record(app: Application) -> ApplicationRecord:
    """Map an ORM Application (with parties loaded) to an ApplicationRecord."""
    return ApplicationRecord(
        id=app.id,
        stage=app.stage,
        recruiter_id=app.recruiter_id,
        candidate_id=app.candidate_id,
        company_id=app.company_id,
        job_id=app.job_id,
        action_due_date=app.action_due_date,
        expires_at=app.expires_at,
        recruiter_notes=app.recruiter_notes,
        response_notes=app.response_notes,
        responded_at=app.responded_at,
        candidate=(
            PartyRef(id=app.candidate.id, name=app.candidate.full_name, email=app.candidate.email)
            if app.candidate
            else None
        ),
        recruiter=(
            PartyRef(id=app.recruiter.id, name=app.recruiter.name, email=app.recruiter.email)
            if app.recruiter
            else None
        ),
        company=PartyRef(id=app.company.id, name=app.company.name) if app.company else None,
        job=(
            JobRef(id=app.job.id, title=app.job.title, location=app.job.location)
            if app.job
            else None
        ),
        created_at=app.created_at,
        updated_at=app.updated_at,
    )


class SqlApplicationRepository:
    """ApplicationRepository over an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _apply_filters(self, stmt, query: ApplicationQuery):
        stmt = apply_data_scope(stmt, query)
        if query.job_id is not None:
            stmt = stmt.where(Application.job_id == query.job_id)
        if query.stages is not None:
            stmt = stmt.where(Application.stage.in_(sorted(query.stages)))
        if query.created_after is not None:
            stmt = stmt.where(Application.created_at >= query.created_after)
        if query.created_before is not None:
            stmt = stmt.where(Application.created_at <= query.created_before)
        if query.search:
            pattern = f"%{query.search.strip()}%"
            stmt = (
                stmt.outerjoin(Candidate, Candidate.id == Application.candidate_id)
                .outerjoin(Job, Job.id == Application.job_id)
                .outerjoin(Company, Company.id == Application.company_id)
                .where(
                    or_(
                        Candidate.full_name.ilike(pattern),
                        Job.title.ilike(pattern),
                        Company.name.ilike(pattern),
                    )
                )
            )
        return stmt

    async def find_applications_paginated(self, query: ApplicationQuery) -> ApplicationPage:
        count_stmt = self._apply_filters(
            select(func.count(func.distinct(Application.id))).select_from(Application), query
        )
        total = (await self.session.execute(count_stmt)).scalar() or 0

        column = _SORT_COLUMNS.get(query.sort_by, Application.created_at)
        order = column.asc() if query.sort_order == "asc" else column.desc()
        stmt = (
            self._apply_filters(select(Application), query)
            .options(*_EAGER)
            .order_by(order.nulls_last(), Application.id)
            .offset((query.page - 1) * query.limit)
            .limit(query.limit)
        )
        result = await self.session.execute(stmt)
        applications = result.unique().scalars().all()

        return ApplicationPage(
            data=[to_record(app) for app in applications],
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=total_pages(total, query.limit),
        )

    async def find_application_by_id(self, application_id: str) -> ApplicationRecord | None:
        stmt = select(Application).options(*_EAGER).where(Application.id == application_id)
        result = await self.session.execute(stmt)
        app = result.unique().scalar_one_or_none()
        return to_record(app) if app is not None else None

    async def transition_stage(
        self,
        application_id: str,
        new_stage: str,
        actor_id: str,
        notes: str | None,
        *,
        expected_stage: str,
        actor_role: str | None = None,
    ) -> ApplicationRecord | None:
        now = datetime.now(UTC)
        stmt = (
            update(Application)
            .where(Application.id == application_id, Application.stage == expected_stage)
            .values(stage=new_stage, response_notes=notes, responded_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            await self.session.rollback()
            logger.info(
                "Stage compare-and-swap missed: app=%s expected=%s",
                application_id,
                expected_stage,
            )
            return None

        self.session.add(
            ApplicationStageTransition(
                application_id=application_id,
                from_stage=expected_stage,
                to_stage=new_stage,
                actor_id=actor_id,
                actor_role=actor_role,
                notes=notes,
            )
        )
        await self.session.commit()
        # Fresh read so relationships and server-side columns are current
        self.session.expire_all()
        return await self.find_application_by_id(application_id)
