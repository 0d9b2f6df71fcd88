# This project was developed with assistance from AI tools.
"""Shared test factories: application snapshots, users, and an in-memory
repository that honors the ApplicationRepository contract (including the
compare-and-swap on stage).
"""

import asyncio
import math
from datetime import UTC, datetime, timedelta

from db.enums import UserRole

from src.core.auth import build_data_scope
from src.schemas.application import (
    ApplicationPage,
    ApplicationQuery,
    ApplicationRecord,
    JobRef,
    PartyRef,
)
from src.schemas.auth import UserContext

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)


def make_application(
    id="app-1",
    stage="recruiter_proposed",
    recruiter_id="rec-1",
    candidate_id="cand-1",
    company_id="comp-1",
    job_id="job-1",
    action_due_date=None,
    expires_at=None,
    created_at=None,
    recruiter_notes=None,
    candidate_name="Ada Lovelace",
    recruiter_name="Grace Hopper",
    company_name="Analytical Engines Ltd",
    job_title="Staff Engineer",
):
    """Create an ApplicationRecord with every party populated.

    Pass ``None`` for an owner id to build a malformed record.
    """
    return ApplicationRecord(
        id=id,
        stage=stage,
        recruiter_id=recruiter_id,
        candidate_id=candidate_id,
        company_id=company_id,
        job_id=job_id,
        action_due_date=action_due_date,
        expires_at=expires_at,
        recruiter_notes=recruiter_notes,
        candidate=PartyRef(id=candidate_id, name=candidate_name) if candidate_id else None,
        recruiter=PartyRef(id=recruiter_id, name=recruiter_name) if recruiter_id else None,
        company=PartyRef(id=company_id, name=company_name) if company_id else None,
        job=JobRef(id=job_id, title=job_title, location="Remote") if job_id else None,
        created_at=created_at or NOW - timedelta(days=1),
        updated_at=created_at or NOW - timedelta(days=1),
    )


def make_user(user_id, role, company_id=None):
    """Create a UserContext with the data scope the auth middleware would build."""
    role = UserRole(role)
    return UserContext(
        user_id=user_id,
        role=role,
        email=f"{user_id}@example.com",
        name=user_id,
        company_id=company_id,
        data_scope=build_data_scope(role, user_id, company_id),
    )


def candidate_user(user_id="cand-1"):
    return make_user(user_id, "candidate")


def recruiter_user(user_id="rec-1"):
    return make_user(user_id, "recruiter")


def company_user(user_id="hm-1", company_id="comp-1"):
    return make_user(user_id, "company", company_id=company_id)


def admin_user(user_id="admin-1"):
    return make_user(user_id, "admin")


class InMemoryApplicationRepository:
    """Dict-backed ApplicationRepository.

    Args:
        records: Initial application snapshots.
        yield_control: When True every call yields to the event loop first,
            so concurrent callers interleave (read, read, write, write).
    """

    def __init__(self, records=(), *, yield_control=False):
        self.records: dict[str, ApplicationRecord] = {r.id: r for r in records}
        self.yield_control = yield_control
        self.queries: list[ApplicationQuery] = []
        self.transitions: list[dict] = []

    async def _maybe_yield(self):
        if self.yield_control:
            await asyncio.sleep(0)

    def _matches(self, record: ApplicationRecord, query: ApplicationQuery) -> bool:
        for field in ("recruiter_id", "company_id", "candidate_id", "job_id"):
            wanted = getattr(query, field)
            if wanted is not None and getattr(record, field) != wanted:
                return False
        if query.stages is not None and record.stage not in query.stages:
            return False
        if query.created_after is not None and record.created_at < query.created_after:
            return False
        if query.created_before is not None and record.created_at > query.created_before:
            return False
        if query.search:
            needle = query.search.lower()
            haystack = [
                record.candidate.name if record.candidate else None,
                record.job.title if record.job else None,
                record.company.name if record.company else None,
            ]
            if not any(h and needle in h.lower() for h in haystack):
                return False
        return True

    async def find_applications_paginated(self, query: ApplicationQuery) -> ApplicationPage:
        await self._maybe_yield()
        self.queries.append(query)
        matched = [r for r in self.records.values() if self._matches(r, query)]

        present = [r for r in matched if getattr(r, query.sort_by) is not None]
        missing = [r for r in matched if getattr(r, query.sort_by) is None]
        present.sort(key=lambda r: getattr(r, query.sort_by), reverse=query.sort_order == "desc")
        ordered = present + missing

        start = (query.page - 1) * query.limit
        return ApplicationPage(
            data=ordered[start : start + query.limit],
            total=len(matched),
            page=query.page,
            limit=query.limit,
            total_pages=math.ceil(len(matched) / query.limit),
        )

    async def find_application_by_id(self, application_id):
        await self._maybe_yield()
        return self.records.get(application_id)

    async def transition_stage(
        self,
        application_id,
        new_stage,
        actor_id,
        notes,
        *,
        expected_stage,
        actor_role=None,
    ):
        await self._maybe_yield()
        current = self.records.get(application_id)
        if current is None or current.stage != expected_stage:
            return None
        updated = current.model_copy(
            update={
                "stage": new_stage,
                "response_notes": notes,
                "responded_at": NOW,
                "updated_at": NOW,
            }
        )
        self.records[application_id] = updated
        self.transitions.append(
            {
                "application_id": application_id,
                "from_stage": expected_stage,
                "to_stage": new_stage,
                "actor_id": actor_id,
                "actor_role": actor_role,
                "notes": notes,
            }
        )
        return updated
