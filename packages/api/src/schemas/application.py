# This project was developed with assistance from AI tools.
"""Application snapshot schemas exchanged with the repository layer.

These are read-only views of a persisted Application and its related
parties. The proposal core consumes them; it never writes them back.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PartyRef(BaseModel):
    """Display summary of a related candidate, recruiter or company."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str | None = None
    email: str | None = None


class JobRef(BaseModel):
    """Display summary of the job an application targets."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    title: str | None = None
    location: str | None = None


class OwnerIds(BaseModel):
    """The party identifiers that own an Application, one per role."""

    model_config = ConfigDict(frozen=True)

    recruiter_id: str | None = None
    candidate_id: str | None = None
    company_id: str | None = None


class ApplicationRecord(BaseModel):
    """Snapshot of one Application as returned by the repository."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    stage: str
    recruiter_id: str | None = None
    candidate_id: str | None = None
    company_id: str | None = None
    job_id: str | None = None
    action_due_date: datetime | None = None
    expires_at: datetime | None = None
    recruiter_notes: str | None = None
    response_notes: str | None = None
    responded_at: datetime | None = None
    candidate: PartyRef | None = None
    recruiter: PartyRef | None = None
    company: PartyRef | None = None
    job: JobRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def owners(self) -> OwnerIds:
        return OwnerIds(
            recruiter_id=self.recruiter_id,
            candidate_id=self.candidate_id,
            company_id=self.company_id,
        )


SortField = Literal["created_at", "updated_at", "action_due_date"]


class ApplicationQuery(BaseModel):
    """Filter/paging request passed to ``find_applications_paginated``."""

    recruiter_id: str | None = None
    company_id: str | None = None
    candidate_id: str | None = None
    job_id: str | None = None
    stages: frozenset[str] | None = None
    search: str | None = None
    created_after: datetime | None = None
    created_before: datetime | None = None
    sort_by: SortField = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=25, ge=1)


class ApplicationPage(BaseModel):
    """One page of Application snapshots plus the unfiltered scope count."""

    data: list[ApplicationRecord]
    total: int
    page: int
    limit: int
    total_pages: int
