# This project was developed with assistance from AI tools.
"""
Recruiting marketplace -- domain models

Hiring-pipeline records (applications) and the parties they link:
candidates, recruiters, companies and jobs, plus the stage transition
audit trail.
"""

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class Candidate(Base):
    """Candidate profile linked to an identity-provider user."""

    __tablename__ = "candidates"

    id = Column(String(36), primary_key=True, default=_uuid)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Candidate(id={self.id}, name='{self.full_name}')>"


class Recruiter(Base):
    """Recruiter profile."""

    __tablename__ = "recruiters"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Recruiter(id={self.id}, name='{self.name}')>"


class Company(Base):
    """Hiring company (organization)."""

    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    jobs = relationship("Job", back_populates="company")

    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}')>"


class Job(Base):
    """Open role posted by a company."""

    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=_uuid)
    company_id = Column(
        String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    company = relationship("Company", back_populates="jobs")

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}')>"


class Application(Base):
    """A candidate's pipeline record for one job.

    ``stage`` is stored as plain text so that a value written by another
    service and unknown to this one still loads; classification rejects it.
    """

    __tablename__ = "applications"
    __table_args__ = (
        Index("ix_applications_stage_updated", "stage", "updated_at"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    stage = Column(String(50), nullable=False, index=True)
    candidate_id = Column(
        String(36), ForeignKey("candidates.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    recruiter_id = Column(
        String(36), ForeignKey("recruiters.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    company_id = Column(
        String(36), ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    job_id = Column(
        String(36), ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True, index=True,
    )
    recruiter_notes = Column(Text, nullable=True)
    response_notes = Column(Text, nullable=True)
    action_due_date = Column(DateTime(timezone=True), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    candidate = relationship("Candidate")
    recruiter = relationship("Recruiter")
    company = relationship("Company")
    job = relationship("Job")
    stage_transitions = relationship(
        "ApplicationStageTransition", back_populates="application",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Application(id={self.id}, stage='{self.stage}')>"


class ApplicationStageTransition(Base):
    """Append-only record of every accept/decline stage change."""

    __tablename__ = "application_stage_transitions"

    id = Column(String(36), primary_key=True, default=_uuid)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    from_stage = Column(String(50), nullable=False)
    to_stage = Column(String(50), nullable=False)
    actor_id = Column(String(255), nullable=False)
    actor_role = Column(String(20), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    application = relationship("Application", back_populates="stage_transitions")

    def __repr__(self):
        return (
            f"<ApplicationStageTransition(app_id={self.application_id}, "
            f"{self.from_stage} -> {self.to_stage})>"
        )
