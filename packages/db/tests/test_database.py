# This project was developed with assistance from AI tools.
"""Schema and enum tests for the db package (no running database needed)."""

import pytest

from db import Base, DatabaseService
from db.enums import ApplicationStage, UserRole


def test_metadata_registers_all_tables():
    """Importing db registers every model on the shared metadata."""
    assert set(Base.metadata.tables) == {
        "candidates",
        "recruiters",
        "companies",
        "jobs",
        "applications",
        "application_stage_transitions",
    }


def test_application_stage_is_plain_text():
    """Unknown stage values must load; classification rejects them later."""
    column = Base.metadata.tables["applications"].c.stage
    assert column.type.length == 50
    assert not hasattr(column.type, "enums")


def test_transition_rows_cascade_with_application():
    column = Base.metadata.tables["application_stage_transitions"].c.application_id
    fk = next(iter(column.foreign_keys))
    assert fk.column.table.name == "applications"
    assert fk.ondelete == "CASCADE"


def test_every_non_terminal_stage_has_response_transitions():
    transitions = ApplicationStage.response_transitions()
    terminal = ApplicationStage.terminal_stages()
    assert set(transitions) | terminal == set(ApplicationStage)
    assert not set(transitions) & terminal


@pytest.mark.parametrize("stage", list(ApplicationStage.response_transitions()))
def test_decline_always_ends_in_terminal_stage(stage):
    _, decline_to = ApplicationStage.response_transitions()[stage]
    assert decline_to in ApplicationStage.terminal_stages()


def test_user_roles():
    assert {r.value for r in UserRole} == {"admin", "candidate", "recruiter", "company"}


@pytest.mark.asyncio
async def test_database_service_is_lazy():
    """Constructing the service builds an engine but does not connect."""
    service = DatabaseService("postgresql+asyncpg://u:p@localhost:1/none", pool_size=2)
    assert service.engine.url.database == "none"
    assert service.session_factory.kw["expire_on_commit"] is False
    await service.dispose()
