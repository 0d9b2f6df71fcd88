# This project was developed with assistance from AI tools.
"""Integration test fixtures -- real PostgreSQL, no mocks.

A session-scoped container (started once per test run) provides a real
PostgreSQL instance. Function-scoped fixtures give each test an isolated DB
session with savepoint rollback so tests don't leak state.
"""

import asyncio
from collections import namedtuple
from datetime import UTC, datetime, timedelta

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from testcontainers.postgres import PostgresContainer

# ---------------------------------------------------------------------------
# Mark all tests in this directory as integration
# ---------------------------------------------------------------------------
pytestmark = pytest.mark.integration

SEED_NOW = datetime(2026, 3, 2, 9, 0, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Session-scoped: container + engine + schema
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_container():
    """Start postgres:16-alpine via testcontainers."""
    with PostgresContainer(
        image="postgres:16-alpine",
        username="test",
        password="test",
        dbname="test",
    ) as pg:
        yield pg


@pytest.fixture(scope="session")
def db_url(pg_container):
    """Async DB URL for asyncpg."""
    host = pg_container.get_container_host_ip()
    port = pg_container.get_exposed_port(5432)
    return f"postgresql+asyncpg://test:test@{host}:{port}/test"


@pytest.fixture(scope="session", autouse=True)
def _create_schema(db_url):
    """Create every table once for the test run."""
    from db import DatabaseService

    async def _create():
        service = DatabaseService(db_url)
        try:
            await service.create_all()
        finally:
            await service.dispose()

    asyncio.run(_create())


@pytest.fixture(scope="session")
def async_engine(db_url, _create_schema):
    """Create an async engine pointing at the test container."""
    engine = create_async_engine(db_url, echo=False, poolclass=NullPool)
    yield engine


# ---------------------------------------------------------------------------
# Function-scoped: per-test session with savepoint rollback
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session(async_engine):
    """Per-test DB session with savepoint rollback.

    ``commit()``/``rollback()`` inside the code under test only release or
    roll back a savepoint; the outer transaction is always rolled back.
    """
    conn = await async_engine.connect()
    txn = await conn.begin()
    session = AsyncSession(
        bind=conn, join_transaction_mode="create_savepoint", expire_on_commit=False
    )
    yield session
    await session.close()
    await txn.rollback()
    await conn.close()


@pytest.fixture
def client_factory(db_session):
    """Factory returning an async httpx client with dependency overrides."""
    from db import get_db

    from src.main import app
    from src.middleware.auth import get_current_user
    from src.routes import proposals as proposals_route

    original_now = proposals_route._now

    async def _make(user):
        async def _get_db():
            yield db_session

        async def _get_current_user(request=None):
            return user

        app.dependency_overrides[get_db] = _get_db
        app.dependency_overrides[get_current_user] = _get_current_user
        proposals_route._now = lambda: SEED_NOW
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        return httpx.AsyncClient(transport=transport, base_url="http://test")

    yield _make

    proposals_route._now = original_now
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seed data helper
# ---------------------------------------------------------------------------

SeedData = namedtuple(
    "SeedData",
    ["proposed", "submitted", "placed", "no_job", "other_recruiter"],
)


@pytest_asyncio.fixture
async def seed_data(db_session):
    """Create a small marketplace in the DB and commit it to the test savepoint."""
    from db.enums import ApplicationStage
    from db.models import Application, Candidate, Company, Job, Recruiter

    from tests.functional.personas import (
        ACME_COMPANY_ID,
        ADA_USER_ID,
        BEN_USER_ID,
        GLOBEX_COMPANY_ID,
        LINUS_USER_ID,
        ROSA_USER_ID,
    )

    db_session.add_all(
        [
            Candidate(id=ADA_USER_ID, full_name="Ada Okafor", email="ada@example.com"),
            Candidate(id=LINUS_USER_ID, full_name="Linus Berg", email="linus@example.com"),
            Recruiter(id=ROSA_USER_ID, name="Rosa Delgado"),
            Recruiter(id=BEN_USER_ID, name="Ben Sato"),
            Company(id=ACME_COMPANY_ID, name="Acme Robotics"),
            Company(id=GLOBEX_COMPANY_ID, name="Globex"),
        ]
    )
    await db_session.flush()
    db_session.add_all(
        [
            Job(id="job-acme-1", company_id=ACME_COMPANY_ID, title="Platform Engineer"),
            Job(id="job-globex-1", company_id=GLOBEX_COMPANY_ID, title="Data Scientist"),
        ]
    )
    await db_session.flush()

    def _app(app_id, stage, recruiter_id, candidate_id, company_id, job_id, age_days, **kw):
        created = SEED_NOW - timedelta(days=age_days)
        return Application(
            id=app_id,
            stage=stage.value,
            recruiter_id=recruiter_id,
            candidate_id=candidate_id,
            company_id=company_id,
            job_id=job_id,
            created_at=created,
            updated_at=created,
            **kw,
        )

    db_session.add_all(
        [
            _app(
                "int-proposed", ApplicationStage.RECRUITER_PROPOSED, ROSA_USER_ID,
                ADA_USER_ID, ACME_COMPANY_ID, "job-acme-1", 1,
                action_due_date=SEED_NOW + timedelta(hours=6),
                recruiter_notes="Strong platform background",
            ),
            _app(
                "int-submitted", ApplicationStage.SUBMITTED, ROSA_USER_ID,
                LINUS_USER_ID, ACME_COMPANY_ID, "job-acme-1", 3,
            ),
            _app(
                "int-placed", ApplicationStage.PLACED, ROSA_USER_ID,
                ADA_USER_ID, GLOBEX_COMPANY_ID, "job-globex-1", 30,
            ),
            # Job removed: an incomplete application that listing must skip
            _app(
                "int-no-job", ApplicationStage.SUBMITTED, ROSA_USER_ID,
                LINUS_USER_ID, GLOBEX_COMPANY_ID, None, 5,
            ),
            _app(
                "int-ben", ApplicationStage.SCREEN, BEN_USER_ID,
                LINUS_USER_ID, GLOBEX_COMPANY_ID, "job-globex-1", 2,
            ),
        ]
    )
    await db_session.commit()

    return SeedData(
        proposed="int-proposed",
        submitted="int-submitted",
        placed="int-placed",
        no_job="int-no-job",
        other_recruiter="int-ben",
    )
