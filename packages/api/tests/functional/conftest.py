# This project was developed with assistance from AI tools.
"""Fixtures for functional tests.

The real app from ``src.main`` is a module singleton. ``_clean_overrides``
ensures dependency_overrides are cleared after every test so persona
configuration from one test never leaks into the next.
"""

import pytest
from fastapi.testclient import TestClient

from src.main import app as real_app
from src.routes import proposals as proposals_route
from src.schemas.auth import UserContext
from src.services.repository import ApplicationRepository

from .data_factory import FUNCTIONAL_NOW, make_repository
from .mock_db import configure_app_for_persona


@pytest.fixture(autouse=True)
def _clean_overrides():
    """Clear app dependency overrides after each test."""
    yield
    real_app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _fixed_clock(monkeypatch):
    """Evaluate urgency against the portfolio's reference time."""
    monkeypatch.setattr(proposals_route, "_now", lambda: FUNCTIONAL_NOW)


@pytest.fixture
def app():
    """Return the real FastAPI app with all routers mounted."""
    return real_app


@pytest.fixture
def repository():
    """Portfolio repository shared by every client in one test."""
    return make_repository()


@pytest.fixture
def make_client(app, repository):
    """Factory fixture: configure persona + repository, return TestClient.

    Clients built in the same test share one repository, so a write by one
    persona is visible to the next.
    """

    def _make(user: UserContext, repo: ApplicationRepository | None = None) -> TestClient:
        configure_app_for_persona(app, user, repo or repository)
        return TestClient(app)

    return _make
