"""
Pytest fixtures for the Budget Ledger test suite.

Every test gets a fresh application bound to its own in-memory SQLite
database, so tests never see each other's rows.
"""

from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from budget_ledger.config import Settings
from budget_ledger.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        LOG_LEVEL="WARNING",
        CORS_ORIGINS=["http://testserver"],
        MAX_UPLOAD_BYTES=64 * 1024,
    )


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client: TestClient) -> Generator[Session, None, None]:
    """A session on the same database the client's requests use."""
    session = client.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_code(client: TestClient) -> Callable[..., dict]:
    """Create an economic code through the API and return its JSON."""

    def _make(code: str = "EC-1", total: float = 1000.0, description: str | None = None) -> dict:
        response = client.post(
            "/economicCodes",
            json={"economicCode": code, "totalBudget": total, "description": description},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def distribute(client: TestClient) -> Callable[..., object]:
    """Post a distribution and return the raw response."""

    def _distribute(amount: float, code: str = "EC-1", upazila: str = "27", **extra: object):
        body = {"upazilaId": upazila, "economicCode": code, "distributedBudget": amount}
        body.update(extra)
        return client.post("/budgetDistributions", json=body)

    return _distribute
