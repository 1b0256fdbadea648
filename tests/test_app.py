"""Tests for the application shell: root, health and the error envelope."""

from __future__ import annotations

from fastapi.testclient import TestClient

from budget_ledger.main import create_app


def test_root_reports_running(client) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == "Budget Ledger Server is Running!"


def test_health_reports_database(client) -> None:
    response = client.get("/health")

    assert response.json() == {"status": "ok", "app": "Budget Ledger", "database": "ok"}


def test_unknown_route_uses_error_envelope(client) -> None:
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert set(response.json()) == {"error"}


def test_malformed_json_is_a_400(client) -> None:
    response = client.post(
        "/economicCodes", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_engine_is_disposed_and_recreated_per_lifespan(settings) -> None:
    app = create_app(settings)

    with TestClient(app) as first:
        first.post("/economicCodes", json={"economicCode": "EC-1", "totalBudget": 1})
        engine = app.state.engine

    with TestClient(app) as second:
        assert app.state.engine is not engine
        assert second.get("/health").json()["database"] == "ok"
