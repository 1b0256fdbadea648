"""Tests for economic code CRUD and soft deletion."""

from __future__ import annotations

import pytest


def test_new_code_starts_with_nothing_distributed(client) -> None:
    response = client.post(
        "/economicCodes",
        json={"economicCode": "3111101", "totalBudget": 5000, "distributedBudget": 4000},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["distributedBudget"] == 0
    assert body["remainingBudget"] == pytest.approx(5000)
    assert body["active"] is True


def test_duplicate_code_is_a_conflict(client, make_code) -> None:
    make_code("EC-1")

    response = client.post("/economicCodes", json={"economicCode": "EC-1", "totalBudget": 1})

    assert response.status_code == 409


def test_negative_total_is_rejected(client) -> None:
    response = client.post("/economicCodes", json={"economicCode": "EC-X", "totalBudget": -1})

    assert response.status_code == 400


def test_get_unknown_code_is_not_found(client) -> None:
    response = client.get("/economicCodes/missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Economic Code not found"}


def test_total_cannot_drop_below_distributed(client, make_code, distribute) -> None:
    make_code("EC-1", total=1000)
    distribute(600)

    too_low = client.put("/economicCodes/EC-1", json={"totalBudget": 500})
    ok = client.put("/economicCodes/EC-1", json={"totalBudget": 600, "description": "Pay"})

    assert too_low.status_code == 400
    assert ok.status_code == 200
    assert ok.json()["totalBudget"] == pytest.approx(600)
    assert ok.json()["remainingBudget"] == pytest.approx(0)
    assert ok.json()["description"] == "Pay"


def test_soft_delete_hides_code_but_keeps_distributions(client, make_code, distribute) -> None:
    make_code("EC-1", total=1000)
    assert distribute(100).status_code == 201

    first = client.delete("/economicCodes/EC-1")
    second = client.delete("/economicCodes/EC-1")

    assert first.json() == {"deletedCount": 1}
    assert second.json() == {"deletedCount": 0}
    assert client.get("/economicCodes").json() == []
    listed = client.get("/economicCodes", params={"includeInactive": "true"}).json()
    assert [c["active"] for c in listed] == [False]
    assert client.get("/economicCodes/EC-1").json()["active"] is False
    assert len(client.get("/budgetDistributions").json()) == 1
    assert distribute(100).status_code == 404


def test_delete_unknown_code_is_not_found(client) -> None:
    assert client.delete("/economicCodes/nope").status_code == 404
