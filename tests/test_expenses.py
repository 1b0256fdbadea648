"""Tests for charging expenses against a user's distribution."""

from __future__ import annotations

import pytest


@pytest.fixture
def funded(make_code, distribute) -> dict:
    make_code("EC-1", total=1000)
    response = distribute(300, userId="uid-1")
    assert response.status_code == 201
    return response.json()


def _expense(client, amount, uid="uid-1", code="EC-1"):
    return client.post(
        "/expenses", json={"uid": uid, "economicCode": code, "expenseAmount": amount}
    )


def test_expense_reduces_remaining_balance(client, funded) -> None:
    response = _expense(client, 120)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Expense added successfully"
    assert body["distributionId"] == funded["id"]
    assert body["expenseBudget"] == pytest.approx(120)
    assert body["remainingBudget"] == pytest.approx(180)


def test_expense_cannot_exceed_distribution(client, funded) -> None:
    assert _expense(client, 200).status_code == 200

    refused = _expense(client, 101)
    exact = _expense(client, 100)

    assert refused.status_code == 400
    assert refused.json() == {"error": "Expense amount exceeds remaining budget"}
    assert exact.status_code == 200
    assert exact.json()["remainingBudget"] == pytest.approx(0)


def test_user_without_distribution_is_not_found(client, funded) -> None:
    assert _expense(client, 10, uid="someone-else").status_code == 404
    assert _expense(client, 10, code="EC-2").status_code == 404


def test_non_positive_expense_is_rejected(client, funded) -> None:
    assert _expense(client, 0).status_code == 400


def test_list_expenses_for_user(client, funded, distribute) -> None:
    distribute(50, userId="uid-2")
    _expense(client, 30)

    rows = client.get("/expenses/uid-1").json()

    assert len(rows) == 1
    assert rows[0]["expenseBudget"] == pytest.approx(30)
    assert client.get("/expenses/nobody").json() == []


def test_cents_that_exactly_use_up_a_distribution_are_accepted(client, make_code, distribute) -> None:
    make_code("EC-9", total=1)
    assert distribute(0.3, code="EC-9", userId="uid-9").status_code == 201

    first = _expense(client, 0.1, uid="uid-9", code="EC-9")
    second = _expense(client, 0.2, uid="uid-9", code="EC-9")

    assert first.status_code == 200
    assert second.status_code == 200, second.text
    assert second.json()["remainingBudget"] == 0
    assert _expense(client, 0.01, uid="uid-9", code="EC-9").status_code == 400


def test_sub_cent_expense_is_rejected(client, funded) -> None:
    response = _expense(client, 0.005)

    assert response.status_code == 400
    assert "expenseAmount" in response.json()["error"]
