"""Tests for balance-checked budget distribution."""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from budget_ledger.models.economic_code import EconomicCode
from budget_ledger.schemas.budget_distribution import DistributionCreate
from budget_ledger.services import distribution_service, economic_code_service


def _code(client, code="EC-1") -> dict:
    return client.get(f"/economicCodes/{code}").json()


def test_distributions_fill_the_budget_exactly(client, make_code, distribute) -> None:
    """1000 cap: 600 accepted, 500 refused (only 400 left), 400 accepted."""
    make_code("EC-1", total=1000)

    first = distribute(600)
    assert first.status_code == 201
    assert _code(client)["distributedBudget"] == pytest.approx(600)

    second = distribute(500)
    assert second.status_code == 400
    assert second.json()["error"].startswith("Distributed amount exceeds available budget")
    assert "remaining 400.00" in second.json()["error"]
    assert _code(client)["distributedBudget"] == pytest.approx(600)

    third = distribute(400)
    assert third.status_code == 201
    assert _code(client)["distributedBudget"] == pytest.approx(1000)
    assert _code(client)["remainingBudget"] == pytest.approx(0)


def test_distributed_total_equals_sum_of_accepted(client, make_code, distribute) -> None:
    make_code("EC-1", total=250)
    accepted = []
    for amount in (100, 80, 90, 50, 20, 5):
        if distribute(amount).status_code == 201:
            accepted.append(amount)

    rows = client.get("/budgetDistributions", params={"economicCode": "EC-1"}).json()

    assert accepted == [100, 80, 50, 20]
    assert sum(r["distributedBudget"] for r in rows) == pytest.approx(sum(accepted))
    assert _code(client)["distributedBudget"] == pytest.approx(sum(accepted))
    assert _code(client)["distributedBudget"] <= _code(client)["totalBudget"]


@pytest.mark.parametrize("amount", [0, -10])
def test_non_positive_amount_is_rejected(client, make_code, distribute, amount) -> None:
    make_code("EC-1", total=1000)

    response = distribute(amount)

    assert response.status_code == 400
    assert "distributedBudget" in response.json()["error"]
    assert _code(client)["distributedBudget"] == 0


def test_unknown_code_is_not_found(client, distribute) -> None:
    response = distribute(10, code="missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Economic Code not found"}


def test_distribution_record_echoes_request(client, make_code, distribute) -> None:
    make_code("EC-1", total=1000)

    response = distribute(250, upazila="27", upazilaName="Savar", userId="uid-7")

    body = response.json()
    assert body["upazilaId"] == "27"
    assert body["upazilaName"] == "Savar"
    assert body["userId"] == "uid-7"
    assert body["expenseBudget"] == 0
    assert client.get(f"/budgetDistributions/{body['id']}").json()["id"] == body["id"]


def test_numeric_upazila_id_is_accepted(client, make_code) -> None:
    make_code("EC-1", total=1000)

    response = client.post(
        "/budgetDistributions",
        json={"upazilaId": 27, "economicCode": "EC-1", "distributedBudget": 1},
    )

    assert response.status_code == 201
    assert response.json()["upazilaId"] == "27"


def test_reused_serial_code_is_a_conflict_and_rolls_back(client, make_code, distribute) -> None:
    make_code("EC-1", total=1000)
    assert distribute(100, serialCode="S-1").status_code == 201

    response = distribute(100, serialCode="S-1")

    assert response.status_code == 409
    assert _code(client)["distributedBudget"] == pytest.approx(100)


def test_filter_by_upazila(client, make_code, distribute) -> None:
    make_code("EC-1", total=1000)
    distribute(10, upazila="1")
    distribute(20, upazila="2")

    rows = client.get("/budgetDistributions", params={"upazilaId": "2"}).json()

    assert [r["distributedBudget"] for r in rows] == [20]


def test_missing_distribution_is_not_found(client) -> None:
    assert client.get("/budgetDistributions/99").status_code == 404


def test_reserve_budget_refuses_overflow_without_side_effects(client, make_code, db) -> None:
    make_code("EC-1", total=100)
    code = db.query(EconomicCode).filter_by(economic_code="EC-1").one()

    assert economic_code_service.reserve_budget(db, code.id, Decimal("70")) is True
    assert economic_code_service.reserve_budget(db, code.id, Decimal("40")) is False
    db.commit()
    db.refresh(code)

    assert float(code.distributed_budget) == pytest.approx(70)


def test_cents_that_exactly_fill_the_budget_are_accepted(client, make_code, distribute) -> None:
    make_code("EC-1", total=0.3)

    assert distribute(0.1).status_code == 201
    last = distribute(0.2)

    assert last.status_code == 201, last.text
    assert _code(client)["remainingBudget"] == 0
    assert distribute(0.01).status_code == 400


def test_many_small_cents_add_up_exactly(client, make_code, distribute) -> None:
    make_code("EC-1", total=1)

    statuses = [distribute(0.1).status_code for _ in range(10)]

    assert statuses == [201] * 10
    assert _code(client)["distributedBudget"] == 1


@pytest.mark.parametrize("amount", [0.004, 12.345])
def test_sub_cent_amount_is_rejected(client, make_code, distribute, amount) -> None:
    make_code("EC-1", total=1000)

    response = distribute(amount)

    assert response.status_code == 400
    assert "distributedBudget" in response.json()["error"]
    assert client.get("/budgetDistributions").json() == []
    assert _code(client)["distributedBudget"] == 0


def test_integrity_error_without_serial_clash_is_not_a_conflict(client, make_code, db) -> None:
    make_code("EC-1", total=1000)
    # bypasses schema validation so the row fails its positive-amount check
    data = DistributionCreate.model_construct(
        upazila_id="27",
        upazila_name=None,
        user_id=None,
        economic_code="EC-1",
        distributed_budget=Decimal("0"),
        serial_code=None,
    )

    with pytest.raises(IntegrityError):
        distribution_service.create_distribution(db, data)

    assert _code(client)["distributedBudget"] == 0
