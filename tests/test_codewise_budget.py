"""Tests for the per-upazila allocation ledger."""

from __future__ import annotations

import pytest


def _post(client, allocations, upazila_id="27", upazila_name="Savar"):
    return client.post(
        "/upazilaCodewiseBudget",
        json={"upazilaId": upazila_id, "upazilaName": upazila_name, "allocations": allocations},
    )


def _amounts(body: dict) -> dict[str, float]:
    return {a["economicCode"]: a["amount"] for a in body["allocations"]}


def test_first_post_creates_the_ledger(client) -> None:
    response = _post(client, [{"economicCode": "A", "amount": 100}])

    assert response.status_code == 200
    body = response.json()
    assert body["upazilaId"] == "27"
    assert body["upazilaName"] == "Savar"
    assert _amounts(body) == {"A": 100}


def test_repeated_posts_increment_and_append(client) -> None:
    _post(client, [{"economicCode": "A", "amount": 100}])
    _post(client, [{"economicCode": "A", "amount": 50}, {"economicCode": "B", "amount": 20}])
    response = _post(client, [{"economicCode": "B", "amount": 5}])

    body = response.json()
    assert [a["economicCode"] for a in body["allocations"]] == ["A", "B"]
    assert _amounts(body) == pytest.approx({"A": 150, "B": 25})
    assert len(client.get("/upazilaCodewiseBudget").json()) == 1


def test_codes_repeated_in_one_request_are_summed(client) -> None:
    response = _post(
        client,
        [{"economicCode": "A", "amount": 10}, {"economicCode": "A", "amount": 15}],
    )

    assert response.json()["allocations"] == [{"economicCode": "A", "amount": 25}]


def test_ledgers_are_kept_per_upazila(client) -> None:
    _post(client, [{"economicCode": "A", "amount": 1}], upazila_id="1", upazila_name="One")
    _post(client, [{"economicCode": "A", "amount": 2}], upazila_id="2", upazila_name="Two")

    one = client.get("/upazilaCodewiseBudget/1").json()
    two = client.get("/upazilaCodewiseBudget/2").json()

    assert _amounts(one) == {"A": 1}
    assert _amounts(two) == {"A": 2}


@pytest.mark.parametrize(
    "payload",
    [
        {"upazilaName": "Savar", "allocations": [{"economicCode": "A", "amount": 1}]},
        {"upazilaId": "27", "allocations": [{"economicCode": "A", "amount": 1}]},
        {"upazilaId": "27", "upazilaName": "Savar", "allocations": []},
        {"upazilaId": "27", "upazilaName": "Savar", "allocations": [{"economicCode": "A", "amount": 0}]},
    ],
)
def test_incomplete_payload_is_rejected(client, payload) -> None:
    response = client.post("/upazilaCodewiseBudget", json=payload)

    assert response.status_code == 400
    assert "error" in response.json()
    assert client.get("/upazilaCodewiseBudget").json() == []


def test_unknown_upazila_is_not_found(client) -> None:
    response = client.get("/upazilaCodewiseBudget/404")

    assert response.status_code == 404


def test_cent_increments_accumulate_exactly(client) -> None:
    _post(client, [{"economicCode": "A", "amount": 0.1}])
    response = _post(client, [{"economicCode": "A", "amount": 0.2}])

    assert response.json()["allocations"] == [{"economicCode": "A", "amount": 0.3}]
