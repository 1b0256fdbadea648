"""Tests for the upazila directory."""

from __future__ import annotations


def test_full_field_office_code_is_concatenated(client) -> None:
    response = client.post(
        "/upazila",
        json={
            "name": "Savar",
            "district": "Dhaka",
            "instituteCode": "1234",
            "fieldOfficeCode": "56",
        },
    )

    assert response.status_code == 201
    assert response.json()["fullFieldOfficeCode"] == "123456"


def test_client_cannot_override_full_code(client) -> None:
    response = client.post(
        "/upazila",
        json={
            "name": "Dhamrai",
            "instituteCode": "12",
            "fieldOfficeCode": "34",
            "fullFieldOfficeCode": "999",
        },
    )

    assert response.json()["fullFieldOfficeCode"] == "1234"


def test_list_is_ordered_by_name(client) -> None:
    for name in ("Savar", "Dhamrai", "Keraniganj"):
        client.post(
            "/upazila", json={"name": name, "instituteCode": "1", "fieldOfficeCode": "2"}
        )

    names = [u["name"] for u in client.get("/upazila").json()]

    assert names == ["Dhamrai", "Keraniganj", "Savar"]


def test_missing_codes_are_rejected(client) -> None:
    response = client.post("/upazila", json={"name": "Savar"})

    assert response.status_code == 400
    assert "instituteCode" in response.json()["error"]
