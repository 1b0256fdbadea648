"""Tests for the append-only message log."""

from __future__ import annotations

from datetime import datetime


def test_message_is_stamped_by_server(client) -> None:
    response = client.post(
        "/messages",
        json={"text": "Budget released", "createdAt": "1999-01-01T00:00:00"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["payload"] == {"text": "Budget released"}
    assert datetime.fromisoformat(body["createdAt"]).year != 1999


def test_messages_are_listed_newest_first(client) -> None:
    first = client.post("/messages", json={"n": 1}).json()
    second = client.post("/messages", json={"n": 2}).json()

    listed = [m["id"] for m in client.get("/messages").json()]

    assert listed == [second["id"], first["id"]]
    assert client.get(f"/messages/{first['id']}").json()["payload"] == {"n": 1}


def test_empty_payload_is_rejected(client) -> None:
    assert client.post("/messages", json={}).status_code == 400


def test_unknown_message_is_not_found(client) -> None:
    response = client.get("/messages/7")

    assert response.status_code == 404
    assert response.json() == {"error": "Message 7 not found"}
