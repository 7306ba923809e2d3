from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from supportcenter.core.config import get_settings
from supportcenter.dependencies import tickets as ticket_deps
from supportcenter.main import create_app
from supportcenter.tickets.memory import InMemoryTicketStore
from supportcenter.tickets.service import TicketManager


@pytest.fixture
def ticket_client():
    app = create_app()
    manager = TicketManager(InMemoryTicketStore())

    async def override_manager():
        return manager

    app.dependency_overrides[ticket_deps.get_ticket_manager] = override_manager
    client = TestClient(app)
    try:
        yield client, manager
    finally:
        app.dependency_overrides.clear()


def _create(client: TestClient, text: str = "Cannot print", **extra) -> dict:
    response = client.post("/tickets", json={"account_id": 4, "text": text, **extra})
    assert response.status_code == 201
    return response.json()


def test_ping_returns_ok():
    client = TestClient(create_app())

    response = client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_ticket_endpoint_returns_created(ticket_client):
    client, _ = ticket_client

    body = _create(client, device_name="PRN-7")

    assert body["number"] == 1
    assert body["state"] == "open"
    assert body["account_id"] == 4
    assert body["is_hardware"] is True
    assert body["responses"] == []


def test_create_ticket_endpoint_rejects_long_text(ticket_client):
    client, _ = ticket_client

    response = client.post("/tickets", json={"account_id": 4, "text": "x" * 101})

    assert response.status_code == 422
    assert "at most 100 characters" in response.json()["detail"]


def test_get_ticket_endpoint_maps_errors(ticket_client):
    client, _ = ticket_client

    assert client.get("/tickets/1").status_code == 404
    assert client.get("/tickets/-1").status_code == 400


def test_list_tickets_endpoint_includes_responses(ticket_client):
    client, _ = ticket_client
    ticket = _create(client)
    client.post(f"/tickets/{ticket['number']}/responses", json={"text": "Which model?"})

    response = client.get("/tickets")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["state"] == "answered"
    assert body[0]["responses"][0]["text"] == "Which model?"


def test_update_ticket_endpoint_replaces_fields(ticket_client):
    client, _ = ticket_client
    ticket = _create(client)

    response = client.put(
        f"/tickets/{ticket['number']}",
        json={"account_id": 5, "text": "Cannot print in colour", "state": "closed"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["text"] == "Cannot print in colour"
    assert body["state"] == "closed"
    assert body["date_opened"] == ticket["date_opened"]
    assert client.get(f"/tickets/{ticket['number']}").json()["account_id"] == 5


def test_update_ticket_endpoint_maps_errors(ticket_client):
    client, _ = ticket_client
    ticket = _create(client)
    payload = {"account_id": 5, "text": "", "state": "open"}

    assert client.put(f"/tickets/{ticket['number']}", json=payload).status_code == 422
    payload["text"] = "Fine"
    assert client.put("/tickets/77", json=payload).status_code == 404


def test_delete_ticket_endpoint(ticket_client):
    client, _ = ticket_client
    ticket = _create(client)

    assert client.delete(f"/tickets/{ticket['number']}").status_code == 204
    assert client.delete(f"/tickets/{ticket['number']}").status_code == 404


def test_ticket_responses_endpoint_returns_no_content_when_empty(ticket_client):
    client, _ = ticket_client
    ticket = _create(client)

    assert client.get(f"/tickets/{ticket['number']}/responses").status_code == 204
    assert client.get("/tickets/404/responses").status_code == 204


def test_create_ticket_response_endpoint_updates_state(ticket_client):
    client, _ = ticket_client
    ticket = _create(client)

    response = client.post(
        f"/tickets/{ticket['number']}/responses",
        json={"text": "It works again", "is_client_response": True},
    )

    assert response.status_code == 201
    assert response.json()["is_client_response"] is True
    listed = client.get(f"/tickets/{ticket['number']}/responses")
    assert listed.status_code == 200
    assert [item["text"] for item in listed.json()] == ["It works again"]
    assert client.get(f"/tickets/{ticket['number']}").json()["state"] == "client_answer"


def test_create_ticket_response_endpoint_maps_errors(ticket_client):
    client, _ = ticket_client
    ticket = _create(client)

    assert client.post(f"/tickets/{ticket['number']}/responses", json={"text": ""}).status_code == 422
    assert client.post("/tickets/0/responses", json={"text": "Some response"}).status_code == 404


def test_close_ticket_endpoint(ticket_client):
    client, _ = ticket_client
    ticket = _create(client)

    assert client.post(f"/tickets/{ticket['number']}/close").status_code == 204
    assert client.get(f"/tickets/{ticket['number']}").json()["state"] == "closed"
    assert client.post("/tickets/99/close").status_code == 404


def test_routes_call_manager_operations():
    app = create_app()
    manager = AsyncMock()
    manager.get_ticket_responses = AsyncMock(return_value=[])

    async def override_manager():
        return manager

    app.dependency_overrides[ticket_deps.get_ticket_manager] = override_manager
    client = TestClient(app)

    client.delete("/tickets/6")
    client.get("/tickets/5/responses")
    client.post("/tickets/3/close")

    manager.remove_ticket.assert_awaited_once_with(6)
    manager.get_ticket_responses.assert_awaited_once_with(5)
    manager.close_ticket.assert_awaited_once_with(3)


def test_missing_manager_returns_service_unavailable():
    client = TestClient(create_app())

    response = client.get("/tickets")

    assert response.status_code == 503


def test_lifespan_wires_in_memory_manager_with_demo_data(monkeypatch):
    monkeypatch.setenv("SUPPORTCENTER_SEED_DEMO_DATA", "true")
    monkeypatch.delenv("SUPPORTCENTER_DATABASE_URL", raising=False)
    get_settings.cache_clear()
    try:
        with TestClient(create_app()) as client:
            tickets = client.get("/tickets").json()
    finally:
        get_settings.cache_clear()

    assert len(tickets) == 3
    assert tickets[2]["device_name"] == "PC-123456"
