"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from babybot.api import create_fastapi_app
from babybot.api.routes import control
from babybot.app import Application
from babybot.dialogs.user_details import NAME_TEXT


def _payload(text=None, type="message", **extra):
    payload = {
        "type": type,
        "conversationId": "conv1",
        "fromId": "user1",
        "recipientId": "bot",
    }
    if text is not None:
        payload["text"] = text
    payload.update(extra)
    return payload


@pytest.fixture
def client():
    application = Application(db_path=":memory:", questions_path="")
    with TestClient(create_fastapi_app(application)) as test_client:
        yield test_client


class TestMessagesEndpoint:
    def test_echo(self, client):
        response = client.post("/api/messages", json=_payload("hello"))

        assert response.status_code == 200
        assert response.json() == {"replies": [{"type": "message", "text": "You said hello."}]}

    def test_trigger_starts_flow(self, client):
        response = client.post("/api/messages", json=_payload("Hallo"))

        assert response.json()["replies"][0]["text"] == NAME_TEXT

    def test_members_added(self, client):
        response = client.post(
            "/api/messages",
            json=_payload(type="conversationUpdate", membersAdded=["user1", "user2", "bot"]),
        )

        assert len(response.json()["replies"]) == 2

    def test_other_event(self, client):
        response = client.post("/api/messages", json=_payload(type="typing"))

        assert response.json()["replies"] == [{"type": "message", "text": "typing event detected"}]

    def test_missing_fields_rejected(self, client):
        response = client.post("/api/messages", json={"type": "message", "text": "hi"})

        assert response.status_code == 422


class TestObservabilityEndpoints:
    def test_trace_events(self, client):
        client.post("/api/messages", json=_payload("hello"))

        response = client.get("/api/trace-events", params={"event_type": "echo_sent"})

        assert response.status_code == 200
        events = response.json()
        assert len(events) == 1
        assert events[0]["data"]["text"] == "hello"

    def test_invalid_after(self, client):
        response = client.get("/api/trace-events", params={"after": "yesterday"})

        assert response.status_code == 400

    def test_transcript(self, client):
        client.post("/api/messages", json=_payload("hello"))

        response = client.get("/api/conversations/conv1/messages")

        assert [m["content"] for m in response.json()] == ["hello", "You said hello."]


class TestControlEndpoints:
    def test_reset(self, client):
        client.post("/api/messages", json=_payload("Hallo"))

        assert client.post("/api/control/reset").json() == {"status": "ok"}
        assert client.get("/api/conversations/conv1/messages").json() == []

    def test_sim_not_configured(self, client):
        control.set_sim_instance(None)
        assert client.post("/api/control/sim/start").status_code == 404
        assert client.post("/api/control/sim/stop").status_code == 404
