"""Tests for the webhook server."""
from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient
from loguru import logger

from core.config import Settings
from server.app import WorkflowDispatcher, create_app


@pytest.fixture
def app():
    return create_app(Settings(webhook_path="custom-webhook", max_payload_bytes=256))


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "webhook_path": "custom-webhook"}


class TestWebhook:
    """Webhook route wired to the Custom Trigger."""

    def test_post_triggers_workflow(self, app, client: TestClient) -> None:
        response = client.post("/webhook/custom-webhook", json={"name": "ada", "password": "x"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        runs = app.state.dispatcher.runs
        assert len(runs) == 1
        assert runs[0][0][0].json == {"name": "ada", "password": "x"}

    def test_get_not_allowed(self, app, client: TestClient) -> None:
        response = client.get("/webhook/custom-webhook")

        assert response.status_code == 405
        assert response.text == "Method Not Allowed"
        assert len(app.state.dispatcher.runs) == 0

    def test_unknown_path(self, client: TestClient) -> None:
        assert client.post("/webhook/other", json={}).status_code == 404

    def test_payload_too_large(self, client: TestClient) -> None:
        response = client.post("/webhook/custom-webhook", json={"blob": "x" * 512})
        assert response.status_code == 413

    def test_non_json_body(self, client: TestClient) -> None:
        response = client.post(
            "/webhook/custom-webhook",
            content=b"not json",
            headers={"Content-Type": "text/plain"},
        )
        assert response.status_code == 400

    def test_empty_post_body(self, app, client: TestClient) -> None:
        response = client.post("/webhook/custom-webhook")
        assert response.status_code == 200
        assert app.state.dispatcher.runs[0][0][0].json == {"body": None}

    def test_rejected_method_is_audited(self, client: TestClient) -> None:
        events = []
        sink_id = logger.add(
            lambda message: events.append(json.loads(message.record["message"])),
            filter=lambda record: record["extra"].get("audit"),
        )
        try:
            client.put("/webhook/custom-webhook", json={"a": 1})
        finally:
            logger.remove(sink_id)

        assert [event["event"] for event in events] == ["webhook_rejected"]
        assert events[0]["status"] == "rejected"
        assert events[0]["details"] == {"method": "PUT", "statusCode": 405}


class TestDispatcherHistory:
    """Trigger runs are kept in a bounded buffer."""

    def test_only_latest_runs_kept(self) -> None:
        app = create_app(Settings(dispatch_history=3))
        client = TestClient(app)
        for n in range(5):
            assert client.post("/webhook/custom-webhook", json={"n": n}).status_code == 200

        runs = app.state.dispatcher.runs
        assert len(runs) == 3
        assert [run[0][0].json["n"] for run in runs] == [2, 3, 4]

    def test_history_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="history must be positive"):
            WorkflowDispatcher(0)


class TestValidateFields:
    """Validation tool endpoint."""

    def test_annotate(self, client: TestClient) -> None:
        response = client.post(
            "/tools/validate_fields",
            json={
                "fields": [
                    {"name": "colour", "validationType": "enum", "stringData": "red",
                     "enumValues": "red, green, blue"},
                ],
                "items": [{"json": {"id": 3}}],
            },
        )
        assert response.status_code == 200
        assert response.json() == {"items": [{"json": {"id": 3, "isValid": True}}]}

    def test_gate_failure_is_422(self, client: TestClient) -> None:
        response = client.post(
            "/tools/validate_fields",
            json={
                "mode": "output-items",
                "fields": [{"name": "title", "validationType": "string", "required": True}],
            },
        )
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["message"] == "Item failed validation. title: String cannot be empty"
        assert detail["itemIndex"] == 0

    def test_gate_pass_through(self, client: TestClient) -> None:
        response = client.post(
            "/tools/validate_fields",
            json={"mode": "output-items", "fields": [], "items": [{"a": 1}]},
        )
        assert response.status_code == 200
        assert response.json() == {"items": [{"json": {"a": 1}}]}
