from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from mirror_live.server import SETTINGS, app

pytestmark = pytest.mark.skipif(
    bool(SETTINGS.bridge.token or SETTINGS.live.api_key),
    reason="bridge tests expect an open bridge and no configured API key",
)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_health_endpoints(client: TestClient) -> None:
    for path in ("/", "/health", "/healthz"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


def test_session_snapshot_before_start(client: TestClient) -> None:
    response = client.get("/session")
    assert response.json() == {"state": "uninitialized", "recording": False, "connection_open": False}


def test_bridge_ping_and_invalid_messages(client: TestClient) -> None:
    with client.websocket_connect(SETTINGS.bridge.endpoint_path) as ws:
        ws.send_text('{"type": "ping", "request_id": "r1"}')
        pong = ws.receive_json()
        assert pong["type"] == "pong"
        assert pong["request_id"] == "r1"

        ws.send_text("not json")
        assert ws.receive_json()["payload"]["code"] == "invalid_message"

        ws.send_text('{"type": "dance"}')
        assert ws.receive_json()["payload"]["code"] == "invalid_message"

        ws.send_text('{"type": "send_text", "payload": {"text": "hi"}}')
        assert ws.receive_json()["payload"]["code"] == "connection_error"


def test_start_without_key_broadcasts_config_error(client: TestClient) -> None:
    with client.websocket_connect(SETTINGS.bridge.endpoint_path) as ws:
        ws.send_text('{"type": "start", "payload": {"api_key": ""}}')
        message = ws.receive_json()
        assert message["type"] == "error"
        assert message["payload"]["code"] == "config_error"
