from __future__ import annotations

import json
import asyncio

import orjson
import pytest

from mirror_live.state import RuntimeDeps
from mirror_live.audio.capture import AudioCapturePipeline
from mirror_live.state.session import Session, SessionState
from mirror_live.handlers.websocket.dispatch import HANDLERS
from mirror_live.realtime.controller import SessionController
from mirror_live.realtime.dispatcher import ResponseDispatcher
from mirror_live.handlers.connections import ConnectionManager
from mirror_live.handlers.websocket.auth import validate_token
from mirror_live.handlers.websocket.parser import parse_client_message

from tests.utils import (
    FakeSpawner,
    FakeLiveClient,
    FakeBridgeWebSocket,
    make_settings,
    wait_until,
)


def test_parse_client_message_ok() -> None:
    raw = json.dumps({"type": " start_recording ", "payload": {"duration_ms": 3000}, "request_id": "r1"})
    msg = parse_client_message(raw)
    assert msg["type"] == "start_recording"
    assert msg["payload"] == {"duration_ms": 3000}
    assert msg["request_id"] == "r1"


def test_parse_client_message_defaults() -> None:
    msg = parse_client_message('{"type": "stop"}')
    assert msg["payload"] == {}
    assert msg["request_id"] is None


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps([]),
        json.dumps({"payload": {}}),
        json.dumps({"type": ""}),
        json.dumps({"type": "start", "payload": []}),
        json.dumps({"type": "start", "request_id": 7}),
    ],
)
def test_parse_client_message_invalid(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_client_message(raw)


def test_validate_token() -> None:
    assert validate_token("anything", "") is True
    assert validate_token("secret", "secret") is True
    assert validate_token("wrong", "secret") is False
    assert validate_token("", "secret") is False


@pytest.mark.asyncio
async def test_admission_limit() -> None:
    manager = ConnectionManager(max_connections=1, session_id=lambda: "s1")
    first, second = FakeBridgeWebSocket(), FakeBridgeWebSocket()

    assert await manager.connect(first)
    assert not await manager.connect(second)
    await manager.disconnect(first)
    assert await manager.connect(second)


@pytest.mark.asyncio
async def test_emit_fans_out_envelopes_and_drops_failing_clients() -> None:
    manager = ConnectionManager(max_connections=4, session_id=lambda: "s1")
    good, bad = FakeBridgeWebSocket(), FakeBridgeWebSocket(fail=True)
    for ws in (good, bad):
        await manager.connect(ws)
        await manager.register(ws)

    await manager.emit("audioSent", {"sequenceNumber": 1})
    await manager.emit("ready")

    assert [orjson.loads(text) for text in good.sent] == [
        {"type": "audioSent", "session_id": "s1", "payload": {"sequenceNumber": 1}},
        {"type": "ready", "session_id": "s1", "payload": {}},
    ]
    assert manager.get_connection_count() == 1


@pytest.mark.asyncio
async def test_emit_without_clients_is_silent() -> None:
    manager = ConnectionManager(max_connections=1, session_id=lambda: "s1")
    await manager.emit("ready")


@pytest.mark.asyncio
async def test_close_all() -> None:
    manager = ConnectionManager(max_connections=2, session_id=lambda: "s1")
    ws = FakeBridgeWebSocket()
    await manager.connect(ws)
    await manager.register(ws)

    await manager.close_all()

    assert ws.close_code == 1000
    assert manager.get_connection_count() == 0


def _runtime_with_gated_client() -> tuple[RuntimeDeps, FakeLiveClient]:
    settings = make_settings()
    session = Session()
    connections = ConnectionManager(max_connections=2, session_id=lambda: session.session_id)
    client = FakeLiveClient()
    client.gate = asyncio.Event()
    controller = SessionController(
        session=session,
        client=client,  # type: ignore[arg-type]
        capture=AudioCapturePipeline(settings.audio, connections, spawn=FakeSpawner()),
        dispatcher=ResponseDispatcher(connections),
        notifier=connections,
        live=settings.live,
        audio=settings.audio,
        capture_settings=settings.capture,
    )
    deps = RuntimeDeps(connections=connections, controller=controller, session=session, settings=settings)
    return deps, client


@pytest.mark.asyncio
async def test_start_command_returns_while_connect_is_pending_and_stop_cancels_it() -> None:
    deps, client = _runtime_with_gated_client()
    ws = FakeBridgeWebSocket()

    await HANDLERS["start"](ws, deps, None, {"api_key": "k1"})  # type: ignore[arg-type]
    await wait_until(lambda: len(client.calls) == 1)
    assert deps.session.state is SessionState.CONNECTING

    await HANDLERS["stop"](ws, deps, None, {})  # type: ignore[arg-type]

    assert deps.session.state is SessionState.UNINITIALIZED
    assert client.connections == []
