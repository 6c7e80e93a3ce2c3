"""Runtime dependency construction (one session, one controller per process)."""

from __future__ import annotations

import logging

from mirror_live.state import Session, RuntimeDeps
from mirror_live.state.settings import AppSettings
from mirror_live.realtime.client import LiveClient
from mirror_live.audio.capture import AudioCapturePipeline
from mirror_live.handlers.connections import ConnectionManager
from mirror_live.realtime.controller import SessionController
from mirror_live.realtime.dispatcher import ResponseDispatcher

from .settings import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()
    session = Session()

    connections = ConnectionManager(
        max_connections=settings.bridge.max_clients,
        session_id=lambda: session.session_id,
    )
    capture = AudioCapturePipeline(settings.audio, connections)
    controller = SessionController(
        session=session,
        client=LiveClient(settings.live),
        capture=capture,
        dispatcher=ResponseDispatcher(connections),
        notifier=connections,
        live=settings.live,
        audio=settings.audio,
        capture_settings=settings.capture,
    )

    logger.info(
        "runtime: session %s (model=%s, modalities=%s, audio=%s, recorder=%s)",
        session.session_id,
        settings.live.model_id,
        ",".join(settings.live.response_modalities),
        settings.audio.mime_type,
        settings.audio.recorder,
    )
    return RuntimeDeps(connections=connections, controller=controller, session=session, settings=settings)


__all__ = ["RuntimeDeps", "build_runtime_deps"]
