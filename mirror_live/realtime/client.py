"""Gemini Live bidirectional WebSocket client (connect operation)."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from urllib.parse import urlencode
from collections.abc import Callable, Awaitable

import orjson
import websockets

from mirror_live.state.settings import LiveSettings
from mirror_live.config.live import GEMINI_LIVE_PATH_TEMPLATE, GEMINI_MAX_MESSAGE_BYTES

from .connection import LiveCallbacks, LiveConnection

logger = logging.getLogger(__name__)


def build_live_url(*, host: str, api_version: str, api_key: str) -> str:
    path = GEMINI_LIVE_PATH_TEMPLATE.format(version=api_version)
    return f"wss://{host}{path}?{urlencode({'key': api_key})}"


def build_setup_message(
    model_id: str,
    response_modalities: tuple[str, ...],
    *,
    output_transcription: bool = False,
) -> dict[str, Any]:
    model = model_id if model_id.startswith("models/") else f"models/{model_id}"
    setup: dict[str, Any] = {
        "model": model,
        "generationConfig": {"responseModalities": list(response_modalities)},
    }
    if output_transcription:
        setup["outputAudioTranscription"] = {}
    return {"setup": setup}


class LiveClient:
    """Connect operation of the remote live service."""

    def __init__(self, settings: LiveSettings, *, connect_fn: Callable[..., Awaitable[Any]] | None = None) -> None:
        self._settings = settings
        self._connect_fn = connect_fn or websockets.connect

    async def _open_socket(self, url: str) -> Any:
        timeout_s = self._settings.connect_timeout_s
        if timeout_s > 0:
            return await asyncio.wait_for(self._open(url), timeout=timeout_s)
        return await self._open(url)

    async def _open(self, url: str) -> Any:
        return await self._connect_fn(url, max_size=GEMINI_MAX_MESSAGE_BYTES)

    async def connect(
        self,
        *,
        api_key: str,
        model_id: str,
        response_modalities: tuple[str, ...],
        callbacks: LiveCallbacks,
    ) -> LiveConnection:
        url = build_live_url(host=self._settings.host, api_version=self._settings.api_version, api_key=api_key)
        ws = await self._open_socket(url)

        setup = build_setup_message(
            model_id,
            response_modalities,
            output_transcription=self._settings.output_transcription,
        )
        try:
            await ws.send(orjson.dumps(setup).decode("utf-8"))
        except BaseException:
            # Includes cancellation from stop() while the setup frame is in flight.
            with contextlib.suppress(Exception):
                await ws.close()
            raise

        logger.info("live: socket connected (model=%s, modalities=%s)", model_id, ",".join(response_modalities))
        conn = LiveConnection(ws, callbacks)
        conn.start()
        return conn


__all__ = ["LiveClient", "build_live_url", "build_setup_message"]
