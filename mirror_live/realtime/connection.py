"""One open Gemini Live socket and its receive loop.

Callback contract per connection instance: ``on_open`` fires once, when the
service acknowledges setup; every ``on_message`` follows it; ``on_close`` fires
exactly once and always last (``on_error`` may precede it).
"""

from __future__ import annotations

import base64
import asyncio
import logging
import contextlib
from typing import Any
from dataclasses import dataclass
from collections.abc import Callable, Awaitable

import orjson
from websockets.exceptions import ConnectionClosed

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LiveCallbacks:
    on_open: Callable[[], Awaitable[None]]
    on_message: Callable[[dict[str, Any]], Awaitable[None]]
    on_error: Callable[[str], Awaitable[None]]
    on_close: Callable[[int | None, str], Awaitable[None]]


def build_audio_message(*, mime_type: str, data: bytes) -> dict[str, Any]:
    return {
        "realtimeInput": {
            "mediaChunks": [{"mimeType": mime_type, "data": base64.b64encode(data).decode("ascii")}],
        }
    }


def build_text_message(text: str) -> dict[str, Any]:
    return {
        "clientContent": {
            "turns": [{"role": "user", "parts": [{"text": text}]}],
            "turnComplete": True,
        }
    }


def _close_details(exc: ConnectionClosed | None, ws: Any) -> tuple[int | None, str]:
    frame = getattr(exc, "rcvd", None) if exc is not None else None
    if frame is not None:
        return frame.code, frame.reason or ""
    return getattr(ws, "close_code", None), getattr(ws, "close_reason", None) or ""


class LiveConnection:
    """Handle over one open service socket. Owned by the session controller."""

    def __init__(self, ws: Any, callbacks: LiveCallbacks) -> None:
        self._ws = ws
        self._callbacks = callbacks
        self._recv_task: asyncio.Task | None = None
        self._opened = False

    @property
    def opened(self) -> bool:
        return self._opened

    def start(self) -> asyncio.Task:
        if self._recv_task is None:
            self._recv_task = asyncio.create_task(self._recv_loop())
        return self._recv_task

    async def send_chunk(self, *, mime_type: str, data: bytes) -> None:
        await self._ws.send(orjson.dumps(build_audio_message(mime_type=mime_type, data=data)).decode("utf-8"))

    async def send_text(self, text: str) -> None:
        await self._ws.send(orjson.dumps(build_text_message(text)).decode("utf-8"))

    async def close(self) -> None:
        await self._ws.close()
        task = self._recv_task
        if task is not None and task is not asyncio.current_task():
            with contextlib.suppress(Exception):
                await asyncio.wait_for(task, timeout=5.0)

    async def _deliver(self, raw: str | bytes) -> None:
        try:
            msg = orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("live: skipping undecodable frame (%d bytes)", len(raw))
            return
        if not isinstance(msg, dict):
            logger.warning("live: skipping non-object frame")
            return

        if not self._opened:
            if "setupComplete" not in msg:
                logger.warning("live: dropping message received before setup completed")
                return
            self._opened = True
            await self._callbacks.on_open()

        await self._callbacks.on_message(msg)

    async def _recv_loop(self) -> None:
        closed_exc: ConnectionClosed | None = None
        try:
            async for raw in self._ws:
                await self._deliver(raw)
        except ConnectionClosed as exc:
            closed_exc = exc
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.debug("live receive loop failed", exc_info=True)
            with contextlib.suppress(Exception):
                await self._callbacks.on_error(str(exc) or type(exc).__name__)
            with contextlib.suppress(Exception):
                await self._ws.close()

        code, reason = _close_details(closed_exc, self._ws)
        logger.info("live: connection closed code=%s reason=%s", code, reason or "-")
        await self._callbacks.on_close(code, reason)


__all__ = ["LiveCallbacks", "LiveConnection", "build_audio_message", "build_text_message"]
