"""Session controller: sole owner of the live connection and its lifecycle.

State machine: UNINITIALIZED -> CONNECTING -> OPEN -> ERROR | CLOSED. There is
no automatic retry after an error or close; callers issue a fresh ``start``.
A recording trigger that arrives while the connection is down performs one
reconnect attempt, guarded by ``Session.connecting``.
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any

from websockets.exceptions import ConnectionClosed

from mirror_live.audio.chunks import AudioChunk, CaptureMode
from mirror_live.audio.capture import AudioCapturePipeline
from mirror_live.notifier import Notifier, notify_error
from mirror_live.state.session import Session, SessionState
from mirror_live.state.settings import LiveSettings, AudioConfig, CaptureSettings
from mirror_live.config.events import EVENT_READY, REASON_CLOSED_UNEXPECTEDLY
from mirror_live.errors import (
    SendError,
    ConfigError,
    ProtocolError,
    LiveConnectionError,
)

from .relay import ChunkRelay
from .dispatcher import ResponseDispatcher
from .client import LiveClient
from .connection import LiveCallbacks

logger = logging.getLogger(__name__)

_CLOSING_MARKERS = ("closing", "closed")


def indicates_remote_closing(exc: BaseException) -> bool:
    if isinstance(exc, ConnectionClosed):
        return True
    text = str(exc).lower()
    return any(marker in text for marker in _CLOSING_MARKERS)


class SessionController:
    def __init__(
        self,
        *,
        session: Session,
        client: LiveClient,
        capture: AudioCapturePipeline,
        dispatcher: ResponseDispatcher,
        notifier: Notifier,
        live: LiveSettings,
        audio: AudioConfig,
        capture_settings: CaptureSettings,
    ) -> None:
        self._session = session
        self._client = client
        self._capture = capture
        self._dispatcher = dispatcher
        self._notifier = notifier
        self._live = live
        self._capture_settings = capture_settings
        self._relay = ChunkRelay(session, audio, notifier, on_failure=self._handle_send_failure)
        self._start_task: asyncio.Task[None] | None = None

    @property
    def session(self) -> Session:
        return self._session

    @property
    def relay(self) -> ChunkRelay:
        return self._relay

    @property
    def is_recording(self) -> bool:
        return self._capture.is_recording

    def default_capture_mode(self) -> CaptureMode:
        return CaptureMode.for_duration(self._capture_settings.default_duration_ms)

    # --- lifecycle -----------------------------------------------------

    async def start(self, key: str | None = None) -> None:
        key = (key or "").strip()
        if not key:
            exc = ConfigError("API key is missing; set GEMINI_API_KEY or pass api_key")
            await notify_error(self._notifier, exc)
            raise exc

        session = self._session
        if session.connecting or session.state is SessionState.CONNECTING:
            logger.info("start ignored: connect already in flight")
            return
        if session.state is SessionState.OPEN:
            logger.info("start ignored: already open; re-announcing readiness")
            await self._notifier.emit(EVENT_READY)
            return

        session.attempt += 1
        attempt = session.attempt
        session.api_key = key
        session.state = SessionState.CONNECTING
        session.connecting = True
        session.last_error = None
        logger.info("connecting to live service (attempt %s, model=%s)", attempt, self._live.model_id)

        try:
            conn = await self._client.connect(
                api_key=key,
                model_id=self._live.model_id,
                response_modalities=self._live.response_modalities,
                callbacks=self._callbacks(attempt),
            )
        except Exception as exc:
            if attempt != session.attempt:
                return
            session.connecting = False
            reason = f"Error starting live session: {exc or type(exc).__name__}"
            await self._fail(LiveConnectionError(reason))
            return

        if attempt != session.attempt or session.state not in (SessionState.CONNECTING, SessionState.OPEN):
            # stop() or a failure callback won the race; this handle is orphaned.
            logger.info("discarding connection from superseded attempt %s", attempt)
            with contextlib.suppress(Exception):
                await conn.close()
            return

        session.connection = conn
        session.connecting = False

    def start_in_background(self, key: str | None = None) -> asyncio.Task[None]:
        """Run ``start`` as a tracked task so ``stop`` can cancel an in-flight connect."""
        task = self._start_task
        if task is not None and not task.done():
            logger.info("start ignored: connect already in flight")
            return task
        task = asyncio.create_task(self._run_start(key))
        self._start_task = task
        return task

    async def _run_start(self, key: str | None) -> None:
        try:
            await self.start(key)
        except ConfigError:
            # Already broadcast as an error notification.
            logger.info("start rejected: missing API key")

    async def stop(self) -> None:
        """Caller-initiated shutdown. Safe from any state; never raises."""
        session = self._session
        conn = session.connection
        # Invalidate callbacks of the current connection before closing it.
        session.attempt += 1
        await self._cancel_start()
        try:
            await self._capture.stop_capture(force=True)
        except Exception:
            logger.exception("capture teardown failed during stop")
        try:
            await self._relay.stop()
        except Exception:
            logger.exception("relay teardown failed during stop")
        try:
            if conn is not None:
                await conn.close()
                logger.info("live session closed")
        except Exception:
            logger.warning("error closing live session", exc_info=True)
        finally:
            session.reset()
            self._dispatcher.reset()

    async def _cancel_start(self) -> None:
        task = self._start_task
        self._start_task = None
        if task is None or task.done() or task is asyncio.current_task():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            logger.info("in-flight connect cancelled by stop")
        except Exception:
            logger.exception("start task failed during stop")

    # --- recording ------------------------------------------------------

    async def trigger_recording(self, mode: CaptureMode | None = None) -> None:
        mode = mode or self.default_capture_mode()
        session = self._session
        if session.is_open:
            await self._capture.start_capture(mode, self._relay.submit)
            return

        if session.connecting:
            logger.info("recording requested while connecting; will start once open")
            session.pending_capture = mode
            return
        if not session.api_key:
            await notify_error(self._notifier, LiveConnectionError("not connected; send start first"))
            return

        logger.info("recording requested while %s; reconnecting once", session.state.value)
        key = session.api_key
        if session.state is SessionState.OPEN:
            # Belief already dropped after a failed send; tear the stale handle down first.
            await self._teardown_connection()
            session.state = SessionState.CLOSED
        session.pending_capture = mode
        await self.start(key)

    async def stop_recording(self) -> None:
        await self._capture.stop_capture(force=False)

    async def send_text(self, text: str) -> bool:
        conn = self._session.connection
        if not self._session.is_open or conn is None:
            logger.warning("send_text dropped: connection not open")
            return False
        try:
            await conn.send_text(text)
        except Exception as exc:
            await self._handle_send_failure(None, exc)
            return False
        return True

    # --- collaborator callbacks ----------------------------------------

    def _callbacks(self, attempt: int) -> LiveCallbacks:
        async def on_open() -> None:
            if attempt == self._session.attempt:
                await self.on_open()

        async def on_message(msg: dict[str, Any]) -> None:
            if attempt == self._session.attempt:
                await self.on_message(msg)

        async def on_error(reason: str) -> None:
            if attempt == self._session.attempt:
                await self.on_error(reason)

        async def on_close(code: int | None, reason: str) -> None:
            if attempt == self._session.attempt:
                await self.on_close(code, reason)

        return LiveCallbacks(on_open=on_open, on_message=on_message, on_error=on_error, on_close=on_close)

    async def on_open(self) -> None:
        session = self._session
        if session.state is SessionState.OPEN:
            logger.warning("duplicate open notification ignored")
            return
        if session.state is not SessionState.CONNECTING:
            logger.warning("open notification in state %s ignored", session.state.value)
            return

        session.state = SessionState.OPEN
        session.connection_open = True
        session.connecting = False
        logger.info("live session open")
        await self._notifier.emit(EVENT_READY)

        mode = session.pending_capture
        session.pending_capture = None
        if mode is None and self._capture_settings.autostart_on_open:
            mode = self.default_capture_mode()
        if mode is not None and session.is_open:
            await self._capture.start_capture(mode, self._relay.submit)

    async def on_message(self, msg: dict[str, Any]) -> None:
        try:
            await self._dispatcher.dispatch(msg)
        except ProtocolError as exc:
            logger.warning("protocol error: %s", exc)

    async def on_error(self, reason: str) -> None:
        await self._fail(LiveConnectionError(reason or "unknown live service error"))

    async def on_close(self, code: int | None, reason: str) -> None:
        session = self._session
        was_open = session.state is SessionState.OPEN
        was_connecting = session.state is SessionState.CONNECTING
        logger.info("live close callback (code=%s, reason=%s, was_open=%s)", code, reason or "-", was_open)

        session.connection = None
        session.connection_open = False
        session.connecting = False
        session.pending_capture = None
        failure: LiveConnectionError | None = None
        if was_open:
            failure = LiveConnectionError(REASON_CLOSED_UNEXPECTEDLY)
        elif was_connecting:
            # Rejected before setup completed (bad key, unknown model).
            detail = f"{code} {reason}".strip() if code is not None else reason
            failure = LiveConnectionError(f"connection closed before setup completed: {detail or 'no reason'}")

        if failure is not None:
            session.state = SessionState.ERROR
            session.last_error = failure.reason
        elif session.state is not SessionState.ERROR:
            session.state = SessionState.CLOSED

        await self._capture.stop_capture(force=True)
        await self._relay.stop()
        if failure is not None:
            self._dispatcher.reset()
            await notify_error(self._notifier, failure)

    # --- failure paths ---------------------------------------------------

    async def _fail(self, exc: LiveConnectionError) -> None:
        session = self._session
        session.last_error = exc.reason
        session.state = SessionState.ERROR
        session.connecting = False
        session.pending_capture = None
        await self._teardown_connection()
        await self._capture.stop_capture(force=True)
        await self._relay.stop()
        self._dispatcher.reset()
        await notify_error(self._notifier, exc)

    async def _teardown_connection(self) -> None:
        conn = self._session.connection
        self._session.connection = None
        self._session.connection_open = False
        if conn is None:
            return
        # Our own close must not come back as an unexpected close.
        self._session.attempt += 1
        try:
            await conn.close()
        except Exception:
            logger.debug("closing failed connection raised", exc_info=True)

    async def _handle_send_failure(self, chunk: AudioChunk | None, exc: Exception) -> None:
        seq = chunk.sequence_number if chunk is not None else 0
        if indicates_remote_closing(exc):
            logger.warning("send failure indicates the remote end is closing; marking connection not open")
            self._session.connection_open = False
        await self._capture.stop_capture(force=True)
        what = f"audio chunk {seq}" if chunk is not None else "text"
        await notify_error(self._notifier, SendError(f"Error sending {what}: {exc}", sequence_number=seq))


__all__ = ["SessionController", "indicates_remote_closing"]
