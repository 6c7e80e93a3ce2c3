"""Chunk relay: forwards captured audio chunks into the open live connection."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable, Awaitable

from mirror_live.notifier import Notifier
from mirror_live.audio.chunks import AudioChunk
from mirror_live.state.session import Session
from mirror_live.config.events import EVENT_AUDIO_SENT
from mirror_live.state.settings import AudioConfig

logger = logging.getLogger(__name__)

FailureHandler = Callable[[AudioChunk, Exception], Awaitable[None]]


class ChunkRelay:
    """FIFO sender over a queue fed by the capture pipeline.

    The session is re-checked before every send so a connection that drops
    mid-stream never receives chunks queued before the drop.
    """

    def __init__(
        self,
        session: Session,
        audio: AudioConfig,
        notifier: Notifier,
        *,
        on_failure: FailureHandler,
    ) -> None:
        self._session = session
        self._audio = audio
        self._notifier = notifier
        self._on_failure = on_failure
        self._queue: asyncio.Queue[AudioChunk] = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self.sent: int = 0
        self.dropped: int = 0

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def submit(self, chunk: AudioChunk) -> None:
        """Capture listener; never blocks the capture reader."""
        if not self._session.is_open:
            self.dropped += 1
            logger.debug("relay: connection not open; dropping chunk %s", chunk.sequence_number)
            return
        self._queue.put_nowait(chunk)
        self._ensure_task()

    def _ensure_task(self) -> None:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run())

    def discard_pending(self) -> int:
        count = 0
        with contextlib.suppress(asyncio.QueueEmpty):
            while True:
                self._queue.get_nowait()
                count += 1
        self.dropped += count
        return count

    async def stop(self) -> None:
        self.discard_pending()
        task = self._task
        self._task = None
        if task is None or task is asyncio.current_task():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task

    async def _run(self) -> None:
        while True:
            chunk = await self._queue.get()
            conn = self._session.connection
            if not self._session.is_open or conn is None:
                self.dropped += 1 + self.discard_pending()
                logger.debug("relay: connection left OPEN; dropped chunk %s and the backlog", chunk.sequence_number)
                continue

            try:
                await conn.send_chunk(mime_type=self._audio.mime_type, data=chunk.data)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                discarded = self.discard_pending()
                logger.warning(
                    "relay: send failed for chunk %s (%d queued chunks discarded): %s",
                    chunk.sequence_number,
                    discarded,
                    exc,
                )
                await self._on_failure(chunk, exc)
                continue

            self.sent += 1
            await self._notifier.emit(EVENT_AUDIO_SENT, {"sequenceNumber": chunk.sequence_number})


__all__ = ["ChunkRelay", "FailureHandler"]
