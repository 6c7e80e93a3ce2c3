"""Audio capture pipeline: one capture subprocess per recording episode."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Callable

from mirror_live.errors import RecordingError
from mirror_live.state.settings import AudioConfig
from mirror_live.notifier import Notifier, notify_error
from mirror_live.config.events import EVENT_RECORDING_STOPPED, EVENT_RECORDING_STARTED

from .chunks import AudioChunk, CaptureMode
from .process import SpawnFn, CaptureProcess, spawn_capture

logger = logging.getLogger(__name__)

ChunkHandler = Callable[[AudioChunk], None]


class AudioCapturePipeline:
    """Owns the capture subprocess and turns its stdout into ordered AudioChunks.

    Invariant: ``_process`` is set if and only if ``_recording`` is True.
    """

    def __init__(self, audio: AudioConfig, notifier: Notifier, *, spawn: SpawnFn | None = None) -> None:
        self._audio = audio
        self._notifier = notifier
        self._spawn = spawn or spawn_capture

        self._recording: bool = False
        self._process: CaptureProcess | None = None
        self._episode: int = 0
        self._sequence: int = 0
        self._on_chunk: ChunkHandler | None = None
        self._reader_task: asyncio.Task | None = None
        self._timer_task: asyncio.Task | None = None

    @property
    def is_recording(self) -> bool:
        return self._recording

    @property
    def episode(self) -> int:
        return self._episode

    async def start_capture(self, mode: CaptureMode, on_chunk: ChunkHandler) -> bool:
        """Begin an episode. Spawn failures are reported as events, never raised."""
        if self._recording:
            logger.warning("capture already running (episode %s); ignoring start", self._episode)
            return False

        try:
            process = await self._spawn(self._audio, mode)
        except Exception as exc:
            logger.debug("capture spawn failed", exc_info=True)
            await notify_error(self._notifier, RecordingError(f"Failed to start recording: {exc}"))
            return False

        self._episode += 1
        self._sequence = 0
        self._process = process
        self._recording = True
        self._on_chunk = on_chunk

        episode = self._episode
        self._reader_task = asyncio.create_task(self._read_loop(process, episode))
        if mode.duration_ms is not None:
            self._timer_task = asyncio.create_task(self._duration_timer(episode, mode.duration_ms / 1000.0))

        logger.info("recording started (episode %s, %s)", episode, mode.describe())
        await self._notifier.emit(EVENT_RECORDING_STARTED)
        return True

    async def stop_capture(self, *, force: bool = False) -> None:
        if not self._recording:
            if force:
                logger.debug("forced capture stop while idle")
            return

        # Detach listeners before the process is told to stop so no chunk from
        # a dying episode reaches the relay.
        self._on_chunk = None
        self._cancel_task(self._reader_task)
        self._cancel_task(self._timer_task)
        self._reader_task = None
        self._timer_task = None

        process = self._process
        self._process = None
        self._recording = False
        episode = self._episode

        try:
            if process is not None:
                await process.stop()
        except Exception:
            logger.warning("capture process teardown failed (episode %s)", episode, exc_info=True)
        finally:
            logger.info("recording stopped (episode %s, force=%s)", episode, force)
            await self._notifier.emit(EVENT_RECORDING_STOPPED)

    @staticmethod
    def _cancel_task(task: asyncio.Task | None) -> None:
        if task is None or task is asyncio.current_task() or task.done():
            return
        task.cancel()

    async def _read_loop(self, process: CaptureProcess, episode: int) -> None:
        failure: Exception | None = None
        try:
            async for data in process.chunks():
                if not data:
                    continue
                handler = self._on_chunk
                if handler is None or episode != self._episode:
                    return
                self._sequence += 1
                handler(AudioChunk(self._sequence, data))
        except asyncio.CancelledError:
            return
        except Exception as exc:
            failure = exc

        if not self._recording or episode != self._episode:
            return

        if failure is not None:
            reason = f"audio stream failed: {failure}"
        else:
            with contextlib.suppress(Exception):
                await asyncio.wait_for(process.wait(), timeout=0.5)
            detail = await process.stderr_tail()
            reason = f"capture process exited unexpectedly (code={process.returncode})"
            if detail:
                reason = f"{reason}: {detail}"

        if not self._recording or episode != self._episode:
            return
        await notify_error(self._notifier, RecordingError(reason))
        await self.stop_capture(force=True)

    async def _duration_timer(self, episode: int, seconds: float) -> None:
        try:
            await asyncio.sleep(seconds)
        except asyncio.CancelledError:
            return
        # A manual or error-driven stop before the deadline wins.
        if self._recording and episode == self._episode:
            logger.debug("capture duration elapsed (episode %s)", episode)
            await self.stop_capture(force=False)


__all__ = ["AudioCapturePipeline", "ChunkHandler"]
