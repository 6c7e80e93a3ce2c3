"""Audio capture subprocess (arecord / sox writing raw PCM to stdout)."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import AsyncIterator, Awaitable, Callable

from mirror_live.state.settings import AudioConfig
from mirror_live.config.audio import ARECORD_FORMATS, RECORDER_SOX, RECORDER_ARECORD

from .chunks import CaptureMode

logger = logging.getLogger(__name__)


def build_capture_command(audio: AudioConfig) -> list[str]:
    if audio.bit_depth not in ARECORD_FORMATS:
        raise ValueError(f"unsupported bit depth: {audio.bit_depth}")

    if audio.recorder == RECORDER_ARECORD:
        cmd = [
            "arecord",
            "-q",
            "-t",
            "raw",
            "-f",
            ARECORD_FORMATS[audio.bit_depth],
            "-r",
            str(audio.sample_rate),
            "-c",
            str(audio.channels),
        ]
        if audio.device:
            cmd += ["-D", audio.device]
        return cmd

    if audio.recorder == RECORDER_SOX:
        encoding = "unsigned-integer" if audio.bit_depth == 8 else "signed-integer"
        return [
            "sox",
            "-q",
            "-t",
            "alsa",
            audio.device or "default",
            "-t",
            "raw",
            "-b",
            str(audio.bit_depth),
            "-e",
            encoding,
            "-L",
            "-r",
            str(audio.sample_rate),
            "-c",
            str(audio.channels),
            "-",
        ]

    raise ValueError(f"unsupported recorder: {audio.recorder}")


class CaptureProcess:
    """Handle over a running capture subprocess: chunk stream plus stop/exit signals."""

    def __init__(self, proc: asyncio.subprocess.Process, *, chunk_bytes: int, stop_timeout_s: float) -> None:
        self._proc = proc
        self._chunk_bytes = max(1, int(chunk_bytes))
        self._stop_timeout_s = float(stop_timeout_s)

    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def returncode(self) -> int | None:
        return self._proc.returncode

    async def chunks(self) -> AsyncIterator[bytes]:
        """Yield fixed-size PCM slices until the process closes stdout."""
        stdout = self._proc.stdout
        if stdout is None:
            return
        while True:
            try:
                data = await stdout.readexactly(self._chunk_bytes)
            except asyncio.IncompleteReadError as exc:
                # Final short slice before EOF.
                if exc.partial:
                    yield exc.partial
                return
            yield data

    async def wait(self) -> int:
        return await self._proc.wait()

    async def stderr_tail(self) -> str:
        stderr = self._proc.stderr
        if stderr is None:
            return ""
        with contextlib.suppress(Exception):
            data = await asyncio.wait_for(stderr.read(4096), timeout=0.2)
            return data.decode("utf-8", errors="replace").strip()
        return ""

    async def stop(self) -> None:
        if self._proc.returncode is not None:
            return
        with contextlib.suppress(ProcessLookupError):
            self._proc.terminate()
        try:
            await asyncio.wait_for(self._proc.wait(), timeout=self._stop_timeout_s)
        except TimeoutError:
            logger.warning("capture process pid=%s ignored terminate; killing", self._proc.pid)
            with contextlib.suppress(ProcessLookupError):
                self._proc.kill()
            await self._proc.wait()


SpawnFn = Callable[[AudioConfig, CaptureMode], Awaitable[CaptureProcess]]


async def spawn_capture(audio: AudioConfig, mode: CaptureMode) -> CaptureProcess:
    """Start the recorder; duration limits are enforced by the pipeline's timer, not the recorder."""
    cmd = build_capture_command(audio)
    logger.info("spawning capture process (%s): %s", mode.describe(), " ".join(cmd))
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    return CaptureProcess(proc, chunk_bytes=audio.chunk_bytes, stop_timeout_s=audio.stop_timeout_s)


__all__ = ["CaptureProcess", "SpawnFn", "build_capture_command", "spawn_capture"]
