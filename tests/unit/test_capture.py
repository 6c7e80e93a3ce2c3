from __future__ import annotations

import asyncio

import pytest

from mirror_live.audio.chunks import AudioChunk, CaptureMode
from mirror_live.audio.capture import AudioCapturePipeline

from tests.utils import FakeSpawner, RecordingNotifier, make_audio_config, wait_until


def _pipeline() -> tuple[AudioCapturePipeline, FakeSpawner, RecordingNotifier]:
    notifier = RecordingNotifier()
    spawner = FakeSpawner()
    return AudioCapturePipeline(make_audio_config(), notifier, spawn=spawner), spawner, notifier


@pytest.mark.asyncio
async def test_sequence_numbers_increase_and_reset_per_episode() -> None:
    pipeline, spawner, _ = _pipeline()
    received: list[AudioChunk] = []

    assert await pipeline.start_capture(CaptureMode.continuous(), received.append)
    spawner.process.push(b"\x01" * 4, b"\x02" * 4, b"\x03" * 4)
    await wait_until(lambda: len(received) == 3)
    await pipeline.stop_capture()

    assert await pipeline.start_capture(CaptureMode.continuous(), received.append)
    spawner.process.push(b"\x04" * 4, b"\x05" * 4)
    await wait_until(lambda: len(received) == 5)
    await pipeline.stop_capture()

    assert [c.sequence_number for c in received] == [1, 2, 3, 1, 2]
    assert pipeline.episode == 2


@pytest.mark.asyncio
async def test_start_while_recording_is_rejected() -> None:
    pipeline, spawner, notifier = _pipeline()

    assert await pipeline.start_capture(CaptureMode.continuous(), lambda chunk: None)
    assert not await pipeline.start_capture(CaptureMode.continuous(), lambda chunk: None)

    assert len(spawner.processes) == 1
    assert notifier.count("recordingStarted") == 1
    await pipeline.stop_capture()


@pytest.mark.asyncio
async def test_stop_emits_stopped_exactly_once() -> None:
    pipeline, spawner, notifier = _pipeline()

    await pipeline.start_capture(CaptureMode.continuous(), lambda chunk: None)
    await pipeline.stop_capture()
    await pipeline.stop_capture()
    await pipeline.stop_capture(force=True)

    assert notifier.count("recordingStopped") == 1
    assert spawner.process.stopped
    assert not pipeline.is_recording


@pytest.mark.asyncio
async def test_no_chunks_delivered_after_stop() -> None:
    pipeline, spawner, _ = _pipeline()
    received: list[AudioChunk] = []

    await pipeline.start_capture(CaptureMode.continuous(), received.append)
    process = spawner.process
    await pipeline.stop_capture()
    process.push(b"late")
    await asyncio.sleep(0.02)

    assert received == []


@pytest.mark.asyncio
async def test_duration_timer_stops_capture() -> None:
    pipeline, _, notifier = _pipeline()

    await pipeline.start_capture(CaptureMode.for_duration(30), lambda chunk: None)
    await wait_until(lambda: not pipeline.is_recording)

    assert notifier.names() == ["recordingStarted", "recordingStopped"]


@pytest.mark.asyncio
async def test_manual_stop_before_timer_is_not_overridden() -> None:
    pipeline, spawner, notifier = _pipeline()

    await pipeline.start_capture(CaptureMode.for_duration(50), lambda chunk: None)
    await pipeline.stop_capture()
    # A new continuous episode must survive the old episode's deadline.
    await pipeline.start_capture(CaptureMode.continuous(), lambda chunk: None)
    await asyncio.sleep(0.1)

    assert pipeline.is_recording
    assert notifier.count("recordingStopped") == 1
    await pipeline.stop_capture()


@pytest.mark.asyncio
async def test_unexpected_exit_is_a_recording_error_plus_stop() -> None:
    pipeline, spawner, notifier = _pipeline()

    await pipeline.start_capture(CaptureMode.continuous(), lambda chunk: None)
    spawner.process.exit(1, stderr="arecord: audio open error: Device or resource busy")
    await wait_until(lambda: not pipeline.is_recording)

    assert notifier.names() == ["recordingStarted", "error", "recordingStopped"]
    error = notifier.payloads("error")[0]
    assert error["code"] == "recording_error"
    assert "code=1" in error["reason"]
    assert "Device or resource busy" in error["reason"]


@pytest.mark.asyncio
async def test_spawn_failure_is_reported_not_raised() -> None:
    pipeline, spawner, notifier = _pipeline()
    spawner.error = FileNotFoundError("arecord")

    assert not await pipeline.start_capture(CaptureMode.continuous(), lambda chunk: None)

    assert not pipeline.is_recording
    assert notifier.names() == ["error"]
    assert notifier.payloads("error")[0]["code"] == "recording_error"


@pytest.mark.asyncio
async def test_stop_tolerates_teardown_failure() -> None:
    pipeline, spawner, notifier = _pipeline()
    await pipeline.start_capture(CaptureMode.continuous(), lambda chunk: None)

    async def broken_stop() -> None:
        raise ProcessLookupError("gone")

    spawner.process.stop = broken_stop  # type: ignore[method-assign]
    await pipeline.stop_capture(force=True)

    assert not pipeline.is_recording
    assert notifier.count("recordingStopped") == 1
