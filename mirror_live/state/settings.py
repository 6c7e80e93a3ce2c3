"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass

from mirror_live.config.audio import AUDIO_MIME_TEMPLATE


@dataclass(frozen=True, slots=True)
class AudioConfig:
    """Wire format shared by the capture pipeline and the chunk relay."""

    sample_rate: int
    channels: int
    bit_depth: int
    device: str
    recorder: str
    chunk_ms: int
    stop_timeout_s: float

    @property
    def mime_type(self) -> str:
        return AUDIO_MIME_TEMPLATE.format(rate=self.sample_rate)

    @property
    def bytes_per_second(self) -> int:
        return self.sample_rate * self.channels * (self.bit_depth // 8)

    @property
    def chunk_bytes(self) -> int:
        # Whole frames only, so a chunk never splits a sample.
        frame_bytes = self.channels * (self.bit_depth // 8)
        frames = max(1, (self.sample_rate * self.chunk_ms) // 1000)
        return frames * frame_bytes


@dataclass(frozen=True, slots=True)
class LiveSettings:
    api_key: str
    model_id: str
    host: str
    api_version: str
    response_modalities: tuple[str, ...]
    output_transcription: bool
    connect_timeout_s: float


@dataclass(frozen=True, slots=True)
class CaptureSettings:
    default_duration_ms: int
    autostart_on_open: bool


@dataclass(frozen=True, slots=True)
class BridgeSettings:
    token: str
    max_clients: int
    endpoint_path: str
    autostart: bool


@dataclass(frozen=True, slots=True)
class AppSettings:
    audio: AudioConfig
    live: LiveSettings
    capture: CaptureSettings
    bridge: BridgeSettings


__all__ = [
    "AppSettings",
    "AudioConfig",
    "BridgeSettings",
    "CaptureSettings",
    "LiveSettings",
]
