"""Audio chunk and capture-mode value types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AudioChunk:
    sequence_number: int
    data: bytes

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class CaptureMode:
    """Either a fixed duration in milliseconds or continuous (duration_ms is None)."""

    duration_ms: int | None = None

    @classmethod
    def continuous(cls) -> CaptureMode:
        return cls(None)

    @classmethod
    def for_duration(cls, duration_ms: int | None) -> CaptureMode:
        if duration_ms is None or int(duration_ms) <= 0:
            return cls(None)
        return cls(int(duration_ms))

    @property
    def is_continuous(self) -> bool:
        return self.duration_ms is None

    def describe(self) -> str:
        return "continuous" if self.duration_ms is None else f"{self.duration_ms}ms"


__all__ = ["AudioChunk", "CaptureMode"]
