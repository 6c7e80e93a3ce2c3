from .chunks import AudioChunk, CaptureMode
from .capture import ChunkHandler, AudioCapturePipeline
from .process import CaptureProcess, spawn_capture, build_capture_command

__all__ = [
    "AudioCapturePipeline",
    "AudioChunk",
    "CaptureMode",
    "CaptureProcess",
    "ChunkHandler",
    "build_capture_command",
    "spawn_capture",
]
