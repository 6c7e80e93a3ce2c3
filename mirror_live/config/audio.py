"""Audio capture configuration and wire-format constants."""

from __future__ import annotations

ENV_AUDIO_SAMPLE_RATE_HZ = "AUDIO_SAMPLE_RATE_HZ"
ENV_AUDIO_CHANNELS = "AUDIO_CHANNELS"
ENV_AUDIO_BIT_DEPTH = "AUDIO_BIT_DEPTH"
ENV_AUDIO_DEVICE = "AUDIO_DEVICE"
ENV_AUDIO_RECORDER = "AUDIO_RECORDER"
ENV_AUDIO_CHUNK_MS = "AUDIO_CHUNK_MS"
ENV_AUDIO_STOP_TIMEOUT_S = "AUDIO_STOP_TIMEOUT_S"

# Live API expects little-endian PCM; 16kHz mono is its native input format.
DEFAULT_AUDIO_SAMPLE_RATE_HZ = 16000
DEFAULT_AUDIO_CHANNELS = 1
DEFAULT_AUDIO_BIT_DEPTH = 16
DEFAULT_AUDIO_DEVICE = ""
DEFAULT_AUDIO_RECORDER = "arecord"
DEFAULT_AUDIO_CHUNK_MS = 100
DEFAULT_AUDIO_STOP_TIMEOUT_S = 2.0

MIN_AUDIO_CHUNK_MS = 10

RECORDER_ARECORD = "arecord"
RECORDER_SOX = "sox"
SUPPORTED_RECORDERS = (RECORDER_ARECORD, RECORDER_SOX)

# arecord sample format per bit depth.
ARECORD_FORMATS: dict[int, str] = {
    8: "U8",
    16: "S16_LE",
    24: "S24_3LE",
    32: "S32_LE",
}

AUDIO_MIME_TEMPLATE = "audio/pcm;rate={rate}"

__all__ = [
    "ARECORD_FORMATS",
    "AUDIO_MIME_TEMPLATE",
    "DEFAULT_AUDIO_BIT_DEPTH",
    "DEFAULT_AUDIO_CHANNELS",
    "DEFAULT_AUDIO_CHUNK_MS",
    "DEFAULT_AUDIO_DEVICE",
    "DEFAULT_AUDIO_RECORDER",
    "DEFAULT_AUDIO_SAMPLE_RATE_HZ",
    "DEFAULT_AUDIO_STOP_TIMEOUT_S",
    "ENV_AUDIO_BIT_DEPTH",
    "ENV_AUDIO_CHANNELS",
    "ENV_AUDIO_CHUNK_MS",
    "ENV_AUDIO_DEVICE",
    "ENV_AUDIO_RECORDER",
    "ENV_AUDIO_SAMPLE_RATE_HZ",
    "ENV_AUDIO_STOP_TIMEOUT_S",
    "MIN_AUDIO_CHUNK_MS",
    "RECORDER_ARECORD",
    "RECORDER_SOX",
    "SUPPORTED_RECORDERS",
]
