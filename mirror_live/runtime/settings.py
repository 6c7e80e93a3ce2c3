"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from mirror_live.config.secrets import ENV_HELPER_TOKEN, ENV_GEMINI_API_KEY
from mirror_live.state.settings import (
    AppSettings,
    AudioConfig,
    LiveSettings,
    BridgeSettings,
    CaptureSettings,
)
from mirror_live.config.capture import (
    ENV_CAPTURE_ON_OPEN,
    DEFAULT_CAPTURE_ON_OPEN,
    ENV_CAPTURE_DURATION_MS,
    DEFAULT_CAPTURE_DURATION_MS,
)
from mirror_live.config.websocket import (
    ENV_HELPER_AUTOSTART,
    ENV_WS_ENDPOINT_PATH,
    ENV_MAX_BRIDGE_CLIENTS,
    DEFAULT_HELPER_AUTOSTART,
    DEFAULT_WS_ENDPOINT_PATH,
    DEFAULT_MAX_BRIDGE_CLIENTS,
)
from mirror_live.config.live import (
    ENV_GEMINI_MODEL_ID,
    SUPPORTED_MODALITIES,
    ENV_GEMINI_API_HOST,
    DEFAULT_GEMINI_MODEL_ID,
    ENV_GEMINI_API_VERSION,
    DEFAULT_GEMINI_API_HOST,
    DEFAULT_GEMINI_API_VERSION,
    ENV_GEMINI_CONNECT_TIMEOUT_S,
    ENV_GEMINI_OUTPUT_TRANSCRIPTION,
    ENV_GEMINI_RESPONSE_MODALITIES,
    DEFAULT_GEMINI_CONNECT_TIMEOUT_S,
    DEFAULT_GEMINI_OUTPUT_TRANSCRIPTION,
    DEFAULT_GEMINI_RESPONSE_MODALITIES,
)
from mirror_live.config.audio import (
    ARECORD_FORMATS,
    ENV_AUDIO_DEVICE,
    ENV_AUDIO_CHANNELS,
    ENV_AUDIO_CHUNK_MS,
    ENV_AUDIO_RECORDER,
    MIN_AUDIO_CHUNK_MS,
    ENV_AUDIO_BIT_DEPTH,
    SUPPORTED_RECORDERS,
    DEFAULT_AUDIO_DEVICE,
    DEFAULT_AUDIO_CHANNELS,
    DEFAULT_AUDIO_CHUNK_MS,
    DEFAULT_AUDIO_RECORDER,
    DEFAULT_AUDIO_BIT_DEPTH,
    ENV_AUDIO_SAMPLE_RATE_HZ,
    ENV_AUDIO_STOP_TIMEOUT_S,
    DEFAULT_AUDIO_SAMPLE_RATE_HZ,
    DEFAULT_AUDIO_STOP_TIMEOUT_S,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _modalities_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    values = tuple(v.strip().upper() for v in raw.split(",") if v.strip())
    unknown = [v for v in values if v not in SUPPORTED_MODALITIES]
    if unknown:
        raise ValueError(f"{name} has unsupported modalities: {', '.join(unknown)}")
    return values or default


def _load_audio_config() -> AudioConfig:
    bit_depth = _int_env(ENV_AUDIO_BIT_DEPTH, DEFAULT_AUDIO_BIT_DEPTH)
    if bit_depth not in ARECORD_FORMATS:
        supported = ", ".join(str(b) for b in ARECORD_FORMATS)
        raise ValueError(f"{ENV_AUDIO_BIT_DEPTH} must be one of {supported}")

    recorder = _str_env(ENV_AUDIO_RECORDER, DEFAULT_AUDIO_RECORDER).lower()
    if recorder not in SUPPORTED_RECORDERS:
        raise ValueError(f"{ENV_AUDIO_RECORDER} must be one of {', '.join(SUPPORTED_RECORDERS)}")

    sample_rate = _int_env(ENV_AUDIO_SAMPLE_RATE_HZ, DEFAULT_AUDIO_SAMPLE_RATE_HZ)
    if sample_rate <= 0:
        sample_rate = DEFAULT_AUDIO_SAMPLE_RATE_HZ
    channels = _int_env(ENV_AUDIO_CHANNELS, DEFAULT_AUDIO_CHANNELS)
    if channels <= 0:
        channels = DEFAULT_AUDIO_CHANNELS
    chunk_ms = max(MIN_AUDIO_CHUNK_MS, _int_env(ENV_AUDIO_CHUNK_MS, DEFAULT_AUDIO_CHUNK_MS))
    stop_timeout_s = _float_env(ENV_AUDIO_STOP_TIMEOUT_S, DEFAULT_AUDIO_STOP_TIMEOUT_S)
    if stop_timeout_s <= 0:
        stop_timeout_s = DEFAULT_AUDIO_STOP_TIMEOUT_S

    return AudioConfig(
        sample_rate=sample_rate,
        channels=channels,
        bit_depth=bit_depth,
        device=_str_env(ENV_AUDIO_DEVICE, DEFAULT_AUDIO_DEVICE),
        recorder=recorder,
        chunk_ms=chunk_ms,
        stop_timeout_s=stop_timeout_s,
    )


def _load_live_settings() -> LiveSettings:
    timeout_s = _float_env(ENV_GEMINI_CONNECT_TIMEOUT_S, DEFAULT_GEMINI_CONNECT_TIMEOUT_S)
    return LiveSettings(
        api_key=(os.getenv(ENV_GEMINI_API_KEY) or "").strip(),
        model_id=_str_env(ENV_GEMINI_MODEL_ID, DEFAULT_GEMINI_MODEL_ID),
        host=_str_env(ENV_GEMINI_API_HOST, DEFAULT_GEMINI_API_HOST),
        api_version=_str_env(ENV_GEMINI_API_VERSION, DEFAULT_GEMINI_API_VERSION),
        response_modalities=_modalities_env(ENV_GEMINI_RESPONSE_MODALITIES, DEFAULT_GEMINI_RESPONSE_MODALITIES),
        output_transcription=_bool_env(ENV_GEMINI_OUTPUT_TRANSCRIPTION, DEFAULT_GEMINI_OUTPUT_TRANSCRIPTION),
        connect_timeout_s=max(0.0, timeout_s),
    )


def _load_capture_settings() -> CaptureSettings:
    return CaptureSettings(
        default_duration_ms=max(0, _int_env(ENV_CAPTURE_DURATION_MS, DEFAULT_CAPTURE_DURATION_MS)),
        autostart_on_open=_bool_env(ENV_CAPTURE_ON_OPEN, DEFAULT_CAPTURE_ON_OPEN),
    )


def _load_bridge_settings() -> BridgeSettings:
    endpoint_path = _str_env(ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH)
    if not endpoint_path.startswith("/"):
        endpoint_path = f"/{endpoint_path}"
    max_clients = _int_env(ENV_MAX_BRIDGE_CLIENTS, DEFAULT_MAX_BRIDGE_CLIENTS)
    if max_clients <= 0:
        max_clients = DEFAULT_MAX_BRIDGE_CLIENTS
    return BridgeSettings(
        token=(os.getenv(ENV_HELPER_TOKEN) or "").strip(),
        max_clients=max_clients,
        endpoint_path=endpoint_path,
        autostart=_bool_env(ENV_HELPER_AUTOSTART, DEFAULT_HELPER_AUTOSTART),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        audio=_load_audio_config(),
        live=_load_live_settings(),
        capture=_load_capture_settings(),
        bridge=_load_bridge_settings(),
    )


__all__ = ["load_settings"]
