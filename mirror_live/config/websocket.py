"""Bridge WebSocket protocol configuration and constants."""

from __future__ import annotations

ENV_WS_ENDPOINT_PATH = "WS_ENDPOINT_PATH"
ENV_MAX_BRIDGE_CLIENTS = "MAX_BRIDGE_CLIENTS"
ENV_HELPER_AUTOSTART = "HELPER_AUTOSTART"

DEFAULT_WS_ENDPOINT_PATH = "/ws"
DEFAULT_MAX_BRIDGE_CLIENTS = 8
DEFAULT_HELPER_AUTOSTART = False

# Envelope keys
WS_KEY_TYPE = "type"
WS_KEY_SESSION_ID = "session_id"
WS_KEY_REQUEST_ID = "request_id"
WS_KEY_PAYLOAD = "payload"

# Auth
WS_TOKEN_QUERY_PARAM = "token"
WS_TOKEN_HEADER = "x-helper-token"

# Close codes
WS_CLOSE_CLIENT_REQUEST_CODE = 1000
WS_CLOSE_UNAUTHORIZED_CODE = 4001
WS_CLOSE_BUSY_CODE = 4002

# Presentation commands
CMD_START = "start"
CMD_START_RECORDING = "start_recording"
CMD_STOP_RECORDING = "stop_recording"
CMD_SEND_TEXT = "send_text"
CMD_STOP = "stop"
CMD_PING = "ping"
CMD_PONG = "pong"
CMD_END = "end"

__all__ = [
    "CMD_END",
    "CMD_PING",
    "CMD_PONG",
    "CMD_SEND_TEXT",
    "CMD_START",
    "CMD_START_RECORDING",
    "CMD_STOP",
    "CMD_STOP_RECORDING",
    "DEFAULT_HELPER_AUTOSTART",
    "DEFAULT_MAX_BRIDGE_CLIENTS",
    "DEFAULT_WS_ENDPOINT_PATH",
    "ENV_HELPER_AUTOSTART",
    "ENV_MAX_BRIDGE_CLIENTS",
    "ENV_WS_ENDPOINT_PATH",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_CLIENT_REQUEST_CODE",
    "WS_CLOSE_UNAUTHORIZED_CODE",
    "WS_KEY_PAYLOAD",
    "WS_KEY_REQUEST_ID",
    "WS_KEY_SESSION_ID",
    "WS_KEY_TYPE",
    "WS_TOKEN_HEADER",
    "WS_TOKEN_QUERY_PARAM",
]
