from mirror_live.state import Session, SessionState

from .client import LiveClient
from .relay import ChunkRelay
from .dispatcher import ResponseDispatcher
from .controller import SessionController
from .connection import LiveCallbacks, LiveConnection
from .messages import ServerEvent, parse_server_message

__all__ = [
    "ChunkRelay",
    "LiveCallbacks",
    "LiveClient",
    "LiveConnection",
    "ResponseDispatcher",
    "ServerEvent",
    "Session",
    "SessionController",
    "SessionState",
    "parse_server_message",
]
