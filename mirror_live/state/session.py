"""Per-process live session state.

Only the session controller writes these fields; the relay, capture pipeline
and dispatcher read snapshots.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import TYPE_CHECKING
from dataclasses import field, dataclass

if TYPE_CHECKING:
    from mirror_live.audio.chunks import CaptureMode
    from mirror_live.realtime.connection import LiveConnection


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    OPEN = "open"
    ERROR = "error"
    CLOSED = "closed"


def _new_session_id() -> str:
    return uuid.uuid4().hex


@dataclass(slots=True)
class Session:
    session_id: str = field(default_factory=_new_session_id)
    state: SessionState = SessionState.UNINITIALIZED
    connection: LiveConnection | None = None
    # Local belief; may drop before the close callback arrives.
    connection_open: bool = False
    # Guards re-entrant connect attempts.
    connecting: bool = False
    api_key: str = ""
    # Bumped on every connect attempt and every stop; callbacks from older attempts are ignored.
    attempt: int = 0
    last_error: str | None = None
    pending_capture: CaptureMode | None = None

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN and self.connection_open and self.connection is not None

    def reset(self) -> None:
        self.state = SessionState.UNINITIALIZED
        self.connection = None
        self.connection_open = False
        self.connecting = False
        self.api_key = ""
        self.last_error = None
        self.pending_capture = None

    def snapshot(self) -> dict[str, object]:
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "connection_open": self.is_open,
            "connecting": self.connecting,
            "last_error": self.last_error,
        }


__all__ = ["Session", "SessionState"]
