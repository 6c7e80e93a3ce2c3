"""Service acknowledgement of the setup frame; the connection's open signal."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SetupComplete:
    pass


__all__ = ["SetupComplete"]
