"""A prompt the service refused to answer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PromptFeedback:
    block_reason: str


__all__ = ["PromptFeedback"]
