"""Parse decoded live-service messages into tagged variants.

A single wire message can carry several payload kinds (text parts, an audio
blob and a turn-complete flag together), so parsing yields a list.
"""

from __future__ import annotations

from typing import Any

from mirror_live.config.live import IMAGE_TOOL_NAME

from .text import TextDelta
from .audio import AudioBlob
from .turn import TurnComplete
from .events import ServerEvent
from .feedback import PromptFeedback
from .setup_complete import SetupComplete
from .image_generated import ImageGenerated
from .image_generating import ImageGenerating


def _block_reason(container: Any) -> str | None:
    if not isinstance(container, dict):
        return None
    feedback = container.get("promptFeedback")
    if not isinstance(feedback, dict):
        return None
    reason = feedback.get("blockReason")
    if isinstance(reason, str) and reason.strip():
        return reason.strip()
    return None


def _parse_part(part: Any) -> ServerEvent | None:
    if not isinstance(part, dict):
        return None

    text = part.get("text")
    if isinstance(text, str) and text:
        return TextDelta(text)

    inline = part.get("inlineData")
    if not isinstance(inline, dict):
        return None
    mime_type = inline.get("mimeType") if isinstance(inline.get("mimeType"), str) else ""
    data = inline.get("data") if isinstance(inline.get("data"), str) else ""

    if mime_type.startswith("image/"):
        return ImageGenerated(data or None, mime_type)
    if mime_type.startswith("audio/") and data:
        return AudioBlob(data, mime_type)
    return None


def _parse_tool_call(tool_call: Any) -> list[ServerEvent]:
    if not isinstance(tool_call, dict):
        return []
    calls = tool_call.get("functionCalls")
    if not isinstance(calls, list):
        return []
    events: list[ServerEvent] = []
    for call in calls:
        if isinstance(call, dict) and call.get("name") == IMAGE_TOOL_NAME:
            call_id = call.get("id") if isinstance(call.get("id"), str) else ""
            events.append(ImageGenerating(call_id))
    return events


def parse_server_message(msg: Any) -> list[ServerEvent]:
    """Map one decoded service message onto zero or more variants."""
    if not isinstance(msg, dict):
        return []

    events: list[ServerEvent] = []
    server_content = msg.get("serverContent")

    reason = _block_reason(msg) or _block_reason(server_content)
    if reason is not None:
        events.append(PromptFeedback(reason))

    if "setupComplete" in msg:
        events.append(SetupComplete())

    events.extend(_parse_tool_call(msg.get("toolCall")))

    if isinstance(server_content, dict):
        model_turn = server_content.get("modelTurn")
        parts = model_turn.get("parts") if isinstance(model_turn, dict) else None
        if isinstance(parts, list):
            for part in parts:
                event = _parse_part(part)
                if event is not None:
                    events.append(event)

        transcription = server_content.get("outputTranscription")
        if isinstance(transcription, dict):
            text = transcription.get("text")
            if isinstance(text, str) and text:
                events.append(TextDelta(text))

        if server_content.get("turnComplete") is True:
            events.append(TurnComplete())

    return events


__all__ = ["parse_server_message"]
