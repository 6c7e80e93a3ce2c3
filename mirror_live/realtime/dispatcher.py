"""Response dispatcher: service reply stream -> normalized presentation events."""

from __future__ import annotations

import logging
from typing import Any

from mirror_live.errors import ProtocolError
from mirror_live.notifier import Notifier
from mirror_live.state.turn import ImagePhase, TurnBuffer, ImageGenerationState
from mirror_live.config.events import (
    STATUS_LISTENING,
    EVENT_AUDIO_READY,
    EVENT_TEXT_UPDATE,
    STATUS_IN_PROGRESS,
    STATUS_IMAGE_ERROR,
    BLOCK_REASON_MARKER,
    EVENT_TURN_COMPLETE,
    EVENT_IMAGE_GENERATED,
    EVENT_IMAGE_GENERATING,
)

from .messages import (
    AudioBlob,
    TextDelta,
    ServerEvent,
    TurnComplete,
    SetupComplete,
    ImageGenerated,
    PromptFeedback,
    ImageGenerating,
    parse_server_message,
)

logger = logging.getLogger(__name__)


class ResponseDispatcher:
    def __init__(self, notifier: Notifier) -> None:
        self._notifier = notifier
        self.turn = TurnBuffer()
        self.image = ImageGenerationState()

    def reset(self) -> None:
        self.turn.reset()
        self.image.reset()

    async def dispatch(self, msg: dict[str, Any]) -> None:
        if not isinstance(msg, dict):
            raise ProtocolError(f"expected a JSON object, got {type(msg).__name__}")
        events = parse_server_message(msg)
        if not events:
            logger.warning("dropping service message with no recognized payload (keys=%s)", sorted(msg))
            return
        for event in events:
            await self.handle(event)

    async def handle(self, event: ServerEvent) -> None:
        if isinstance(event, SetupComplete):
            logger.debug("live setup complete")
        elif isinstance(event, TextDelta):
            await self._on_text(event.text)
        elif isinstance(event, AudioBlob):
            await self._notifier.emit(EVENT_AUDIO_READY, {"audio": event.data})
        elif isinstance(event, PromptFeedback):
            await self._on_blocked(event.block_reason)
        elif isinstance(event, ImageGenerating):
            await self._on_image_generating()
        elif isinstance(event, ImageGenerated):
            await self._on_image_generated(event.image)
        elif isinstance(event, TurnComplete):
            self.turn.turn_complete = True
            await self._notifier.emit(EVENT_TURN_COMPLETE)

    async def _on_text(self, text: str) -> None:
        if self.turn.turn_complete:
            # New turn: replace the buffer and drop a finished image; one still generating stays.
            self.turn.text = text
            self.turn.turn_complete = False
            if self.image.phase is ImagePhase.GENERATED:
                self.image.reset()
        else:
            self.turn.text += text
        await self._notifier.emit(EVENT_TEXT_UPDATE, {"text": self.turn.text})

    async def _on_blocked(self, reason: str) -> None:
        logger.warning("service blocked the prompt: %s", reason)
        await self._on_text(BLOCK_REASON_MARKER.format(reason=reason))

    async def _on_image_generating(self) -> None:
        if self.image.phase is ImagePhase.GENERATING:
            logger.warning("image generation already in progress; ignoring duplicate start")
            return
        self.image.phase = ImagePhase.GENERATING
        self.image.image = None
        await self._notifier.emit(EVENT_IMAGE_GENERATING)

    async def _on_image_generated(self, image: str | None) -> None:
        if not image:
            logger.warning("image generated without image data")
            self.image.reset()
            await self._notifier.emit(
                EVENT_IMAGE_GENERATED,
                {"error": STATUS_IMAGE_ERROR, "status": STATUS_IMAGE_ERROR},
            )
            return

        self.image.phase = ImagePhase.GENERATED
        self.image.image = image
        status = STATUS_LISTENING if self.turn.turn_complete else STATUS_IN_PROGRESS
        await self._notifier.emit(EVENT_IMAGE_GENERATED, {"image": image, "status": status})


__all__ = ["ResponseDispatcher"]
