from __future__ import annotations

import pytest

from mirror_live.errors import ProtocolError
from mirror_live.state.turn import ImagePhase
from mirror_live.realtime.dispatcher import ResponseDispatcher
from mirror_live.realtime.messages import TextDelta, TurnComplete, ImageGenerated, ImageGenerating

from tests.utils import RecordingNotifier


def _text(text: str, *, turn_complete: bool = False) -> dict:
    content: dict = {"modelTurn": {"parts": [{"text": text}]}}
    if turn_complete:
        content["turnComplete"] = True
    return {"serverContent": content}


@pytest.mark.asyncio
async def test_text_accumulates_within_a_turn() -> None:
    notifier = RecordingNotifier()
    dispatcher = ResponseDispatcher(notifier)

    await dispatcher.handle(TextDelta("a"))
    await dispatcher.handle(TextDelta("b"))

    assert notifier.payloads("textUpdate") == [{"text": "a"}, {"text": "ab"}]
    assert dispatcher.turn.turn_complete is False


@pytest.mark.asyncio
async def test_turn_complete_starts_a_new_buffer() -> None:
    notifier = RecordingNotifier()
    dispatcher = ResponseDispatcher(notifier)

    await dispatcher.dispatch(_text("first", turn_complete=True))
    await dispatcher.dispatch(_text("second"))

    assert notifier.names() == ["textUpdate", "turnComplete", "textUpdate"]
    assert notifier.payloads("textUpdate")[-1] == {"text": "second"}


@pytest.mark.asyncio
async def test_image_lifecycle_generating_then_generated() -> None:
    notifier = RecordingNotifier()
    dispatcher = ResponseDispatcher(notifier)

    await dispatcher.handle(TextDelta("drawing"))
    await dispatcher.handle(ImageGenerating("c1"))
    assert dispatcher.image.phase is ImagePhase.GENERATING

    await dispatcher.handle(ImageGenerated("iVBO", "image/png"))
    assert dispatcher.image.phase is ImagePhase.GENERATED
    assert notifier.payloads("imageGenerated") == [{"image": "iVBO", "status": ""}]

    await dispatcher.handle(TurnComplete())
    await dispatcher.handle(ImageGenerated("R0lG", "image/gif"))
    assert notifier.payloads("imageGenerated")[-1] == {"image": "R0lG", "status": "Listening..."}


@pytest.mark.asyncio
async def test_missing_image_resets_to_idle_with_error_marker() -> None:
    notifier = RecordingNotifier()
    dispatcher = ResponseDispatcher(notifier)

    await dispatcher.handle(ImageGenerating())
    await dispatcher.handle(ImageGenerated(None))

    assert dispatcher.image.phase is ImagePhase.IDLE
    payload = notifier.payloads("imageGenerated")[-1]
    assert payload == {"error": "Error receiving image", "status": "Error receiving image"}
    assert "image" not in payload


@pytest.mark.asyncio
async def test_duplicate_generating_is_ignored() -> None:
    notifier = RecordingNotifier()
    dispatcher = ResponseDispatcher(notifier)

    await dispatcher.handle(ImageGenerating("c1"))
    await dispatcher.handle(ImageGenerating("c1"))

    assert notifier.count("imageGenerating") == 1


@pytest.mark.asyncio
async def test_new_turn_clears_previous_image() -> None:
    notifier = RecordingNotifier()
    dispatcher = ResponseDispatcher(notifier)

    await dispatcher.handle(ImageGenerated("iVBO"))
    await dispatcher.handle(TurnComplete())
    await dispatcher.handle(TextDelta("next"))

    assert dispatcher.image.phase is ImagePhase.IDLE
    assert dispatcher.image.image is None


@pytest.mark.asyncio
async def test_new_turn_keeps_an_image_still_generating() -> None:
    notifier = RecordingNotifier()
    dispatcher = ResponseDispatcher(notifier)

    await dispatcher.handle(TurnComplete())
    await dispatcher.handle(ImageGenerating("c1"))
    await dispatcher.handle(TextDelta("here it comes"))
    assert dispatcher.image.phase is ImagePhase.GENERATING

    await dispatcher.handle(ImageGenerated("iVBO", "image/png"))
    assert dispatcher.image.phase is ImagePhase.GENERATED
    assert notifier.payloads("imageGenerated") == [{"image": "iVBO", "status": ""}]


@pytest.mark.asyncio
async def test_blocked_prompt_becomes_text_marker() -> None:
    notifier = RecordingNotifier()
    dispatcher = ResponseDispatcher(notifier)

    await dispatcher.dispatch({"promptFeedback": {"blockReason": "SAFETY"}})

    assert notifier.payloads("textUpdate") == [{"text": "[Blocked: SAFETY]"}]
    assert notifier.count("error") == 0


@pytest.mark.asyncio
async def test_audio_blob_is_forwarded() -> None:
    notifier = RecordingNotifier()
    dispatcher = ResponseDispatcher(notifier)

    audio_part = {"inlineData": {"mimeType": "audio/pcm", "data": "UklG"}}
    await dispatcher.dispatch({"serverContent": {"modelTurn": {"parts": [audio_part]}}})

    assert notifier.events == [("audioReady", {"audio": "UklG"})]


@pytest.mark.asyncio
async def test_non_object_message_is_a_protocol_error() -> None:
    dispatcher = ResponseDispatcher(RecordingNotifier())
    with pytest.raises(ProtocolError):
        await dispatcher.dispatch(["nope"])  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_reset_clears_turn_and_image() -> None:
    dispatcher = ResponseDispatcher(RecordingNotifier())
    await dispatcher.handle(TextDelta("partial"))
    await dispatcher.handle(ImageGenerating())

    dispatcher.reset()

    assert dispatcher.turn.text == ""
    assert dispatcher.turn.turn_complete is True
    assert dispatcher.image.phase is ImagePhase.IDLE
