from __future__ import annotations

from mirror_live.realtime.messages import (
    AudioBlob,
    TextDelta,
    TurnComplete,
    SetupComplete,
    ImageGenerated,
    PromptFeedback,
    ImageGenerating,
    parse_server_message,
)


def test_setup_complete() -> None:
    assert parse_server_message({"setupComplete": {}}) == [SetupComplete()]


def test_model_turn_parts_in_order_then_turn_complete() -> None:
    msg = {
        "serverContent": {
            "modelTurn": {
                "parts": [
                    {"text": "Hello"},
                    {"inlineData": {"mimeType": "audio/pcm;rate=24000", "data": "AAAA"}},
                    {"text": " there"},
                ]
            },
            "turnComplete": True,
        }
    }
    assert parse_server_message(msg) == [
        TextDelta("Hello"),
        AudioBlob("AAAA", "audio/pcm;rate=24000"),
        TextDelta(" there"),
        TurnComplete(),
    ]


def test_image_inline_data_with_and_without_payload() -> None:
    with_data = {"serverContent": {"modelTurn": {"parts": [{"inlineData": {"mimeType": "image/png", "data": "iVBO"}}]}}}
    empty = {"serverContent": {"modelTurn": {"parts": [{"inlineData": {"mimeType": "image/png", "data": ""}}]}}}
    assert parse_server_message(with_data) == [ImageGenerated("iVBO", "image/png")]
    assert parse_server_message(empty) == [ImageGenerated(None, "image/png")]


def test_audio_without_data_is_ignored() -> None:
    msg = {"serverContent": {"modelTurn": {"parts": [{"inlineData": {"mimeType": "audio/pcm"}}]}}}
    assert parse_server_message(msg) == []


def test_generate_image_tool_call() -> None:
    msg = {
        "toolCall": {
            "functionCalls": [
                {"id": "c1", "name": "generate_image", "args": {"prompt": "a cat"}},
                {"id": "c2", "name": "lookup_weather"},
            ]
        }
    }
    assert parse_server_message(msg) == [ImageGenerating("c1")]


def test_prompt_feedback_top_level_and_nested_comes_first() -> None:
    top = {"promptFeedback": {"blockReason": "SAFETY"}}
    nested = {"serverContent": {"promptFeedback": {"blockReason": "OTHER"}, "turnComplete": True}}
    assert parse_server_message(top) == [PromptFeedback("SAFETY")]
    assert parse_server_message(nested) == [PromptFeedback("OTHER"), TurnComplete()]


def test_output_transcription_is_text() -> None:
    msg = {"serverContent": {"outputTranscription": {"text": "hi"}}}
    assert parse_server_message(msg) == [TextDelta("hi")]


def test_turn_complete_must_be_true() -> None:
    assert parse_server_message({"serverContent": {"turnComplete": False}}) == []


def test_unknown_and_malformed_messages_yield_nothing() -> None:
    assert parse_server_message({"usageMetadata": {"totalTokenCount": 3}}) == []
    assert parse_server_message({"serverContent": {"modelTurn": {"parts": "nope"}}}) == []
    assert parse_server_message(["not", "a", "dict"]) == []


def test_variants_live_in_their_own_modules() -> None:
    from mirror_live.realtime.messages import text, audio, turn, parser, setup_complete, image_generated

    assert TextDelta is text.TextDelta
    assert AudioBlob is audio.AudioBlob
    assert TurnComplete is turn.TurnComplete
    assert SetupComplete is setup_complete.SetupComplete
    assert ImageGenerated is image_generated.ImageGenerated
    assert parse_server_message is parser.parse_server_message
    assert parse_server_message({"setupComplete": {}})[0].__class__.__module__ == setup_complete.__name__
