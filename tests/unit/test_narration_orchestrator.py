"""Tests for narration orchestration."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from lesson_studio.errors import SpeechSynthesisError
from lesson_studio.lessons import build_record
from lesson_studio.lessons.fields import LessonSource
from lesson_studio.models.lesson import Level
from lesson_studio.models.media import NarrationAudio, Voice
from lesson_studio.narration_orchestrator import (
    NarrationOrchestrator,
    NarrationRequest,
    markup_to_text,
    placeholder_video_url,
    request_for_lesson,
)


def _synthesizer(audio_url: str = "data:audio/mp3;base64,QUJD") -> MagicMock:
    synthesizer = MagicMock()
    synthesizer.synthesize_narration = AsyncMock(
        return_value=NarrationAudio(
            audio_url=audio_url, voice=Voice.ONYX, model="tts-1-hd", speed=1.0
        )
    )
    return synthesizer


def _request(**overrides: str) -> NarrationRequest:
    values = {
        "lesson_id": "42",
        "title": "Greetings",
        "content": "Hello there. How are you today?",
        "avatar_id": "professor",
    }
    values.update(overrides)
    return NarrationRequest(**values)


class TestOrchestrate:
    async def test_bundle_contents(self) -> None:
        synthesizer = _synthesizer()
        result = await NarrationOrchestrator(synthesizer).orchestrate(_request())

        assert result.lesson_id == "42"
        assert result.audio_url == "data:audio/mp3;base64,QUJD"
        assert result.video_url == placeholder_video_url("42")
        assert result.metadata.duration == 3
        assert result.metadata.voice_model == "tts-1-hd"
        assert [(s.start_time, s.end_time) for s in result.subtitles] == [
            (0, 1000),
            (1000, 3000),
        ]
        synthesizer.synthesize_narration.assert_awaited_once_with(
            "Hello there. How are you today?", "professor"
        )

    async def test_theme_colour_on_subtitles(self) -> None:
        result = await NarrationOrchestrator(_synthesizer()).orchestrate(
            _request(theme_key="emerald-garden", language="ar")
        )
        assert result.theme.key == "emerald-garden"
        assert {s.highlight_color for s in result.subtitles} == {"#4ade80"}
        assert {s.language for s in result.subtitles} == {"ar"}

    async def test_unknown_theme_falls_back(self) -> None:
        result = await NarrationOrchestrator(_synthesizer()).orchestrate(
            _request(theme_key="neon")
        )
        assert result.theme.key == "casino-gold"

    async def test_custom_speaking_rate(self) -> None:
        orchestrator = NarrationOrchestrator(_synthesizer(), words_per_second=1)
        result = await orchestrator.orchestrate(_request())
        assert result.metadata.duration == 6

    async def test_synthesis_error_propagates_unchanged(self) -> None:
        synthesizer = _synthesizer()
        error = SpeechSynthesisError(500, voice="onyx")
        synthesizer.synthesize_narration.side_effect = error

        with pytest.raises(SpeechSynthesisError) as exc_info:
            await NarrationOrchestrator(synthesizer).orchestrate(_request())

        assert exc_info.value is error


class TestMarkupToText:
    def test_plain_text_untouched(self) -> None:
        assert markup_to_text("  Just text.  ") == "Just text."

    def test_tags_stripped_blocks_separated(self) -> None:
        markup = "<h2>Agenda</h2><p>Plan it.</p><hr/><ul><li>One</li></ul>"
        assert markup_to_text(markup) == "Agenda Plan it. One"

    def test_empty(self) -> None:
        assert markup_to_text("") == ""


class TestRequestForLesson:
    def test_built_from_record(self) -> None:
        record = build_record(
            LessonSource(
                path=Path("Greetings.json"),
                level=Level.A1,
                lesson_id=9,
                data={
                    "title": "Greetings",
                    "content": "<p>Hello there.</p>",
                    "avatarId": "coach",
                },
            )
        )
        request = request_for_lesson(record, language="ar", theme_key="luxury-blue")
        assert request.lesson_id == "9"
        assert request.content == "Hello there."
        assert request.avatar_id == "coach"
        assert request.language == "ar"
        assert request.theme_key == "luxury-blue"
