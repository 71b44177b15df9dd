"""Tests for narration, timeline, and theme endpoints."""

from unittest.mock import MagicMock

import httpx
import openai
import pytest
from httpx import AsyncClient

from lesson_studio.api.app import app
from lesson_studio.config import Settings
from lesson_studio.models.lesson import Level

SPEECH_URL = "https://api.openai.com/v1/audio/speech"


def _status_error(status_code: int) -> openai.APIStatusError:
    request = httpx.Request("POST", SPEECH_URL)
    response = httpx.Response(status_code, request=request)
    return openai.APIStatusError("upstream failed", response=response, body=None)


class TestThemesAndVoices:
    async def test_list_themes(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/narration/themes")
        assert [theme["key"] for theme in resp.json()] == [
            "casino-gold",
            "luxury-blue",
            "emerald-garden",
            "sunset-orange",
        ]

    async def test_theme_fallback(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/narration/themes/unknown-key")
        assert resp.status_code == 200
        assert resp.json()["key"] == "casino-gold"
        assert resp.json()["highlightColor"] == "#ffed4e"

    async def test_voices(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/narration/voices")
        body = resp.json()
        assert len(body["voices"]) == 6
        assert body["avatarVoices"]["professor"] == "onyx"


class TestTimeline:
    async def test_worked_example(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/narration/timeline",
            json={"text": "Hello there. How are you today?"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["duration"] == 3
        assert [(s["startTime"], s["endTime"]) for s in body["segments"]] == [
            (0, 1000),
            (1000, 3000),
        ]
        assert body["segments"][0]["highlightColor"] == "#ffed4e"

    async def test_empty_text(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/narration/timeline", json={"text": ""})
        assert resp.json()["duration"] == 0
        assert resp.json()["segments"] == []

    async def test_rate_and_theme_override(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/narration/timeline",
            json={
                "text": "One two. Three.",
                "wordsPerSecond": 1,
                "studioTheme": "sunset-orange",
                "language": "ar",
            },
        )
        segment = resp.json()["segments"][0]
        assert segment["endTime"] == 2000
        assert segment["highlightColor"] == "#ffb84d"
        assert segment["language"] == "ar"

    async def test_omitted_options_use_settings(self, client: AsyncClient) -> None:
        app.state.settings = Settings(
            _env_file=None,
            default_theme="emerald-garden",
            default_language="ar",
        )
        resp = await client.post(
            "/api/v1/narration/timeline", json={"text": "Hello there."}
        )
        body = resp.json()
        assert body["theme"]["key"] == "emerald-garden"
        assert body["segments"][0]["language"] == "ar"

    async def test_non_positive_rate_rejected(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/narration/timeline", json={"text": "x.", "wordsPerSecond": 0}
        )
        assert resp.status_code == 422


class TestSpeech:
    async def test_speech(self, client: AsyncClient, speech_client: MagicMock) -> None:
        resp = await client.post(
            "/api/v1/narration/speech",
            json={"text": "Welcome", "avatarId": "mentor"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["voice"] == "shimmer"
        assert body["audioUrl"].startswith("data:audio/mp3;base64,")

    async def test_pronunciation(
        self, client: AsyncClient, speech_client: MagicMock
    ) -> None:
        resp = await client.post(
            "/api/v1/narration/pronunciation", json={"word": "airport"}
        )
        assert resp.status_code == 200
        assert resp.json()["speed"] == 0.85

    async def test_upstream_error_is_bad_gateway(
        self, client: AsyncClient, speech_client: MagicMock
    ) -> None:
        speech_client.audio.speech.create.side_effect = _status_error(429)
        resp = await client.post("/api/v1/narration/speech", json={"text": "Hi"})
        assert resp.status_code == 502
        assert resp.json()["upstream_status"] == 429

    async def test_empty_text_rejected(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/narration/speech", json={"text": ""})
        assert resp.status_code == 422


class TestOrchestrate:
    async def test_orchestrate_content(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/narration/orchestrate",
            json={
                "lessonId": "L-1",
                "lessonTitle": "Greetings",
                "lessonContent": "Hello there. How are you today?",
                "avatarId": "friend",
                "language": "en",
                "studioTheme": "luxury-blue",
            },
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["videoUrl"].endswith("SIMULATED_VIDEO_STREAM_L-1")
        assert body["duration"] == 3
        assert body["theme"]["key"] == "luxury-blue"
        assert len(body["subtitles"]) == 2

    async def test_orchestrate_catalog_lesson(
        self, client: AsyncClient, speech_client: MagicMock
    ) -> None:
        resp = await client.post("/api/v1/lessons/1/narration", json={})
        assert resp.status_code == 200
        body = resp.json()
        assert [s["text"] for s in body["subtitles"]] == [
            "Hello there",
            "How are you today",
        ]
        kwargs = speech_client.audio.speech.create.call_args.kwargs
        assert kwargs["input"] == "Hello there. How are you today?"
        assert kwargs["voice"] == "onyx"

    async def test_catalog_lesson_uses_default_theme(
        self, client: AsyncClient
    ) -> None:
        app.state.settings = Settings(_env_file=None, default_theme="sunset-orange")
        resp = await client.post("/api/v1/lessons/1/narration", json={})
        assert resp.json()["theme"]["key"] == "sunset-orange"

    async def test_lesson_too_long_to_narrate(
        self,
        client: AsyncClient,
        write_lesson,
        speech_client: MagicMock,
    ) -> None:
        write_lesson(
            Level.C2,
            "C2-01-Long.json",
            {"title": "Long", "content": "word. " * 1000},
        )
        app.state.lesson_repository.initialize()

        resp = await client.post("/api/v1/lessons/5/narration", json={})

        assert resp.status_code == 422
        assert resp.json()["detail"] == "Lesson too long to narrate"
        speech_client.audio.speech.create.assert_not_called()

    async def test_orchestrate_missing_lesson(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/lessons/99/narration", json={})
        assert resp.status_code == 404

    async def test_orchestrate_propagates_upstream_error(
        self, client: AsyncClient, speech_client: MagicMock
    ) -> None:
        speech_client.audio.speech.create.side_effect = _status_error(401)
        resp = await client.post("/api/v1/lessons/1/narration", json={})
        assert resp.status_code == 502

    async def test_status_ready(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/narration/status/L-1")
        assert resp.json()["status"] == "ready"


class TestSpeechDisabled:
    @pytest.fixture()
    def speech_enabled(self) -> bool:
        return False

    async def test_speech_unavailable(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/narration/speech", json={"text": "Hi"})
        assert resp.status_code == 503

    async def test_orchestrate_unavailable(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/lessons/1/narration", json={})
        assert resp.status_code == 503

    async def test_timeline_still_works(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/narration/timeline", json={"text": "Hi."})
        assert resp.status_code == 200

    async def test_status_unavailable(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/narration/status/L-1")
        assert resp.json()["status"] == "unavailable"
