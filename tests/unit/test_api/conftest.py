"""Fixtures for API tests: app state wired to a temporary catalog."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from lesson_studio.api.app import app
from lesson_studio.config import Settings
from lesson_studio.lessons import LessonRepository
from lesson_studio.media.speech import SpeechSynthesizer


@pytest.fixture()
def speech_client() -> MagicMock:
    """Stand-in for the OpenAI SDK client."""
    client = MagicMock()
    client.audio.speech.create = AsyncMock(return_value=MagicMock(content=b"mp3"))
    client.close = AsyncMock()
    return client


@pytest.fixture()
def speech_enabled() -> bool:
    return True


@pytest.fixture()
async def client(
    sample_catalog: Path,
    speech_client: MagicMock,
    speech_enabled: bool,
) -> AsyncGenerator[AsyncClient]:
    """AsyncClient over the app with state set up as the lifespan would."""
    repository = LessonRepository(sample_catalog)
    repository.initialize()
    app.state.settings = Settings(_env_file=None)
    app.state.lesson_repository = repository
    app.state.speech_synthesizer = (
        SpeechSynthesizer("sk-test", client=speech_client) if speech_enabled else None
    )

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    for name in ("settings", "lesson_repository", "speech_synthesizer"):
        if hasattr(app.state, name):
            delattr(app.state, name)
