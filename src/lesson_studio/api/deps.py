"""FastAPI dependency injection."""

from __future__ import annotations

from typing import cast

from fastapi import Request

from lesson_studio.config import Settings, get_settings
from lesson_studio.errors import SpeechNotConfiguredError
from lesson_studio.lessons import LessonRepository
from lesson_studio.media.speech import SpeechSynthesizer
from lesson_studio.narration_orchestrator import NarrationOrchestrator

__all__ = [
    "get_app_settings",
    "get_lesson_repository",
    "get_orchestrator",
    "get_speech_synthesizer",
]


async def get_app_settings(request: Request) -> Settings:
    """Settings the app was started with; process settings otherwise."""
    settings = getattr(request.app.state, "settings", None)
    return cast(Settings, settings or get_settings())


async def get_lesson_repository(request: Request) -> LessonRepository:
    """Retrieve LessonRepository from app state.

    Initialized during lifespan startup.
    """
    return cast(LessonRepository, request.app.state.lesson_repository)


async def get_speech_synthesizer(request: Request) -> SpeechSynthesizer:
    """Retrieve SpeechSynthesizer from app state.

    Raises:
        SpeechNotConfiguredError: No API key was configured at startup.
    """
    synthesizer = getattr(request.app.state, "speech_synthesizer", None)
    if synthesizer is None:
        raise SpeechNotConfiguredError("Speech synthesis is not configured")
    return cast(SpeechSynthesizer, synthesizer)


async def get_orchestrator(request: Request) -> NarrationOrchestrator:
    """Orchestrator bound to the app's synthesizer and speaking rate."""
    synthesizer = await get_speech_synthesizer(request)
    settings = await get_app_settings(request)
    return NarrationOrchestrator(
        synthesizer, words_per_second=settings.words_per_second
    )
