"""Pydantic schemas for lesson-studio domain models."""

from lesson_studio.models.lesson import (
    Category,
    LessonRecord,
    Level,
    VocabularyItem,
)
from lesson_studio.models.media import (
    NarrationAudio,
    OrchestrationResult,
    StudioTheme,
    TimedSegment,
    Voice,
)

__all__ = [
    "Category",
    "LessonRecord",
    "Level",
    "NarrationAudio",
    "OrchestrationResult",
    "StudioTheme",
    "TimedSegment",
    "VocabularyItem",
    "Voice",
]
