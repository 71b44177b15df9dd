"""API request/response schemas.

Field names are snake_case in Python and camelCase on the wire, matching
the catalog records served to the web client.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from lesson_studio.media.speech import MAX_INPUT_CHARS
from lesson_studio.models.base import CamelModel
from lesson_studio.models.lesson import LessonRecord, Level, VocabularyItem
from lesson_studio.models.media import StudioTheme, TimedSegment, Voice

Language = Literal["en", "ar"]


# ── Lessons ──


class LessonListResponse(CamelModel):
    items: list[LessonRecord]
    total: int


class LevelSummary(CamelModel):
    level: Level
    directory: str
    lesson_count: int


class LevelListResponse(CamelModel):
    levels: list[LevelSummary]
    total: int


class VocabularyListResponse(CamelModel):
    items: list[VocabularyItem]
    total: int


# ── Narration ──


class TimelineRequest(CamelModel):
    """Text to lay out as captions. Empty text yields an empty timeline."""

    text: str = Field(max_length=20_000)
    words_per_second: float | None = Field(default=None, gt=0)
    language: Language | None = None
    studio_theme: str | None = None


class TimelineResponse(CamelModel):
    duration: int  # seconds
    segments: list[TimedSegment]
    theme: StudioTheme


class SpeechRequest(CamelModel):
    text: str = Field(min_length=1, max_length=MAX_INPUT_CHARS)
    avatar_id: str = "friend"


class PronunciationRequest(CamelModel):
    word: str = Field(min_length=1, max_length=100)


class SpeechResponse(CamelModel):
    audio_url: str
    voice: Voice
    model: str
    speed: float


class VoiceInfo(CamelModel):
    id: Voice
    name: str
    description: str


class VoiceListResponse(CamelModel):
    voices: list[VoiceInfo]
    avatar_voices: dict[str, Voice]


class OrchestrateRequest(CamelModel):
    """Narration request for free-standing content."""

    lesson_id: str = Field(min_length=1)
    lesson_title: str = ""
    lesson_content: str = Field(min_length=1, max_length=MAX_INPUT_CHARS)
    avatar_id: str = Field(min_length=1)
    language: Language | None = None
    studio_theme: str | None = None


class LessonNarrationRequest(CamelModel):
    """Narration options for a catalog lesson. Omitted options use settings."""

    language: Language | None = None
    studio_theme: str | None = None


class OrchestrateResponse(CamelModel):
    success: bool = True
    lesson_id: str
    video_url: str
    audio_url: str
    subtitles: list[TimedSegment]
    theme: StudioTheme
    duration: int
    quality: str
    voice_model: str
    generated_at: datetime
    message: str


class NarrationStatusResponse(CamelModel):
    lesson_id: str
    status: Literal["ready", "unavailable"]
    message: str
