"""Narration and caption timeline schemas."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import ConfigDict, Field

from lesson_studio.models.base import CamelModel


class Voice(StrEnum):
    """Voices offered by the text-to-speech service."""

    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class TimedSegment(CamelModel):
    """One caption window. Times are integer milliseconds."""

    index: int
    text: str
    start_time: int
    end_time: int
    language: str
    highlight_color: str


class StudioTheme(CamelModel):
    """Named colour palette applied to the lesson presentation."""

    model_config = ConfigDict(frozen=True)

    key: str
    background_color: str
    accent_color: str
    brand_color: str
    text_color: str
    highlight_color: str


class NarrationAudio(CamelModel):
    """Playable narration returned by the speech synthesizer."""

    audio_url: str
    voice: Voice
    model: str
    speed: float


class OrchestrationMetadata(CamelModel):
    duration: int  # seconds
    quality: str = "4K"
    voice_model: str = "tts-1-hd"
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class OrchestrationResult(CamelModel):
    """Bundle of media references and caption timeline for one lesson."""

    lesson_id: str
    video_url: str
    audio_url: str
    subtitles: list[TimedSegment] = Field(default_factory=list)
    theme: StudioTheme
    metadata: OrchestrationMetadata
