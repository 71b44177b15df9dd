"""Lesson narration orchestration.

Sequences the steps that turn lesson text into presentable media:
narration audio, a placeholder video reference, the caption timeline
and summary metadata. Speech synthesis failures propagate unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from bs4 import BeautifulSoup

from lesson_studio.media.speech import SpeechSynthesizer
from lesson_studio.media.themes import DEFAULT_THEME_KEY, resolve_theme
from lesson_studio.media.timeline import (
    DEFAULT_WORDS_PER_SECOND,
    build_segments,
    estimate_duration,
)
from lesson_studio.models.lesson import LessonRecord
from lesson_studio.models.media import OrchestrationMetadata, OrchestrationResult

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class NarrationRequest:
    """Input for one orchestration run.

    Attributes:
        lesson_id: Identifier echoed in the result and the video reference.
        title: Lesson title, used for logging only.
        content: Plain narration text.
        avatar_id: Host avatar; selects the narration voice.
        language: Language tag stamped on every caption.
        theme_key: Studio theme preset name; unknown names use the default.
    """

    lesson_id: str
    title: str
    content: str
    avatar_id: str
    language: str = "en"
    theme_key: str = DEFAULT_THEME_KEY


def markup_to_text(markup: str) -> str:
    """Flatten lesson markup into narration text.

    Block elements are separated by a space so adjacent headings and
    paragraphs do not fuse into one word.
    """
    if "<" not in markup:
        return markup.strip()
    soup = BeautifulSoup(markup, "html.parser")
    return " ".join(soup.get_text(separator=" ").split())


def request_for_lesson(
    lesson: LessonRecord,
    *,
    language: str = "en",
    theme_key: str = DEFAULT_THEME_KEY,
) -> NarrationRequest:
    """Build a narration request from a catalog lesson."""
    return NarrationRequest(
        lesson_id=str(lesson.id),
        title=lesson.title,
        content=markup_to_text(lesson.content),
        avatar_id=lesson.avatar_id,
        language=language,
        theme_key=theme_key,
    )


def placeholder_video_url(lesson_id: str) -> str:
    """Reference standing in for a rendered lesson video."""
    return f"data:video/mp4;base64,SIMULATED_VIDEO_STREAM_{lesson_id}"


class NarrationOrchestrator:
    """Produce audio, video reference, captions and metadata for a lesson."""

    def __init__(
        self,
        synthesizer: SpeechSynthesizer,
        *,
        words_per_second: float = DEFAULT_WORDS_PER_SECOND,
    ) -> None:
        self._synthesizer = synthesizer
        self._words_per_second = words_per_second

    async def orchestrate(self, request: NarrationRequest) -> OrchestrationResult:
        log = logger.bind(lesson_id=request.lesson_id)
        log.info("narration_orchestration_start", title=request.title)

        audio = await self._synthesizer.synthesize_narration(
            request.content, request.avatar_id
        )
        video_url = placeholder_video_url(request.lesson_id)

        theme = resolve_theme(request.theme_key)
        subtitles = build_segments(
            request.content,
            words_per_second=self._words_per_second,
            language=request.language,
            highlight_color=theme.highlight_color,
        )
        metadata = OrchestrationMetadata(
            duration=estimate_duration(request.content, self._words_per_second),
            voice_model=audio.model,
        )

        log.info(
            "narration_orchestration_done",
            segments=len(subtitles),
            duration_s=metadata.duration,
        )
        return OrchestrationResult(
            lesson_id=request.lesson_id,
            video_url=video_url,
            audio_url=audio.audio_url,
            subtitles=subtitles,
            theme=theme,
            metadata=metadata,
        )
