"""Narration, caption timeline, and studio theme endpoints."""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from lesson_studio.api.deps import (
    get_app_settings,
    get_lesson_repository,
    get_orchestrator,
    get_speech_synthesizer,
)
from lesson_studio.api.schemas import (
    LessonNarrationRequest,
    NarrationStatusResponse,
    OrchestrateRequest,
    OrchestrateResponse,
    PronunciationRequest,
    SpeechRequest,
    SpeechResponse,
    TimelineRequest,
    TimelineResponse,
    VoiceInfo,
    VoiceListResponse,
)
from lesson_studio.config import Settings
from lesson_studio.lessons import LessonRepository
from lesson_studio.media.speech import (
    AVATAR_VOICES,
    MAX_INPUT_CHARS,
    VOICE_DESCRIPTIONS,
    SpeechSynthesizer,
)
from lesson_studio.media.themes import STUDIO_THEMES, resolve_theme
from lesson_studio.media.timeline import build_segments, estimate_duration
from lesson_studio.models.media import OrchestrationResult, StudioTheme
from lesson_studio.narration_orchestrator import (
    NarrationOrchestrator,
    NarrationRequest,
    request_for_lesson,
)

logger = structlog.get_logger()

router = APIRouter(tags=["narration"])

RepoDep = Annotated[LessonRepository, Depends(get_lesson_repository)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
SynthesizerDep = Annotated[SpeechSynthesizer, Depends(get_speech_synthesizer)]
OrchestratorDep = Annotated[NarrationOrchestrator, Depends(get_orchestrator)]


def _orchestrate_response(result: OrchestrationResult) -> OrchestrateResponse:
    return OrchestrateResponse(
        lesson_id=result.lesson_id,
        video_url=result.video_url,
        audio_url=result.audio_url,
        subtitles=result.subtitles,
        theme=result.theme,
        duration=result.metadata.duration,
        quality=result.metadata.quality,
        voice_model=result.metadata.voice_model,
        generated_at=result.metadata.generated_at,
        message=f"Narration complete for lesson {result.lesson_id}",
    )


@router.get("/narration/themes")
async def list_themes() -> list[StudioTheme]:
    return list(STUDIO_THEMES.values())


@router.get("/narration/themes/{key}")
async def get_theme(key: str) -> StudioTheme:
    """Theme preset; unknown keys resolve to the default preset."""
    return resolve_theme(key)


@router.get("/narration/voices")
async def list_voices() -> VoiceListResponse:
    voices = [
        VoiceInfo(id=voice, name=voice.value.capitalize(), description=description)
        for voice, description in VOICE_DESCRIPTIONS.items()
    ]
    return VoiceListResponse(voices=voices, avatar_voices=dict(AVATAR_VOICES))


@router.post("/narration/timeline")
async def build_timeline(
    body: TimelineRequest, settings: SettingsDep
) -> TimelineResponse:
    """Caption timeline and duration estimate for text. No audio is produced."""
    words_per_second = body.words_per_second or settings.words_per_second
    theme = resolve_theme(body.studio_theme or settings.default_theme)
    segments = build_segments(
        body.text,
        words_per_second=words_per_second,
        language=body.language or settings.default_language,
        highlight_color=theme.highlight_color,
    )
    return TimelineResponse(
        duration=estimate_duration(body.text, words_per_second),
        segments=segments,
        theme=theme,
    )


@router.post("/narration/speech")
async def synthesize_speech(
    body: SpeechRequest, synthesizer: SynthesizerDep
) -> SpeechResponse:
    """Narrate text in the voice of a host avatar."""
    audio = await synthesizer.synthesize_narration(body.text, body.avatar_id)
    return SpeechResponse.model_validate(audio.model_dump())


@router.post("/narration/pronunciation")
async def synthesize_pronunciation(
    body: PronunciationRequest, synthesizer: SynthesizerDep
) -> SpeechResponse:
    audio = await synthesizer.synthesize_pronunciation(body.word)
    return SpeechResponse.model_validate(audio.model_dump())


@router.post("/narration/orchestrate")
async def orchestrate(
    body: OrchestrateRequest,
    orchestrator: OrchestratorDep,
    settings: SettingsDep,
) -> OrchestrateResponse:
    """Full narration bundle for caller-supplied content."""
    result = await orchestrator.orchestrate(
        NarrationRequest(
            lesson_id=body.lesson_id,
            title=body.lesson_title,
            content=body.lesson_content,
            avatar_id=body.avatar_id,
            language=body.language or settings.default_language,
            theme_key=body.studio_theme or settings.default_theme,
        )
    )
    return _orchestrate_response(result)


@router.post("/lessons/{lesson_id}/narration")
async def narrate_lesson(
    lesson_id: int,
    body: LessonNarrationRequest,
    repo: RepoDep,
    orchestrator: OrchestratorDep,
    settings: SettingsDep,
) -> OrchestrateResponse:
    """Full narration bundle for a catalog lesson.

    Lessons whose plain text exceeds the speech input limit are rejected
    with 422 rather than sent upstream.
    """
    lesson = repo.get_by_id(lesson_id)
    if lesson is None:
        raise HTTPException(status_code=404, detail="Lesson not found")
    request = request_for_lesson(
        lesson,
        language=body.language or settings.default_language,
        theme_key=body.studio_theme or settings.default_theme,
    )
    if not request.content:
        raise HTTPException(status_code=422, detail="Lesson has no narratable content")
    if len(request.content) > MAX_INPUT_CHARS:
        raise HTTPException(status_code=422, detail="Lesson too long to narrate")
    result = await orchestrator.orchestrate(request)
    return _orchestrate_response(result)


@router.get("/narration/status/{lesson_id}")
async def narration_status(
    lesson_id: str, request: Request
) -> NarrationStatusResponse:
    """Whether narration can be produced right now."""
    if getattr(request.app.state, "speech_synthesizer", None) is not None:
        return NarrationStatusResponse(
            lesson_id=lesson_id,
            status="ready",
            message="Narration is ready for orchestration",
        )
    return NarrationStatusResponse(
        lesson_id=lesson_id,
        status="unavailable",
        message="Speech synthesis is not configured",
    )
