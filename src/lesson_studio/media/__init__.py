"""Narration media: caption timeline, studio themes, speech synthesis."""

from lesson_studio.media.speech import (
    AVATAR_VOICES,
    SpeechSynthesizer,
    create_speech_synthesizer,
    voice_for_avatar,
)
from lesson_studio.media.themes import DEFAULT_THEME_KEY, STUDIO_THEMES, resolve_theme
from lesson_studio.media.timeline import (
    DEFAULT_WORDS_PER_SECOND,
    build_segments,
    estimate_duration,
    split_sentences,
    word_count,
)

__all__ = [
    "AVATAR_VOICES",
    "DEFAULT_THEME_KEY",
    "DEFAULT_WORDS_PER_SECOND",
    "STUDIO_THEMES",
    "SpeechSynthesizer",
    "build_segments",
    "create_speech_synthesizer",
    "estimate_duration",
    "resolve_theme",
    "split_sentences",
    "voice_for_avatar",
    "word_count",
]
