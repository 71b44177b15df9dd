"""Text-to-speech client for lesson narration.

Wraps the OpenAI speech endpoint. Audio comes back as MP3 bytes and is
returned inline as a base64 ``data:`` URL, so no asset storage is needed.
"""

from __future__ import annotations

import base64
import time
from types import MappingProxyType

import openai
import structlog

from lesson_studio.config import Settings
from lesson_studio.errors import SpeechSynthesisError
from lesson_studio.models.media import NarrationAudio, Voice

logger = structlog.get_logger()

DEFAULT_VOICE = Voice.NOVA
NARRATION_MODEL = "tts-1-hd"
PRONUNCIATION_SPEED = 0.85
# Longest input the speech endpoint accepts, in characters.
MAX_INPUT_CHARS = 4096

# Host avatar persona -> voice.
AVATAR_VOICES: MappingProxyType[str, Voice] = MappingProxyType(
    {
        "professor": Voice.ONYX,
        "coach": Voice.ECHO,
        "friend": Voice.NOVA,
        "tutor": Voice.ALLOY,
        "storyteller": Voice.FABLE,
        "mentor": Voice.SHIMMER,
    }
)

VOICE_DESCRIPTIONS: MappingProxyType[Voice, str] = MappingProxyType(
    {
        Voice.ALLOY: "Clear and patient - ideal for tutoring",
        Voice.ECHO: "Energetic and motivating - great for coaching",
        Voice.FABLE: "Expressive and engaging - perfect for storytelling",
        Voice.ONYX: "Deep and authoritative - professional tone",
        Voice.NOVA: "Warm and conversational - natural American English",
        Voice.SHIMMER: "Calm and supportive - mentoring style",
    }
)


def voice_for_avatar(avatar_id: str | None) -> Voice:
    """Voice assigned to an avatar; unmapped avatars speak with nova."""
    if avatar_id is None:
        return DEFAULT_VOICE
    return AVATAR_VOICES.get(avatar_id, DEFAULT_VOICE)


def to_data_url(audio: bytes, mime_type: str = "audio/mp3") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(audio).decode('ascii')}"


class SpeechSynthesizer:
    """Async text-to-speech client.

    Errors are not retried. A rejected request surfaces as
    :class:`SpeechSynthesisError`; connection failures surface as the
    SDK's own exceptions.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        model: str = NARRATION_MODEL,
        timeout: float = 60.0,
        client: openai.AsyncOpenAI | None = None,
    ) -> None:
        self._model = model
        self._client = client or openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    async def synthesize(
        self,
        text: str,
        *,
        voice: Voice = DEFAULT_VOICE,
        speed: float = 1.0,
        model: str | None = None,
    ) -> NarrationAudio:
        """Convert ``text`` to MP3 narration.

        Raises:
            SpeechSynthesisError: The service answered with an error status.
        """
        model = model or self._model
        start = time.perf_counter()
        try:
            response = await self._client.audio.speech.create(
                model=model,
                input=text,
                voice=voice.value,
                speed=speed,
                response_format="mp3",
            )
        except openai.APIStatusError as exc:
            logger.error(
                "speech_synthesis_rejected",
                status_code=exc.status_code,
                voice=str(voice),
                model=model,
            )
            raise SpeechSynthesisError(
                exc.status_code, voice=str(voice), message=exc.message
            ) from exc

        audio = response.content
        logger.info(
            "speech_synthesized",
            voice=str(voice),
            model=model,
            chars=len(text),
            audio_bytes=len(audio),
            latency_ms=int((time.perf_counter() - start) * 1000),
        )
        return NarrationAudio(
            audio_url=to_data_url(audio),
            voice=voice,
            model=model,
            speed=speed,
        )

    async def synthesize_narration(self, text: str, avatar_id: str) -> NarrationAudio:
        """Narrate lesson text in the voice of the given host avatar."""
        return await self.synthesize(text, voice=voice_for_avatar(avatar_id), speed=1.0)

    async def synthesize_pronunciation(self, word: str) -> NarrationAudio:
        """Slow, high-quality pronunciation of a single word."""
        return await self.synthesize(
            word, voice=DEFAULT_VOICE, speed=PRONUNCIATION_SPEED
        )

    async def aclose(self) -> None:
        await self._client.close()


def create_speech_synthesizer(settings: Settings) -> SpeechSynthesizer | None:
    """Build the synthesizer from settings, or None when no key is set."""
    if settings.openai_api_key is None:
        logger.warning("speech_synthesis_disabled", reason="OPENAI_API_KEY not set")
        return None
    return SpeechSynthesizer(
        settings.openai_api_key.get_secret_value(),
        base_url=settings.openai_base_url,
        model=settings.tts_model,
        timeout=settings.tts_timeout_seconds,
    )

