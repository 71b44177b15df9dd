"""Domain-specific exceptions for lesson-studio."""

from __future__ import annotations

from pathlib import Path


class SourceParseError(Exception):
    """A lesson file is not valid JSON or is not a JSON object.

    Raised while loading a single file; the repository catches it,
    logs a warning and skips the file.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path.name}: {reason}")


class SpeechSynthesisError(Exception):
    """The text-to-speech service rejected a request.

    Attributes:
        status_code: HTTP status returned by the service.
        voice: Voice the request was made with.
    """

    def __init__(self, status_code: int, voice: str, message: str = "") -> None:
        self.status_code = status_code
        self.voice = voice
        super().__init__(f"TTS API error: {status_code} {message}".rstrip())


class SpeechNotConfiguredError(Exception):
    """Narration was requested but no TTS API key is configured."""
