"""Centralized application configuration via environment variables."""

from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The OpenAI API key uses SecretStr to prevent accidental logging.
    Narration is disabled (503 on speech endpoints) while the key is unset.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App ---
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "DEBUG"
    # --- CORS ---
    cors_allowed_origins: list[str] = []
    cors_allow_credentials: bool = False
    cors_allowed_methods: list[str] = ["GET", "POST"]
    cors_allowed_headers: list[str] = ["Content-Type"]

    # --- Lesson catalog ---
    courses_root: Path = Path("courses")

    # --- Speech synthesis ---
    openai_api_key: SecretStr | None = None
    # None means the SDK default endpoint.
    openai_base_url: str | None = None
    tts_model: str = "tts-1-hd"
    tts_timeout_seconds: float = 60.0

    # --- Narration timeline ---
    words_per_second: float = 2.5
    default_theme: str = "casino-gold"
    default_language: Literal["en", "ar"] = "en"

    # --- Convenience properties ---
    @property
    def is_dev(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_prod(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING

    @property
    def speech_enabled(self) -> bool:
        return self.openai_api_key is not None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings singleton.

    Usage::

        from lesson_studio.config import get_settings
        settings = get_settings()
    """
    return Settings()


settings = get_settings()
