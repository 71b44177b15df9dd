"""Lesson catalog schemas: levels, categories, normalized lesson records."""

from enum import StrEnum
from typing import Any

from pydantic import ConfigDict, Field

from lesson_studio.models.base import CamelModel


class Level(StrEnum):
    """CEFR proficiency level. Declaration order is difficulty order."""

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"

    @property
    def directory(self) -> str:
        """Name of the course directory holding this level's lessons."""
        return LEVEL_DIRECTORIES[self]


LEVEL_DIRECTORIES: dict[Level, str] = {
    Level.A1: "A1-Foundation",
    Level.A2: "A2-Elementary",
    Level.B1: "B1-Intermediate",
    Level.B2: "B2-Upper-Intermediate",
    Level.C1: "C1-Advanced",
    Level.C2: "C2-Mastery",
}


class Category(StrEnum):
    """Topical lesson category. Mirrors the catalog's closed category set."""

    DAILY_CONVERSATION = "daily_conversation"
    BUSINESS = "business"
    TRAVEL = "travel"
    ACADEMIC = "academic"
    SOCIAL = "social"
    CULTURE = "culture"
    IDIOMS = "idioms"
    PRONUNCIATION = "pronunciation"


DEFAULT_CATEGORY = Category.DAILY_CONVERSATION


class _FrozenModel(CamelModel):
    model_config = ConfigDict(frozen=True)


class VocabularyItem(_FrozenModel):
    """Single vocabulary entry attached to a lesson."""

    word: str = ""
    definition: str = ""
    example: str = ""
    translation: str | None = None


class LessonRecord(_FrozenModel):
    """Normalized in-memory representation of one lesson file.

    ``id`` is assigned sequentially at load time and is only stable
    within a process; ``file_id`` is derived from the filename and is
    stable across reloads.
    """

    id: int
    file_id: str
    title: str
    subtitle: str = ""
    description: str = ""
    level: Level
    category: Category = DEFAULT_CATEGORY
    duration: int = 15
    xp_reward: int = 50
    order: int
    is_published: bool = True
    avatar_id: str = "host-couple-1"
    objectives: list[str] = Field(default_factory=list)
    content: str = ""
    vocabulary: list[VocabularyItem] = Field(default_factory=list)
    exercises: list[dict[str, Any]] = Field(default_factory=list)
    cultural_notes: str = ""
