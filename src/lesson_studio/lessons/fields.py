"""Field reconciliation rules for heterogeneous lesson files.

Every output field of :class:`~lesson_studio.models.lesson.LessonRecord`
is described by a :class:`FieldRule`: an ordered list of extractors
(current field name first, legacy names after), an acceptor that
validates the extracted value, and a computed default. The first
extractor whose value is accepted wins.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from lesson_studio.models.lesson import (
    DEFAULT_CATEGORY,
    Category,
    Level,
    VocabularyItem,
)

T = TypeVar("T")

Extractor = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True, slots=True)
class LessonSource:
    """A parsed lesson file awaiting normalization."""

    path: Path
    level: Level
    lesson_id: int
    data: Mapping[str, Any]

    @property
    def file_id(self) -> str:
        return self.path.name.removesuffix(".json")


def key(name: str) -> Extractor:
    """Extractor reading a top-level key."""

    def _extract(data: Mapping[str, Any]) -> Any:
        return data.get(name)

    return _extract


def nested(*path: str) -> Extractor:
    """Extractor following a path of nested objects."""

    def _extract(data: Mapping[str, Any]) -> Any:
        current: Any = data
        for part in path:
            if not isinstance(current, Mapping):
                return None
            current = current.get(part)
        return current

    return _extract


@dataclass(frozen=True, slots=True)
class FieldRule(Generic[T]):
    """Ordered fallback chain for one output field."""

    name: str
    extractors: tuple[Extractor, ...]
    accept: Callable[[Any], T | None]
    default: Callable[[LessonSource], T]

    def resolve(self, source: LessonSource) -> T:
        for extract in self.extractors:
            value = self.accept(extract(source.data))
            if value is not None:
                return value
        return self.default(source)


# ── Acceptors ──


def accept_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def accept_count(value: Any) -> int | None:
    """Accept a positive finite number, or a string of decimal digits."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float) and math.isfinite(value) and value >= 1:
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        count = int(value)
        return count if count > 0 else None
    return None


def accept_text_list(value: Any) -> list[str] | None:
    """A present list is kept even when empty; non-string items are dropped."""
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str) and item.strip()]


def accept_vocabulary(value: Any) -> list[VocabularyItem] | None:
    if not isinstance(value, list):
        return None
    return [_vocabulary_item(entry) for entry in value if isinstance(entry, Mapping)]


def _vocabulary_item(entry: Mapping[str, Any]) -> VocabularyItem:
    translation = entry.get("translation")
    return VocabularyItem(
        word=str(entry.get("word") or ""),
        definition=str(entry.get("definition") or ""),
        example=str(entry.get("example") or ""),
        translation=str(translation) if translation else None,
    )


def accept_records(value: Any) -> list[dict[str, Any]] | None:
    if not isinstance(value, list):
        return None
    return [dict(entry) for entry in value if isinstance(entry, Mapping)]


# ── Rules ──

TITLE: FieldRule[str] = FieldRule(
    name="title",
    extractors=(key("title"), key("lessonTitle")),
    accept=accept_text,
    default=lambda source: f"Lesson {source.lesson_id}",
)

SUBTITLE: FieldRule[str] = FieldRule(
    name="subtitle",
    extractors=(key("subtitle"), key("topic")),
    accept=accept_text,
    default=lambda source: "",
)

OBJECTIVES: FieldRule[list[str]] = FieldRule(
    name="objectives",
    extractors=(key("objectives"), key("learningObjectives")),
    accept=accept_text_list,
    default=lambda source: [],
)


def _first_objective(data: Mapping[str, Any]) -> Any:
    for extract in OBJECTIVES.extractors:
        objectives = accept_text_list(extract(data))
        if objectives is not None:
            return objectives[0] if objectives else None
    return None


DESCRIPTION: FieldRule[str] = FieldRule(
    name="description",
    extractors=(key("description"), nested("introduction", "text"), _first_objective),
    accept=accept_text,
    default=lambda source: "",
)

DURATION: FieldRule[int] = FieldRule(
    name="duration",
    extractors=(key("duration"), key("estimatedTime")),
    accept=accept_count,
    default=lambda source: 15,
)

XP_REWARD: FieldRule[int] = FieldRule(
    name="xp_reward",
    extractors=(key("xpReward"), key("xp")),
    accept=accept_count,
    default=lambda source: 50,
)

AVATAR_ID: FieldRule[str] = FieldRule(
    name="avatar_id",
    extractors=(key("avatarId"), key("hostId")),
    accept=accept_text,
    default=lambda source: "host-couple-1",
)

VOCABULARY: FieldRule[list[VocabularyItem]] = FieldRule(
    name="vocabulary",
    extractors=(key("vocabulary"), key("keyVocabulary")),
    accept=accept_vocabulary,
    default=lambda source: [],
)

EXERCISES: FieldRule[list[dict[str, Any]]] = FieldRule(
    name="exercises",
    extractors=(key("exercises"), nested("practice", "guidedExercises")),
    accept=accept_records,
    default=lambda source: [],
)

CULTURAL_NOTES: FieldRule[str] = FieldRule(
    name="cultural_notes",
    extractors=(key("culturalNotes"), nested("extension", "culturalNotes")),
    accept=accept_text,
    default=lambda source: "",
)

FIELD_RULES: tuple[FieldRule[Any], ...] = (
    TITLE,
    SUBTITLE,
    OBJECTIVES,
    DESCRIPTION,
    DURATION,
    XP_REWARD,
    AVATAR_ID,
    VOCABULARY,
    EXERCISES,
    CULTURAL_NOTES,
)


# ── Category ──

CATEGORY_ALIASES: dict[str, Category] = {
    "grammar": Category.DAILY_CONVERSATION,
    "vocabulary": Category.DAILY_CONVERSATION,
}

# Checked in order against the filename; first match wins.
FILENAME_CATEGORY_KEYWORDS: tuple[tuple[str, Category], ...] = (
    ("Business", Category.BUSINESS),
    ("Travel", Category.TRAVEL),
    ("Academic", Category.ACADEMIC),
)


def normalize_category(value: str) -> Category:
    """Map an explicit category value onto the closed category set."""
    if value in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[value]
    try:
        return Category(value)
    except ValueError:
        return DEFAULT_CATEGORY


def infer_category(data: Mapping[str, Any], filename: str) -> Category:
    """Explicit ``category`` field, else filename keyword, else default.

    The filename match is a plain case-sensitive substring test and can
    misclassify a lesson whose name mentions a keyword incidentally.
    """
    explicit = data.get("category")
    if isinstance(explicit, str) and explicit:
        return normalize_category(explicit)
    for keyword, category in FILENAME_CATEGORY_KEYWORDS:
        if keyword in filename:
            return category
    return DEFAULT_CATEGORY
