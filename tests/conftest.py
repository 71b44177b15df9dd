"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from lesson_studio.models.lesson import Level

WriteLesson = Callable[..., Path]


def write_lesson_file(
    root: Path,
    level: Level,
    filename: str,
    data: dict[str, Any] | None = None,
    *,
    raw: str | None = None,
) -> Path:
    """Write one lesson file into ``{root}/{LevelDir}/lessons/``."""
    lessons_dir = root / level.directory / "lessons"
    lessons_dir.mkdir(parents=True, exist_ok=True)
    path = lessons_dir / filename
    path.write_text(raw if raw is not None else json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture()
def courses_root(tmp_path: Path) -> Path:
    root = tmp_path / "courses"
    root.mkdir()
    return root


@pytest.fixture()
def write_lesson(courses_root: Path) -> WriteLesson:
    """Write a lesson file under the temporary course tree."""

    def _write(
        level: Level,
        filename: str,
        data: dict[str, Any] | None = None,
        *,
        raw: str | None = None,
    ) -> Path:
        return write_lesson_file(courses_root, level, filename, data, raw=raw)

    return _write


@pytest.fixture()
def sample_catalog(write_lesson: WriteLesson, courses_root: Path) -> Path:
    """Small catalog spanning three schema generations and one broken file.

    A1: Greetings (flat content), Business-Meeting-Vocabulary (sections)
    A2: Travel-Airport (presentation sections), broken.json (skipped)
    C1: Idioms (explicit category)
    """
    write_lesson(
        Level.A1,
        "A1-01-Greetings.json",
        {
            "title": "Greetings",
            "objectives": ["Say hello", "Introduce yourself"],
            "content": "<p>Hello there. How are you today?</p>",
            "vocabulary": [
                {"word": "hello", "definition": "a greeting", "example": "Hello!"},
                {
                    "word": "bye",
                    "definition": "a farewell",
                    "example": "Bye!",
                    "translation": "مع السلامة",
                },
            ],
            "avatarId": "professor",
        },
    )
    write_lesson(
        Level.A1,
        "Business-Meeting-Vocabulary.json",
        {
            "lessonTitle": "Meeting Vocabulary",
            "sections": [
                {"title": "Agenda", "content": "Plan the meeting."},
                {"title": "Minutes", "text": "Write it down."},
            ],
            "xp": 80,
        },
    )
    write_lesson(
        Level.A2,
        "Travel-Airport.json",
        {
            "title": "At the Airport",
            "learningObjectives": ["Check in for a flight"],
            "presentation": {
                "sections": [
                    {
                        "title": "Check-in",
                        "content": "Show your passport.",
                        "examples": ["Here is my passport.", "Window seat, please."],
                    }
                ]
            },
            "estimatedTime": 25,
            "practice": {"guidedExercises": [{"type": "fill_blank", "question": "Q"}]},
        },
    )
    write_lesson(Level.A2, "broken.json", raw="{not json")
    write_lesson(
        Level.C1,
        "C1-05-Idioms.json",
        {"title": "Idioms", "category": "idioms", "content": "Break a leg!"},
    )
    return courses_root
