"""Lesson catalog: file discovery, field reconciliation, lookups."""

from lesson_studio.lessons.repository import (
    LessonRepository,
    LoadReport,
    build_record,
    read_lesson_file,
)

__all__ = [
    "LessonRepository",
    "LoadReport",
    "build_record",
    "read_lesson_file",
]
