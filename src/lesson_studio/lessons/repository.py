"""In-memory lesson catalog loaded from the course directory tree.

Layout::

    {courses_root}/
        A1-Foundation/lessons/*.json
        A2-Elementary/lessons/*.json
        ...
        C2-Mastery/lessons/*.json

The repository is constructed by the composition root and loaded with
:meth:`LessonRepository.initialize` (or lazily via
:meth:`LessonRepository.ensure_loaded`). Once loaded, the catalog is
read-only for the lifetime of the instance.
"""

from __future__ import annotations

import json
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from lesson_studio.errors import SourceParseError
from lesson_studio.lessons import fields
from lesson_studio.lessons.content import detect_content, render_content
from lesson_studio.models.lesson import (
    Category,
    LessonRecord,
    Level,
    VocabularyItem,
)

logger = structlog.get_logger()

LESSONS_SUBDIR = "lessons"


@dataclass(slots=True)
class LoadReport:
    """Outcome of one catalog scan.

    Attributes:
        loaded: Number of records produced per level.
        skipped: Files that could not be turned into a record, with reason.
        missing_levels: Levels whose lesson directory does not exist.
    """

    loaded: dict[Level, int] = field(default_factory=dict)
    skipped: list[tuple[Path, str]] = field(default_factory=list)
    missing_levels: list[Level] = field(default_factory=list)


def read_lesson_file(path: Path) -> dict[str, Any]:
    """Read and parse one lesson file.

    Raises:
        SourceParseError: If the file is unreadable, not valid JSON,
            is nested too deeply to parse, or its top-level value is not
            an object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceParseError(path, f"unreadable: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SourceParseError(path, f"invalid JSON: {exc.msg}") from exc
    except RecursionError as exc:
        raise SourceParseError(path, "invalid JSON: nesting too deep") from exc

    if not isinstance(data, dict):
        raise SourceParseError(path, "top-level value is not an object")
    return data


def build_record(source: fields.LessonSource) -> LessonRecord:
    """Normalize a parsed lesson file into a LessonRecord."""
    values = {rule.name: rule.resolve(source) for rule in fields.FIELD_RULES}
    return LessonRecord(
        id=source.lesson_id,
        file_id=source.file_id,
        level=source.level,
        category=fields.infer_category(source.data, source.path.name),
        order=source.lesson_id,
        content=render_content(detect_content(source.data)),
        **values,
    )


class LessonRepository:
    """Lesson catalog indexed by id, file id, and level.

    Lookups never raise: a missing lesson is ``None`` or an empty list.
    """

    def __init__(self, courses_root: Path) -> None:
        self._root = Path(courses_root)
        self._lock = threading.Lock()
        self._lessons: list[LessonRecord] = []
        self._by_id: dict[int, LessonRecord] = {}
        self._by_file_id: dict[str, LessonRecord] = {}
        self._by_level: dict[Level, list[LessonRecord]] = {}
        self._report = LoadReport()

    @property
    def courses_root(self) -> Path:
        return self._root

    @property
    def last_report(self) -> LoadReport:
        return self._report

    # ── Loading ──

    def initialize(self) -> list[LessonRecord]:
        """Scan the course tree and (re)build the catalog.

        Concurrent callers are serialized; each scan is deterministic
        for a given tree, so a repeated scan yields equal records.
        """
        with self._lock:
            self._scan()
            return list(self._lessons)

    def ensure_loaded(self) -> list[LessonRecord]:
        """Load the catalog unless it already holds lessons.

        Returns a new list; the cached catalog itself is never handed out.
        """
        if self._lessons:
            return list(self._lessons)
        with self._lock:
            if not self._lessons:
                self._scan()
            return list(self._lessons)

    def load_all(self) -> list[LessonRecord]:
        """Return the memoized catalog, scanning the tree on first use."""
        return self.ensure_loaded()

    def _scan(self) -> None:
        logger.info("lesson_catalog_loading", courses_root=str(self._root))
        lessons: list[LessonRecord] = []
        by_file_id: dict[str, LessonRecord] = {}
        report = LoadReport()
        next_id = 1

        for level in Level:
            lessons_dir = self._root / level.directory / LESSONS_SUBDIR
            if not lessons_dir.is_dir():
                logger.warning(
                    "lesson_directory_missing",
                    level=str(level),
                    path=str(lessons_dir),
                )
                report.missing_levels.append(level)
                report.loaded[level] = 0
                continue

            level_count = 0
            for path in sorted(lessons_dir.glob("*.json")):
                try:
                    data = read_lesson_file(path)
                except SourceParseError as exc:
                    logger.warning(
                        "lesson_file_skipped",
                        file=path.name,
                        level=str(level),
                        reason=exc.reason,
                    )
                    report.skipped.append((path, exc.reason))
                    continue

                source = fields.LessonSource(
                    path=path, level=level, lesson_id=next_id, data=data
                )
                if source.file_id in by_file_id:
                    logger.warning(
                        "lesson_file_duplicate",
                        file=path.name,
                        level=str(level),
                        first_level=str(by_file_id[source.file_id].level),
                    )
                    report.skipped.append((path, "duplicate file id"))
                    continue

                try:
                    record = build_record(source)
                except (ValidationError, ValueError, OverflowError) as exc:
                    reason = f"invalid field value: {exc}"
                    logger.warning(
                        "lesson_file_skipped",
                        file=path.name,
                        level=str(level),
                        reason=reason,
                    )
                    report.skipped.append((path, reason))
                    continue

                lessons.append(record)
                by_file_id[record.file_id] = record
                level_count += 1
                next_id += 1

            report.loaded[level] = level_count

        by_level: dict[Level, list[LessonRecord]] = defaultdict(list)
        for record in lessons:
            by_level[record.level].append(record)

        self._lessons = lessons
        self._by_id = {record.id: record for record in lessons}
        self._by_file_id = by_file_id
        self._by_level = dict(by_level)
        self._report = report

        logger.info(
            "lesson_catalog_loaded",
            lesson_count=len(lessons),
            skipped_count=len(report.skipped),
        )

    # ── Queries ──

    def get_all(
        self,
        level: Level | str | None = None,
        category: Category | str | None = None,
    ) -> list[LessonRecord]:
        """Return lessons in load order, optionally filtered."""
        lessons = self.ensure_loaded()
        if level:
            lessons = [lesson for lesson in lessons if lesson.level == level]
        if category:
            lessons = [lesson for lesson in lessons if lesson.category == category]
        return list(lessons)

    def get_by_id(self, lesson_id: int) -> LessonRecord | None:
        self.ensure_loaded()
        return self._by_id.get(lesson_id)

    def get_by_file_id(self, file_id: str) -> LessonRecord | None:
        self.ensure_loaded()
        return self._by_file_id.get(file_id)

    def get_by_level(self, level: Level | str) -> list[LessonRecord]:
        self.ensure_loaded()
        try:
            return list(self._by_level.get(Level(level), []))
        except ValueError:
            return []

    def count(self) -> int:
        return len(self.ensure_loaded())

    def count_by_level(self) -> dict[Level, int]:
        self.ensure_loaded()
        return {level: len(self._by_level.get(level, [])) for level in Level}

    def recommended(self, limit: int = 5) -> list[LessonRecord]:
        """First ``limit`` lessons in catalog order."""
        return self.ensure_loaded()[:limit]

    def vocabulary(
        self,
        level: Level | str | None = None,
        limit: int = 50,
    ) -> list[VocabularyItem]:
        """Vocabulary of all matching lessons, flattened in catalog order."""
        items: list[VocabularyItem] = []
        for lesson in self.get_all(level=level):
            items.extend(lesson.vocabulary)
            if len(items) >= limit:
                break
        return items[:limit]
