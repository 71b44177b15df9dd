"""Lesson catalog API endpoints."""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from lesson_studio.api.deps import get_lesson_repository
from lesson_studio.api.schemas import (
    LessonListResponse,
    LevelListResponse,
    LevelSummary,
    VocabularyListResponse,
)
from lesson_studio.lessons import LessonRepository
from lesson_studio.models.lesson import Category, LessonRecord, Level

logger = structlog.get_logger()

router = APIRouter(tags=["lessons"])

RepoDep = Annotated[LessonRepository, Depends(get_lesson_repository)]


@router.get("/lessons")
async def list_lessons(
    repo: RepoDep,
    level: Level | None = Query(default=None, description="CEFR level filter."),
    category: Category | None = Query(default=None, description="Category filter."),
) -> LessonListResponse:
    """List catalog lessons in catalog order, optionally filtered."""
    lessons = repo.get_all(level=level, category=category)
    return LessonListResponse(items=lessons, total=len(lessons))


@router.get("/lessons/recommended")
async def recommended_lessons(
    repo: RepoDep,
    limit: int = Query(default=5, ge=1, le=50),
) -> LessonListResponse:
    """First ``limit`` lessons of the catalog."""
    lessons = repo.recommended(limit)
    return LessonListResponse(items=lessons, total=len(lessons))


@router.get("/lessons/by-file/{file_id}")
async def get_lesson_by_file_id(file_id: str, repo: RepoDep) -> LessonRecord:
    """Lesson by its file identifier (filename without extension)."""
    lesson = repo.get_by_file_id(file_id)
    if lesson is None:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return lesson


@router.get("/lessons/{lesson_id}")
async def get_lesson(lesson_id: int, repo: RepoDep) -> LessonRecord:
    """Full lesson record including content, vocabulary and exercises."""
    lesson = repo.get_by_id(lesson_id)
    if lesson is None:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return lesson


@router.get("/levels")
async def list_levels(repo: RepoDep) -> LevelListResponse:
    """Lesson counts per level, easiest first."""
    counts = repo.count_by_level()
    levels = [
        LevelSummary(level=level, directory=level.directory, lesson_count=count)
        for level, count in counts.items()
    ]
    return LevelListResponse(levels=levels, total=sum(counts.values()))


@router.get("/vocabulary")
async def list_vocabulary(
    repo: RepoDep,
    level: Level | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
) -> VocabularyListResponse:
    """Vocabulary gathered from catalog lessons."""
    items = repo.vocabulary(level=level, limit=limit)
    return VocabularyListResponse(items=items, total=len(items))
