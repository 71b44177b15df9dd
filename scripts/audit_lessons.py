"""Lesson catalog audit CLI.

Usage:
    uv run python scripts/audit_lessons.py                  # text report
    uv run python scripts/audit_lessons.py --json           # JSON output
    uv run python scripts/audit_lessons.py --root ./courses
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import BaseModel, Field

from lesson_studio.config import get_settings
from lesson_studio.lessons import LessonRepository
from lesson_studio.logging_config import configure_logging
from lesson_studio.models.lesson import LessonRecord


class LessonIssues(BaseModel):
    file_id: str
    level: str
    issues: list[str]


class AuditReport(BaseModel):
    total_lessons: int
    valid_lessons: int
    per_level: dict[str, int]
    missing_levels: list[str] = Field(default_factory=list)
    skipped_files: dict[str, str] = Field(default_factory=dict)
    lessons_with_issues: list[LessonIssues] = Field(default_factory=list)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Lesson catalog audit")
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Course directory (defaults to COURSES_ROOT setting)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output as JSON instead of a text report",
    )
    return parser.parse_args(argv)


def lesson_issues(lesson: LessonRecord) -> list[str]:
    """Problems a lesson author should fix; empty when the lesson is clean."""
    issues: list[str] = []
    if lesson.title == f"Lesson {lesson.id}":
        issues.append("Missing title")
    if not lesson.content:
        issues.append("Missing content")
    elif "<" not in lesson.content:
        issues.append("Content missing HTML formatting")
    if not lesson.objectives:
        issues.append("Missing objectives")
    for i, item in enumerate(lesson.vocabulary):
        if not item.word:
            issues.append(f"Vocabulary {i}: missing word")
        if not item.definition:
            issues.append(f"Vocabulary {i}: missing definition")
    for i, exercise in enumerate(lesson.exercises):
        if not exercise.get("type"):
            issues.append(f"Exercise {i}: missing type")
        if not exercise.get("question"):
            issues.append(f"Exercise {i}: missing question")
    return issues


def audit(repository: LessonRepository) -> AuditReport:
    """Load the catalog and collect per-lesson issues."""
    lessons = repository.initialize()
    load_report = repository.last_report

    flagged = [
        LessonIssues(file_id=lesson.file_id, level=str(lesson.level), issues=issues)
        for lesson in lessons
        if (issues := lesson_issues(lesson))
    ]
    return AuditReport(
        total_lessons=len(lessons),
        valid_lessons=len(lessons) - len(flagged),
        per_level={str(level): n for level, n in load_report.loaded.items()},
        missing_levels=[str(level) for level in load_report.missing_levels],
        skipped_files={
            path.relative_to(repository.courses_root).as_posix(): reason
            for path, reason in load_report.skipped
        },
        lessons_with_issues=flagged,
    )


def format_report(report: AuditReport) -> str:
    """Format report as plain text and return the string."""
    lines: list[str] = []

    lines.append("=== Catalog Summary ===")
    lines.append(f"  Total lessons:  {report.total_lessons}")
    lines.append(f"  Valid lessons:  {report.valid_lessons}")
    lines.append(f"  Skipped files:  {len(report.skipped_files)}")
    lines.append("")

    lines.append("=== By Level ===")
    for level, count in report.per_level.items():
        suffix = "  (directory missing)" if level in report.missing_levels else ""
        lines.append(f"  {level:<4} {count:>5}{suffix}")
    lines.append("")

    if report.skipped_files:
        lines.append("=== Skipped Files ===")
        for name, reason in report.skipped_files.items():
            lines.append(f"  {name}: {reason}")
        lines.append("")

    lines.append("=== Issues ===")
    if not report.lessons_with_issues:
        lines.append("  (none)")
    for entry in report.lessons_with_issues:
        lines.append(f"  [{entry.level}] {entry.file_id}")
        for issue in entry.issues:
            lines.append(f"      - {issue}")

    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Run the audit CLI. Exit status is 1 when any file was skipped."""
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(
        environment=str(settings.environment),
        log_level="WARNING",
        stream=sys.stderr,
    )

    report = audit(LessonRepository(args.root or settings.courses_root))

    if args.json_output:
        print(json.dumps(report.model_dump(), indent=2, ensure_ascii=False))
    else:
        print(format_report(report))
    return 1 if report.skipped_files else 0


if __name__ == "__main__":
    sys.exit(main())
