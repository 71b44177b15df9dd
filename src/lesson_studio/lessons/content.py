"""Lesson body reconstruction.

Lesson files carry their body in one of three shapes, produced by
different generations of the authoring tools:

* ``content``: a ready-made markup string;
* ``sections``: a flat list of ``{title, content | text}`` objects;
* ``presentation.sections``: structured sections with ``examples``.

Each shape is detected into its own variant and rendered to markup
independently. Rendered sections are joined with ``<hr/>``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

SECTION_SEPARATOR = "<hr/>"


@dataclass(frozen=True, slots=True)
class FlatContent:
    """Pre-rendered markup taken verbatim."""

    markup: str


@dataclass(frozen=True, slots=True)
class SectionsContent:
    """Generic ``sections`` array."""

    sections: tuple[Mapping[str, Any], ...]


@dataclass(frozen=True, slots=True)
class PresentationContent:
    """``presentation.sections`` array with optional example lists."""

    sections: tuple[Mapping[str, Any], ...]


ContentSource = FlatContent | SectionsContent | PresentationContent


def _section_list(value: Any) -> tuple[Mapping[str, Any], ...]:
    if not isinstance(value, list):
        return ()
    return tuple(s for s in value if isinstance(s, Mapping))


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def detect_content(data: Mapping[str, Any]) -> ContentSource | None:
    """Pick the content variant present in a raw lesson document.

    Shapes are checked in priority order: flat string, generic
    sections, presentation sections. A present ``sections`` list selects
    the generic shape even when empty. Returns None when none is present.
    """
    markup = data.get("content")
    if isinstance(markup, str) and markup:
        return FlatContent(markup)

    if isinstance(data.get("sections"), list):
        return SectionsContent(_section_list(data["sections"]))

    presentation = data.get("presentation")
    if isinstance(presentation, Mapping):
        sections = _section_list(presentation.get("sections"))
        if sections:
            return PresentationContent(sections)

    return None


def _render_generic_section(section: Mapping[str, Any]) -> str:
    title = _text(section.get("title"))
    body = _text(section.get("content")) or _text(section.get("text"))
    return f"<h2>{title}</h2><p>{body}</p>"


def _render_presentation_section(section: Mapping[str, Any]) -> str:
    title = _text(section.get("title"))
    body = _text(section.get("content"))
    fragment = f"<h2>{title}</h2><p>{body}</p>"

    examples = section.get("examples")
    if isinstance(examples, list) and examples:
        items = "".join(f"<li>{example}</li>" for example in examples)
        fragment += f"<ul>{items}</ul>"
    return fragment


def render_content(source: ContentSource | None) -> str:
    """Render a content variant to markup. Absent content renders as ``""``."""
    match source:
        case FlatContent(markup=markup):
            return markup
        case SectionsContent(sections=sections):
            return SECTION_SEPARATOR.join(
                _render_generic_section(s) for s in sections
            )
        case PresentationContent(sections=sections):
            return SECTION_SEPARATOR.join(
                _render_presentation_section(s) for s in sections
            )
        case _:
            return ""
