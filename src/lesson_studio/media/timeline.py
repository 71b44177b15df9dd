"""Caption timeline approximated from text at a fixed speaking rate.

No audio alignment is performed: every sentence gets a window of
``ceil(words / words_per_second)`` seconds, windows are laid out back
to back from zero.
"""

import math
import re

from lesson_studio.media.themes import DEFAULT_THEME_KEY, STUDIO_THEMES
from lesson_studio.models.media import TimedSegment

DEFAULT_WORDS_PER_SECOND = 2.5
DEFAULT_HIGHLIGHT_COLOR = STUDIO_THEMES[DEFAULT_THEME_KEY].highlight_color

_SENTENCE_TERMINATORS = re.compile(r"[.!?]+")


def word_count(text: str) -> int:
    """Number of whitespace-separated tokens."""
    return len(text.split())


def _seconds(words: int, words_per_second: float) -> int:
    if words_per_second <= 0:
        raise ValueError(f"words_per_second must be positive, got {words_per_second}")
    return math.ceil(words / words_per_second)


def estimate_duration(
    text: str,
    words_per_second: float = DEFAULT_WORDS_PER_SECOND,
) -> int:
    """Estimated narration length of ``text`` in whole seconds."""
    return _seconds(word_count(text), words_per_second)


def split_sentences(text: str) -> list[str]:
    """Split text into sentence-like units on ``.``, ``!`` and ``?``.

    Text without any terminator yields no units. Text trailing the last
    terminator is kept as a final unit.
    """
    if not _SENTENCE_TERMINATORS.search(text):
        return []
    units = (unit.strip() for unit in _SENTENCE_TERMINATORS.split(text))
    return [unit for unit in units if unit]


def build_segments(
    text: str,
    words_per_second: float = DEFAULT_WORDS_PER_SECOND,
    language: str = "en",
    highlight_color: str = DEFAULT_HIGHLIGHT_COLOR,
) -> list[TimedSegment]:
    """Lay sentences of ``text`` out as contiguous caption windows.

    ``segments[0].start_time`` is 0 and every window ends where the next
    one starts. Times are milliseconds.
    """
    segments: list[TimedSegment] = []
    cursor = 0
    for index, sentence in enumerate(split_sentences(text)):
        length_ms = _seconds(word_count(sentence), words_per_second) * 1000
        segments.append(
            TimedSegment(
                index=index,
                text=sentence,
                start_time=cursor,
                end_time=cursor + length_ms,
                language=language,
                highlight_color=highlight_color,
            )
        )
        cursor += length_ms
    return segments
