"""Speed and accuracy formulas.

All speeds count *correct* characters only. A word is ``CHARS_PER_WORD``
characters, the usual typing-test convention.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

Number = Union[int, float]

CHARS_PER_WORD = 5
DEFAULT_BASELINE_WPM = 40


@dataclass(frozen=True)
class TypingMetrics:
    wpm: int
    cpm: int
    accuracy_percent: int
    elapsed_seconds: Number
    correct_char_count: int
    total_typed_count: int
    mistake_count: int
    expected_seconds: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (``2.5 -> 3``)."""
    return int(math.floor(value + 0.5))


def wpm(correct_chars: int, seconds: Number) -> int:
    if seconds == 0:
        return 0
    return round_half_up(correct_chars * 60 / (CHARS_PER_WORD * seconds))


def cpm(correct_chars: int, seconds: Number) -> int:
    if seconds == 0:
        return 0
    return round_half_up(correct_chars * 60 / seconds)


def accuracy(correct_chars: int, total_typed: int) -> int:
    """Percentage of typed characters that were correct; 100 for no input."""
    if total_typed == 0:
        return 100
    return round_half_up(correct_chars * 100 / total_typed)


def expected_seconds(reference: str, baseline_wpm: Number = DEFAULT_BASELINE_WPM) -> int:
    """Seconds a typist at *baseline_wpm* needs for *reference*."""
    word_count = len(reference.split(" "))
    return round_half_up(word_count * 60 / baseline_wpm)
