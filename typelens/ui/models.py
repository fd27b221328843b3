"""Data models used by the UI."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from typelens.core.alignment import MistakeDetail
from typelens.core.analysis import AnalysisResult
from typelens.core.report import format_clock, time_efficiency


@dataclass
class StatCard:
    """A labelled figure on the results page."""

    label: str
    value: str
    hint: str = ""


def stat_cards(result: AnalysisResult) -> List[StatCard]:
    return [
        StatCard("WPM", str(result.wpm), "words per minute"),
        StatCard("CPM", str(result.cpm), "characters per minute"),
        StatCard("Accuracy", f"{result.accuracy_percent}%"),
        StatCard("Time", format_clock(result.elapsed_seconds), f"expected {format_clock(result.expected_seconds)}"),
        StatCard(
            "Efficiency",
            f"{time_efficiency(result.expected_seconds, result.elapsed_seconds)}%",
        ),
        StatCard("Mistakes", str(result.mistake_count), f"{result.correct_char_count}/{result.total_typed_count} correct"),
    ]


def problem_words(mistakes: Sequence[MistakeDetail], limit: int = 5) -> List[Tuple[str, int]]:
    """Words with the most mistakes, largest count first.

    Ties keep first-seen order.
    """
    counts = Counter(m.word for m in mistakes)
    return sorted(counts.items(), key=lambda item: -item[1])[:limit]


def mistake_label(count: int) -> str:
    return f"{count} mistake{'s' if count != 1 else ''}"
