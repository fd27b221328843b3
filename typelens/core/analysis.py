from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from typelens.core import metrics
from typelens.core.alignment import (
    CharacterDiff,
    MistakeDetail,
    compute_diff,
    compute_mistakes,
    count_correct,
)
from typelens.core.feedback import suggestions as build_suggestions
from typelens.core.metrics import DEFAULT_BASELINE_WPM, Number, TypingMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything the results screen needs for one finished test."""

    wpm: int
    cpm: int
    accuracy_percent: int
    elapsed_seconds: Number
    correct_char_count: int
    total_typed_count: int
    mistake_count: int
    mistake_details: Tuple[MistakeDetail, ...]
    expected_seconds: int
    suggestions: Tuple[str, ...]

    @property
    def metrics(self) -> TypingMetrics:
        return TypingMetrics(
            wpm=self.wpm,
            cpm=self.cpm,
            accuracy_percent=self.accuracy_percent,
            elapsed_seconds=self.elapsed_seconds,
            correct_char_count=self.correct_char_count,
            total_typed_count=self.total_typed_count,
            mistake_count=self.mistake_count,
            expected_seconds=self.expected_seconds,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with the keys the web client used for submissions."""
        return {
            "wpm": self.wpm,
            "cpm": self.cpm,
            "accuracy": self.accuracy_percent,
            "elapsedTime": self.elapsed_seconds,
            "correctChars": self.correct_char_count,
            "totalChars": self.total_typed_count,
            "mistakes": self.mistake_count,
            "mistakeDetails": [
                {
                    "position": m.position,
                    "expected": m.expected,
                    "typed": m.typed,
                    "word": m.word,
                    "wordIndex": m.word_index,
                }
                for m in self.mistake_details
            ],
            "expectedTime": self.expected_seconds,
            "improvementSuggestions": list(self.suggestions),
        }


def analyze(
    reference: str,
    typed: str,
    elapsed_seconds: Number,
    baseline_wpm: Number = DEFAULT_BASELINE_WPM,
) -> AnalysisResult:
    """Score *typed* against *reference* for a test that took *elapsed_seconds*."""
    mistakes = compute_mistakes(reference, typed)
    correct = count_correct(reference, typed)
    wpm = metrics.wpm(correct, elapsed_seconds)
    accuracy = metrics.accuracy(correct, len(typed))
    result = AnalysisResult(
        wpm=wpm,
        cpm=metrics.cpm(correct, elapsed_seconds),
        accuracy_percent=accuracy,
        elapsed_seconds=elapsed_seconds,
        correct_char_count=correct,
        total_typed_count=len(typed),
        mistake_count=len(mistakes),
        mistake_details=tuple(mistakes),
        expected_seconds=metrics.expected_seconds(reference, baseline_wpm),
        suggestions=tuple(build_suggestions(mistakes, accuracy, wpm)),
    )
    logger.debug(
        "Analyzed %d typed chars: wpm=%d accuracy=%d%% mistakes=%d",
        result.total_typed_count,
        result.wpm,
        result.accuracy_percent,
        result.mistake_count,
    )
    return result


def diff(reference: str, typed: str) -> List[CharacterDiff]:
    """Per-character classification for highlighting."""
    return compute_diff(reference, typed)
