"""Rule-based improvement suggestions.

Rules run in table order and each contributes at most one message, so the
order of :data:`RULES` is the order of the returned list.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from typelens.core.alignment import MistakeDetail

PUNCTUATION = frozenset(".,;:!?'\"()-")
PUNCTUATION_SHARE = 0.3
CAPITALIZATION_SHARE = 0.2
MAX_NAMED_WORDS = 3

FOCUS_ACCURACY = "Focus on accuracy over speed. Slow down and ensure each keystroke is correct."
KEEP_ACCURACY = "Good progress! Try to maintain focus on accuracy while gradually increasing speed."
FUNDAMENTALS = "Practice basic finger positioning and try to type without looking at the keyboard."
MUSCLE_MEMORY = "Great foundation! Focus on building muscle memory for common letter combinations."
FAST_TYPIST = "Excellent typing speed! Consider practicing complex texts to maintain this level."
PUNCTUATION_PRACTICE = "Focus on punctuation accuracy. Practice typing sentences with various punctuation marks."
NUMBER_PRACTICE = "Practice typing numbers. Consider using the number row or numeric keypad more frequently."
CAPITALIZATION_PRACTICE = "Work on capitalization accuracy. Practice proper use of the Shift key."
CHALLENGING_WORDS = "Practice these challenging words: {words}"
EXCELLENT = "Excellent performance! Keep practicing to maintain your skills."


@dataclass(frozen=True)
class FeedbackInput:
    mistakes: Sequence[MistakeDetail]
    accuracy: int
    wpm: int


@dataclass(frozen=True)
class FeedbackRule:
    name: str
    evaluate: Callable[[FeedbackInput], Optional[str]]


def _accuracy_rule(data: FeedbackInput) -> Optional[str]:
    if data.accuracy < 80:
        return FOCUS_ACCURACY
    if data.accuracy < 90:
        return KEEP_ACCURACY
    return None


def _speed_rule(data: FeedbackInput) -> Optional[str]:
    if data.wpm < 30:
        return FUNDAMENTALS
    if data.wpm < 50:
        return MUSCLE_MEMORY
    if data.wpm >= 70:
        return FAST_TYPIST
    # 50-69 wpm: nothing to add
    return None


def _punctuation_rule(data: FeedbackInput) -> Optional[str]:
    hits = sum(1 for m in data.mistakes if m.expected in PUNCTUATION)
    if hits > len(data.mistakes) * PUNCTUATION_SHARE:
        return PUNCTUATION_PRACTICE
    return None


def _number_rule(data: FeedbackInput) -> Optional[str]:
    if any("0" <= m.expected <= "9" for m in data.mistakes):
        return NUMBER_PRACTICE
    return None


def _is_case_slip(mistake: MistakeDetail) -> bool:
    return mistake.expected != mistake.typed and mistake.expected.lower() == mistake.typed.lower()


def _capitalization_rule(data: FeedbackInput) -> Optional[str]:
    hits = sum(1 for m in data.mistakes if _is_case_slip(m))
    if hits > len(data.mistakes) * CAPITALIZATION_SHARE:
        return CAPITALIZATION_PRACTICE
    return None


def repeated_mistake_words(mistakes: Sequence[MistakeDetail]) -> List[str]:
    """Lower-cased words holding two or more mistakes, in first-seen order."""
    counts = Counter(m.word.lower() for m in mistakes)
    return [word for word, count in counts.items() if count >= 2]


def _repeated_word_rule(data: FeedbackInput) -> Optional[str]:
    words = repeated_mistake_words(data.mistakes)
    if not words:
        return None
    return CHALLENGING_WORDS.format(words=", ".join(words[:MAX_NAMED_WORDS]))


RULES: tuple[FeedbackRule, ...] = (
    FeedbackRule("accuracy", _accuracy_rule),
    FeedbackRule("speed", _speed_rule),
    FeedbackRule("punctuation", _punctuation_rule),
    FeedbackRule("numbers", _number_rule),
    FeedbackRule("capitalization", _capitalization_rule),
    FeedbackRule("repeated_words", _repeated_word_rule),
)


def suggestions(
    mistakes: Sequence[MistakeDetail],
    accuracy: int,
    wpm: int,
    rules: Sequence[FeedbackRule] = RULES,
) -> List[str]:
    """Evaluate *rules* in order; never returns an empty list."""
    data = FeedbackInput(mistakes=tuple(mistakes), accuracy=accuracy, wpm=wpm)
    messages: List[str] = []
    for rule in rules:
        message = rule.evaluate(data)
        if message is not None:
            messages.append(message)
    if not messages:
        messages.append(EXCELLENT)
    return messages
