from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class DiffKind(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    MISSING = "missing"
    EXTRA = "extra"


@dataclass(frozen=True)
class CharacterDiff:
    """Classification of one aligned position, used for highlighting."""

    position: int
    kind: DiffKind
    char: str


@dataclass(frozen=True)
class MistakeDetail:
    """A position inside the overlapping range where the typed char differs."""

    position: int
    expected: str
    typed: str
    word: str
    word_index: int



def word_spans(reference: str) -> List[Tuple[int, int, str]]:
    """``(start, end, word)`` for each single-space-separated word.

    ``end`` is inclusive and equals ``start + len(word)``, so the space after
    a word falls inside that word's span. Consecutive spaces yield empty words.
    """
    spans: List[Tuple[int, int, str]] = []
    start = 0
    for word in reference.split(" "):
        end = start + len(word)
        spans.append((start, end, word))
        start = end + 1
    return spans


def word_at(reference: str, position: int) -> Tuple[int, str]:
    """Return ``(word_index, word)`` of the reference word containing *position*."""
    for index, (start, end, word) in enumerate(word_spans(reference)):
        if start <= position <= end:
            return index, word
    return 0, ""


def count_correct(reference: str, typed: str) -> int:
    """Number of positions where *typed* matches *reference*."""
    return sum(1 for a, b in zip(reference, typed) if a == b)


def compute_mistakes(reference: str, typed: str) -> List[MistakeDetail]:
    """Collect mismatches within ``min(len(reference), len(typed))``.

    Characters typed past the end of the reference, and reference characters
    not yet typed, are not mistakes here; see :func:`compute_diff`.
    """
    spans = word_spans(reference)
    cursor = 0
    mistakes: List[MistakeDetail] = []
    for i, (expected, got) in enumerate(zip(reference, typed)):
        if expected == got:
            continue
        # spans are contiguous and positions only grow, so the cursor never moves back
        while cursor < len(spans) and spans[cursor][1] < i:
            cursor += 1
        if cursor < len(spans):
            word_index, word = cursor, spans[cursor][2]
        else:
            word_index, word = 0, ""
        mistakes.append(
            MistakeDetail(
                position=i,
                expected=expected,
                typed=got,
                word=word,
                word_index=word_index,
            )
        )
    return mistakes


def compute_diff(reference: str, typed: str) -> List[CharacterDiff]:
    """Classify every index in ``max(len(reference), len(typed))``.

    Incorrect positions carry the reference character, not the typo.
    """
    diffs: List[CharacterDiff] = []
    for i in range(max(len(reference), len(typed))):
        if i >= len(reference):
            diffs.append(CharacterDiff(i, DiffKind.EXTRA, typed[i]))
        elif i >= len(typed):
            diffs.append(CharacterDiff(i, DiffKind.MISSING, reference[i]))
        elif reference[i] == typed[i]:
            diffs.append(CharacterDiff(i, DiffKind.CORRECT, reference[i]))
        else:
            diffs.append(CharacterDiff(i, DiffKind.INCORRECT, reference[i]))
    return diffs
