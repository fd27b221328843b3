from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from typelens.core import metrics
from typelens.core.alignment import count_correct
from typelens.core.analysis import AnalysisResult, analyze

logger = logging.getLogger(__name__)

# Submitting is offered once this share of the passage has been typed.
SUBMIT_THRESHOLD = 0.8


class SessionError(RuntimeError):
    """Raised when a session is used out of order."""


@dataclass
class LiveStats:
    """Running figures shown while the user types."""

    wpm: int
    cpm: int
    accuracy: int


class TypingSession:
    """Tracks one attempt at typing a passage.

    The timer starts with the first typed character and stops on
    :meth:`submit`. ``clock`` must return seconds and only go forward.
    """

    def __init__(self, reference: str, clock: Optional[Callable[[], float]] = None) -> None:
        self._reference = reference
        self._clock = clock or time.monotonic
        self._typed = ""
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None
        self._result: Optional[AnalysisResult] = None

    @property
    def reference(self) -> str:
        return self._reference

    @property
    def typed(self) -> str:
        return self._typed

    @property
    def started(self) -> bool:
        return self._start_time is not None

    @property
    def submitted(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[AnalysisResult]:
        """Analysis from the last :meth:`submit`, if any."""
        return self._result

    @property
    def elapsed_seconds(self) -> float:
        """Seconds since the first keystroke, frozen once submitted."""
        if self._start_time is None:
            return 0.0
        end = self._end_time if self._end_time is not None else self._clock()
        return max(0.0, end - self._start_time)

    def type_text(self, typed: str) -> None:
        """Replace the typed buffer with the current input contents."""
        if self.submitted:
            raise SessionError("Session already submitted; reset it to type again")
        if typed and self._start_time is None:
            self._start_time = self._clock()
            logger.debug("Typing session started")
        self._typed = typed

    def reset(self) -> None:
        self._typed = ""
        self._start_time = None
        self._end_time = None
        self._result = None

    def is_complete(self) -> bool:
        """True once the typed text is at least as long as the passage."""
        return len(self._typed) >= len(self._reference)

    def accepts_input(self) -> bool:
        """False once the passage is fully typed or the session was submitted."""
        return not self.submitted and not self.is_complete()

    def can_submit(self) -> bool:
        if not self.started or self.submitted:
            return False
        return self.is_complete() or len(self._typed) > len(self._reference) * SUBMIT_THRESHOLD

    def live_metrics(self) -> LiveStats:
        if not self.started or not self._typed:
            return LiveStats(wpm=0, cpm=0, accuracy=100)
        correct = count_correct(self._reference, self._typed)
        seconds = self.elapsed_seconds
        return LiveStats(
            wpm=metrics.wpm(correct, seconds),
            cpm=metrics.cpm(correct, seconds),
            accuracy=metrics.accuracy(correct, len(self._typed)),
        )

    def submit(self) -> AnalysisResult:
        """Stop the timer and analyse the typed text."""
        if self._start_time is None:
            raise SessionError("Cannot submit before typing has started")
        if self._result is not None:
            raise SessionError("Session already submitted")
        self._end_time = self._clock()
        self._result = analyze(self._reference, self._typed, self.elapsed_seconds)
        logger.info(
            "Submitted session: %d wpm, %d%% accuracy in %.1fs",
            self._result.wpm,
            self._result.accuracy_percent,
            self._result.elapsed_seconds,
        )
        return self._result
