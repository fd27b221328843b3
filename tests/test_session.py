"""Tests for typelens.core.session – live typing session logic."""

from __future__ import annotations

import pytest

from typelens.core.session import LiveStats, SessionError, TypingSession


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Timer
# ---------------------------------------------------------------------------

class TestTimer:
    def test_not_started_initially(self, clock: FakeClock):
        s = TypingSession("cat", clock=clock)
        assert not s.started
        assert s.elapsed_seconds == 0.0

    def test_starts_on_first_character(self, clock: FakeClock):
        s = TypingSession("cat", clock=clock)
        s.type_text("c")
        clock.advance(4)
        assert s.started
        assert s.elapsed_seconds == pytest.approx(4.0)

    def test_empty_input_does_not_start(self, clock: FakeClock):
        s = TypingSession("cat", clock=clock)
        s.type_text("")
        clock.advance(4)
        assert not s.started
        assert s.elapsed_seconds == 0.0

    def test_frozen_after_submit(self, clock: FakeClock):
        s = TypingSession("cat", clock=clock)
        s.type_text("c")
        clock.advance(6)
        s.type_text("cat")
        s.submit()
        clock.advance(30)
        assert s.elapsed_seconds == pytest.approx(6.0)


# ---------------------------------------------------------------------------
# Progress checks
# ---------------------------------------------------------------------------

class TestProgress:
    def test_is_complete(self, clock: FakeClock):
        s = TypingSession("abc", clock=clock)
        s.type_text("ab")
        assert not s.is_complete()
        s.type_text("abc")
        assert s.is_complete()
        s.type_text("abcd")
        assert s.is_complete()

    def test_accepts_input_until_fully_typed(self, clock: FakeClock):
        s = TypingSession("abc", clock=clock)
        assert s.accepts_input()
        s.type_text("ab")
        assert s.accepts_input()
        s.type_text("abc")
        assert not s.accepts_input()

    def test_no_input_after_submit(self, clock: FakeClock):
        s = TypingSession("abcdefghij", clock=clock)
        s.type_text("abcdefghi")
        s.submit()
        assert not s.accepts_input()

    def test_accepts_input_again_after_reset(self, clock: FakeClock):
        s = TypingSession("abc", clock=clock)
        s.type_text("abc")
        s.reset()
        assert s.accepts_input()

    def test_can_submit_needs_more_than_80_percent(self, clock: FakeClock):
        s = TypingSession("abcdefghij", clock=clock)
        s.type_text("abcdefgh")
        assert not s.can_submit()
        s.type_text("abcdefghi")
        assert s.can_submit()

    def test_cannot_submit_before_typing(self, clock: FakeClock):
        s = TypingSession("abc", clock=clock)
        assert not s.can_submit()

    def test_cannot_submit_twice(self, clock: FakeClock):
        s = TypingSession("abc", clock=clock)
        s.type_text("abc")
        s.submit()
        assert not s.can_submit()


# ---------------------------------------------------------------------------
# Live metrics
# ---------------------------------------------------------------------------

class TestLiveMetrics:
    def test_before_start(self, clock: FakeClock):
        s = TypingSession("hello", clock=clock)
        assert s.live_metrics() == LiveStats(wpm=0, cpm=0, accuracy=100)

    def test_running_figures(self, clock: FakeClock):
        s = TypingSession("hello world", clock=clock)
        s.type_text("h")
        clock.advance(12)
        s.type_text("hello")
        stats = s.live_metrics()
        assert stats.wpm == 5
        assert stats.cpm == 25
        assert stats.accuracy == 100

    def test_accuracy_reflects_typos(self, clock: FakeClock):
        s = TypingSession("abcd", clock=clock)
        s.type_text("a")
        clock.advance(1)
        s.type_text("abxy")
        assert s.live_metrics().accuracy == 50

    def test_cleared_input_after_start(self, clock: FakeClock):
        s = TypingSession("abc", clock=clock)
        s.type_text("a")
        s.type_text("")
        assert s.live_metrics() == LiveStats(wpm=0, cpm=0, accuracy=100)


# ---------------------------------------------------------------------------
# Submit and reset
# ---------------------------------------------------------------------------

class TestSubmit:
    def test_returns_analysis(self, clock: FakeClock):
        s = TypingSession("cat", clock=clock)
        s.type_text("c")
        clock.advance(6)
        s.type_text("cat")
        result = s.submit()
        assert result.wpm == 6
        assert result.accuracy_percent == 100
        assert result.elapsed_seconds == pytest.approx(6.0)
        assert s.result is result
        assert s.submitted

    def test_submit_before_start(self, clock: FakeClock):
        s = TypingSession("cat", clock=clock)
        with pytest.raises(SessionError, match="before typing"):
            s.submit()

    def test_submit_twice(self, clock: FakeClock):
        s = TypingSession("cat", clock=clock)
        s.type_text("cat")
        s.submit()
        with pytest.raises(SessionError, match="already submitted"):
            s.submit()

    def test_typing_after_submit(self, clock: FakeClock):
        s = TypingSession("cat", clock=clock)
        s.type_text("cat")
        s.submit()
        with pytest.raises(SessionError):
            s.type_text("cats")

    def test_session_error_is_runtime_error(self):
        assert issubclass(SessionError, RuntimeError)

    def test_reset(self, clock: FakeClock):
        s = TypingSession("cat", clock=clock)
        s.type_text("cat")
        s.submit()
        s.reset()
        assert s.typed == ""
        assert not s.started
        assert not s.submitted
        assert s.result is None
        s.type_text("c")
        assert s.started

    def test_reference_property(self):
        assert TypingSession("hello").reference == "hello"
