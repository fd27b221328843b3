"""Plain-text report for a finished typing test."""

from __future__ import annotations

from datetime import datetime

from typelens.core.analysis import AnalysisResult
from typelens.core.metrics import Number, round_half_up


def format_clock(seconds: Number) -> str:
    """Render *seconds* as ``m:ss``; fractions are dropped."""
    whole = int(seconds)
    return f"{whole // 60}:{whole % 60:02d}"


def time_efficiency(expected_seconds: Number, total_seconds: Number) -> int:
    """Expected time as a percentage of the time actually taken."""
    if expected_seconds <= 0 or total_seconds <= 0:
        return 100
    return round_half_up(expected_seconds / total_seconds * 100)


def report_filename(completed_at: datetime) -> str:
    return f"typing-test-report-{completed_at.date().isoformat()}.txt"


def render_report(result: AnalysisResult, text: str, completed_at: datetime) -> str:
    suggestions = "\n".join(f"• {s}" for s in result.suggestions)
    if result.mistake_details:
        mistakes = "\n".join(
            f'Position {m.position}: Expected "{m.expected}", Typed "{m.typed}" (in word "{m.word}")'
            for m in result.mistake_details
        )
    else:
        mistakes = "No mistakes found!"

    lines = [
        "TYPING TEST REPORT",
        "==================",
        "",
        f"Date: {completed_at:%Y-%m-%d}",
        f"Time: {completed_at:%H:%M:%S}",
        "",
        "RESULTS:",
        "--------",
        f"Words Per Minute: {result.wpm} WPM",
        f"Characters Per Minute: {result.cpm} CPM",
        f"Accuracy: {result.accuracy_percent}%",
        f"Total Time: {format_clock(result.elapsed_seconds)}",
        f"Expected Time: {format_clock(result.expected_seconds)}",
        f"Time Efficiency: {time_efficiency(result.expected_seconds, result.elapsed_seconds)}%",
        f"Mistakes: {result.mistake_count}",
        "",
        "IMPROVEMENT SUGGESTIONS:",
        "------------------------",
        suggestions,
        "",
        "MISTAKE ANALYSIS:",
        "-----------------",
        mistakes,
        "",
        "TEXT USED:",
        "----------",
        text,
        "",
    ]
    return "\n".join(lines)
