"""Tests for typelens.core.report – plain-text report rendering."""

from __future__ import annotations

from datetime import datetime

import pytest

from typelens.core.analysis import analyze
from typelens.core.report import format_clock, render_report, report_filename, time_efficiency

COMPLETED_AT = datetime(2024, 3, 5, 14, 30, 9)


class TestFormatClock:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "0:00"), (5, "0:05"), (65, "1:05"), (59.9, "0:59"), (600, "10:00")],
    )
    def test_values(self, seconds: float, expected: str):
        assert format_clock(seconds) == expected


class TestTimeEfficiency:
    def test_faster_than_expected(self):
        assert time_efficiency(120, 60) == 200

    def test_rounds_half_up(self):
        assert time_efficiency(1, 8) == 13

    def test_thirds(self):
        assert time_efficiency(2, 3) == 67

    def test_no_expected_time(self):
        assert time_efficiency(0, 10) == 100

    def test_no_elapsed_time(self):
        assert time_efficiency(10, 0) == 100


class TestReportFilename:
    def test_uses_date(self):
        assert report_filename(COMPLETED_AT) == "typing-test-report-2024-03-05.txt"


class TestRenderReport:
    def test_sections_and_figures(self):
        report = render_report(analyze("ab", "ax", 6), "ab", COMPLETED_AT)
        assert report.startswith("TYPING TEST REPORT\n")
        assert "Date: 2024-03-05" in report
        assert "Time: 14:30:09" in report
        assert "Words Per Minute: 2 WPM" in report
        assert "Characters Per Minute: 10 CPM" in report
        assert "Accuracy: 50%" in report
        assert "Total Time: 0:06" in report
        assert "Expected Time: 0:02" in report
        assert "Time Efficiency: 33%" in report
        assert "Mistakes: 1" in report
        assert 'Position 1: Expected "b", Typed "x" (in word "ab")' in report
        assert report.rstrip().endswith("TEXT USED:\n----------\nab")

    def test_suggestions_are_bulleted(self):
        result = analyze("ab", "ax", 6)
        report = render_report(result, "ab", COMPLETED_AT)
        for suggestion in result.suggestions:
            assert f"• {suggestion}" in report

    def test_no_mistakes(self):
        report = render_report(analyze("cat", "cat", 6), "cat", COMPLETED_AT)
        assert "No mistakes found!" in report
        assert "Position" not in report
