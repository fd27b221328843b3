from __future__ import annotations

import html
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QStackedWidget,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from typelens.core.analysis import AnalysisResult, diff
from typelens.core.passages import Passage, PassageRepository
from typelens.core.report import format_clock, render_report, report_filename
from typelens.core.session import SessionError, TypingSession
from typelens.ui.colors import ThemeColors, accuracy_color
from typelens.ui.highlight import diff_to_html
from typelens.ui.models import mistake_label, problem_words, stat_cards

logger = logging.getLogger(__name__)

STATS_REFRESH_MS = 500


class MainWindow(QMainWindow):
    """Three pages: pick a passage, type it, review the analysis."""

    def __init__(self, passages: PassageRepository) -> None:
        super().__init__()
        self._passages = passages
        self._passage: Optional[Passage] = None
        self._session: Optional[TypingSession] = None
        self._completed_at: Optional[datetime] = None

        self._stack: Optional[QStackedWidget] = None
        self._setup_page: Optional[QWidget] = None
        self._typing_page: Optional[QWidget] = None
        self._results_page: Optional[QWidget] = None

        self._passage_combo: Optional[QComboBox] = None
        self._title_edit: Optional[QLineEdit] = None
        self._paste_box: Optional[QPlainTextEdit] = None

        self._typing_title_label: Optional[QLabel] = None
        self._reference_view: Optional[QTextBrowser] = None
        self._input_box: Optional[QPlainTextEdit] = None
        self._time_label: Optional[QLabel] = None
        self._wpm_label: Optional[QLabel] = None
        self._cpm_label: Optional[QLabel] = None
        self._accuracy_label: Optional[QLabel] = None
        self._submit_button: Optional[QPushButton] = None
        self._stats_timer: Optional[QTimer] = None

        self._cards_layout: Optional[QGridLayout] = None
        self._diff_view: Optional[QTextBrowser] = None
        self._suggestions_label: Optional[QLabel] = None
        self._problem_words_label: Optional[QLabel] = None

        self._build_ui()
        self.setWindowTitle("Typelens")
        self.resize(960, 720)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.setStyleSheet(f"""
            QMainWindow {{ background: {ThemeColors.BG}; }}
            QLabel {{ color: {ThemeColors.TEXT_PRIMARY}; }}
            QPushButton {{
                background: {ThemeColors.PRIMARY};
                color: white;
                border: none;
                border-radius: 8px;
                padding: 8px 18px;
                font-weight: 700;
            }}
            QPushButton:hover {{ background: {ThemeColors.PRIMARY_DARK}; }}
            QPushButton:disabled {{ background: {ThemeColors.TEXT_MUTED}; }}
        """)
        self._stack = QStackedWidget()
        self._setup_page = self._build_setup_page()
        self._typing_page = self._build_typing_page()
        self._results_page = self._build_results_page()
        for page in (self._setup_page, self._typing_page, self._results_page):
            self._stack.addWidget(page)
        self.setCentralWidget(self._stack)

        self._stats_timer = QTimer(self)
        self._stats_timer.setInterval(STATS_REFRESH_MS)
        self._stats_timer.timeout.connect(self._refresh_live_stats)

    def _heading(self, text: str, size: int = 22) -> QLabel:
        label = QLabel(text)
        label.setStyleSheet(f"color: {ThemeColors.PRIMARY}; font-size: {size}px; font-weight: 900;")
        return label

    def _card(self) -> tuple[QFrame, QVBoxLayout]:
        frame = QFrame()
        frame.setStyleSheet(
            f"QFrame {{ background: {ThemeColors.CARD_BG}; border: 1px solid {ThemeColors.CARD_BORDER};"
            " border-radius: 12px; }"
        )
        layout = QVBoxLayout(frame)
        layout.setContentsMargins(16, 12, 16, 12)
        return frame, layout

    def _build_setup_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.addWidget(self._heading("Typelens", 30))

        subtitle = QLabel("Pick a passage or paste your own text, then type it from memory.")
        subtitle.setStyleSheet(f"color: {ThemeColors.TEXT_SECONDARY}; font-size: 13px;")
        layout.addWidget(subtitle)

        library_card, library_layout = self._card()
        library_layout.addWidget(self._heading("Passage library", 16))
        self._passage_combo = QComboBox()
        for passage in self._passages.all():
            self._passage_combo.addItem(f"{passage.title} ({passage.word_count} words)", passage.key)
        library_layout.addWidget(self._passage_combo)
        library_button = QPushButton("Start with passage")
        library_button.clicked.connect(self._start_library_passage)
        library_layout.addWidget(library_button, alignment=Qt.AlignRight)
        layout.addWidget(library_card)

        paste_card, paste_layout = self._card()
        paste_layout.addWidget(self._heading("Your own text", 16))
        self._title_edit = QLineEdit()
        self._title_edit.setPlaceholderText("Title (optional)")
        paste_layout.addWidget(self._title_edit)
        self._paste_box = QPlainTextEdit()
        self._paste_box.setPlaceholderText("Paste the text you want to practise here")
        paste_layout.addWidget(self._paste_box, 1)
        paste_button = QPushButton("Start with my text")
        paste_button.clicked.connect(self._start_pasted_passage)
        paste_layout.addWidget(paste_button, alignment=Qt.AlignRight)
        layout.addWidget(paste_card, 1)
        return page

    def _build_typing_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setContentsMargins(32, 24, 32, 24)

        header = QHBoxLayout()
        back_button = QPushButton("← Back")
        back_button.clicked.connect(self._show_setup_page)
        header.addWidget(back_button)
        self._typing_title_label = self._heading("")
        header.addWidget(self._typing_title_label, 1)
        layout.addLayout(header)

        stats = QHBoxLayout()
        self._time_label = self._stat_label("0:00")
        self._wpm_label = self._stat_label("0 WPM")
        self._cpm_label = self._stat_label("0 CPM")
        self._accuracy_label = self._stat_label("100%")
        for label in (self._time_label, self._wpm_label, self._cpm_label, self._accuracy_label):
            stats.addWidget(label)
        layout.addLayout(stats)

        self._reference_view = QTextBrowser()
        self._reference_view.setStyleSheet("font-size: 16px;")
        layout.addWidget(self._reference_view, 1)

        self._input_box = QPlainTextEdit()
        self._input_box.setPlaceholderText("Start typing; the timer starts with your first keystroke")
        self._input_box.setStyleSheet("font-size: 16px; font-family: monospace;")
        self._input_box.textChanged.connect(self._on_text_changed)
        layout.addWidget(self._input_box, 1)

        buttons = QHBoxLayout()
        restart_button = QPushButton("Restart")
        restart_button.clicked.connect(self._restart_session)
        buttons.addWidget(restart_button)
        buttons.addStretch(1)
        self._submit_button = QPushButton("Submit")
        self._submit_button.setEnabled(False)
        self._submit_button.clicked.connect(self._submit_session)
        buttons.addWidget(self._submit_button)
        layout.addLayout(buttons)
        return page

    def _stat_label(self, text: str) -> QLabel:
        label = QLabel(text)
        label.setAlignment(Qt.AlignCenter)
        label.setStyleSheet(f"color: {ThemeColors.PRIMARY}; font-size: 24px; font-weight: 900; font-family: monospace;")
        return label

    def _build_results_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.addWidget(self._heading("Results"))

        self._cards_layout = QGridLayout()
        layout.addLayout(self._cards_layout)

        diff_card, diff_layout = self._card()
        diff_layout.addWidget(self._heading("Your text", 16))
        self._diff_view = QTextBrowser()
        diff_layout.addWidget(self._diff_view)
        layout.addWidget(diff_card, 1)

        tips_card, tips_layout = self._card()
        tips_layout.addWidget(self._heading("Suggestions", 16))
        self._suggestions_label = QLabel()
        self._suggestions_label.setWordWrap(True)
        self._suggestions_label.setTextFormat(Qt.RichText)
        tips_layout.addWidget(self._suggestions_label)

        words_card, words_layout = self._card()
        words_layout.addWidget(self._heading("Most problematic words", 16))
        self._problem_words_label = QLabel()
        self._problem_words_label.setWordWrap(True)
        self._problem_words_label.setTextFormat(Qt.RichText)
        words_layout.addWidget(self._problem_words_label)

        feedback_row = QHBoxLayout()
        feedback_row.addWidget(words_card, 1)
        feedback_row.addWidget(tips_card, 2)
        layout.addLayout(feedback_row)

        buttons = QHBoxLayout()
        again_button = QPushButton("Try again")
        again_button.clicked.connect(self._retry_passage)
        buttons.addWidget(again_button)
        new_button = QPushButton("New passage")
        new_button.clicked.connect(self._show_setup_page)
        buttons.addWidget(new_button)
        buttons.addStretch(1)
        save_button = QPushButton("Save report")
        save_button.clicked.connect(self._save_report)
        buttons.addWidget(save_button)
        layout.addLayout(buttons)
        return page

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _show_setup_page(self) -> None:
        if self._stats_timer is not None:
            self._stats_timer.stop()
        self._stack.setCurrentWidget(self._setup_page)

    def _start_library_passage(self) -> None:
        key = self._passage_combo.currentData()
        if key is None:
            return
        self._start_passage(self._passages.get(key))

    def _start_pasted_passage(self) -> None:
        try:
            passage = Passage.from_text(self._paste_box.toPlainText(), self._title_edit.text())
        except ValueError as exc:
            QMessageBox.warning(self, "Typelens", str(exc))
            return
        self._start_passage(passage)

    def _start_passage(self, passage: Passage) -> None:
        logger.info("Starting passage %s (%s)", passage.key, passage.source)
        self._passage = passage
        self._session = TypingSession(passage.text)
        self._typing_title_label.setText(passage.title)
        self._reference_view.setPlainText(passage.text)
        self._reset_typing_widgets()
        self._stack.setCurrentWidget(self._typing_page)
        self._input_box.setFocus()

    def _retry_passage(self) -> None:
        if self._passage is not None:
            self._start_passage(self._passage)

    def _restart_session(self) -> None:
        if self._session is None:
            return
        self._session.reset()
        self._reset_typing_widgets()
        self._input_box.setFocus()

    def _reset_typing_widgets(self) -> None:
        self._stats_timer.stop()
        self._input_box.blockSignals(True)
        self._input_box.clear()
        self._input_box.blockSignals(False)
        self._input_box.setReadOnly(False)
        self._submit_button.setEnabled(False)
        self._refresh_live_stats()

    # ------------------------------------------------------------------
    # Typing
    # ------------------------------------------------------------------

    def _on_text_changed(self) -> None:
        if self._session is None or self._session.submitted:
            return
        was_started = self._session.started
        self._session.type_text(self._input_box.toPlainText())
        if self._session.started and not was_started:
            self._stats_timer.start()
        self._submit_button.setEnabled(self._session.can_submit())
        if not self._session.accepts_input():
            self._stats_timer.stop()
            self._input_box.setReadOnly(True)
        self._refresh_live_stats()

    def _refresh_live_stats(self) -> None:
        if self._session is None:
            return
        stats = self._session.live_metrics()
        self._time_label.setText(format_clock(self._session.elapsed_seconds))
        self._wpm_label.setText(f"{stats.wpm} WPM")
        self._cpm_label.setText(f"{stats.cpm} CPM")
        self._accuracy_label.setText(f"{stats.accuracy}%")
        self._accuracy_label.setStyleSheet(
            f"color: {accuracy_color(stats.accuracy)}; font-size: 24px; font-weight: 900; font-family: monospace;"
        )

    def _submit_session(self) -> None:
        if self._session is None:
            return
        try:
            result = self._session.submit()
        except SessionError as exc:
            logger.warning("Submit rejected: %s", exc)
            QMessageBox.information(self, "Typelens", str(exc))
            return
        self._stats_timer.stop()
        self._input_box.setReadOnly(True)
        self._completed_at = datetime.now()
        self._show_results(result)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def _show_results(self, result: AnalysisResult) -> None:
        while self._cards_layout.count():
            item = self._cards_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        for i, card in enumerate(stat_cards(result)):
            frame, layout = self._card()
            title = QLabel(card.label)
            title.setStyleSheet(f"color: {ThemeColors.TEXT_SECONDARY}; font-size: 12px; font-weight: 800;")
            value = QLabel(card.value)
            value.setStyleSheet(f"color: {ThemeColors.PRIMARY}; font-size: 28px; font-weight: 900;")
            layout.addWidget(title)
            layout.addWidget(value)
            if card.hint:
                hint = QLabel(card.hint)
                hint.setStyleSheet(f"color: {ThemeColors.TEXT_MUTED}; font-size: 11px;")
                layout.addWidget(hint)
            self._cards_layout.addWidget(frame, i // 3, i % 3)

        self._diff_view.setHtml(diff_to_html(diff(self._session.reference, self._session.typed)))
        items = "".join(f"<li>{html.escape(s)}</li>" for s in result.suggestions)
        self._suggestions_label.setText(f"<ul>{items}</ul>")
        self._problem_words_label.setText(self._problem_words_html(result))
        self._stack.setCurrentWidget(self._results_page)

    def _problem_words_html(self, result: AnalysisResult) -> str:
        words = problem_words(result.mistake_details)
        if not words:
            return f"<p style=\"color: {ThemeColors.GOOD}; font-weight: 700;\">Perfect! No mistakes found!</p>"
        rows = "".join(
            f"<tr><td style=\"font-family: monospace; color: {ThemeColors.BAD};\">&quot;{html.escape(word)}&quot;</td>"
            f"<td style=\"padding-left: 16px; color: {ThemeColors.TEXT_SECONDARY};\">{mistake_label(count)}</td></tr>"
            for word, count in words
        )
        return f"<table>{rows}</table>"

    def _save_report(self) -> None:
        if self._session is None or self._session.result is None:
            return
        completed_at = self._completed_at or datetime.now()
        default_path = str(Path.home() / report_filename(completed_at))
        path, _ = QFileDialog.getSaveFileName(self, "Save report", default_path, "Text files (*.txt)")
        if not path:
            return
        report = render_report(self._session.result, self._session.reference, completed_at)
        try:
            Path(path).write_text(report, encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write report %s: %s", path, exc)
            QMessageBox.critical(self, "Typelens", f"Could not save report: {exc}")
            return
        logger.info("Saved report to %s", path)
