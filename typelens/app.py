"""Application entry point and setup for the Typelens typing trainer."""

import logging
import os
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from typelens.core.passages import PassageRepository
from typelens.ui.main_window import MainWindow

LOG_LEVEL_ENV = "TYPELENS_LOG_LEVEL"


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Initialize the application, load passages, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Typelens")
    app.setApplicationDisplayName("Typelens")

    try:
        passages = PassageRepository()
    except (OSError, ValueError) as exc:
        logging.error("Could not load passages: %s", exc)
        QMessageBox.critical(None, "Typelens", f"Could not load passages:\n{exc}")
        sys.exit(1)

    window = MainWindow(passages=passages)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
