"""
Application Initialization
==========================
This module wires the store, the main window and the Qt event loop together.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Parses the few command-line flags (logging only).
2. Instantiates the view state store (ViewStore).
3. Instantiates the Main Window, passing the store in.
4. Starts the Qt event loop.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import QApplication

from plasmoire.controller.store import ViewStore
from plasmoire.logging_config import level_from_name, setup_logging
from plasmoire.view.main_window import MainWindow

APP_ID = "plasmoire"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plasmoire",
        description="Viewer for phase-aligned plasma/moire images.",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        help="Logging level (debug, info, warning, error). Default: info",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Shortcut for --log-level debug",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write the log to this file",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    # Qt consumes its own flags from sys.argv, ignore whatever we don't know
    args, qt_args = parser.parse_known_args(argv)

    try:
        level = logging.DEBUG if args.debug else level_from_name(args.log_level)
    except ValueError as e:
        parser.error(str(e))
    setup_logging(level=level, log_file=args.log_file)

    QCoreApplication.setApplicationName(APP_ID)
    app = QApplication([sys.argv[0], *qt_args])

    store = ViewStore()
    window = MainWindow(store)
    window.show()

    logger.info("Entering event loop.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
