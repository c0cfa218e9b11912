"""
Productivity Hub — personal dashboard for tasks, notes, habits and focus.
Entry point for the application.
"""

import argparse
import faulthandler
import logging
import sys
from pathlib import Path
from typing import List, Optional

faulthandler.enable()

# Ensure productivity_hub is importable
sys.path.insert(0, str(Path(__file__).resolve().parent))

from PySide6.QtWidgets import QApplication

from productivity_hub.config import CONFIG_PATH, load_config
from productivity_hub.data.context import AppContext
from productivity_hub.ui.main_window import MainWindow
from productivity_hub.ui.view_dispatcher import ViewName


def setup_logging(level: str = "INFO", log_file: Optional[str] = "productivity_hub.log") -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Productivity Hub")
    parser.add_argument("--db", type=Path, help="SQLite database file")
    parser.add_argument("--config", type=Path, default=CONFIG_PATH,
                        help="settings JSON (default: config/settings.json)")
    parser.add_argument("--view", help="view to open first, e.g. tasks or timer")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    config = load_config(args.config)
    setup_logging(args.log_level or config["log_level"], config["log_file"])
    logger = logging.getLogger(__name__)
    logger.info("Starting Productivity Hub...")

    try:
        start_view = ViewName.parse(args.view or config["start_view"])
    except KeyError:
        logger.warning("Unknown start view %r, opening the dashboard.", args.view)
        start_view = ViewName.DASHBOARD

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Productivity Hub")
    app.setOrganizationName("Productivity Hub")

    db_path = args.db or (Path(config["db_path"]) if config["db_path"] else None)
    ctx = AppContext.open(db_path, config)

    window = MainWindow(ctx, start_view=start_view, config_path=args.config)
    window.show()

    logger.info("Application started.")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   The entry point. Reads CLI flags and settings, sets up logging, opens
#   the AppContext (database + repositories) and shows MainWindow.
#
# Key points:
#   - CLI flags beat the settings file; the settings file beats defaults.
#   - QApplication must exist before any widget, including the QTimer the
#     pomodoro service creates.
#   - app.exec() runs the Qt event loop; every mutation happens inside it,
#     one event at a time, so the repositories never need locks.
