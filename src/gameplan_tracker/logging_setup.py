# src/gameplan_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core.clock import Clock

LOG_FILE_NAME = "gameplan.log"
LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 3

# Subsystems that log on every tick or every save.
_BACKGROUND_PREFIXES = ("gameplan_tracker.tasks.", "gameplan_tracker.storage.")


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable while the REPL is in use.

    Background subsystems (reset scheduler, state store) only reach the console at
    WARNING+. Captured Python warnings and third-party loggers only at ERROR+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("gameplan_tracker."):
            if name.startswith(_BACKGROUND_PREFIXES):
                return record.levelno >= logging.WARNING
            return True

        return record.levelno >= logging.ERROR


class _GameClockStamp(logging.Filter):
    """
    Stamp records with the tracker's "now" so virtual-clock sessions read correctly.

    Until a clock is bound the stamp is "-".
    """

    def __init__(self) -> None:
        super().__init__()
        self.clock: Clock | None = None

    def filter(self, record: logging.LogRecord) -> bool:
        clock = self.clock
        if clock is None:
            record.game_now = "-"
        elif clock.is_virtual:
            record.game_now = f"virtual {clock.now_iso()}"
        else:
            record.game_now = "wall"
        return True


_clock_stamp = _GameClockStamp()


def bind_clock(clock: Clock | None) -> None:
    """Attach the tracker clock to file log records (None detaches it)."""
    _clock_stamp.clock = clock


def setup_logging(
    *,
    log_dir: str | Path = ".local/gameplan",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install a filtered stderr handler and a rotating file handler on the root logger.

    Replaces any existing root handlers, so calling it twice does not duplicate output.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s [%(game_now)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    file_handler.addFilter(_clock_stamp)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
