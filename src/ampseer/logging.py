# ================================================================================
# Logging configuration using loguru
#
# Components never log through a global; they receive a Reporter and call
# report(level, message). LoguruReporter is the production sink.
# ================================================================================

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Protocol

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[component]} - {message}"
)

VERBOSITY_LEVELS = ("WARNING", "INFO", "DEBUG")

logger.configure(extra={"component": "ampseer"})


class Reporter(Protocol):
    """Sink for human-readable diagnostics."""

    def report(self, level: str, message: str) -> None: ...

    def child(self, component: str) -> Reporter: ...


class LoguruReporter:
    """Forward diagnostics to loguru, tagged with the emitting component."""

    def __init__(self, component: str = "ampseer") -> None:
        self.component = component
        self._logger = logger.bind(component=component)

    def report(self, level: str, message: str) -> None:
        self._logger.log(level, message)

    def child(self, component: str) -> LoguruReporter:
        """Reporter for a sub-component, tagged `<parent>.<component>`."""
        return LoguruReporter(f"{self.component}.{component}")


def default_reporter(reporter: Reporter | None, component: str) -> Reporter:
    """Return *reporter*, or a LoguruReporter for *component* if none was given."""
    if reporter is not None:
        return reporter
    return LoguruReporter(component)


def level_for_verbosity(verbosity: int) -> str:
    """Map the number of --debug flags to a loguru level name."""
    index = min(max(verbosity, 0), len(VERBOSITY_LEVELS) - 1)
    return VERBOSITY_LEVELS[index]


def configure_logging(verbosity: int = 0) -> str:
    """
    Replace loguru's default handler with a coloured stderr handler.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.

    Returns:
        The level name that was configured.
    """
    level = level_for_verbosity(verbosity)
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    return level


def configure_file_logging(log_dir: str | Path = ".") -> Path:
    """
    Configure file logging with a timestamped log file.

    Args:
        log_dir: Directory to write log files to. Defaults to current directory.

    Returns:
        Path to the log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_path = log_dir / f"ampseer_{timestamp}.log"

    logger.add(
        str(log_path),
        format=FILE_FORMAT,
        level="DEBUG",
        rotation="10 MB",
    )

    return log_path


__all__ = [
    "LoguruReporter",
    "Reporter",
    "configure_file_logging",
    "configure_logging",
    "default_reporter",
    "level_for_verbosity",
    "logger",
]
