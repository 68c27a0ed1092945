"""Coloured, timestamped log lines written to standard error."""

from __future__ import annotations

import sys
from datetime import datetime
from enum import Enum
from typing import TextIO

RESET = "\033[0m"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class Level(Enum):
    """Log severity, each with its label and terminal colour."""

    INFO = ("INFO", "\033[0m")
    WARN = ("WARN", "\033[33m")
    ERROR = ("ERROR", "\033[31m")

    def __init__(self, label: str, color: str) -> None:
        self.label = label
        self.color = color


def format_line(level: Level, message: str, when: datetime | None = None) -> str:
    """Render one log line, without the trailing newline."""
    moment = when if when is not None else datetime.now()
    stamp = moment.strftime(TIME_FORMAT)
    return f"{level.color}[{stamp} {level.label}]  {message}{RESET}"


def log(level: Level, message: str, stream: TextIO | None = None) -> None:
    """Write a log line at the given level to ``stream`` (standard error by default)."""
    out = stream if stream is not None else sys.stderr
    out.write(format_line(level, message) + "\n")
    out.flush()


def info(message: str) -> None:
    """Log an informational message."""
    log(Level.INFO, message)


def warn(message: str) -> None:
    """Log a warning."""
    log(Level.WARN, message)


def error(message: str) -> None:
    """Log an error."""
    log(Level.ERROR, message)