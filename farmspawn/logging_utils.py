"""Logging utilities for farmspawn passes.

Provides the injectable log sink used by every engine call. Recoverable
problems (malformed region strings, unknown object names, unknown maps) are
reported here instead of being raised, so a single bad config entry never
aborts the day's spawn pass.

Two sinks ship with the library:
- ConsoleLog: color-coded terminal output (the default)
- RecordingLog: keeps records in memory for tests or for forwarding to a host logger
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Trace/debug detail
    YELLOW = "\033[93m"    # Warnings
    RED = "\033[91m"       # Errors
    GREEN = "\033[92m"     # Pass summaries
    CYAN = "\033[96m"      # Info

    BOLD = "\033[1m"
    RESET = "\033[0m"


class LogLevel(IntEnum):
    """Severity levels, ordered so sinks can filter with ``>=``."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    ALERT = 5

    @classmethod
    def parse(cls, value: str | int | "LogLevel") -> "LogLevel":
        """Accept ``"info"``, ``"INFO"``, ``2`` or a LogLevel."""

        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {value!r}") from None


# Markers for severities (color-blind accessible)
EMOJI_TRACE = "[·]"
EMOJI_DEBUG = "[•]"
EMOJI_INFO = "[i]"
EMOJI_WARN = "[!]"
EMOJI_ERROR = "[x]"
EMOJI_SUCCESS = "[✓]"

_LEVEL_STYLE = {
    LogLevel.TRACE: (Color.BLUE, EMOJI_TRACE),
    LogLevel.DEBUG: (Color.BLUE, EMOJI_DEBUG),
    LogLevel.INFO: (Color.CYAN, EMOJI_INFO),
    LogLevel.WARN: (Color.YELLOW, EMOJI_WARN),
    LogLevel.ERROR: (Color.RED, EMOJI_ERROR),
    LogLevel.ALERT: (Color.RED, EMOJI_ERROR),
}


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if FARMSPAWN_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("FARMSPAWN_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


@dataclass(frozen=True)
class LogRecord:
    """One message emitted during a spawn pass."""

    message: str
    level: LogLevel


class SpawnLog(ABC):
    """Abstract log sink injected into every engine call via SpawnContext."""

    def __init__(self, min_level: LogLevel = LogLevel.TRACE):
        self.min_level = min_level

    def log(self, message: str, level: LogLevel = LogLevel.DEBUG) -> None:
        """Log a message for the player or developer."""

        if level < self.min_level:
            return
        self.emit(LogRecord(message=message, level=level))

    @abstractmethod
    def emit(self, record: LogRecord) -> None:
        """Deliver a record that passed the level filter."""

    def trace(self, message: str) -> None:
        self.log(message, LogLevel.TRACE)

    def debug(self, message: str) -> None:
        self.log(message, LogLevel.DEBUG)

    def info(self, message: str) -> None:
        self.log(message, LogLevel.INFO)

    def warn(self, message: str) -> None:
        self.log(message, LogLevel.WARN)

    def error(self, message: str) -> None:
        self.log(message, LogLevel.ERROR)


class ConsoleLog(SpawnLog):
    """Print records to stdout with a color and a marker per severity."""

    def emit(self, record: LogRecord) -> None:
        color, marker = _LEVEL_STYLE[record.level]
        print(colored(f"{marker} {record.message}", color, bold=record.level >= LogLevel.ERROR))


class RecordingLog(SpawnLog):
    """Keep records in memory.

    Useful in tests, and for hosts that want to forward messages to their
    own logger after the pass completes.
    """

    def __init__(self, min_level: LogLevel = LogLevel.TRACE):
        super().__init__(min_level)
        self.records: List[LogRecord] = []

    def emit(self, record: LogRecord) -> None:
        self.records.append(record)

    def messages(self, level: LogLevel | None = None) -> List[str]:
        """Return recorded messages, optionally only those at ``level``."""

        return [r.message for r in self.records if level is None or r.level == level]

    def clear(self) -> None:
        self.records.clear()


def log_success(message: str) -> None:
    """Print a pass summary (green), bypassing level filtering."""
    print(colored(f"{EMOJI_SUCCESS} {message}", Color.GREEN))
