"""Process-wide logger writing timestamped entries to a file or the console."""

from __future__ import annotations

import sys
import threading
from datetime import datetime
from enum import IntEnum
from typing import Optional, TextIO


class LogLevel(IntEnum):
    """Severity of a log entry, ordered from least to most severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        """Fixed-width tag written in front of each message."""
        return _LABELS[self]


_LABELS = {
    LogLevel.DEBUG: "[DEBUG]   ",
    LogLevel.INFO: "[INFO]    ",
    LogLevel.WARNING: "[WARNING] ",
    LogLevel.ERROR: "[ERROR]   ",
    LogLevel.CRITICAL: "[CRITICAL]",
}


def _timestamp() -> str:
    now = datetime.now()
    return f"{now:%Y-%m-%d %H:%M:%S}.{now.microsecond // 1000:03d}"


class Logger:
    """Thread-safe logger.

    Until :meth:`init` opens a log file, entries go to standard output.
    Entries of WARNING and above are also echoed to standard error.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._file: Optional[TextIO] = None
        self._min_level = LogLevel.INFO

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    @property
    def initialized(self) -> bool:
        return self._file is not None

    def init(self, log_file_path, min_level=LogLevel.INFO) -> None:
        """Open ``log_file_path`` for appending and set the minimum level.

        Raises OSError when the file cannot be opened; the logger then
        falls back to console output.
        """
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None
            self._file = open(log_file_path, "a", encoding="utf-8")
            self._min_level = LogLevel(min_level)
            self._write_file_line(
                f"{_timestamp()} {LogLevel.INFO.label} === Emiglio Logger Initialized ==="
            )

    def debug(self, message) -> None:
        self.log(LogLevel.DEBUG, message)

    def info(self, message) -> None:
        self.log(LogLevel.INFO, message)

    def warning(self, message) -> None:
        self.log(LogLevel.WARNING, message)

    def error(self, message) -> None:
        self.log(LogLevel.ERROR, message)

    def critical(self, message) -> None:
        self.log(LogLevel.CRITICAL, message)

    def log(self, level, message) -> None:
        """Write ``message`` if ``level`` reaches the minimum level."""
        level = LogLevel(level)
        if level >= self._min_level:
            self._write(level, str(message))

    def set_log_level(self, level) -> None:
        with self._lock:
            self._min_level = LogLevel(level)

    def flush(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.flush()

    def close(self) -> None:
        """Write a closing entry and close the log file, if one is open."""
        with self._lock:
            if self._file is not None:
                self._write_file_line(
                    f"{_timestamp()} {LogLevel.INFO.label} === Emiglio Logger Closed ==="
                )
                self._file.close()
                self._file = None

    def _write_file_line(self, entry: str) -> None:
        assert self._file is not None
        self._file.write(entry + "\n")
        self._file.flush()

    def _write(self, level: LogLevel, message: str) -> None:
        with self._lock:
            entry = f"{_timestamp()} {level.label} {message}"
            if self._file is not None:
                self._write_file_line(entry)
            else:
                print(entry, file=sys.stdout, flush=True)
            if level >= LogLevel.WARNING:
                print(entry, file=sys.stderr, flush=True)


_instance = Logger()


def get_logger() -> Logger:
    """Return the shared application logger."""
    return _instance