"""Spider logging and run statistics."""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, TextIO

from tabulate import tabulate

DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
FATAL = logging.CRITICAL
PANIC = logging.CRITICAL + 10

_LEVEL_NAMES = {
    DEBUG: "DEBUG",
    INFO: "INFO",
    WARNING: "WARNING",
    ERROR: "ERROR",
    FATAL: "FATAL",
    PANIC: "PANIC",
}

_LEVELS_BY_NAME = {
    "DEBUG": DEBUG,
    "INFO": INFO,
    "WARN": WARNING,
    "WARNING": WARNING,
    "ERROR": ERROR,
    "FATAL": FATAL,
    "PANIC": PANIC,
}

_TABLE_HEADERS = ("统计项目", "信息")
_UNKNOWN_TYPE = "未知类型"
_TIMESTAMP_FORMAT = "%y%m%d %H:%M:%S"


def parse_log_level(level: str) -> int:
    """Map a level name to a logging level; unknown names give INFO."""
    return _LEVELS_BY_NAME.get(level.upper(), INFO)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Stats:
    """Thread-safe counters and notes collected during a crawl."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.overall_stats: dict[str, Any] = {}

    def add_int(self, key: str, count: int) -> None:
        """Add ``count`` to the integer under ``key``; a non-integer restarts at zero."""
        if not _is_int(count):
            raise TypeError(f"count must be an int, got {type(count).__name__}")
        with self._lock:
            current = self.overall_stats.get(key)
            if not _is_int(current):
                current = 0
            self.overall_stats[key] = current + count

    def add_string(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"value must be a str, got {type(value).__name__}")
        with self._lock:
            self.overall_stats[key] = value

    def clear(self) -> None:
        with self._lock:
            self.overall_stats = {}

    def render_table(self) -> str:
        """Render the statistics as a text table."""
        with self._lock:
            rows = [(key, self._describe(value)) for key, value in self.overall_stats.items()]
        return tabulate(rows, headers=_TABLE_HEADERS, tablefmt="grid")

    def out_table_info(self, file: TextIO | None = None) -> None:
        print(self.render_table(), file=file if file is not None else sys.stdout)

    @staticmethod
    def _describe(value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return _UNKNOWN_TYPE


class _SpiderFormatter(logging.Formatter):
    def __init__(self, name: str) -> None:
        super().__init__(datefmt=_TIMESTAMP_FORMAT)
        self._spider_name = name

    def format(self, record: logging.LogRecord) -> str:
        level = _LEVEL_NAMES.get(record.levelno, record.levelname)
        stamp = self.formatTime(record, self.datefmt)
        return f"{level:<7} [{stamp}] {record.getMessage()}  name={self._spider_name}"


class Logger:
    """A named spider logger writing one line per record, with attached stats."""

    def __init__(self, name: str, level: int = INFO, stream: TextIO | None = None) -> None:
        self.name = name
        self.level = level
        self.stats = Stats()
        self._logger = logging.Logger(f"duckspider.{name}", level)
        self._logger.propagate = False
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(_SpiderFormatter(name))
        self._logger.addHandler(handler)

    def debug(self, msg: str, *args: Any) -> None:
        self._logger.log(DEBUG, msg, *args)

    def info(self, msg: str, *args: Any) -> None:
        self._logger.log(INFO, msg, *args)

    def warning(self, msg: str, *args: Any) -> None:
        self._logger.log(WARNING, msg, *args)

    def error(self, msg: str, *args: Any) -> None:
        self._logger.log(ERROR, msg, *args)

    def fatal(self, msg: str, *args: Any) -> None:
        """Log at FATAL level and exit with status 1."""
        self._logger.log(FATAL, msg, *args)
        raise SystemExit(1)

    def panic(self, msg: str, *args: Any) -> None:
        """Log at PANIC level and raise the message as a RuntimeError."""
        message = msg % args if args else msg
        self._logger.log(PANIC, "%s", message)
        raise RuntimeError(message)


def init_logger(name: str, level: str) -> Logger:
    """Create a logger for spider ``name`` writing to standard output."""
    return Logger(name, parse_log_level(level))