"""Named loggers that write coloured, levelled lines through non-blocking I/O."""

from __future__ import annotations

import time
from enum import IntEnum
from typing import Any, ClassVar

from .ioprocessor import IOProcessor
from .singleio import IOOption, SingleIOProcessor

ANSI_RESET = "\033[0m"
ANSI_RED = "\033[31m"
ANSI_GREEN = "\033[32m"
ANSI_YELLOW = "\033[33m"
ANSI_BLUE = "\033[34m"
ANSI_MAGENTA = "\033[35m"
ANSI_CYAN = "\033[36m"
ANSI_WHITE = "\033[37m"
ANSI_BBLACK = "\033[90m"
ANSI_BRED = "\033[91m"
ANSI_BGREEN = "\033[92m"
ANSI_BYELLOW = "\033[93m"
ANSI_BBLUE = "\033[94m"
ANSI_BMAGENTA = "\033[95m"
ANSI_BCYAN = "\033[96m"
ANSI_BWHITE = "\033[97m"


class LogLevel(IntEnum):
    DEBUG = 0
    VERBOSE = 1
    INFO = 2
    WARNING = 3
    ERROR = 4


_LEVEL_NAMES = {
    LogLevel.DEBUG: "DEBUG  ",
    LogLevel.VERBOSE: "VERBOSE",
    LogLevel.INFO: "INFO   ",
    LogLevel.WARNING: "WARNING",
    LogLevel.ERROR: "ERROR  ",
}

_LEVEL_COLOURS = {
    LogLevel.DEBUG: ANSI_RESET,
    LogLevel.VERBOSE: ANSI_RESET,
    LogLevel.INFO: ANSI_BWHITE,
    LogLevel.WARNING: ANSI_BYELLOW,
    LogLevel.ERROR: ANSI_BRED,
}


class Logger:
    """A named logger; all loggers share the targets and the level filter."""

    _loggers: ClassVar[dict[str, Logger]] = {}
    _targets: ClassVar[dict[int, SingleIOProcessor]] = {}
    _level: ClassVar[LogLevel] = LogLevel.INFO
    _active: ClassVar[bool] = False

    def __init__(self, name: str = "root") -> None:
        self.name = name

    def prefix(self, level: LogLevel | int) -> str:
        """Return the coloured timestamp and level header for a new line."""
        level = LogLevel(level)
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        return f"{_LEVEL_COLOURS[level]}{stamp}, [{_LEVEL_NAMES[level]}]{self.name}: "

    def log(self, content: Any) -> None:
        """Queue text on every target if the current line passes the filter."""
        if not Logger._active:
            return
        text = str(content)
        for target in Logger._targets.values():
            target.write(text)

    def mark(self, level: LogLevel | int) -> None:
        """End the current line and start one at the given level."""
        level = LogLevel(level)
        self.log(ANSI_RESET + "\n")
        Logger._active = level >= Logger._level
        self.log(self.prefix(level))

    def _emit(self, level: LogLevel, args: tuple[Any, ...]) -> None:
        self.mark(level)
        for arg in args:
            self.log(arg)

    def debug(self, *args: Any) -> None:
        self._emit(LogLevel.DEBUG, args)

    def verbose(self, *args: Any) -> None:
        self._emit(LogLevel.VERBOSE, args)

    def info(self, *args: Any) -> None:
        self._emit(LogLevel.INFO, args)

    def warning(self, *args: Any) -> None:
        self._emit(LogLevel.WARNING, args)

    def error(self, *args: Any) -> None:
        self._emit(LogLevel.ERROR, args)

    @classmethod
    def get_logger(cls, name: str) -> Logger:
        """Return the logger of that name, creating it on first use."""
        if name not in cls._loggers:
            cls._loggers[name] = Logger(name)
        return cls._loggers[name]

    @classmethod
    def register_fd(cls, fd: int) -> None:
        """Send log output to the descriptor as well."""
        if fd not in cls._targets:
            cls._targets[fd] = SingleIOProcessor(fd, IOOption.WRITE)

    @classmethod
    def unregister_fd(cls, fd: int) -> None:
        """Stop sending log output to the descriptor; it is not closed."""
        target = cls._targets.pop(fd, None)
        if target is not None:
            target.close()

    @classmethod
    def set_log_level(cls, level: LogLevel | int | str) -> None:
        """Set the filter by level or by a leading part of a level name."""
        if isinstance(level, str):
            for candidate, name in _LEVEL_NAMES.items():
                if len(level) <= len(name) and name.startswith(level):
                    cls._level = candidate
                    return
            raise ValueError(f"Log level {level} does not exist.")
        cls._level = LogLevel(level)

    @classmethod
    def get_log_level(cls) -> LogLevel:
        return cls._level

    @classmethod
    def is_active(cls) -> bool:
        """True if the line being written passes the level filter."""
        return cls._active

    @classmethod
    def blocking_write_all(cls) -> None:
        """Flush everything queued on every processor."""
        IOProcessor.blocking_write_all()