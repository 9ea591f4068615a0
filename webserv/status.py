"""Status codes of asynchronous jobs and their error messages."""

from __future__ import annotations

from enum import IntEnum


class Status(IntEnum):
    """Outcome of one step of an asynchronous job."""

    OK_DONE = 0
    OK_BEGIN = 1
    OK_AGAIN = 2
    ERROR_GENERIC = 3
    ERROR_FILECLOSED = 4
    ERROR_FILEOPENING = 5
    ERROR_FILEISDIR = 6
    ERROR_TIMEOUT = 7
    ERROR_READ = 8
    ERROR_WRITE = 9

    @property
    def is_error(self) -> bool:
        """True for every ERROR_* status."""
        return self >= Status.ERROR_GENERIC


def error_msg_generic() -> str:
    return "Unknown async error"


def error_msg_file_closed(fd: int) -> str:
    return f"File {fd} is closed"


def error_msg_file_opening(path: str) -> str:
    return f"Error opening file {path}"


def error_msg_file_is_dir(path: str) -> str:
    return f"File {path} is directory"


def error_msg_timeout(fd: int, timeout_ms: int) -> str:
    return f"Timeout ({timeout_ms} ms) occured while reading from fd {fd}"


def error_msg_read(fd: int) -> str:
    return f"Error while reading from fd {fd}"


def error_msg_write(fd: int) -> str:
    return f"Error while writing to fd {fd}"