"""Asynchronous whole-file reads and writes driven step by step."""

from __future__ import annotations

import os
import time
from abc import ABC, abstractmethod

from .fileutil import is_directory
from .singleio import IOOption, SingleIOProcessor
from .status import (
    Status,
    error_msg_file_is_dir,
    error_msg_file_opening,
    error_msg_read,
    error_msg_timeout,
    error_msg_write,
)


class FileIOHandler(ABC):
    """A job on one file, advanced by repeated calls to :meth:`task`.

    The target is either an open descriptor, which is left open, or a path,
    which is opened on the first step and closed when the job ends.
    A timeout of 0 ms disables the timeout.
    """

    def __init__(self, timeout_ms: int, target: int | str | os.PathLike[str]) -> None:
        self._processor: SingleIOProcessor | None = None
        self._file = None
        if isinstance(target, int):
            self.fd = target
            self.path = ""
            self._owns_fd = False
        else:
            self.fd = -1
            self.path = os.fspath(target)
            self._owns_fd = True
        self.status = Status.OK_BEGIN
        self.error_msg = ""
        self._buffer = bytearray()
        self._timeout_ms = timeout_ms
        self._timeout = timeout_ms / 1000
        self._next_timeout = time.monotonic() + self._timeout

    def __enter__(self) -> FileIOHandler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @abstractmethod
    def task(self) -> Status:
        """Advance the job by one step and return its status."""

    def retrieve(self) -> bytes:
        """Return the bytes the job produced; only valid once it is done."""
        if self.status is not Status.OK_DONE:
            raise RuntimeError("FileIOHandler: File is not yet loaded.")
        return bytes(self._buffer)

    def close(self) -> None:
        """Release the processor and, for a path target, the file."""
        if self._processor is not None:
            self._processor.close()
            self._processor = None
        if self._file is not None:
            self._file.close()
            self._file = None

    def _fail(self, status: Status, message: str) -> Status:
        self.status = status
        self.error_msg = message
        self.close()
        return status

    def _finish(self) -> Status:
        self.status = Status.OK_DONE
        self.close()
        return self.status

    def _open(self, mode: str) -> bool:
        """Open a path target; return False and set an error status on failure."""
        if not self._owns_fd:
            return True
        if is_directory(self.path):
            self._fail(Status.ERROR_FILEISDIR, error_msg_file_is_dir(self.path))
            return False
        try:
            self._file = open(self.path, mode, buffering=0)
        except OSError:
            self._fail(Status.ERROR_FILEOPENING, error_msg_file_opening(self.path))
            return False
        self.fd = self._file.fileno()
        return True

    def _renew_timeout(self) -> None:
        self._next_timeout += self._timeout

    def _timed_out(self) -> bool:
        if self._timeout_ms == 0:
            return False
        if time.monotonic() > self._next_timeout:
            self._fail(Status.ERROR_TIMEOUT, error_msg_timeout(self.fd, self._timeout_ms))
            return True
        return False


class FileReader(FileIOHandler):
    """Reads a whole file, or a FIFO until its writer closes it."""

    def __init__(
        self,
        timeout_ms: int,
        target: int | str | os.PathLike[str],
        is_fifo: bool = False,
    ) -> None:
        super().__init__(timeout_ms, target)
        self.is_fifo = is_fifo
        self._filesize = 0

    def task(self) -> Status:
        if self.status is Status.OK_DONE or self.status.is_error:
            return self.status
        if self.status is Status.OK_BEGIN:
            if not self._open("rb"):
                return self.status
            if not self.is_fifo:
                self._filesize = os.fstat(self.fd).st_size
                if self._filesize == 0:
                    return self._finish()
            self._processor = SingleIOProcessor(self.fd, IOOption.READ)
            self.status = Status.OK_AGAIN

        processor = self._processor
        assert processor is not None
        processor.task()
        if processor.event_count() > 0:
            self._renew_timeout()
        if self._timed_out():
            return self.status
        self._buffer.extend(processor.read())

        if not self.is_fifo and len(self._buffer) == self._filesize:
            return self._finish()
        if processor.status is Status.ERROR_FILECLOSED:
            self._buffer.extend(processor.read())
            return self._finish()
        if processor.status is Status.ERROR_READ:
            return self._fail(Status.ERROR_READ, error_msg_read(self.fd))
        return self.status


class FileWriter(FileIOHandler):
    """Writes the given content to a file or descriptor."""

    def __init__(
        self,
        timeout_ms: int,
        target: int | str | os.PathLike[str],
        content: str | bytes,
    ) -> None:
        super().__init__(timeout_ms, target)
        self.content = content.encode("utf-8") if isinstance(content, str) else bytes(content)

    def task(self) -> Status:
        if self.status is Status.OK_DONE or self.status.is_error:
            return self.status
        if self.status is Status.OK_BEGIN:
            if not self._open("wb"):
                return self.status
            self._processor = SingleIOProcessor(self.fd, IOOption.WRITE)
            self._processor.write(self.content)
            self.status = Status.OK_AGAIN

        processor = self._processor
        assert processor is not None
        if not processor.write_done():
            processor.task()
        if processor.event_count() > 0:
            self._renew_timeout()
        if self._timed_out():
            return self.status
        if processor.status is Status.ERROR_WRITE:
            return self._fail(Status.ERROR_WRITE, error_msg_write(self.fd))
        if processor.write_done():
            return self._finish()
        return self.status