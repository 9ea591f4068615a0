"""A processor that drives non-blocking reads and writes on one descriptor."""

from __future__ import annotations

import os
import selectors
from enum import Enum

from .ioprocessor import IOEvent, IOProcessor
from .status import Status


class IOOption(Enum):
    """Which directions a single-descriptor processor handles."""

    READ = "r"
    WRITE = "w"
    READ_WRITE = "rw"


class SingleIOProcessor(IOProcessor):
    """Buffered non-blocking I/O on a single file descriptor."""

    def __init__(self, fd: int, option: IOOption = IOOption.READ_WRITE) -> None:
        super().__init__()
        self.fd = fd
        self.option = IOOption(option)
        try:
            os.set_blocking(fd, False)
        except OSError as exc:
            self.close()
            raise RuntimeError(
                f"Error while running fcntl at fd {fd}: {exc.strerror}"
            ) from exc
        if self.option is IOOption.READ:
            events = (IOEvent.READ,)
        elif self.option is IOOption.WRITE:
            events = (IOEvent.WRITE,)
        else:
            events = (IOEvent.READ, IOEvent.WRITE)
        self._watch(fd, *events)
        self._read_buffers[fd] = bytearray()
        self._write_buffers[fd] = bytearray()

    def task(self) -> None:
        """Read what is available and write what is pending."""
        for _fd, mask in self._poll():
            if mask & selectors.EVENT_READ and self.option is not IOOption.WRITE:
                if self._read(self.fd).is_error:
                    return
            if mask & selectors.EVENT_WRITE and self._write_buffers[self.fd]:
                if self._write(self.fd).is_error:
                    return
        self.status = Status.OK_AGAIN

    def write(self, data: str | bytes) -> None:
        """Queue data to be written; text is encoded as UTF-8."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._write_buffers[self.fd].extend(data)

    def read(self) -> bytes:
        """Return and clear everything read so far."""
        buffer = self._read_buffers[self.fd]
        data = bytes(buffer)
        buffer.clear()
        return data

    def write_done(self) -> bool:
        """True when nothing is left to write."""
        return not self._write_buffers[self.fd]