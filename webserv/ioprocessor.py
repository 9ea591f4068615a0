"""Non-blocking I/O multiplexing over file descriptors."""

from __future__ import annotations

import os
import selectors
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import ClassVar

from .status import (
    Status,
    error_msg_file_closed,
    error_msg_read,
    error_msg_write,
)

# poll() also accepts regular files, which epoll refuses.
_Selector = getattr(selectors, "PollSelector", selectors.SelectSelector)


class IOEvent(IntEnum):
    """Kinds of readiness a processor can watch for."""

    READ = 0
    WRITE = 1
    ERROR = 2

    @property
    def mask(self) -> int:
        """The selector event mask for this event."""
        if self is IOEvent.READ:
            return selectors.EVENT_READ
        if self is IOEvent.WRITE:
            return selectors.EVENT_WRITE
        raise ValueError("ERROR state cannot be converted into a watch event.")


class IOProcessor(ABC):
    """Base of all non-blocking processors.

    Every live processor is kept in a registry so that all of them can be
    driven at once with :meth:`do_all_tasks`.
    """

    CHUNK_SIZE = 65536
    _registry: ClassVar[list[IOProcessor]] = []

    def __init__(self) -> None:
        self.status: Status = Status.OK_BEGIN
        self.error_msg = ""
        self._selector = _Selector()
        self._read_buffers: dict[int, bytearray] = {}
        self._write_buffers: dict[int, bytearray] = {}
        self._event_count = 0
        self._closed = False
        IOProcessor._registry.append(self)

    def __enter__(self) -> IOProcessor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @abstractmethod
    def task(self) -> None:
        """Run one non-blocking round of I/O."""

    def close(self) -> None:
        """Stop watching and leave the registry; the watched fds stay open."""
        if self._closed:
            return
        self._closed = True
        if self in IOProcessor._registry:
            IOProcessor._registry.remove(self)
        self._selector.close()

    def _watch(self, fd: int, *events: IOEvent) -> None:
        mask = 0
        for event in events:
            mask |= IOEvent(event).mask
        try:
            key = self._selector.get_key(fd)
        except KeyError:
            self._selector.register(fd, mask)
        else:
            self._selector.modify(fd, key.events | mask)

    def _unwatch(self, fd: int) -> None:
        try:
            self._selector.unregister(fd)
        except (KeyError, ValueError):
            pass

    def _poll(self) -> list[tuple[int, int]]:
        """Return (fd, mask) pairs that are ready now, without waiting."""
        if self._closed or not self._selector.get_map():
            return []
        return [(key.fd, mask) for key, mask in self._selector.select(0)]

    def _read(self, fd: int, size: int | None = None) -> Status:
        try:
            data = os.read(fd, size or self.CHUNK_SIZE)
        except BlockingIOError:
            self.status = Status.OK_AGAIN
            return self.status
        except OSError:
            self.status = Status.ERROR_READ
            self.error_msg = error_msg_read(fd)
            return self.status
        if not data:
            self.status = Status.ERROR_FILECLOSED
            self.error_msg = error_msg_file_closed(fd)
            return self.status
        self._read_buffers.setdefault(fd, bytearray()).extend(data)
        self._event_count += 1
        self.status = Status.OK_AGAIN
        return self.status

    def _write(self, fd: int) -> Status:
        buffer = self._write_buffers.setdefault(fd, bytearray())
        if not buffer:
            self.status = Status.OK_AGAIN
            return self.status
        try:
            written = os.write(fd, buffer)
        except BlockingIOError:
            self.status = Status.OK_AGAIN
            return self.status
        except OSError:
            self.status = Status.ERROR_WRITE
            self.error_msg = error_msg_write(fd)
            return self.status
        if written == 0:
            raise RuntimeError("write(2) call cannot return 0.")
        del buffer[:written]
        self._event_count += 1
        self.status = Status.OK_AGAIN
        return self.status

    def blocking_write(self) -> None:
        """Keep running tasks until every write buffer is empty or an error occurs."""
        for fd in list(self._write_buffers):
            while self._write_buffers.get(fd):
                self.task()
                if self.status.is_error:
                    return

    def event_count(self) -> int:
        """Return the number of reads and writes since the last call, and reset it."""
        count, self._event_count = self._event_count, 0
        return count

    @classmethod
    def do_all_tasks(cls) -> None:
        """Run one round on every live processor."""
        for processor in list(IOProcessor._registry):
            processor.task()

    @classmethod
    def blocking_write_all(cls) -> None:
        """Flush the write buffers of every live processor."""
        for processor in list(IOProcessor._registry):
            processor.blocking_write()