"""A listening TCP socket with non-blocking, buffered client connections."""

from __future__ import annotations

import selectors
import socket
from collections import deque
from collections.abc import Iterator

from .ioprocessor import IOEvent, IOProcessor
from .logger import Logger
from .status import Status


class TCPIOProcessor(IOProcessor):
    """Accepts clients on a port and keeps a read and a write buffer per client.

    Descriptors of clients that went away are queued on
    ``disconnected_clients`` so the owner can drop its per-client state.
    """

    def __init__(self, port: int = 80, backlog: int = 8, host: str = "") -> None:
        super().__init__()
        self.port = port
        self.backlog = backlog
        self.disconnected_clients: deque[int] = deque()
        self._clients: dict[int, socket.socket] = {}
        self._listener: socket.socket | None = None
        self._logger = Logger.get_logger("TCPIOProcessor")
        try:
            self._open_listener(host)
        except BaseException:
            self.close()
            raise

    def _open_listener(self, host: str) -> None:
        try:
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            raise RuntimeError(
                f"Error while creating socket: {exc.strerror or exc}"
            ) from exc
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._listener = listener
        self._logger.info("Created socket ", listener.fileno())

        try:
            listener.bind((host, self.port))
        except OSError as exc:
            self.finalize(exc.strerror or str(exc))
        self.port = listener.getsockname()[1]
        self._logger.info("Bind socket ", listener.fileno(), " at port ", self.port)

        try:
            listener.listen(self.backlog)
        except OSError as exc:
            self.finalize(exc.strerror or str(exc))
        self._logger.info("Listen with backlog size ", self.backlog)

        listener.setblocking(False)
        self._watch(listener.fileno(), IOEvent.READ)
        self._logger.verbose("TCPIOProcessor initialization complete")

    def task(self) -> None:
        """Accept new clients, read what they sent and write what is queued."""
        self.status = Status.OK_AGAIN
        for fd, mask in self._poll():
            if self._listener is not None and fd == self._listener.fileno():
                if mask & selectors.EVENT_READ:
                    self._accept()
                continue
            if fd not in self._clients:
                continue
            if mask & selectors.EVENT_READ:
                rc = self._read(fd)
                if rc is Status.ERROR_FILECLOSED:
                    self._logger.verbose("client ", fd, " is closed")
                    self._disconnect(fd)
                    continue
                if rc.is_error:
                    self._logger.warning(
                        "Error while reading from client ", fd, ": ", self.error_msg
                    )
                    self._disconnect(fd)
                    continue
            if mask & selectors.EVENT_WRITE and self._write_buffers.get(fd):
                if self._write(fd).is_error:
                    self._logger.warning(
                        "Error while writing to client ", fd, ": ", self.error_msg
                    )
        self.status = Status.OK_AGAIN

    def _accept(self) -> None:
        if self._listener is None:
            return
        try:
            conn, _ = self._listener.accept()
        except BlockingIOError:
            return
        except OSError as exc:
            self.finalize(exc.strerror or str(exc))
            return
        conn.setblocking(False)
        fd = conn.fileno()
        self._logger.info("Accepted new client: ", fd)
        self._clients[fd] = conn
        self._watch(fd, IOEvent.READ, IOEvent.WRITE)
        self._read_buffers[fd] = bytearray()
        self._write_buffers[fd] = bytearray()

    def _disconnect(self, fd: int) -> None:
        conn = self._clients.pop(fd, None)
        self._unwatch(fd)
        if conn is not None:
            conn.close()
        self._read_buffers.pop(fd, None)
        self._write_buffers.pop(fd, None)
        self.disconnected_clients.append(fd)
        self._logger.info("Disconnected ", fd)

    def finalize(self, error: str | None = None) -> None:
        """Drop every client and close the listening socket.

        With an error message, raise RuntimeError after cleaning up.
        """
        listener = self._listener
        if listener is None:
            return
        self._logger.verbose("Finalize TCPIOProcessor")
        for fd in list(self._clients):
            self._disconnect(fd)
        self._listener = None
        self._unwatch(listener.fileno())
        listener.close()
        if error:
            raise RuntimeError(f"Error from TCPIOProcessor: {error}")

    def close(self) -> None:
        self.finalize(None)
        super().close()

    def read_buffer(self, fd: int) -> bytearray:
        """The mutable buffer of bytes received from the client."""
        return self._read_buffers.setdefault(fd, bytearray())

    def write_buffer(self, fd: int) -> bytearray:
        """The mutable buffer of bytes waiting to be sent to the client."""
        return self._write_buffers.setdefault(fd, bytearray())

    def __iter__(self) -> Iterator[int]:
        """Iterate over the descriptors of connected clients in ascending order."""
        return iter(sorted(self._clients))