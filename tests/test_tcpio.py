import socket
import time

import pytest

from webserv.tcpio import TCPIOProcessor


@pytest.fixture
def server():
    proc = TCPIOProcessor(0, 8, "127.0.0.1")
    yield proc
    proc.close()


def _pump(proc, condition, seconds=5.0):
    deadline = time.monotonic() + seconds
    while time.monotonic() < deadline:
        proc.task()
        if condition():
            return True
        time.sleep(0.001)
    return False


def _connect(proc):
    return socket.create_connection(("127.0.0.1", proc.port), timeout=5)


def test_binds_to_an_ephemeral_port(server):
    assert server.port > 0
    assert list(server) == []


def test_accepts_a_client(server):
    with _connect(server):
        assert _pump(server, lambda: len(list(server)) == 1)
        fd = list(server)[0]
        assert server.read_buffer(fd) == b""
        assert server.write_buffer(fd) == b""


def test_echo(server):
    with _connect(server) as client:
        assert _pump(server, lambda: len(list(server)) == 1)
        client.sendall(b"Hello, echo!")
        fd = list(server)[0]
        assert _pump(server, lambda: server.read_buffer(fd) == b"Hello, echo!")

        for client_fd in server:
            incoming = server.read_buffer(client_fd)
            server.write_buffer(client_fd).extend(incoming)
            incoming.clear()

        assert _pump(server, lambda: not server.write_buffer(fd))
        assert client.recv(100) == b"Hello, echo!"
        assert server.read_buffer(fd) == b""


def test_client_close_is_reported(server):
    client = _connect(server)
    assert _pump(server, lambda: len(list(server)) == 1)
    fd = list(server)[0]
    client.close()
    assert _pump(server, lambda: bool(server.disconnected_clients))
    assert list(server.disconnected_clients) == [fd]
    assert list(server) == []


def test_finalize_drops_clients(server):
    with _connect(server):
        assert _pump(server, lambda: len(list(server)) == 1)
        fd = list(server)[0]
        server.finalize()
        assert list(server) == []
        assert fd in server.disconnected_clients


def test_finalize_with_error_raises(server):
    with pytest.raises(RuntimeError, match="Error from TCPIOProcessor: boom"):
        server.finalize("boom")
    assert list(server) == []


def test_finalize_twice_is_silent(server):
    server.finalize()
    server.finalize("ignored")
    assert list(server) == []


def test_port_in_use_raises(server):
    with pytest.raises(RuntimeError, match="Error from TCPIOProcessor"):
        TCPIOProcessor(server.port, 8, "127.0.0.1")