from __future__ import annotations

from unittest.mock import patch

import pytest

from ircwire.irc import IRCClient


class FakeSocket:
    """In-memory stand-in for a connected socket.

    ``incoming`` items are returned by successive ``recv`` calls; an
    exception instance is raised instead of returned. An exhausted queue
    reads as end of stream.
    """

    def __init__(self, incoming=(), short_by: int = 0, send_error: Exception | None = None):
        self.incoming = list(incoming)
        self.short_by = short_by
        self.send_error = send_error
        self.sent: list[bytes] = []
        self.closed = False
        self.shutdown_called = False
        self.timeout = "unset"

    def send(self, data: bytes) -> int:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)
        return len(data) - self.short_by

    def recv(self, size: int) -> bytes:
        if self.incoming:
            item = self.incoming.pop(0)
            if isinstance(item, Exception):
                raise item
            return item
        return b""

    def shutdown(self, how: int) -> None:
        self.shutdown_called = True
        self.incoming.clear()

    def close(self) -> None:
        self.closed = True

    def settimeout(self, timeout) -> None:
        self.timeout = timeout

    @property
    def lines(self) -> list[str]:
        return [data.decode("utf-8") for data in self.sent]


@pytest.fixture
def fake_socket():
    return FakeSocket()


@pytest.fixture
def client():
    return IRCClient("tester")


@pytest.fixture
def connected_client(client, fake_socket):
    """Client dialed against ``fake_socket``."""
    with patch("socket.create_connection", return_value=fake_socket):
        client.dial("irc.example.net", 6667)
    return client


@pytest.fixture
def socket_factory():
    return FakeSocket
