"""Blocking IRC connection driver.

``run()`` owns the receive loop; ``send_raw`` and ``close`` may be called
from other threads. The socket handle is only read or replaced under
``_lock``. Writes are serialized by ``_write_lock``, which ``close`` never
takes, so shutting the socket down wakes a send blocked on a full buffer.
"""

from __future__ import annotations

import logging
import socket
import ssl
import threading
from typing import TYPE_CHECKING

from ..constants import (
    DEFAULT_USER_MODE,
    IRC_CONNECT_ATTEMPTS,
    IRC_CONNECT_RETRY_MAX_WAIT,
    IRC_CONNECT_TIMEOUT,
    IRC_DEFAULT_PORT,
    IRC_DEFAULT_TLS_PORT,
    IRC_MAX_MESSAGE_LENGTH,
    IRC_RECV_BUFFER_SIZE,
)
from ..errors import (
    AlreadyConnectedError,
    AlreadyDisconnectedError,
    NotConnectedError,
    ShortWriteError,
    log_error,
)
from ..logs.logger import logger
from ..utils.retry import retry_transport
from .dispatcher import IRCDispatcher
from .events import EventKind, Handler, HandlerRegistry
from .message import parse_message
from .models import ConnectionState
from .outbound import (
    build_join,
    build_nick,
    build_nick_change,
    build_notice_lines,
    build_part,
    build_pass,
    build_privmsg_lines,
    build_quit,
    build_user,
    first_line,
    frame_line,
)

if TYPE_CHECKING:  # pragma: no cover
    from ..config.model import ClientConfig


class IRCClient:  # pylint: disable=too-many-instance-attributes
    """One connection to one IRC server.

    Args:
        nick: Nickname to register with. Required.
        user: Username/ident; defaults to *nick*.
        realname: Real name ("gecos"); defaults to *nick*.
        mode: User mode sent with USER; defaults to ``+i``.
        max_message_length: Byte limit applied to every outgoing line.
        write_raw: Log every raw line sent and received.
        connect_attempts: Connection attempts made by ``dial``.

    Raises:
        ValueError: If *nick* is empty.
    """

    def __init__(
        self,
        nick: str,
        user: str = "",
        realname: str = "",
        mode: str = "",
        *,
        max_message_length: int = IRC_MAX_MESSAGE_LENGTH,
        write_raw: bool = False,
        connect_attempts: int = IRC_CONNECT_ATTEMPTS,
    ) -> None:
        if not nick:
            raise ValueError("nickname not specified")
        self.nick = nick
        self.user = user or nick
        self.realname = realname or nick
        self.mode = mode or DEFAULT_USER_MODE
        self.max_message_length = max_message_length
        self.write_raw = write_raw
        self.connect_attempts = connect_attempts
        self.state = ConnectionState.DISCONNECTED
        self.handlers = HandlerRegistry()
        self.dispatcher = IRCDispatcher(self)
        self._sock: socket.socket | None = None
        self._password = ""
        self._buffer = b""
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: ClientConfig) -> IRCClient:
        return cls(
            config.nick,
            config.user or "",
            config.realname or "",
            config.mode,
            max_message_length=config.max_message_length,
            write_raw=config.write_raw,
            connect_attempts=config.connect_attempts,
        )

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def on(self, kind: EventKind, handler: Handler) -> Handler:
        return self.handlers.register(kind, handler)

    def off(self, kind: EventKind, handler: Handler) -> bool:
        return self.handlers.unregister(kind, handler)

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                nick=self.nick,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    # ------------------------------------------------------------------ #
    #  Connection lifecycle                                                #
    # ------------------------------------------------------------------ #

    def dial(
        self,
        host: str,
        port: int | None = None,
        password: str = "",
        *,
        tls: bool = False,
        local_address: tuple[str, int] | None = None,
        ssl_context: ssl.SSLContext | None = None,
    ) -> None:
        """Open the TCP (optionally TLS) connection; registration happens in ``run``.

        Raises:
            AlreadyConnectedError: A connection is open or being opened.
            OSError: The transport error of the last connection attempt.
        """
        with self._lock:
            if self._sock is not None or self.state != ConnectionState.DISCONNECTED:
                raise AlreadyConnectedError()
            self._set_state(ConnectionState.CONNECTING)

        if port is None:
            port = IRC_DEFAULT_TLS_PORT if tls else IRC_DEFAULT_PORT
        logger.log_event("irc", "connect_start", nick=self.nick, server=host, port=port, tls=tls)
        try:
            sock = retry_transport(
                lambda: self._open_socket(host, port, tls, local_address, ssl_context),
                max_attempts=self.connect_attempts,
                max_wait=IRC_CONNECT_RETRY_MAX_WAIT,
                description=f"connect {host}:{port}",
            )
        except OSError as e:
            with self._lock:
                self._set_state(ConnectionState.DISCONNECTED)
            log_error("Connection failed", e, context={"server": host, "port": port})
            raise

        with self._lock:
            self._sock = sock
            self._password = password
            self._buffer = b""
            self.dispatcher.reset()
        logger.log_event("irc", "connect_success", nick=self.nick, server=host, port=port)

    @staticmethod
    def _open_socket(
        host: str,
        port: int,
        tls: bool,
        local_address: tuple[str, int] | None,
        ssl_context: ssl.SSLContext | None,
    ) -> socket.socket:
        sock = socket.create_connection(
            (host, port), timeout=IRC_CONNECT_TIMEOUT, source_address=local_address
        )
        try:
            if tls:
                context = ssl_context or ssl.create_default_context()
                sock = context.wrap_socket(sock, server_hostname=host)
            sock.settimeout(None)
        except Exception:
            sock.close()
            raise
        return sock

    def run(self) -> None:
        """Register, then read and dispatch lines until the connection ends.

        Returns normally when the server closes the stream or ``close`` is
        called from another thread.

        Raises:
            NotConnectedError: ``dial`` has not succeeded.
            OSError: The connection failed while reading.
        """
        with self._lock:
            sock = self._sock
            if sock is None:
                raise NotConnectedError()
            password, self._password = self._password, ""
            self._set_state(ConnectionState.REGISTERING)

        if password:
            self.send_raw(build_pass(password))
        self.send_raw(build_nick(self.nick))
        self.send_raw(build_user(self.user, self.mode, self.realname))
        logger.log_event("irc", "registration_sent", level=logging.DEBUG, nick=self.nick)

        logger.log_event("irc", "listener_start", level=logging.DEBUG, nick=self.nick)
        try:
            while True:
                try:
                    data = sock.recv(IRC_RECV_BUFFER_SIZE)
                except OSError as e:
                    if self._sock is not sock:
                        return  # closed locally while blocked in recv
                    logger.log_event(
                        "irc", "connection_reset", level=logging.ERROR, nick=self.nick, error=str(e)
                    )
                    self._release(sock)
                    raise
                if not data:
                    if self._sock is sock:
                        logger.log_event(
                            "irc", "connection_lost", level=logging.WARNING, nick=self.nick
                        )
                        self._release(sock)
                    return
                self._buffer = self.dispatcher.process_incoming_data(self._buffer, data)
        finally:
            logger.log_event("irc", "listener_stopped", level=logging.DEBUG, nick=self.nick)

    def mark_registered(self) -> None:
        with self._lock:
            if self._sock is None:
                return
            self._set_state(ConnectionState.CONNECTED)
        logger.log_event("irc", "registered", nick=self.nick)

    def close(self) -> None:
        """Close the connection, unblocking a ``run`` loop or a stalled send in
        another thread.

        Raises:
            AlreadyDisconnectedError: There is no open connection.
        """
        with self._lock:
            sock = self._sock
            if sock is None:
                raise AlreadyDisconnectedError()
            self._disconnect_locked(sock)

    def _release(self, sock: socket.socket) -> None:
        with self._lock:
            if self._sock is sock:
                self._disconnect_locked(sock)

    def _disconnect_locked(self, sock: socket.socket) -> None:
        self._sock = None
        self._buffer = b""
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            logger.log_event(
                "irc", "shutdown_failed", level=logging.DEBUG, nick=self.nick, error=str(e)
            )
        finally:
            sock.close()
        self._set_state(ConnectionState.DISCONNECTED)
        logger.log_event("irc", "disconnected", level=logging.WARNING, nick=self.nick)

    # ------------------------------------------------------------------ #
    #  Sending                                                             #
    # ------------------------------------------------------------------ #

    def send_raw(self, raw: str) -> None:
        """Send one protocol line, cut to ``max_message_length`` bytes.

        Raises:
            NotConnectedError: There is no open connection.
            ShortWriteError: The socket took only part of the line; the
                connection has been closed.
            OSError: The underlying send failed.

        Only the text before an embedded CR, LF or NUL is sent.
        """
        if not self.connected:
            raise NotConnectedError()
        raw = first_line(raw)
        if not raw:
            return
        data = frame_line(raw, self.max_message_length)
        outgoing = parse_message(data.decode("utf-8"))
        if self.write_raw:
            logger.log_event("irc", "raw_out", nick=self.nick, raw=outgoing.raw)
        self.handlers.emit(EventKind.RAW, outgoing, False)

        with self._write_lock:
            with self._lock:
                sock = self._sock
            if sock is None:
                raise NotConnectedError()
            try:
                sent = sock.send(data)
            except OSError as e:
                if self._sock is not sock:
                    raise NotConnectedError() from e  # closed while sending
                raise
        if sent != len(data):
            self._release(sock)
            error = ShortWriteError(sent, len(data))
            log_error("Send failed", error, context={"nick": self.nick})
            raise error

    def join(self, channel: str, key: str = "") -> None:
        self.send_raw(build_join(channel, key))

    def part(self, channel: str, message: str = "") -> None:
        self.send_raw(build_part(channel, message))

    def privmsg(self, target: str, message: str) -> None:
        """Send *message* to a channel or nick, split over as many lines as needed."""
        for line in build_privmsg_lines(target, message, self.max_message_length):
            self.send_raw(line)

    def notice(self, target: str, message: str) -> None:
        for line in build_notice_lines(target, message, self.max_message_length):
            self.send_raw(line)

    def change_nick(self, new_nick: str) -> None:
        self.send_raw(build_nick_change(new_nick))

    def quit(self, message: str = "") -> None:
        self.send_raw(build_quit(message))
