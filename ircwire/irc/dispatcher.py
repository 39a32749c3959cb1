"""Line framing and routing of parsed messages to event handlers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import IRC_MAX_LINE_BUFFER
from ..logs.logger import logger
from .entity import Entity
from .events import EventKind
from .message import Message, parse_message
from .outbound import build_pong

RPL_WELCOME = 1

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


def _first_middle(message: Message) -> str:
    return message.middles[0]


class IRCDispatcher:
    def __init__(self, client: IRCClient):
        self.client = client
        self._discarding = False

    def reset(self) -> None:
        """Forget an oversized line being discarded; called for a new connection."""
        self._discarding = False

    def process_incoming_data(self, buffer: bytes, new_data: bytes) -> bytes:
        """Dispatch every complete line in *buffer* + *new_data*; return the rest.

        An unterminated remainder longer than ``IRC_MAX_LINE_BUFFER`` is
        dropped along with the rest of its line.
        """
        buffer += new_data
        while b"\n" in buffer:
            line, buffer = buffer.split(b"\n", 1)
            if self._discarding:
                self._discarding = False
                continue
            decoded = line.decode("utf-8", errors="ignore")
            if decoded.strip("\x00\r"):
                self.dispatch(decoded)
        if len(buffer) > IRC_MAX_LINE_BUFFER:
            logger.log_event(
                "irc",
                "line_overflow",
                level=logging.WARNING,
                nick=self.client.nick,
                size=len(buffer),
                limit=IRC_MAX_LINE_BUFFER,
            )
            self._discarding = True
            return b""
        return buffer

    def dispatch(self, raw_line: str) -> Message:
        message = parse_message(raw_line)
        client = self.client
        if client.write_raw:
            logger.log_event("irc", "raw_in", nick=client.nick, raw=message.raw)
        client.handlers.emit(EventKind.RAW, message, True)

        command = message.command
        if not command:
            logger.log_event(
                "irc",
                "unparsed_line",
                level=logging.DEBUG,
                nick=client.nick,
                raw=message.raw,
            )
            return message

        handler = self._routes.get(command)
        if handler is not None:
            handler(self, message)
        elif message.is_numeric:
            if message.numeric == RPL_WELCOME:
                client.mark_registered()
            client.handlers.emit(EventKind.NUMERIC, message.numeric, message)
        return message

    def _handle_ping(self, message: Message) -> None:
        token = message.trailing if message.has_trailing else ""
        self.client.send_raw(build_pong(token))
        logger.log_event(
            "irc", "ping_pong", level=logging.DEBUG, nick=self.client.nick, token=token
        )
        self.client.handlers.emit(EventKind.PING_PONG)

    def _handle_join(self, message: Message) -> None:
        channel = message.trailing or _first_middle(message)
        self.client.handlers.emit(EventKind.JOIN, channel, message.prefix)

    def _handle_part(self, message: Message) -> None:
        self.client.handlers.emit(
            EventKind.PART, _first_middle(message), message.trailing, message.prefix
        )

    def _handle_kick(self, message: Message) -> None:
        middles = message.middles
        target = Entity(middles[1]) if len(middles) > 1 else Entity("")
        self.client.handlers.emit(
            EventKind.KICK, middles[0], target, message.trailing, message.prefix
        )

    def _handle_privmsg(self, message: Message) -> None:
        self._emit_text(EventKind.PRIVMSG, message)

    def _handle_notice(self, message: Message) -> None:
        self._emit_text(EventKind.NOTICE, message)

    def _emit_text(self, kind: EventKind, message: Message) -> None:
        target = Entity(_first_middle(message))
        logger.log_event(
            "irc",
            kind.name.lower(),
            level=logging.DEBUG,
            nick=self.client.nick,
            channel=target.value if target.is_chan else None,
            source=message.prefix.nickname,
            text=message.trailing,
        )
        self.client.handlers.emit(kind, message.trailing, message.prefix, target)

    def _handle_nick(self, message: Message) -> None:
        new_nick = message.trailing or _first_middle(message)
        self.client.handlers.emit(EventKind.NICK, new_nick, message.prefix)

    def _handle_quit(self, message: Message) -> None:
        self.client.handlers.emit(EventKind.QUIT, message.trailing, message.prefix)

    _routes = {
        "PING": _handle_ping,
        "JOIN": _handle_join,
        "PART": _handle_part,
        "KICK": _handle_kick,
        "PRIVMSG": _handle_privmsg,
        "NOTICE": _handle_notice,
        "NICK": _handle_nick,
        "QUIT": _handle_quit,
    }
