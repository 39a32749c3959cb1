"""Event kinds and the handler registry the dispatcher emits into.

Handler arguments by kind::

    RAW        (message: Message, inbound: bool)
    PING_PONG  ()
    JOIN       (channel: str, user: Entity)
    PART       (channel: str, message: str, user: Entity)
    KICK       (channel: str, target: Entity, message: str, user: Entity)
    PRIVMSG    (message: str, source: Entity, target: Entity)
    NOTICE     (message: str, source: Entity, target: Entity)
    NICK       (new_nick: str, user: Entity)
    QUIT       (message: str, user: Entity)
    NUMERIC    (numeric: int, message: Message)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum, auto
from typing import Any

from ..logs.logger import logger

Handler = Callable[..., Any]


class EventKind(Enum):
    RAW = auto()
    PING_PONG = auto()
    JOIN = auto()
    PART = auto()
    KICK = auto()
    PRIVMSG = auto()
    NOTICE = auto()
    NICK = auto()
    QUIT = auto()
    NUMERIC = auto()


class HandlerRegistry:
    """Handlers keyed by event kind; emitting an unhandled kind does nothing."""

    def __init__(self) -> None:
        self._handlers: dict[EventKind, list[Handler]] = {}
        self._lock = threading.Lock()

    def register(self, kind: EventKind, handler: Handler) -> Handler:
        if not callable(handler):
            raise TypeError(f"handler for {kind.name} is not callable")
        with self._lock:
            self._handlers.setdefault(kind, []).append(handler)
        return handler

    def unregister(self, kind: EventKind, handler: Handler) -> bool:
        with self._lock:
            handlers = self._handlers.get(kind, [])
            if handler not in handlers:
                return False
            handlers.remove(handler)
            if not handlers:
                del self._handlers[kind]
            return True

    def handlers(self, kind: EventKind) -> list[Handler]:
        with self._lock:
            return list(self._handlers.get(kind, ()))

    def emit(self, kind: EventKind, *args: Any) -> int:
        """Call every handler for *kind*; return how many ran without raising."""
        completed = 0
        for handler in self.handlers(kind):
            try:
                handler(*args)
            except Exception as e:  # noqa: BLE001
                logger.log_event(
                    "irc",
                    "handler_error",
                    level=logging.ERROR,
                    event=kind.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue
            completed += 1
        return completed
