#!/usr/bin/env python3
"""
Main entry point for the ircwire example client

Connects with the configured identity, joins the configured channels once
the server welcomes us and logs channel traffic in readable form.
"""

from __future__ import annotations

import logging
import sys

from .config import ClientConfig, load_config
from .errors import ConfigError, InternalError
from .errors.handling import log_error
from .irc import (
    Entity,
    EventKind,
    IRCClient,
    Message,
    highest_mode,
    parse_channel_modes,
    strip_control_codes,
)
from .irc.modes import mode_sigil
from .logging_config import LoggerConfigurator
from .logs.logger import logger

RPL_WELCOME = 1
RPL_NAMREPLY = 353
QUIT_MESSAGE = "ircwire signing off"


def decorate_names(names: list[str]) -> list[str]:
    """Render a NAMES list with only each user's highest channel mode."""
    decorated = []
    for name in names:
        if not name:
            continue
        nick, modes = parse_channel_modes(name)
        decorated.append(f"{mode_sigil(highest_mode(modes))}{nick}")
    return decorated


def attach_handlers(client: IRCClient, config: ClientConfig) -> None:
    def on_numeric(numeric: int, message: Message) -> None:
        if numeric == RPL_WELCOME:
            for channel in config.channels:
                client.join(channel)
        elif numeric == RPL_NAMREPLY:
            channel = message.middles[-1]
            names = decorate_names(message.trailings)
            logger.log_event(
                "app", "names", nick=client.nick, channel=channel, names=" ".join(names)
            )

    def on_text(kind: str):
        def handler(text: str, source: Entity, target: Entity) -> None:
            logger.log_event(
                "app",
                kind,
                nick=client.nick,
                channel=target.value if target.is_chan else None,
                source=source.nickname or "server",
                text=strip_control_codes(text),
            )

        return handler

    def on_join(channel: str, user: Entity) -> None:
        logger.log_event("app", "join", nick=client.nick, channel=channel, who=user.nickname)

    def on_part(channel: str, message: str, user: Entity) -> None:
        logger.log_event(
            "app", "part", nick=client.nick, channel=channel, who=user.nickname,
            reason=strip_control_codes(message),
        )

    def on_kick(channel: str, target: Entity, message: str, user: Entity) -> None:
        logger.log_event(
            "app", "kick", nick=client.nick, channel=channel, who=user.nickname,
            target=target.nickname, reason=strip_control_codes(message),
        )

    def on_nick(new_nick: str, user: Entity) -> None:
        if user.nickname == client.nick:
            client.nick = new_nick
        logger.log_event("app", "nick", nick=client.nick, who=user.nickname, new_nick=new_nick)

    def on_quit(message: str, user: Entity) -> None:
        logger.log_event(
            "app", "quit", nick=client.nick, who=user.nickname, reason=strip_control_codes(message)
        )

    client.on(EventKind.NUMERIC, on_numeric)
    client.on(EventKind.PRIVMSG, on_text("privmsg"))
    client.on(EventKind.NOTICE, on_text("notice"))
    client.on(EventKind.JOIN, on_join)
    client.on(EventKind.PART, on_part)
    client.on(EventKind.KICK, on_kick)
    client.on(EventKind.NICK, on_nick)
    client.on(EventKind.QUIT, on_quit)


def health_check(path: str | None = None) -> int:
    """Validate the configuration only; return the process exit code."""
    try:
        config = load_config(path)
    except ConfigError as e:
        logger.log_event("app", "health_check_failed", level=logging.ERROR, error=str(e))
        return 1
    logger.log_event("app", "health_check_passed", server=config.host, port=config.port)
    return 0


def main(path: str | None = None) -> int:
    """Connect and run the client until the server or the user ends the session.

    Returns:
        Process exit code.
    """
    client: IRCClient | None = None
    try:
        config = load_config(path)
        client = IRCClient.from_config(config)
        attach_handlers(client, config)
        logger.log_event("app", "start", nick=config.nick, server=config.host, port=config.port)
        client.dial(config.host, config.port, config.password, tls=config.tls)
        client.run()
        return 0
    except KeyboardInterrupt:
        if client is not None and client.connected:
            try:
                client.quit(QUIT_MESSAGE)
            except (InternalError, OSError) as e:
                log_error("Quit failed", e)
            finally:
                if client.connected:
                    client.close()
        logger.log_event("app", "interrupted")
        return 0
    except (InternalError, OSError) as e:
        log_error("Main application error", e)
        return 1
    finally:
        logger.log_event("app", "shutdown")


def run() -> None:
    """Synchronous entry point: ``ircwire [--health-check] [config-file]``."""
    LoggerConfigurator().configure()
    args = sys.argv[1:]
    if args and args[0] == "--health-check":
        sys.exit(health_check(args[1] if len(args) > 1 else None))
    sys.exit(main(args[0] if args else None))


if __name__ == "__main__":
    run()
