"""ircwire: a small IRC client built around a total, non-raising line parser."""

from .irc import (  # noqa: F401
    ChannelMode,
    Entity,
    EventKind,
    IRCClient,
    Message,
    parse_channel_modes,
    parse_message,
    strip_control_codes,
)

__all__ = [
    "ChannelMode",
    "Entity",
    "EventKind",
    "IRCClient",
    "Message",
    "parse_channel_modes",
    "parse_message",
    "strip_control_codes",
]
