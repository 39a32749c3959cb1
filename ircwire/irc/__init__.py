"""IRC subsystem package.

Contains the line parser and its value types, the formatting stripper, the
outbound command builders, the event registry, the dispatcher and the
connection driver.
"""

from .client import IRCClient  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .entity import Entity  # noqa: F401
from .events import EventKind, HandlerRegistry  # noqa: F401
from .formatting import strip_control_codes  # noqa: F401
from .message import Message, parse_message  # noqa: F401
from .models import ConnectionState  # noqa: F401
from .modes import ChannelMode, highest_mode, parse_channel_modes  # noqa: F401

__all__ = [
    "ChannelMode",
    "ConnectionState",
    "Entity",
    "EventKind",
    "HandlerRegistry",
    "IRCClient",
    "IRCDispatcher",
    "Message",
    "highest_mode",
    "parse_channel_modes",
    "parse_message",
    "strip_control_codes",
]
