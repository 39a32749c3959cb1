"""Channel membership prefixes as they appear in NAMES replies."""

from __future__ import annotations

from enum import IntFlag


class ChannelMode(IntFlag):
    """Privilege of a user on a channel; values are combined with ``|``."""

    VOICE = 1
    HALFOP = 2
    OP = 4
    ADMIN = 8
    OWNER = 16


SIGILS: dict[str, ChannelMode] = {
    "~": ChannelMode.OWNER,
    "&": ChannelMode.ADMIN,
    "@": ChannelMode.OP,
    "%": ChannelMode.HALFOP,
    "+": ChannelMode.VOICE,
}

# Most powerful first
_RANKED = (
    ChannelMode.OWNER,
    ChannelMode.ADMIN,
    ChannelMode.OP,
    ChannelMode.HALFOP,
    ChannelMode.VOICE,
)


def parse_channel_modes(name: str) -> tuple[str, ChannelMode]:
    """Split leading mode sigils off *name*.

    ``"&@somenick"`` gives ``("somenick", ChannelMode.ADMIN | ChannelMode.OP)``.
    Scanning stops at the first character that is not a sigil; the rest of
    the string is the nickname, so a string made only of sigils yields an
    empty nickname with the accumulated modes.
    """
    modes = ChannelMode(0)
    for index, char in enumerate(name):
        mode = SIGILS.get(char)
        if mode is None:
            return name[index:], modes
        modes |= mode
    return "", modes


def highest_mode(modes: ChannelMode) -> ChannelMode:
    for mode in _RANKED:
        if modes & mode:
            return mode
    return ChannelMode(0)


def mode_sigil(mode: ChannelMode) -> str:
    """Sigil for a single mode flag, empty for none."""
    for sigil, flag in SIGILS.items():
        if flag == mode:
            return sigil
    return ""
