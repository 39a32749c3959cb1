"""Removal of mIRC-style text formatting codes."""

from __future__ import annotations

from enum import IntEnum

BOLD = "\x02"
COLOR = "\x03"
RESET = "\x0f"
REVERSE = "\x16"
ITALIC = "\x1d"
UNDERLINE = "\x1f"

FORMAT_CODES = frozenset((BOLD, RESET, REVERSE, ITALIC, UNDERLINE))
_DIGITS = frozenset("0123456789")


class _State(IntEnum):
    NORMAL = 0
    SAW_COLOR_MARKER = 1
    SAW_FIRST_DIGIT = 2
    SAW_SECOND_DIGIT = 3
    SAW_COMMA = 4
    SAW_BG_DIGIT = 5


def strip_control_codes(text: str) -> str:
    """Return *text* without bold, italic, underline, reverse, reset and color codes.

    A color code is ``\\x03`` followed by up to two foreground digits and,
    optionally, a comma with up to two background digits. The comma is only
    part of the code when a digit follows it. A character that does not fit
    the code is re-examined as ordinary text, so nothing outside a matched
    code is dropped.
    """
    out: list[str] = []
    state = _State.NORMAL
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if state == _State.NORMAL:
            if char == COLOR:
                state = _State.SAW_COLOR_MARKER
            elif char not in FORMAT_CODES:
                out.append(char)
        elif state == _State.SAW_COLOR_MARKER:
            if char not in _DIGITS:
                state = _State.NORMAL
                continue
            state = _State.SAW_FIRST_DIGIT
        elif state in (_State.SAW_FIRST_DIGIT, _State.SAW_SECOND_DIGIT):
            if char in _DIGITS and state == _State.SAW_FIRST_DIGIT:
                state = _State.SAW_SECOND_DIGIT
            elif char == "," and i + 1 < length and text[i + 1] in _DIGITS:
                state = _State.SAW_COMMA
            else:
                state = _State.NORMAL
                continue
        elif state == _State.SAW_COMMA:
            if char not in _DIGITS:
                state = _State.NORMAL
                continue
            state = _State.SAW_BG_DIGIT
        else:  # SAW_BG_DIGIT
            state = _State.NORMAL
            if char not in _DIGITS:
                continue
        i += 1
    return "".join(out)
