"""IRC protocol line parsing.

A line has the general form::

    [':' prefix ' '] command [' ' middle-params] [' ' ':' trailing]

Parsing is positional: the first ``:`` after the command token marks the
trailing parameter, which may itself contain spaces. Nothing here raises;
malformed input degrades to empty strings, ``[""]`` lists and ``-1``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .entity import Entity

_FRAMING_CHARS = "\x00\n\r"


def sanitize_line(raw_line: str) -> str:
    """Trim framing characters; a line with an embedded NUL is discarded."""
    line = raw_line.strip(_FRAMING_CHARS)
    if "\x00" in line:
        return ""
    return line


@dataclass(frozen=True, slots=True)
class Message:
    """One decoded protocol line.

    Only the raw text is stored; every part is recomputed from it on access.
    """

    raw: str = ""

    def __str__(self) -> str:
        return self.raw

    @property
    def is_empty(self) -> bool:
        return not self.raw

    @property
    def has_prefix(self) -> bool:
        return self.raw.startswith(":")

    @property
    def has_trailing(self) -> bool:
        """True if a ``:`` occurs after the prefix marker, even with nothing after it."""
        if self.has_prefix:
            return ":" in self.raw[1:]
        return ":" in self.raw

    @property
    def prefix(self) -> Entity:
        if not self.has_prefix:
            return Entity("")
        space = self.raw.find(" ")
        if space == -1:
            return Entity("")
        return Entity(self.raw[1:space])

    @property
    def command(self) -> str:
        """Command or numeric, uppercased.

        Empty when no space follows the command token, i.e. a line made of
        a bare command with no parameters at all.
        """
        rest = self._after_prefix()
        if rest is None:
            return ""
        space = rest.find(" ")
        if space == -1:
            return ""
        return rest[:space].upper()

    @property
    def is_numeric(self) -> bool:
        command = self.command
        return command.isascii() and command.isdigit()

    @property
    def numeric(self) -> int:
        if self.is_numeric:
            return int(self.command)
        return -1

    @property
    def middle(self) -> str:
        params = self._after_command()
        if params is None:
            return ""
        colon = params.find(":")
        if colon > -1:
            params = params[:colon]
        return params.rstrip(" ")

    @property
    def middles(self) -> list[str]:
        return self.middle.split(" ")

    @property
    def trailing(self) -> str:
        params = self._after_command()
        if params is None:
            return ""
        colon = params.find(":")
        if colon == -1 or colon + 1 >= len(params):
            return ""
        return params[colon + 1 :]

    @property
    def trailings(self) -> list[str]:
        return self.trailing.split(" ")

    def _after_prefix(self) -> str | None:
        """Text starting at the command token, or None if there is none."""
        if not self.raw:
            return None
        if not self.has_prefix:
            return self.raw
        space = self.raw.find(" ")
        if space == -1 or space + 1 >= len(self.raw):
            return None
        return self.raw[space + 1 :]

    def _after_command(self) -> str | None:
        """Text following the command token and its separating space."""
        rest = self._after_prefix()
        if rest is None:
            return None
        space = rest.find(" ")
        if space == -1:
            return None
        return rest[space + 1 :]


def parse_message(raw_line: str) -> Message:
    """Build a Message from one received or outgoing line. Never raises."""
    if not isinstance(raw_line, str):
        return Message("")
    return Message(sanitize_line(raw_line))
