"""Classification of IRC actor identifiers (nicknames, channels, hostmasks)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Entity:
    """The source or destination of a message.

    An entity is a nickname or server name, a channel name, or a full
    ``nick!user@host`` hostmask. Every accessor is total: anything that
    cannot be decomposed yields an empty string.

    A string with ``@`` before ``!`` (or ``@`` without any ``!``) is a
    name, not a hostmask.
    """

    value: str = ""

    def __str__(self) -> str:
        return self.value

    def __bool__(self) -> bool:
        return bool(self.value)

    @property
    def is_empty(self) -> bool:
        return not self.value

    @property
    def is_chan(self) -> bool:
        return self.value.startswith("#") and len(self.value) > 1

    @property
    def is_hostmask(self) -> bool:
        bang, at = self._separators()
        return at > bang > -1

    @property
    def is_name(self) -> bool:
        return not self.is_chan and not self.is_hostmask

    @property
    def nickname(self) -> str:
        """Part before the first ``!``, or the whole value when there is none."""
        bang = self.value.find("!")
        if bang > -1:
            return self.value[:bang]
        return self.value

    @property
    def username(self) -> str:
        bang, at = self._separators()
        if at > bang > -1:
            return self.value[bang + 1 : at]
        return ""

    @property
    def hostname(self) -> str:
        bang, at = self._separators()
        if at > bang > -1:
            return self.value[at + 1 :]
        return ""

    def _separators(self) -> tuple[int, int]:
        return self.value.find("!"), self.value.find("@")
