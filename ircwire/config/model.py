from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..constants import (
    DEFAULT_USER_MODE,
    IRC_CONNECT_ATTEMPTS,
    IRC_DEFAULT_PORT,
    IRC_DEFAULT_TLS_PORT,
    IRC_MAX_MESSAGE_LENGTH,
)


def normalize_channels(channels: list[str] | Any) -> list[str]:
    """Strip, deduplicate and ``#``-prefix channel names, keeping their order.

    Names already carrying another channel type prefix (``&``, ``+``, ``!``)
    are left as given.
    """
    if not isinstance(channels, list):
        raise ValueError("channels must be a list")
    normalized: list[str] = []
    for channel in channels:
        if not isinstance(channel, str):
            continue
        name = channel.strip()
        if not name or name == "#":
            continue
        if name[0] not in "#&+!":
            name = f"#{name}"
        if name.lower() not in (c.lower() for c in normalized):
            normalized.append(name)
    return normalized


class ClientConfig(BaseModel):
    """Connection settings for one client.

    Attributes:
        nick: Nickname to register with.
        user: Username/ident, defaults to nick.
        realname: Real name, defaults to nick.
        mode: User mode sent during registration.
        password: Optional server password (PASS).
        host: Server host name.
        port: Server port, defaults by ``tls``.
        tls: Wrap the connection in TLS.
        channels: Channels joined once registered.
        max_message_length: Byte limit for outgoing lines.
        write_raw: Log raw traffic.
        connect_attempts: Connection attempts before giving up.
    """

    nick: str = Field(min_length=1, max_length=64)
    user: str | None = None
    realname: str | None = None
    mode: str = DEFAULT_USER_MODE
    password: str = ""
    host: str = Field(min_length=1)
    port: int | None = Field(default=None, ge=1, le=65535)
    tls: bool = False
    channels: list[str] = Field(default_factory=list)
    max_message_length: int = Field(default=IRC_MAX_MESSAGE_LENGTH, ge=64)
    write_raw: bool = False
    connect_attempts: int = Field(default=IRC_CONNECT_ATTEMPTS, ge=1)

    @field_validator("nick", "host", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("nick")
    @classmethod
    def validate_nick(cls, v: str) -> str:
        if any(c in v for c in " ,*?!@:") or v[0] in "#&$:":
            raise ValueError(f"invalid nickname {v!r}")
        return v

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> list[str]:
        return normalize_channels(v)

    @model_validator(mode="after")
    def fill_defaults(self) -> ClientConfig:
        """Derive user, realname and port from the other fields."""
        if not self.user:
            self.user = self.nick
        if not self.realname:
            self.realname = self.nick
        if self.port is None:
            self.port = IRC_DEFAULT_TLS_PORT if self.tls else IRC_DEFAULT_PORT
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
