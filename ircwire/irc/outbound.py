"""Outbound command construction and byte-length limiting.

Builders return raw lines without the CRLF terminator; ``frame_line``
drops anything after an embedded line break, then applies the length limit
and terminator right before a line hits the wire.
Lengths are UTF-8 byte counts, and cuts always fall between characters.
"""

from __future__ import annotations

LINE_TERMINATOR = "\r\n"
_LINE_BREAKS = ("\r", "\n", "\x00")


def first_line(text: str) -> str:
    """Text before the first CR, LF or NUL."""
    cut = len(text)
    for char in _LINE_BREAKS:
        index = text.find(char, 0, cut)
        if index > -1:
            cut = index
    return text[:cut]


def limit_by_bytes(text: str, max_bytes: int) -> str:
    """Longest prefix of *text* whose UTF-8 encoding fits in *max_bytes*."""
    if max_bytes <= 0:
        return ""
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    # Decoding drops a multi-byte sequence cut in half at the end.
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def split_by_bytes(text: str, max_bytes: int) -> list[str]:
    """Cut *text* into consecutive chunks of at most *max_bytes* UTF-8 bytes."""
    if max_bytes < 1:
        raise ValueError(f"max_bytes must be positive, got {max_bytes}")
    chunks: list[str] = []
    current: list[str] = []
    size = 0
    for char in text:
        char_size = len(char.encode("utf-8"))
        if char_size > max_bytes:
            raise ValueError(
                f"character {char!r} needs {char_size} bytes, limit is {max_bytes}"
            )
        if size + char_size > max_bytes:
            chunks.append("".join(current))
            current = []
            size = 0
        current.append(char)
        size += char_size
    if current:
        chunks.append("".join(current))
    return chunks


def frame_line(raw: str, max_length: int) -> bytes:
    line = limit_by_bytes(first_line(raw), max_length)
    return (line + LINE_TERMINATOR).encode("utf-8")


def build_pass(password: str) -> str:
    return f"PASS {password}"


def build_nick(nick: str) -> str:
    return f"NICK {nick}"


def build_nick_change(new_nick: str) -> str:
    return f"NICK :{new_nick}"


def build_user(user: str, mode: str, realname: str) -> str:
    return f"USER {user} {mode} * :{realname}"


def build_join(channel: str, key: str = "") -> str:
    if key:
        return f"JOIN {channel} {key}"
    return f"JOIN {channel}"


def build_part(channel: str, message: str = "") -> str:
    if message:
        return f"PART {channel} :{message}"
    return f"PART {channel}"


def build_quit(message: str = "") -> str:
    if message:
        return f"QUIT :{message}"
    return "QUIT"


def build_pong(token: str = "") -> str:
    if token:
        return f"PONG :{token}"
    return "PONG"


def _build_text_lines(command: str, target: str, message: str, max_length: int) -> list[str]:
    head = f"{command} {target} :"
    budget = max_length - len(head.encode("utf-8"))
    if budget < 1:
        raise ValueError(f"target {target!r} leaves no room for a {command} body")
    return [head + chunk for chunk in split_by_bytes(first_line(message), budget)]


def build_privmsg_lines(target: str, message: str, max_length: int) -> list[str]:
    """PRIVMSG lines carrying *message*, each within *max_length* bytes."""
    return _build_text_lines("PRIVMSG", target, message, max_length)


def build_notice_lines(target: str, message: str, max_length: int) -> list[str]:
    return _build_text_lines("NOTICE", target, message, max_length)
