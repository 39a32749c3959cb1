import logging
from unittest.mock import patch

from ircwire.irc import Entity, EventKind, IRCClient, IRCDispatcher, Message


class DummyIRC(IRCClient):
    def __init__(self) -> None:  # keep base init
        super().__init__("tester")
        self.sent: list[str] = []

    def send_raw(self, raw: str) -> None:  # capture instead of network
        self.sent.append(raw)


def _record(client, kind):
    events = []
    client.on(kind, lambda *args: events.append(args))
    return events


def test_ping_pong_response():
    client = DummyIRC()
    pongs = _record(client, EventKind.PING_PONG)
    disp = IRCDispatcher(client)
    buf = disp.process_incoming_data(b"", b"PING :irc.example.net\r\n")
    assert buf == b""
    assert client.sent == ["PONG :irc.example.net"]
    assert pongs == [()]


def test_ping_without_trailing_gets_bare_pong():
    client = DummyIRC()
    IRCDispatcher(client).dispatch("PING irc.example.net")
    assert client.sent == ["PONG"]


def test_partial_lines_are_buffered():
    client = DummyIRC()
    events = _record(client, EventKind.PRIVMSG)
    disp = IRCDispatcher(client)
    buf = disp.process_incoming_data(b"", b":a!b@c PRIVMSG #chan :hel")
    assert buf == b":a!b@c PRIVMSG #chan :hel"
    assert events == []
    buf = disp.process_incoming_data(buf, b"lo world\r\n:a!b@c PRIV")
    assert buf == b":a!b@c PRIV"
    assert events == [("hello world", Entity("a!b@c"), Entity("#chan"))]


def test_multibyte_character_split_across_reads():
    client = DummyIRC()
    events = _record(client, EventKind.PRIVMSG)
    disp = IRCDispatcher(client)
    data = ":a!b@c PRIVMSG #chan :café\r\n".encode("utf-8")
    cut = data.index(b"\xa9")  # second byte of the é sequence
    buf = disp.process_incoming_data(b"", data[:cut])
    disp.process_incoming_data(buf, data[cut:])
    assert events[0][0] == "café"


def test_raw_event_for_every_line_including_blank_skip():
    client = DummyIRC()
    raws = _record(client, EventKind.RAW)
    disp = IRCDispatcher(client)
    disp.process_incoming_data(b"", b"\r\n:srv 001 tester :Welcome\r\n\n")
    assert raws == [(Message(":srv 001 tester :Welcome"), True)]


def test_privmsg_and_notice_routing():
    client = DummyIRC()
    privmsgs = _record(client, EventKind.PRIVMSG)
    notices = _record(client, EventKind.NOTICE)
    disp = IRCDispatcher(client)
    disp.dispatch(":nick!user@host PRIVMSG #room :hello there")
    disp.dispatch(":irc.example.net NOTICE tester :*** Looking up your hostname")
    assert privmsgs == [("hello there", Entity("nick!user@host"), Entity("#room"))]
    assert notices == [
        ("*** Looking up your hostname", Entity("irc.example.net"), Entity("tester"))
    ]


def test_join_with_trailing_or_middle_channel():
    client = DummyIRC()
    joins = _record(client, EventKind.JOIN)
    disp = IRCDispatcher(client)
    disp.dispatch(":n!u@h JOIN :#one")
    disp.dispatch(":n!u@h JOIN #two")
    assert joins == [("#one", Entity("n!u@h")), ("#two", Entity("n!u@h"))]


def test_part_kick_nick_quit_routing():
    client = DummyIRC()
    parts = _record(client, EventKind.PART)
    kicks = _record(client, EventKind.KICK)
    nicks = _record(client, EventKind.NICK)
    quits = _record(client, EventKind.QUIT)
    disp = IRCDispatcher(client)
    disp.dispatch(":n!u@h PART #chan :see you")
    disp.dispatch(":op!u@h KICK #chan victim :behave")
    disp.dispatch(":old!u@h NICK :new")
    disp.dispatch(":n!u@h QUIT :Quit: leaving")
    assert parts == [("#chan", "see you", Entity("n!u@h"))]
    assert kicks == [("#chan", Entity("victim"), "behave", Entity("op!u@h"))]
    assert nicks == [("new", Entity("old!u@h"))]
    assert quits == [("Quit: leaving", Entity("n!u@h"))]


def test_numeric_event():
    client = DummyIRC()
    numerics = _record(client, EventKind.NUMERIC)
    disp = IRCDispatcher(client)
    msg = disp.dispatch(":srv 433 * tester :Nickname is already in use")
    assert numerics == [(433, msg)]


def test_unknown_and_unparseable_lines_only_raise_raw():
    client = DummyIRC()
    raws = _record(client, EventKind.RAW)
    others = [_record(client, kind) for kind in EventKind if kind is not EventKind.RAW]
    disp = IRCDispatcher(client)
    disp.dispatch(":srv CAP * LS :multi-prefix")
    disp.dispatch("garbage")
    disp.dispatch(":")
    assert len(raws) == 3
    assert all(events == [] for events in others)
    assert client.sent == []


def test_handler_exception_does_not_stop_dispatch():
    client = DummyIRC()
    seen = []

    def bad_handler(message, source, target):  # noqa: ARG001
        raise RuntimeError("boom")

    client.on(EventKind.PRIVMSG, bad_handler)
    client.on(EventKind.PRIVMSG, lambda message, source, target: seen.append(message))
    disp = IRCDispatcher(client)
    disp.process_incoming_data(b"", b":a!b@c PRIVMSG #c :one\r\n:a!b@c PRIVMSG #c :two\r\n")
    assert seen == ["one", "two"]


def test_oversized_partial_line_dropped(caplog):
    client = DummyIRC()
    privmsgs = _record(client, EventKind.PRIVMSG)
    disp = IRCDispatcher(client)
    with patch("ircwire.irc.dispatcher.IRC_MAX_LINE_BUFFER", 64), caplog.at_level(
        logging.WARNING, logger="ircwire"
    ):
        buf = b""
        for _ in range(10):
            buf = disp.process_incoming_data(buf, b"x" * 40)
            assert len(buf) <= 64
        buf = disp.process_incoming_data(buf, b"tail of junk\r\n:a!b@c PRIVMSG #c :ok\r\n")
    assert buf == b""
    assert privmsgs == [("ok", Entity("a!b@c"), Entity("#c"))]
    assert any("Dropping unterminated input" in r.getMessage() for r in caplog.records)


def test_line_within_limit_kept():
    client = DummyIRC()
    disp = IRCDispatcher(client)
    with patch("ircwire.irc.dispatcher.IRC_MAX_LINE_BUFFER", 64):
        assert disp.process_incoming_data(b"", b"y" * 64) == b"y" * 64


def test_reset_clears_discard_state():
    client = DummyIRC()
    privmsgs = _record(client, EventKind.PRIVMSG)
    disp = IRCDispatcher(client)
    with patch("ircwire.irc.dispatcher.IRC_MAX_LINE_BUFFER", 8):
        disp.process_incoming_data(b"", b"z" * 20)
        disp.reset()
        disp.process_incoming_data(b"", b":a!b@c PRIVMSG #c :fresh\r\n")
    assert privmsgs == [("fresh", Entity("a!b@c"), Entity("#c"))]
