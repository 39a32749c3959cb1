"""
Tests for Entity classification and hostmask decomposition
"""

import pytest

from ircwire.irc import Entity

HOSTMASK = "SomeNick!SomeUser@SomeHost"


class TestEntityHostmask:
    """Decomposition of nick!user@host"""

    def test_hostmask_parts(self):
        entity = Entity(HOSTMASK)
        assert entity.nickname == "SomeNick"
        assert entity.username == "SomeUser"
        assert entity.hostname == "SomeHost"

    def test_hostmask_classification(self):
        entity = Entity(HOSTMASK)
        assert entity.is_hostmask is True
        assert entity.is_name is False
        assert entity.is_chan is False

    def test_host_with_extra_at_sign(self):
        entity = Entity("nick!user@host@weird")
        assert entity.username == "user"
        assert entity.hostname == "host@weird"

    def test_empty_nick_part(self):
        entity = Entity("!user@host")
        assert entity.is_hostmask is True
        assert entity.nickname == ""
        assert entity.username == "user"


class TestEntityClassification:
    """Channel / name / hostmask predicates"""

    def test_channel(self):
        assert Entity("#SomeChan").is_chan is True
        assert Entity("#SomeChan").is_name is False

    def test_lone_hash_is_a_name(self):
        entity = Entity("#")
        assert entity.is_chan is False
        assert entity.is_name is True

    def test_plain_nick_is_name(self):
        entity = Entity("SomeNick")
        assert entity.is_name is True
        assert entity.nickname == "SomeNick"
        assert entity.username == ""
        assert entity.hostname == ""

    def test_server_name_is_name(self):
        assert Entity("irc.example.net").is_name is True

    @pytest.mark.parametrize("value", ["user@host!nick", "user@host", "a@b@c"])
    def test_at_before_bang_is_a_name(self, value):
        """Malformed hostmasks are not repaired"""
        entity = Entity(value)
        assert entity.is_hostmask is False
        assert entity.is_name is True
        assert entity.username == ""
        assert entity.hostname == ""

    def test_bang_without_at_is_a_name(self):
        entity = Entity("nick!user")
        assert entity.is_hostmask is False
        assert entity.nickname == "nick"
        assert entity.username == ""

    @pytest.mark.parametrize(
        "value", ["", "#", "#chan", "nick", "n!u@h", "u@h!n", "!", "@", "!@"]
    )
    def test_exactly_one_classification(self, value):
        entity = Entity(value)
        flags = [entity.is_chan, entity.is_hostmask, entity.is_name]
        assert flags.count(True) == 1


class TestEntityValue:
    """Value semantics"""

    def test_equality_by_string(self):
        assert Entity("nick") == Entity("nick")
        assert Entity("nick") != Entity("Nick")
        assert len({Entity("a"), Entity("a"), Entity("b")}) == 2

    def test_str_and_empty(self):
        assert str(Entity(HOSTMASK)) == HOSTMASK
        assert Entity("").is_empty is True
        assert Entity().is_empty is True
        assert not Entity("")
        assert Entity("").nickname == ""
