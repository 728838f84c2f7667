import pytest

from basicirc.irc import message_types
from basicirc.irc.message_types import MessageType, type_for_id


@pytest.mark.parametrize(
    ("wire_id", "expected"),
    [
        ("PRIVMSG", MessageType.PRIVMSG),
        ("PING", MessageType.PING),
        ("NOTICE", MessageType.NOTICE),
        ("001", MessageType.RPL_WELCOME),
        ("366", MessageType.RPL_ENDOFNAMES),
        ("433", MessageType.ERR_NICKNAMEINUSE),
    ],
)
def test_known_identifiers(wire_id, expected):
    assert type_for_id(wire_id) is expected


def test_numeric_without_leading_zeros():
    assert type_for_id("1") is MessageType.RPL_WELCOME
    assert type_for_id("05") is MessageType.RPL_BOUNCE


@pytest.mark.parametrize("wire_id", ["FROB", "privmsg", "999", "", None, "0001"])
def test_unknown_identifiers_fall_back_to_sentinel(wire_id):
    assert type_for_id(wire_id) is MessageType.UNKNOWN_COMMAND_ID


def test_sentinels():
    assert MessageType.MALFORMED.is_sentinel
    assert MessageType.UNKNOWN_COMMAND_ID.is_sentinel
    assert not MessageType.PING.is_sentinel
    assert MessageType.MALFORMED.wire_id == "!"


def test_lookup_table_is_read_only():
    with pytest.raises(TypeError):
        message_types._ID_TO_TYPE["NEW"] = MessageType.PING  # type: ignore[index]


def test_every_member_resolves_to_itself():
    for member in MessageType:
        assert type_for_id(member.wire_id) is member
