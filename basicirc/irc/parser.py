"""IRC line codec.

This is not a strict RFC 2812 parser, just a heuristic that keeps the code
small. A line is read as ``[sender] <type> <params>`` where params are space
separated until one is introduced by `` :``; everything after that marker is a
single trailing param. Lines that do not fit degrade to a ``MALFORMED``
message; nothing here raises.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass

from ..constants import LINE_TERMINATOR
from .message_types import MessageType, type_for_id

# Prefix of a PRIVMSG body that marks a CTCP emote (/me)
ACTION_MARKER = "\x01ACTION"
UNKNOWN_SENDER = "unknown"

_WHITESPACE_RUN = re.compile(r"\s+")
_TRAILING_MARKER = re.compile(r"\s:")
_EMOTE_TRIM = string.whitespace + "\x01"


@dataclass(frozen=True, slots=True)
class Message:
    sender: str | None
    type: MessageType
    params: tuple[str, ...] = ()

    def param(self, index: int) -> str:
        """Positional param, or ``""`` when the message has fewer params."""
        if 0 <= index < len(self.params):
            return self.params[index]
        return ""

    def __str__(self) -> str:
        return serialize(self)


def message(msg_type: MessageType, *params: str) -> Message:
    """Build a client-originated message (no sender)."""
    return Message(None, msg_type, tuple(params))


def trailing(text: str) -> str:
    """Mark ``text`` as the long-form final param so it may contain spaces."""
    return f":{text}"


def privmsg(target: str, text: str) -> Message:
    return message(MessageType.PRIVMSG, target, trailing(text))


def serialize(msg: Message) -> str:
    parts: list[str] = []
    if msg.sender:
        parts.append(msg.sender)
    parts.append(msg.type.wire_id)
    # Empty params are dropped, so serialize is not a faithful round trip.
    parts.extend(p for p in msg.params if p)
    return " ".join(parts) + LINE_TERMINATOR


def parse_message(line: str) -> Message:
    """Parse one line received from the server.

    Two tokens are read as ``<type> <params>``; a ``<sender> <type>`` line with
    no params therefore comes out with the sender as type. That ambiguity is
    accepted.
    """
    parts = _WHITESPACE_RUN.split(line.strip(), maxsplit=2)
    if len(parts) == 2:
        return Message(None, type_for_id(parts[0]), parse_params(parts[1]))
    if len(parts) == 3:
        return Message(parts[0], type_for_id(parts[1]), parse_params(parts[2]))
    return Message(UNKNOWN_SENDER, MessageType.MALFORMED, (line,))


def parse_params(raw: str) -> tuple[str, ...]:
    head, *rest = _TRAILING_MARKER.split(raw, maxsplit=1)
    params = head.split()
    if rest and rest[0]:
        params.append(rest[0])
    return tuple(params)


def extract_nick(name: str) -> str:
    """``[:]nick!user@host`` -> ``nick``."""
    start = 1 if name.startswith(":") else 0
    end = name.find("!")
    if end < 0:
        end = len(name)
    return name[start:end]


def format_as_chat_line(msg: Message) -> str:
    """Render a PRIVMSG as ``[recipient] nick: body``.

    Emotes render as ``[recipient] nick body``. Any other message type gives
    an empty string.
    """
    if msg.type is not MessageType.PRIVMSG:
        return ""
    nick = extract_nick(msg.sender) if msg.sender else UNKNOWN_SENDER
    recipient = msg.param(0)
    body = msg.param(1)
    if body.startswith(ACTION_MARKER):
        body = body[len(ACTION_MARKER):].strip(_EMOTE_TRIM)
        return f"[{recipient}] {nick} {body}"
    return f"[{recipient}] {nick}: {body}"


__all__ = [
    "ACTION_MARKER",
    "Message",
    "extract_nick",
    "format_as_chat_line",
    "message",
    "parse_message",
    "parse_params",
    "privmsg",
    "serialize",
    "trailing",
]
