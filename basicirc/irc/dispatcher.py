"""Reaction to decoded inbound messages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..logs.logger import logger
from .message_types import MessageType
from .parser import Message, format_as_chat_line, message

if TYPE_CHECKING:  # pragma: no cover
    from .client import BasicIRCClient


class IRCDispatcher:
    """Handles just enough of the protocol to stay connected and relay chat."""

    def __init__(self, client: BasicIRCClient):
        self.client = client

    def dispatch(self, msg: Message) -> None:
        if msg.type is MessageType.PING:
            self._handle_ping(msg)
        elif msg.type is MessageType.PRIVMSG:
            self._handle_privmsg(msg)
        else:
            logger.log_event(
                "irc",
                "ignored",
                level=logging.DEBUG,
                user=self.client.nick,
                type=msg.type.name,
            )

    def _handle_ping(self, msg: Message) -> None:
        # the pinging party arrives as a param, not as the sender
        origin = msg.param(0)
        logger.log_event(
            "irc", "ping", level=logging.DEBUG, user=self.client.nick, origin=origin
        )
        self.client.enqueue(message(MessageType.PONG, self.client.nick, origin))

    def _handle_privmsg(self, msg: Message) -> None:
        self.client.notify(self.client.observer.on_chat, format_as_chat_line(msg))
