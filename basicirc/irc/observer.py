"""Observer interface notified of traffic, chat lines and fatal errors."""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO

from ..errors import StreamError
from ..logs.logger import logger
from .parser import Message, serialize


class ClientObserver(Protocol):
    """Receives everything the client wants to surface to the outside."""

    def on_send(self, msg: Message) -> None:
        """Called with each message right before it is written."""
        ...

    def on_receive(self, msg: Message) -> None:
        """Called with each message right after it is decoded."""
        ...

    def on_chat(self, line: str) -> None:
        """Called with the rendered text of each PRIVMSG."""
        ...

    def on_error(self, error: StreamError) -> None:
        """Called once per fatal stream failure."""
        ...


class LoggingObserver:
    """Default observer: structured log events plus chat lines on a text sink."""

    def __init__(
        self, nick: str | None = None, channel: str | None = None, sink: TextIO | None = None
    ) -> None:
        self.nick = nick
        self.channel = channel
        self.sink = sink

    def on_send(self, msg: Message) -> None:
        logger.log_event(
            "irc", "send", level=logging.DEBUG, user=self.nick, line=_wire(msg)
        )

    def on_receive(self, msg: Message) -> None:
        logger.log_event(
            "irc",
            "receive",
            level=logging.DEBUG,
            user=self.nick,
            line=_wire(msg),
            type=msg.type.name,
        )

    def on_chat(self, line: str) -> None:
        sink = self.sink or sys.stdout
        print(line, file=sink, flush=True)
        logger.log_event(
            "irc", "chat", level=logging.DEBUG, user=self.nick, channel=self.channel, line=line
        )

    def on_error(self, error: StreamError) -> None:
        logger.log_event(
            "irc",
            "io_error",
            level=logging.ERROR,
            user=self.nick,
            direction=error.direction,
            error=str(error),
        )


def _wire(msg: Message) -> str:
    return serialize(msg).rstrip("\r\n")


__all__ = ["ClientObserver", "LoggingObserver"]
