"""IRC subsystem package.

Contains the identifier table, the line codec, the dispatcher and the
connection engine.
"""

from .client import BasicIRCClient  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .message_types import MessageType, type_for_id  # noqa: F401
from .models import ConnectionState, IOResult  # noqa: F401
from .observer import ClientObserver, LoggingObserver  # noqa: F401
from .parser import (  # noqa: F401
    Message,
    extract_nick,
    format_as_chat_line,
    message,
    parse_message,
    privmsg,
    serialize,
)

__all__ = [
    "BasicIRCClient",
    "ClientObserver",
    "ConnectionState",
    "IOResult",
    "IRCDispatcher",
    "LoggingObserver",
    "Message",
    "MessageType",
    "extract_nick",
    "format_as_chat_line",
    "message",
    "parse_message",
    "privmsg",
    "serialize",
    "type_for_id",
]
