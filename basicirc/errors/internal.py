"""Centralized internal error hierarchy.

These exceptions give semantic categories to the failures the client can hit.
Only ``ConnectError`` is ever raised to a caller; post-connect stream failures
travel as values inside ``IOResult`` and end the session instead.

Classes:
  InternalError        – Base for all internal errors.
  NetworkError         – Transport level problems.
  ConnectError         – The TCP connection could not be opened.
  StreamError          – A read or write failed after the connection was up.
  ConfigError          – Invalid process configuration.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors."""


class ConnectError(NetworkError):
    """Exception raised when the connection to the server cannot be opened.

    This is the only failure surfaced synchronously to the caller of
    ``BasicIRCClient.connect``.
    """


class StreamError(NetworkError):
    """A read or write on an established connection failed.

    Args:
        message: Descriptive error message.
        direction: ``"read"`` or ``"write"``.
        cause: The underlying exception, if any.
    """

    def __init__(
        self, message: str, *, direction: str, cause: BaseException | None = None
    ) -> None:
        data: dict[str, object] = {"direction": direction}
        if cause is not None:
            data["cause"] = type(cause).__name__
        super().__init__(message, data=data)
        self.direction = direction
        self.cause = cause


class ConfigError(InternalError):
    """Exception raised for invalid client configuration."""


__all__ = [
    "InternalError",
    "NetworkError",
    "ConnectError",
    "StreamError",
    "ConfigError",
]
