"""Error types used across the client."""

from .internal import (  # noqa: F401
    ConfigError,
    ConnectError,
    InternalError,
    NetworkError,
    StreamError,
)

__all__ = [
    "InternalError",
    "NetworkError",
    "ConnectError",
    "StreamError",
    "ConfigError",
]
