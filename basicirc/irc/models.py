"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from ..errors import StreamError


class ConnectionState(Enum):
    UNCONNECTED = auto()
    CONNECTING = auto()
    ACTIVE = auto()
    DRAINING = auto()
    CLOSED = auto()


@dataclass(frozen=True, slots=True)
class IOResult:
    """Outcome of one read or write on the stream.

    ``line`` holds the text read or written; ``error`` is set instead when the
    operation failed or the peer closed the connection.
    """

    line: str | None = None
    error: StreamError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, line: str) -> IOResult:
        return cls(line=line)

    @classmethod
    def failure(cls, error: StreamError) -> IOResult:
        return cls(error=error)
