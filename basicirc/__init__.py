"""Minimal IRC client: connect, join one channel, relay chat."""

__version__ = "0.1.0"
