"""
Configuration constants for the basic IRC client

This module contains all configurable constants used throughout the application.
Each numeric constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Outbound flow
OUTGOING_QUEUE_SIZE = _get_env_int(
    "OUTGOING_QUEUE_SIZE", 50
)  # Capacity of the outbound message queue
SEND_INTERVAL_SECONDS = _get_env_float(
    "SEND_INTERVAL_SECONDS", 0.5
)  # Minimum delay between two outbound lines

# Connection lifecycle
CONNECT_TIMEOUT_SECONDS = _get_env_float(
    "CONNECT_TIMEOUT_SECONDS", 30.0
)  # Timeout for opening the TCP connection
SHUTDOWN_GRACE_SECONDS = _get_env_float(
    "SHUTDOWN_GRACE_SECONDS", 2.5
)  # Time given to the sender to flush QUIT before stopping
JOIN_TIMEOUT_SECONDS = _get_env_float(
    "JOIN_TIMEOUT_SECONDS", 5.0
)  # How long close() waits for each task before cancelling it

# Registration
REAL_NAME = "basicirc"
QUIT_MESSAGE = "leaving..."

# Wire format
LINE_TERMINATOR = "\r\n"
WIRE_ENCODING = "utf-8"
