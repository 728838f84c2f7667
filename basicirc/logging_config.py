"""
Logging configuration for the basic IRC client.

Sets up the root logger with colorlog so structured events emitted through
``basicirc.logs.logger`` come out colored on stderr.
"""

import logging
import os
import sys

import colorlog

LOG_FORMAT = (
    "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s"
)


def build_formatter() -> colorlog.ColoredFormatter:
    """Return the colored formatter shared by every handler we install."""
    return colorlog.ColoredFormatter(
        LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "magenta",
        },
        secondary_log_colors={
            "message": {
                "ERROR": "red",
                "CRITICAL": "magenta",
            }
        },
        reset=True,
    )


class LoggerConfigurator:
    """Handles logging configuration using colorlog.

    Supports environment variable configuration for log levels.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stderr

    @staticmethod
    def resolve_level() -> int:
        debug_env = os.environ.get("DEBUG", "").lower()
        return logging.DEBUG if debug_env in ("true", "1", "yes") else logging.INFO

    def configure(self) -> logging.Handler:
        """Configure the root logger with colored output.

        Uses environment variables:
        - DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO
        """
        log_level = self.resolve_level()
        formatter = build_formatter()

        handler = logging.StreamHandler(self.stream)
        handler.setFormatter(formatter)
        handler._basicirc_handler = True  # type: ignore[attr-defined]

        # Replace only what a previous configure() installed.
        root_logger = logging.getLogger()
        for existing in list(root_logger.handlers):
            if getattr(existing, "_basicirc_handler", False):
                root_logger.removeHandler(existing)
        root_logger.addHandler(handler)
        root_logger.setLevel(log_level)
        logging.getLogger("asyncio").setLevel(logging.WARNING)
        return handler
