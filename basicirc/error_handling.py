"""
Simple error reporting helpers
"""

import logging

from .logs.logger import logger


def log_error(message: str, error: BaseException, user: str = None):
    """Log error with optional user context via structured event"""
    logger.log_event(
        "error",
        "logged",
        level=logging.ERROR,
        message=message,
        user=user,
        error=str(error) or type(error).__name__,
        error_type=type(error).__name__,
    )
