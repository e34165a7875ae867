"""Universal debug/logging utility for streamscout.

Provides debug(), info(), warn(), error() functions for consistent logging.
Debug output is controlled by the STREAMSCOUT_DEBUG environment variable, the
DEBUG setting, or the global --debug flag.
Logs to stderr; can be extended to log to file if needed.
"""

import logging
import os
import sys
from typing import Optional

DEBUG_ON = os.getenv("STREAMSCOUT_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger("streamscout")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if DEBUG_ON else logging.INFO)
    _logger = logger
    return logger


def enable_debug(enabled: bool = True) -> None:
    """Switch debug output on or off after import time."""
    global DEBUG_ON
    DEBUG_ON = enabled
    setup_logger().setLevel(logging.DEBUG if enabled else logging.INFO)


def is_debug() -> bool:
    return DEBUG_ON


def debug(msg: str) -> None:
    """Log a debug message if debugging is enabled. Always print to stdout if debugging is enabled."""
    if DEBUG_ON:
        setup_logger().debug(msg)
        print(f"[DEBUG] {msg}", file=sys.stdout, flush=True)


def info(msg: str) -> None:
    """Log an info message."""
    setup_logger().info(msg)


def warn(msg: str) -> None:
    """Log a warning message."""
    setup_logger().warning(msg)


def error(msg: str) -> None:
    """Log an error message."""
    setup_logger().error(msg)
