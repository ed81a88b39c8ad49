"""
Core Logging Utilities.

This module configures the diagnostic logger used internally by the toolset.
Operator-facing output (console lines and run transcripts) goes through
`toolset.logger.Logger` instead; records emitted here are for debugging the
toolset itself.
"""

import logging
import sys
from typing import Optional, TextIO

from colorama import Fore, Style

# Custom Formatter for colored output
class ColoredFormatter(logging.Formatter):
    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record):
        log_color = self.COLORS.get(record.levelno, "")
        reset = Style.RESET_ALL
        timestamp = self.formatTime(record, self.datefmt)

        # Format: [TIME] [LEVEL] name: Message
        formatted_msg = (
            f"{Style.DIM}[{timestamp}]{reset} {log_color}[{record.levelname}]{reset} "
            f"{record.name}: {record.getMessage()}"
        )
        if record.exc_info:
            formatted_msg += "\n" + self.formatException(record.exc_info)
        return formatted_msg


def parse_level(level: "int | str") -> int:
    """Accepts a numeric level or a level name such as "debug"."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def setup_logger(
    name: str,
    level: "int | str" = logging.WARNING,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Sets up a logger with a colored stderr handler.

    Calling this again for the same name only updates the level; handlers
    are attached once.
    """
    logger = logging.getLogger(name)
    logger.setLevel(parse_level(level))

    # Avoid adding multiple handlers if already setup
    if not logger.handlers:
        console_handler = logging.StreamHandler(stream or sys.stderr)
        console_handler.setFormatter(ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(console_handler)

    return logger


def get_logger(module_name: str) -> logging.Logger:
    """Returns a child of the toolset logger for the given module."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")


ROOT_LOGGER_NAME = "tfb_toolset"

# Global default logger
logger = setup_logger(ROOT_LOGGER_NAME)
