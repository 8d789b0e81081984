"""Simple logging configuration for denom-display."""

import logging
import os
import sys

# Define TRACE level (lower than DEBUG)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# Loggers of the HTTP stack used for metadata fetches.
HTTP_LOGGERS = ("urllib3", "backoff")


class ColoredFormatter(logging.Formatter):
    """Colored log formatter using ANSI escape codes."""

    COLORS = {
        "TRACE": "\033[90m",  # Dark gray
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    BOLD = "\033[1m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = (
                f"{self.COLORS[levelname]}{self.BOLD}{levelname}{self.RESET}"
            )

        result = super().format(record)

        record.levelname = levelname

        return result


def setup_logging(level: str | None = None) -> None:
    """Configure logging for applications embedding the library.

    Uses ``level`` (usually ``DisplaySettings.log_level``) when given,
    otherwise the LOG_LEVEL environment variable (defaults to INFO).
    Metadata fetches go through requests, so urllib3 is held at WARNING
    under DEBUG; use TRACE to see its connection logs.
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    numeric_level = TRACE if log_level == "TRACE" else getattr(
        logging, log_level, logging.INFO
    )

    handler = logging.StreamHandler(sys.stdout)
    formatter = ColoredFormatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=numeric_level,
        handlers=[handler],
        force=True,
    )

    http_level = {"DEBUG": logging.WARNING, "TRACE": TRACE}.get(log_level)
    if http_level is not None:
        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Usually __name__ of the calling module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
