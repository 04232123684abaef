"""Logging configuration for the short-link directory."""

import json
import logging
import sys
from typing import Optional

ROOT_LOGGER = "shortlink"

# Driver and server loggers that follow the service level
_LIBRARY_LOGGERS = ("asyncpg", "uvicorn.error")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with the traceback when there is one."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the service logger.

    Sweep failures are logged with their traceback, so both formats keep
    exception text.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path, in addition to stdout
        json_format: Emit JSON lines instead of plain text

    Returns:
        The "shortlink" logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)

    # Calling again (CLI, tests) replaces handlers instead of stacking them
    logger.handlers.clear()

    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    # Console handler
    handlers = [logging.StreamHandler(sys.stdout)]

    # File handler (if specified)
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.INFO))

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the service namespace.

    Args:
        name: "shortlink" or a dotted child such as "shortlink.web"
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
