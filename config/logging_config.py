"""
Logging setup for YouTube Playlist Extractor.

Every record goes to the console and is appended to a log file as
``<ISO timestamp> - <LEVEL> - <message>``.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from .settings import LOG_FILE

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

# Libraries that log request-level chatter at INFO
NOISY_LOGGERS = (
    "googleapiclient",
    "mcp",
    "uvicorn",
    "uvicorn.access",
    "httpx",
    "sse_starlette",
)


class ISOFormatter(logging.Formatter):
    """Formatter that renders timestamps as ISO-8601 UTC with milliseconds."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _BelowErrorFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


def configure_logging(log_file: Optional[str] = LOG_FILE, verbose: bool = False) -> logging.Logger:
    """
    Configure the root logger with console and file handlers.

    Existing handlers are removed first, so calling this again reconfigures
    logging instead of duplicating output.

    Args:
        log_file: Path of the append-only log file, or None for console only
        verbose: If True, DEBUG records are emitted. Otherwise INFO.

    Returns:
        The configured root logger
    """
    formatter = ISOFormatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowErrorFilter())
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)

    handlers = [stdout_handler, stderr_handler]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
