"""
Logging setup for Schema Table Picker

The library only creates loggers; handlers are installed once by the
command line entry point.

Public API:
- configure_logging(level, json_format) -> None
- get_logger(name) -> logging.Logger
- JsonFormatter: one JSON object per record, ``extra`` fields included
"""

import json
import logging
from typing import Union

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else was passed through ``extra``
STANDARD_ATTRS = frozenset({
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module",
    "msecs", "message", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread", "threadName",
    "taskName"
})


class JsonFormatter(logging.Formatter):
    """
    Renders a LogRecord as a single JSON line

    Values that are not JSON-native (paths, enums) are written with str().
    """
    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        log_record.update(
            (key, value) for key, value in record.__dict__.items()
            if key not in STANDARD_ATTRS and not key.startswith("_")
        )

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def _resolve_level(level: Union[str, int]) -> int:
    """
    Level name (any case) or number to a logging level

    Raises:
        ValueError: If the name is not a known level
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_logging(level: Union[str, int] = "WARNING", json_format: bool = False):
    """
    Replace the root logger's handlers with one stderr handler

    Args:
        level: Level name such as "debug" or "INFO", or a logging constant
        json_format: Emit JSON lines instead of plain text

    Raises:
        ValueError: If ``level`` is not a known level; handlers are left as they were
    """
    resolved = _resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(TEXT_FORMAT))
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
