"""Loggers for the classadapter package.

Every module logs through ``get_logger(__name__)``. Builders log rejected
directives, installs and redefinitions; the source renderer and the
dispatch composer log at debug level. Output goes to stderr, either as
plain lines or as one JSON object per record.

Environment Variables:
    CLASSADAPTER_LOG_LEVEL: Level name for new loggers. Default: INFO
    CLASSADAPTER_LOG_FORMAT: "standard" or "json". Default: standard
"""

import json
import logging
import os
import sys
from typing import Any

PACKAGE_LOGGER = "classadapter"

LEVEL_ENV = "CLASSADAPTER_LOG_LEVEL"
FORMAT_ENV = "CLASSADAPTER_LOG_FORMAT"

LOG_FORMAT_STANDARD = "%(asctime)s.%(msecs)03d - %(levelname)s - %(message)s"

LOG_FORMAT_DEBUG = (
    "%(asctime)s.%(msecs)03d - %(levelname)s - "
    "%(filename)s:%(lineno)d - %(name)s:%(funcName)s - %(message)s"
)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_from(level: int | str | None) -> int:
    if level is None:
        level = os.getenv(LEVEL_ENV, "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def _format_from(format_type: str | None) -> str:
    if format_type is None:
        format_type = os.getenv(FORMAT_ENV, "standard")
    return format_type.lower()


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: timestamp, level, message, logger, module, function, line, and
    ``exception`` when the record carries a traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def _formatter_for(level: int, format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JSONFormatter(datefmt=DATE_FORMAT)
    # file and line only at DEBUG
    if level == logging.DEBUG:
        return logging.Formatter(LOG_FORMAT_DEBUG, datefmt=DATE_FORMAT)
    return logging.Formatter(LOG_FORMAT_STANDARD, datefmt=DATE_FORMAT)


def configure_logger(
    name: str,
    level: int | str | None = None,
    format_type: str | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """Attach a formatted handler to a logger, once.

    A logger that already has handlers is returned untouched, so modules
    imported repeatedly do not stack handlers.

    Args:
        name: Logger name, usually the calling module's ``__name__``.
        level: Level override. Falls back to CLASSADAPTER_LOG_LEVEL.
        format_type: "standard" or "json". Falls back to CLASSADAPTER_LOG_FORMAT.
        handler: Handler to attach. Defaults to a stderr stream handler.

    Returns:
        The configured logger. It does not propagate to the root logger.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    resolved = _level_from(level)
    logger.setLevel(resolved)

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(_formatter_for(resolved, _format_from(format_type)))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` configured from the environment."""
    return configure_logger(name)


def set_log_level(level: int | str) -> None:
    """Retune every ``classadapter`` logger created so far.

    The render CLI calls this after parsing ``--log-level``. Handlers get
    the matching formatter, so switching to DEBUG adds file and line.

    Args:
        level: Level as an int constant or a name such as "DEBUG".
    """
    resolved = _level_from(level)
    formatter = _formatter_for(resolved, _format_from(None))
    names = [PACKAGE_LOGGER] + [
        name
        for name in logging.Logger.manager.loggerDict
        if name.startswith(PACKAGE_LOGGER + ".")
    ]

    for name in names:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(resolved)
        for handler in package_logger.handlers:
            handler.setLevel(resolved)
            handler.setFormatter(formatter)
