# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Endevor SCM contributors

"""Structured JSON logging to stdout."""

import json
import logging
import os
import sys
from datetime import datetime, timezone

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

# Attributes every LogRecord has; anything else was passed through ``extra``
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def _default(value: str | None, env_var: str, fallback: str) -> str:
    """Pick an explicit value, then env var, then fallback."""
    return value or os.getenv(env_var) or fallback


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if extra:
            log_entry["extra"] = extra

        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_logging(level: str | None = None, name: str | None = None) -> logging.Logger:
    """Send ``endevor_scm`` logs to stdout as JSON.

    Args:
        level: DEBUG, INFO, WARNING or ERROR. Defaults to LOG_LEVEL env or INFO.
        name: Name of the returned application logger. Defaults to LOG_NAME env
            or "endevor-scm".

    Returns:
        Application logger

    Raises:
        ValueError: If the level is not recognized
    """
    level = _default(level, "LOG_LEVEL", "INFO").upper()
    name = _default(name, "LOG_NAME", "endevor-scm")

    if level not in _LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {list(_LEVELS.keys())}")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    for logger_name in ("endevor_scm", name):
        target = logging.getLogger(logger_name)
        target.handlers = [handler]
        target.setLevel(_LEVELS[level])
        target.propagate = False

    return logging.getLogger(name)
