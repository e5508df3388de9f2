"""
Moderation Logging Configuration
JSON log lines with keyword context, for auditing moderation decisions
"""
import logging
import sys
import json
import traceback
from datetime import datetime, timezone
from typing import Optional

from .config import get_settings

settings = get_settings()

ROOT_LOGGER = "moderation"


class ModerationFormatter(logging.Formatter):
    """One JSON object per record; keyword context becomes top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(getattr(record, "context", {}))
        return json.dumps(log_data, default=str)


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ModerationFormatter())
        root.addHandler(handler)
    return root


class StructuredLogger:
    """Child of the ``moderation`` logger taking context as keyword arguments"""

    def __init__(self, name: str):
        _configure_root()
        self.logger = logging.getLogger(f"{ROOT_LOGGER}.{name}")

    def _log(self, level: int, message: str, context: dict):
        self.logger.log(level, message, extra={"context": context})

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, context)

    def error(self, message: str, error: Optional[Exception] = None, **context):
        if error:
            context["error_type"] = type(error).__name__
            context["error_message"] = str(error)
            context["traceback"] = traceback.format_exc()
        self._log(logging.ERROR, message, context)


moderation_logger = StructuredLogger("core")
api_logger = StructuredLogger("api")
