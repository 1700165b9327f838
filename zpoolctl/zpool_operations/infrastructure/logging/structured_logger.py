"""
Structured logger implementation for zpool operations.
"""
import json
import logging
import sys
from typing import Dict, Any, Optional
from datetime import datetime, timezone
from ...core.interfaces.logger_interface import ILogger

_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'stack_info',
    'exc_info', 'exc_text', 'message', 'timestamp', 'taskName'
}


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class StructuredLogger(ILogger):
    """Structured logger writing one JSON object per record."""

    def __init__(self, name: str = "zpoolctl", level: str = "INFO"):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)

        # Prevent duplicate logs
        self.logger.propagate = False

    def log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        if not self.logger.isEnabledFor(level):
            return

        record = self.logger.makeRecord(
            name=self.name,
            level=level,
            fn="",
            lno=0,
            msg=message,
            args=(),
            exc_info=None
        )
        for key, value in (extra or {}).items():
            if key not in _RESERVED_ATTRS:
                setattr(record, key, value)
        record.timestamp = _utcnow()

        self.logger.handle(record)


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": getattr(record, 'timestamp', _utcnow()),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
                log_entry[key] = value
            except (TypeError, ValueError):
                log_entry[key] = str(value)

        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'))


class ContextLogger(StructuredLogger):
    """Logger with fixed context added to every message.

    The context is set at construction and never changes afterwards, so one
    instance can be shared by engines used from several threads.
    """

    def __init__(self, name: str = "zpoolctl", level: str = "INFO", context: Optional[Dict[str, Any]] = None):
        super().__init__(name, level)
        self.context = dict(context or {})

    def log(self, level: int, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        merged_extra = dict(self.context)
        if extra:
            merged_extra.update(extra)
        super().log(level, message, merged_extra)
