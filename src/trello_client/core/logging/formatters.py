"""
Форматтеры логов: json, text и colored.

Поля из ``extra=`` (method, status_code, duration_ms, attempt...) выводятся
после сообщения. Correlation ID логического вызова в текстовых форматах
выводится префиксом ``[req=...]``.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Type

# Стандартные атрибуты LogRecord, не являются extra полями
_RECORD_ATTRS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName', 'relativeCreated',
    'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
    'asctime', 'taskName',
})

_TEXT_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s]%(request_tag)s %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    """Пользовательские поля записи (всё, что не стандартный атрибут)."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith('_') and key != 'request_tag'
    }


class JSONFormatter(logging.Formatter):
    """
    Одна JSON строка на запись.

    Example output:
        {"timestamp": "2024-01-15T10:30:45.123456+00:00", "level": "INFO",
         "logger": "trello_client.requests", "message": "GET https://...",
         "correlation_id": "3f2a...", "attempt": 1}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(record_extras(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # payload может содержать произвольные объекты
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """
    Текстовый формат.

    Format: [timestamp] [level] [logger] [req=id] message key=value...
    """

    def __init__(self):
        super().__init__(fmt=_TEXT_FORMAT, datefmt=_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        extras = record_extras(record)
        correlation_id = extras.pop('correlation_id', None)
        record.request_tag = f" [req={correlation_id}]" if correlation_id else ""
        try:
            line = super().format(record)
        finally:
            del record.request_tag

        if extras:
            line += " " + " ".join(f"{key}={value}" for key, value in extras.items())
        return line


class ColoredFormatter(TextFormatter):
    """TextFormatter с ANSI цветом уровня для терминала."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[1;31m', # Bold Red
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = self.COLORS.get(levelname)
        if color:
            record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


FORMATTERS: Dict[str, Type[logging.Formatter]] = {
    "json": JSONFormatter,
    "text": TextFormatter,
    "colored": ColoredFormatter,
}


def get_formatter(format_type: str) -> logging.Formatter:
    """
    Форматтер по имени (регистр не важен).

    Raises:
        ValueError: Неизвестный формат
    """
    formatter_class = FORMATTERS.get(format_type.lower())
    if formatter_class is None:
        raise ValueError(
            f"Unknown format type: {format_type}. "
            f"Available: {', '.join(FORMATTERS)}"
        )
    return formatter_class()
