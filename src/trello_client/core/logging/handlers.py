"""
Sink'и логов: stderr и файл с ротацией.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Iterable, List

from .config import LoggingConfig


def _attach(handler: logging.Handler, config: LoggingConfig, formatter: logging.Formatter,
            filters: Iterable[logging.Filter]) -> logging.Handler:
    handler.setLevel(config.python_level)
    handler.setFormatter(formatter)
    for f in filters:
        handler.addFilter(f)
    return handler


def build_handlers(
    config: LoggingConfig,
    formatter: logging.Formatter,
    filters: Iterable[logging.Filter] = (),
) -> List[logging.Handler]:
    """
    Создать handlers по конфигу.

    Консоль - всегда stderr: stdout часто принадлежит приложению, в которое
    встроен клиент. Каталог для файла логов создаётся при необходимости.

    Example:
        >>> handlers = build_handlers(LoggingConfig(file_path="logs/trello.log"), JSONFormatter())
    """
    filters = list(filters)
    handlers: List[logging.Handler] = []

    if config.console:
        handlers.append(_attach(logging.StreamHandler(sys.stderr), config, formatter, filters))

    if config.file_path is not None:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=config.file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding='utf-8',
        )
        handlers.append(_attach(file_handler, config, formatter, filters))

    return handlers
