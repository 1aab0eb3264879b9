"""
Logging system for Trello client.

Provides structured logging with multiple formats, handlers, and filters.

Example:
    >>> from trello_client.core.logging import LoggingConfig, configure_logging
    >>>
    >>> config = LoggingConfig.create(level="DEBUG", format="colored")
    >>> trello_logger = configure_logging(config)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import TrelloLogger, configure_logging
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    reset_correlation_id,
)
from .handlers import build_handlers

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "TrelloLogger",
    "configure_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    # Handlers
    "build_handlers",
]
