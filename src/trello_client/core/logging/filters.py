"""
Log filters for adding context to records.

Correlation IDs live in a ContextVar so that every asyncio task (one
logical call) sees its own value.
"""

import logging
from contextvars import ContextVar
from typing import Any, Dict, Optional


_correlation_id: ContextVar[Optional[str]] = ContextVar('trello_correlation_id', default=None)


def set_correlation_id(correlation_id: str):
    """
    Set correlation ID for the current task.

    Returns:
        Token for ``reset_correlation_id``

    Example:
        >>> token = set_correlation_id("req-12345")
        >>> logger.info("Processing request")  # Will include correlation_id
        >>> reset_correlation_id(token)
    """
    return _correlation_id.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Get correlation ID for the current task."""
    return _correlation_id.get()


def reset_correlation_id(token) -> None:
    """Restore the correlation ID that was active before ``set_correlation_id``."""
    _correlation_id.reset(token)


class CorrelationIdFilter(logging.Filter):
    """
    Filter that adds correlation ID to log records.

    Every attempt of one logical call shares the same ID.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add correlation ID to record if present."""
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Filter that adds static extra fields to every record.

    Example:
        >>> handler.addFilter(ExtraFieldsFilter({"service": "board-sync"}))
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
