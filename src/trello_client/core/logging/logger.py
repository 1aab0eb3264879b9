"""
Установка handlers на дерево логгеров ``trello_client``.
"""

import logging
from typing import List, Optional

from .config import LoggingConfig
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .formatters import get_formatter
from .handlers import build_handlers

ROOT_LOGGER_NAME = "trello_client"

# Метка handlers, установленных TrelloLogger: чужие handlers не трогаем
_OWNER_ATTR = '_trello_owned'


class TrelloLogger:
    """
    Владелец handlers, установленных на логгер по LoggingConfig.

    Повторная установка на тот же логгер заменяет handlers предыдущего
    TrelloLogger, поэтому несколько клиентов не дублируют записи.

    Example:
        >>> with TrelloLogger(LoggingConfig.create(level="DEBUG", format="json")) as trello_logger:
        ...     trello_logger.logger.info("Started")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = ROOT_LOGGER_NAME):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        self._logger = logging.getLogger(name)
        self._logger.setLevel(self.config.python_level)
        self._logger.propagate = False

        for handler in self._owned_handlers():
            self._logger.removeHandler(handler)
            handler.close()

        filters: List[logging.Filter] = [CorrelationIdFilter()]
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)
        for handler in build_handlers(self.config, formatter, filters):
            setattr(handler, _OWNER_ATTR, True)
            self._logger.addHandler(handler)

    def _owned_handlers(self) -> List[logging.Handler]:
        return [h for h in self._logger.handlers if getattr(h, _OWNER_ATTR, False)]

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Снять и закрыть свои handlers. Повторный вызов ничего не делает."""
        if self._closed:
            return

        for handler in self._owned_handlers():
            try:
                handler.flush()
                handler.close()
            except (OSError, ValueError):
                # Файл уже закрыт или удалён
                pass
            self._logger.removeHandler(handler)

        self._logger.propagate = True
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def configure_logging(config: LoggingConfig, name: str = ROOT_LOGGER_NAME) -> TrelloLogger:
    """
    Настроить логирование клиента.

    Example:
        >>> trello_logger = configure_logging(LoggingConfig.create(level="DEBUG"))
        >>> ...
        >>> trello_logger.close()
    """
    return TrelloLogger(config, name=name)
