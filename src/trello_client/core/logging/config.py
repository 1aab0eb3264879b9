"""
Logging configuration for Trello client.

Описывает куда и в каком формате пишутся логи дерева ``trello_client``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Настройки логирования клиента.

    Attributes:
        level: Минимальный уровень для всех sink'ов
        format: json, text или colored
        console: Писать в stderr
        file_path: Путь к файлу логов (None - файл не ведётся)
        max_bytes: Размер файла до ротации
        backup_count: Сколько старых файлов хранить
        extra_fields: Поля, добавляемые к каждой записи (service, env...)

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json", file_path="/tmp/trello.log")
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    console: bool = True
    file_path: Optional[str] = None
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = 5
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'level', LogLevel(self.level))
        object.__setattr__(self, 'format', LogFormat(self.format))
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")

    @property
    def python_level(self) -> int:
        """Уровень в виде числа из модуля logging."""
        return getattr(logging, self.level.value)

    @property
    def has_sinks(self) -> bool:
        return self.console or self.file_path is not None

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        console: bool = True,
        file_path: Optional[str] = None,
        max_bytes: int = DEFAULT_MAX_BYTES,
        backup_count: int = 5,
        extra_fields: Optional[Dict[str, Any]] = None
    ) -> "LoggingConfig":
        """Создать конфиг из строковых значений (регистр не важен)."""
        return cls(
            level=LogLevel(level.upper()),
            format=LogFormat(format.lower()),
            console=console,
            file_path=file_path,
            max_bytes=max_bytes,
            backup_count=backup_count,
            extra_fields=dict(extra_fields or {}),
        )
