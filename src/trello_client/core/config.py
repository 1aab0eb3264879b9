"""
Система конфигурации для Trello client.

Все конфиги immutable (frozen dataclasses): один раз собираются при
создании клиента и дальше только читаются, в том числе из конкурентных задач.
"""

from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .env_config.validator import TrelloSettings
    from .logging import LoggingConfig

TRELLO_BASE_URL = "https://api.trello.com/1"

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_RETRIES = 3
DEFAULT_VERBOSE_LOGGING = False

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RETRY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RetryConfig:
    """
    Конфигурация backoff стратегии.

    Args:
        backoff_base_ms: Базовая задержка (мс)
        backoff_factor: Множитель для exponential backoff
        backoff_max_ms: Максимальная задержка (мс)

    Examples:
        >>> RetryConfig()  # 1s, 2s, 4s, 5s, 5s...
        >>> RetryConfig(backoff_base_ms=500, backoff_max_ms=2000)
    """
    backoff_base_ms: int = 1000
    backoff_factor: float = 2.0
    backoff_max_ms: int = 5000

    def __post_init__(self):
        """Валидация."""
        if self.backoff_base_ms < 0:
            raise ValueError("backoff_base_ms must be non-negative")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        if self.backoff_max_ms < 0:
            raise ValueError("backoff_max_ms must be non-negative")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TrelloClientConfig:
    """
    Эффективная конфигурация клиента.

    Args:
        api_key: Trello API key
        token: Trello token
        timeout_ms: Таймаут одной попытки (мс)
        retries: Количество повторов после первой попытки
        verbose_logging: Включить подробное логирование запросов
        base_url: Базовый URL API
        retry: Параметры backoff
        logging: Конфигурация логгера для verbose режима (None = логгер trello_client как есть)

    Examples:
        >>> config = TrelloClientConfig(api_key="k", token="t")
        >>> config = TrelloClientConfig.resolve("k", "t", retries=5)
    """
    api_key: str
    token: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    retries: int = DEFAULT_RETRIES
    verbose_logging: bool = DEFAULT_VERBOSE_LOGGING
    base_url: str = TRELLO_BASE_URL
    retry: RetryConfig = field(default_factory=RetryConfig)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация и нормализация base_url."""
        if not self.api_key:
            raise ConfigurationError("Trello API key is required")
        if not self.token:
            raise ConfigurationError("Trello token is required")
        if self.timeout_ms <= 0:
            raise ConfigurationError("timeout_ms must be positive")
        if self.retries < 0:
            raise ConfigurationError("retries must be non-negative")

        normalized = self.base_url.rstrip('/')
        if normalized != self.base_url:
            object.__setattr__(self, 'base_url', normalized)

    @property
    def timeout_seconds(self) -> float:
        """Таймаут попытки в секундах (для httpx и asyncio)."""
        return self.timeout_ms / 1000

    @classmethod
    def resolve(
        cls,
        api_key: Optional[str] = None,
        token: Optional[str] = None,
        *,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
        verbose_logging: Optional[bool] = None,
        settings: Optional['TrelloSettings'] = None,
        env_file: Optional[str] = None,
        **kwargs
    ) -> 'TrelloClientConfig':
        """
        Собрать конфигурацию: explicit > environment > default.

        Окружение читается ровно один раз, здесь. После этого ни один
        компонент не смотрит в os.environ.

        Args:
            api_key: Trello API key (иначе TRELLO_API_KEY)
            token: Trello token (иначе TRELLO_TOKEN)
            timeout: Таймаут попытки в мс (иначе TRELLO_TIMEOUT, иначе 30000)
            retries: Бюджет повторов (иначе TRELLO_RETRIES, иначе 3)
            verbose_logging: Подробные логи (иначе TRELLO_VERBOSE_LOGGING, иначе False)
            settings: Готовый TrelloSettings (для тестов и встраивания)
            env_file: Путь к .env файлу

        Returns:
            TrelloClientConfig instance

        Raises:
            ConfigurationError: Нет credentials или невалидные значения
        """
        if settings is None:
            from .env_config.validator import load_settings
            settings = load_settings(env_file, {
                'api_key': api_key,
                'token': token,
                'timeout': timeout,
                'retries': retries,
                'verbose_logging': verbose_logging,
            })

        return cls(
            api_key=_first(api_key, settings.api_key),
            token=_first(token, settings.token),
            timeout_ms=_first(timeout, settings.timeout, DEFAULT_TIMEOUT_MS),
            retries=_first(retries, settings.retries, DEFAULT_RETRIES),
            verbose_logging=_first(
                verbose_logging, settings.verbose_logging, DEFAULT_VERBOSE_LOGGING
            ),
            **kwargs
        )


def _first(*values):
    """Первое значение, которое не None."""
    for value in values:
        if value is not None:
            return value
    return None
