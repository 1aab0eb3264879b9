"""
Pydantic validators for environment configuration.

Provides the validated settings model read once by
``TrelloClientConfig.resolve``.
"""

from typing import Any, Mapping, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError


class TrelloSettings(BaseSettings):
    """
    Trello client configuration from environment variables.

    Reads from:
    1. Environment variables (TRELLO_*)
    2. .env file (only when ``_env_file`` is passed)
    3. Defaults (None = "not set", so explicit values and built-in defaults can win)

    Example .env file:
        TRELLO_API_KEY=0123456789abcdef
        TRELLO_TOKEN=ATTA0123456789
        TRELLO_TIMEOUT=30000
        TRELLO_RETRIES=3
        TRELLO_VERBOSE_LOGGING=false

    Usage:
        >>> settings = TrelloSettings()
        >>> settings.retries
        3
    """

    model_config = SettingsConfigDict(
        env_prefix='TRELLO_',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Credentials (will be masked in summaries)
    api_key: Optional[str] = Field(default=None, description="Trello API key")
    token: Optional[str] = Field(default=None, description="Trello token")

    timeout: Optional[int] = Field(default=None, gt=0, description="Per-attempt timeout in milliseconds")
    retries: Optional[int] = Field(default=None, ge=0, description="Retry budget after the first attempt")
    verbose_logging: Optional[bool] = Field(default=None, description="Log requests and responses")

    @field_validator('api_key', 'token')
    @classmethod
    def blank_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty or whitespace-only credentials as missing."""
        if v is not None and not v.strip():
            return None
        return v


def _invalid_fields(error: ValidationError) -> set:
    return {str(item['loc'][0]) for item in error.errors() if item.get('loc')}


def load_settings(
    env_file: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> TrelloSettings:
    """
    Прочитать TrelloSettings, не падая на полях, которые заданы явно.

    Невалидная переменная окружения (например TRELLO_TIMEOUT=30s) не важна,
    если вызывающий передал это поле сам. Для остальных полей ошибка
    pydantic превращается в ConfigurationError.

    Args:
        env_file: Путь к .env файлу
        overrides: Явные значения полей (None = не задано)

    Raises:
        ConfigurationError: Невалидное значение в окружении без явной замены
    """
    explicit = {key: value for key, value in (overrides or {}).items() if value is not None}

    try:
        return TrelloSettings(_env_file=env_file)
    except ValidationError as e:
        invalid = _invalid_fields(e)
        unresolved = sorted(invalid - set(explicit))
        if unresolved:
            names = ", ".join(f"TRELLO_{name.upper()}" for name in unresolved)
            raise ConfigurationError(f"Invalid environment configuration: {names}") from e

    # init kwargs приоритетнее окружения: невалидные переменные подменяются явными значениями
    try:
        return TrelloSettings(_env_file=env_file, **{name: explicit[name] for name in invalid})
    except ValidationError as e:
        names = ", ".join(sorted(_invalid_fields(e)))
        raise ConfigurationError(f"Invalid configuration: {names}") from e
