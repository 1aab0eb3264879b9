"""
Иерархия исключений Trello client.

Классификация:
- TemporaryError (retryable=True) - можно ретраить
- FatalError (fatal=True) - НЕ ретраить никогда
"""

from enum import Enum
from typing import Any, Optional

from ..utils.serialization import dump_body


class FailureKind(str, Enum):
    """Закрытый набор видов неудачной попытки."""
    CLIENT = "client_error"
    SERVER = "server_error"
    NETWORK = "network_error"
    TIMEOUT = "timeout_error"
    INVALID_RESPONSE = "invalid_response"
    TRANSPORT = "transport_error"

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TrelloClientException(Exception):
    """Базовое исключение Trello client."""

    retryable: bool = False
    fatal: bool = False
    kind: Optional[FailureKind] = None

    def __init__(self, message: str, **kwargs):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ВРЕМЕННЫЕ ОШИБКИ (retryable=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TemporaryError(TrelloClientException):
    """
    Временная ошибка - можно ретраить.

    Примеры: таймауты, сетевые ошибки, 5xx серверов.
    """
    retryable = True

    status_code: Optional[int] = None
    body: Any = None


class NetworkError(TemporaryError):
    """
    Сетевая ошибка.

    Примеры:
    - Connection refused
    - Connection reset
    - Name resolution failure
    """
    kind = FailureKind.NETWORK

    def __init__(self, message: str, url: Optional[str] = None, elapsed_ms: Optional[float] = None):
        self.url = url
        self.elapsed_ms = elapsed_ms
        full_message = f"{message}"
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)


class TimeoutError(NetworkError):
    """
    Попытка не уложилась в таймаут.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        elapsed_ms: Сколько реально прошло (мс)
        timeout_ms: Значение таймаута (мс)
    """
    kind = FailureKind.TIMEOUT

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        elapsed_ms: Optional[float] = None,
        timeout_ms: Optional[int] = None
    ):
        self.timeout_ms = timeout_ms

        msg = message
        if elapsed_ms is not None:
            msg += f" after {elapsed_ms:.0f}ms"
        if timeout_ms:
            msg += f" (timeout: {timeout_ms}ms)"

        super().__init__(msg, url, elapsed_ms)


class ServerError(TemporaryError):
    """
    5xx ошибка сервера.

    Args:
        status_code: HTTP статус код
        url: URL
        body: Декодированное тело ответа
        reason: Reason phrase
    """
    kind = FailureKind.SERVER

    def __init__(
        self,
        status_code: int,
        url: str,
        body: Any = None,
        reason: str = "",
        elapsed_ms: Optional[float] = None
    ):
        self.status_code = status_code
        self.url = url
        self.body = body
        self.elapsed_ms = elapsed_ms
        super().__init__(_status_message(status_code, reason, body))

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ФАТАЛЬНЫЕ ОШИБКИ (fatal=True)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class FatalError(TrelloClientException):
    """
    Фатальная ошибка - НЕ ретраить.

    Примеры: 4xx ошибки клиента, невалидный ответ.
    """
    fatal = True


class HTTPError(FatalError):
    """
    Неуспешный статус, который не ретраится.

    Args:
        status_code: HTTP статус
        url: URL
        body: Декодированное тело ответа
        reason: Reason phrase
    """

    def __init__(
        self,
        status_code: int,
        url: str,
        body: Any = None,
        reason: str = "",
        elapsed_ms: Optional[float] = None
    ):
        self.status_code = status_code
        self.url = url
        self.body = body
        self.elapsed_ms = elapsed_ms
        super().__init__(_status_message(status_code, reason, body))


class ClientError(HTTPError):
    """4xx - запрос некорректен или не авторизован."""
    kind = FailureKind.CLIENT


class InvalidResponseError(FatalError):
    """
    Невалидный ответ.

    Примеры:
    - 2xx с битым JSON при content-type application/json
    """
    kind = FailureKind.INVALID_RESPONSE

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class TransportError(FatalError):
    """
    Неизвестная ошибка транспорта.

    Не ретраится: неизвестные сбои не повторяем молча.
    """
    kind = FailureKind.TRANSPORT

    def __init__(self, message: str, url: Optional[str] = None, elapsed_ms: Optional[float] = None):
        self.url = url
        self.elapsed_ms = elapsed_ms
        super().__init__(message)


class ConfigurationError(FatalError):
    """Ошибка конфигурации (например, нет credentials)."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# СПЕЦИАЛЬНЫЕ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ExhaustedRetriesError(TrelloClientException):
    """
    Исчерпан бюджет повторов.

    Args:
        retries: Бюджет повторов логического вызова
        last_error: Классифицированная ошибка последней попытки
        url: URL (без credentials)
    """

    def __init__(
        self,
        retries: int,
        last_error: TemporaryError,
        url: Optional[str] = None
    ):
        self.retries = retries
        self.last_error = last_error
        self.url = url

        msg = f"Max retries ({retries}) exceeded"
        if url:
            msg += f" for {url}"
        msg += f". Last error: {last_error}"

        super().__init__(msg)

    @property
    def kind(self) -> Optional[FailureKind]:
        return self.last_error.kind

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.last_error, 'status_code', None)

    @property
    def elapsed_ms(self) -> Optional[float]:
        return getattr(self.last_error, 'elapsed_ms', None)


def _status_message(status_code: int, reason: str, body: Any) -> str:
    """Trello API error: 404 Not Found - "body"."""
    msg = f"Trello API error: {status_code}"
    if reason:
        msg += f" {reason}"
    return f"{msg} - {dump_body(body)}"
