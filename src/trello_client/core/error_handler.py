# src/trello_client/core/error_handler.py

import socket
from typing import Optional, Union

import httpx

from .exceptions import (
    ClientError,
    HTTPError,
    NetworkError,
    ServerError,
    TimeoutError,
    TransportError,
    TrelloClientException,
)
from .transport import AttemptTimeout, DecodedResponse

# Исключения транспорта, которые проходят через классификатор.
# Всё остальное (ошибки программиста и т.п.) пробрасывается как есть.
TRANSPORT_EXCEPTIONS = (AttemptTimeout, httpx.HTTPError)

# Сбои сокета, после которых попытку можно повторить: reset, refused, DNS
RETRYABLE_SOCKET_ERRORS = (ConnectionResetError, ConnectionRefusedError, socket.gaierror)


def find_socket_error(error: BaseException) -> Optional[OSError]:
    """
    Найти в цепочке __cause__/__context__ исходную ошибку сокета.

    httpx оборачивает ошибки httpcore, а те - OSError из anyio. При
    нескольких адресах anyio собирает ошибки в ExceptionGroup.
    """
    seen = set()
    stack = [error]
    while stack:
        exc = stack.pop()
        if exc is None or id(exc) in seen:
            continue
        seen.add(id(exc))
        if isinstance(exc, RETRYABLE_SOCKET_ERRORS):
            return exc
        stack.extend(getattr(exc, 'exceptions', ()))
        stack.append(exc.__context__)
        stack.append(exc.__cause__)
    return None


class ErrorHandler:
    """Единственное место, где сырой исход попытки превращается в классифицированную ошибку"""

    @staticmethod
    def classify_response(response: DecodedResponse, url: str) -> Union[HTTPError, ServerError]:
        """Классифицирует неуспешный HTTP статус"""

        status_code = response.status_code

        if 400 <= status_code < 500:
            return ClientError(
                status_code, url, response.body, response.reason, response.elapsed_ms
            )

        elif 500 <= status_code < 600:
            return ServerError(
                status_code, url, response.body, response.reason, response.elapsed_ms
            )

        else:
            # 1xx/3xx, дошедшие до клиента, ретраить бессмысленно
            return HTTPError(
                status_code, url, response.body, response.reason, response.elapsed_ms
            )

    @staticmethod
    def classify_exception(
        error: Exception,
        url: str,
        elapsed_ms: Optional[float] = None,
        timeout_ms: Optional[int] = None
    ) -> TrelloClientException:
        """Классифицирует сбой транспорта по типу исключения и исходной ошибке сокета"""

        if isinstance(error, AttemptTimeout):
            return TimeoutError(
                "Request timeout", url, error.elapsed_ms, error.timeout_ms
            )

        elif isinstance(error, httpx.TimeoutException):
            return TimeoutError("Request timeout", url, elapsed_ms, timeout_ms)

        socket_error = find_socket_error(error)
        if socket_error is not None:
            return NetworkError(
                f"Network error ({type(error).__name__}: {type(socket_error).__name__}): {error}",
                url,
                elapsed_ms
            )

        # TLS, протокол, декодирование и прочее: повтор не поможет
        return TransportError(
            f"Transport error ({type(error).__name__}): {error}", url, elapsed_ms
        )

    @staticmethod
    def is_retryable_error(error: Exception) -> bool:
        """Проверяет, можно ли повторить запрос после этой ошибки"""

        return bool(getattr(error, 'retryable', False)) and not getattr(error, 'fatal', False)
