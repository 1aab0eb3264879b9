"""
Одна физическая попытка запроса и её таймаут.

Включает:
- run_with_timeout: дедлайн на попытку через asyncio.wait_for
- HTTPTransport: отправка через httpx.AsyncClient и декодирование ответа
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Optional, TypeVar

import httpx

from .exceptions import InvalidResponseError
from .request_builder import PreparedRequest
from ..utils.sanitizer import mask_url

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ContentKind(str, Enum):
    """Как было декодировано тело ответа."""
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class DecodedResponse:
    """
    Результат попытки без исключения (любой статус).

    Args:
        status_code: HTTP статус
        content_kind: JSON или TEXT
        body: Декодированное тело
        reason: Reason phrase
        url: Фактический URL запроса
        elapsed_ms: Длительность попытки
    """
    status_code: int
    content_kind: ContentKind
    body: Any
    reason: str = ""
    url: str = ""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class AttemptTimeout(Exception):
    """Сигнал отмены попытки по дедлайну."""

    def __init__(self, elapsed_ms: float, timeout_ms: int):
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        super().__init__(f"Attempt aborted after {elapsed_ms:.0f}ms (timeout: {timeout_ms}ms)")


async def run_with_timeout(awaitable: Awaitable[T], timeout_ms: int) -> T:
    """
    Выполнить одну попытку с дедлайном.

    Каждый вызов получает полный свежий таймаут, бюджет не копится между
    повторами.

    Raises:
        AttemptTimeout: Попытка не завершилась за timeout_ms и была отменена
    """
    started = time.monotonic()
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_ms / 1000)
    except asyncio.TimeoutError:
        elapsed_ms = (time.monotonic() - started) * 1000
        raise AttemptTimeout(elapsed_ms, timeout_ms) from None


def is_json_content_type(content_type: Optional[str]) -> bool:
    """application/json и application/*+json считаются структурными."""
    if not content_type:
        return False
    media_type = content_type.split(';', 1)[0].strip().lower()
    return media_type == 'application/json' or media_type.endswith('+json')


def decode_response(response: httpx.Response, elapsed_ms: float = 0.0) -> DecodedResponse:
    """
    Декодировать httpx.Response по content-type.

    Raises:
        InvalidResponseError: 2xx ответ с content-type JSON и невалидным телом
    """
    body: Any
    kind = ContentKind.TEXT

    if is_json_content_type(response.headers.get('content-type')):
        kind = ContentKind.JSON
        if not response.content:
            body = None
        else:
            try:
                body = response.json()
            except ValueError as e:
                if response.is_success:
                    raise InvalidResponseError(
                        f"Malformed JSON in {response.status_code} response: {e}",
                        url=mask_url(str(response.request.url)),
                        status_code=response.status_code,
                    ) from e
                # Для ошибок статус важнее тела: оставляем текст
                kind = ContentKind.TEXT
                body = response.text
    else:
        body = response.text

    return DecodedResponse(
        status_code=response.status_code,
        content_kind=kind,
        body=body,
        reason=response.reason_phrase,
        url=str(response.request.url),
        elapsed_ms=elapsed_ms,
    )


class HTTPTransport:
    """
    Отправка ровно одного физического запроса.

    Не знает про retry: исключения httpx и AttemptTimeout уходят наверх
    как есть, классификацией занимается error_handler.
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def send(self, prepared: PreparedRequest, timeout_ms: int) -> DecodedResponse:
        """
        Отправить запрос и декодировать ответ.

        Raises:
            AttemptTimeout: Истёк дедлайн попытки
            httpx.HTTPError: Сбой транспорта
            InvalidResponseError: Битый JSON в успешном ответе
        """
        started = time.monotonic()
        response = await run_with_timeout(self._request(prepared), timeout_ms)
        elapsed_ms = (time.monotonic() - started) * 1000
        logger.debug(
            "Attempt finished: %s %s -> %s in %.0fms",
            prepared.method, prepared.url.path, response.status_code, elapsed_ms,
        )
        return decode_response(response, elapsed_ms)

    async def _request(self, prepared: PreparedRequest) -> httpx.Response:
        return await self._client.request(
            prepared.method,
            prepared.url,
            headers=dict(prepared.headers),
            content=prepared.content,
        )
