# src/trello_client/plugins/logging_plugin.py

import logging
from typing import Optional

from ..core.context import Attempt, RequestContext
from ..core.exceptions import TrelloClientException
from ..core.transport import DecodedResponse
from ..utils.sanitizer import mask_sensitive_data, mask_url
from ..utils.serialization import dump_body, serialized_size
from .plugin import PluginPriority, RequestObserver

REQUEST_LOGGER_NAME = "trello_client.requests"

SLOW_REQUEST_THRESHOLD_MS = 5000
MAX_LOGGED_BODY_CHARS = 10000


class LoggingPlugin(RequestObserver):
    """
    Подробное логирование запросов и ответов (verbose режим).

    Логирует:
    - метод, полный URL (с credentials, если не включено маскирование) и payload
    - статус и длительность каждой попытки
    - медленные попытки (WARNING)
    - тело ответа целиком, если оно короче max_body_chars, иначе заглушку с размером

    Priority: LAST (100).

    Example:
        >>> plugin = LoggingPlugin(mask_credentials=True)
        >>> client = AsyncTrelloHTTPClient(config, observers=[plugin])
    """

    priority = PluginPriority.LAST

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        mask_credentials: bool = False,
        slow_threshold_ms: float = SLOW_REQUEST_THRESHOLD_MS,
        max_body_chars: int = MAX_LOGGED_BODY_CHARS,
    ):
        """
        Args:
            logger: Куда писать (по умолчанию trello_client.requests)
            mask_credentials: Заменять key/token в URL и payload на ***REDACTED***
            slow_threshold_ms: Порог медленной попытки (строго больше)
            max_body_chars: Тела ответов от этого размера не логируются
        """
        self.logger = logger or logging.getLogger(REQUEST_LOGGER_NAME)
        self.mask_credentials = mask_credentials
        self.slow_threshold_ms = slow_threshold_ms
        self.max_body_chars = max_body_chars

    def before_attempt(self, context: RequestContext, attempt: Attempt) -> None:
        url = mask_url(context.url) if self.mask_credentials else context.url
        self.logger.info(
            f"{context.method} {url}",
            extra={'attempt': attempt.number},
        )

        payload = context.spec.payload
        if payload:
            if self.mask_credentials:
                payload = mask_sensitive_data(dict(payload))
            self.logger.info(f"Params/Body: {dump_body(payload)}")

    def after_attempt(
        self,
        context: RequestContext,
        attempt: Attempt,
        response: DecodedResponse
    ) -> None:
        duration_ms = response.elapsed_ms
        self.logger.info(
            f"Response Status: {response.status_code} ({duration_ms:.0f}ms)",
            extra={
                'attempt': attempt.number,
                'status_code': response.status_code,
                'duration_ms': round(duration_ms, 2),
            },
        )

        if duration_ms > self.slow_threshold_ms:
            self.logger.warning(
                f"Slow request: {context.method} {context.path} took {duration_ms:.0f}ms"
            )

        size = serialized_size(response.body)
        if size < self.max_body_chars:
            self.logger.info(f"Response Body: {dump_body(response.body)}")
        else:
            self.logger.info(f"Response Body: [Large response omitted - {size} chars]")

    def on_failure(
        self,
        context: RequestContext,
        attempt: Attempt,
        error: TrelloClientException
    ) -> None:
        self.logger.warning(
            f"Attempt {attempt.number} failed for {context.method} {context.path}: {error}"
        )

    def on_retry(
        self,
        context: RequestContext,
        attempt: Attempt,
        error: TrelloClientException,
        delay_ms: float,
        retries_left: int
    ) -> None:
        kind = error.kind.value if error.kind else type(error).__name__
        self.logger.warning(
            f"{kind} on {context.method} {context.path}, retrying in {delay_ms:.0f}ms... "
            f"({retries_left} retries left)"
        )
