# src/trello_client/async_client.py
"""
Асинхронный исполнитель запросов к Trello API на базе httpx.

Превращает логический запрос (path, method, payload, encoding mode) в одну
или несколько физических попыток с таймаутом, retry и backoff.
"""

import logging
import warnings
from typing import Any, Iterable, List, Mapping, Optional

import httpx

from .core.config import TrelloClientConfig
from .core.context import Attempt, RequestContext
from .core.error_handler import TRANSPORT_EXCEPTIONS, ErrorHandler
from .core.exceptions import ExhaustedRetriesError, InvalidResponseError
from .core.logging import (
    LoggingConfig,
    TrelloLogger,
    configure_logging,
    reset_correlation_id,
    set_correlation_id,
)
from .core.request_builder import EncodingMode, RequestSpec, build_request
from .core.retry_engine import RetryEngine, SleepFunc
from .core.transport import HTTPTransport
from .plugins.logging_plugin import LoggingPlugin
from .plugins.plugin import RequestObserver
from .utils.sanitizer import mask_url

logger = logging.getLogger(__name__)


class AsyncTrelloHTTPClient:
    """
    Асинхронный исполнитель запросов с retry, таймаутами и наблюдателями.

    Example:
        >>> async with AsyncTrelloHTTPClient(api_key="...", token="...") as http:
        ...     boards = await http.submit("/members/me/boards")
        ...     card = await http.submit("/cards", "POST", {"idList": "l1", "name": "Task"}, as_query=True)

    Features:
        - Бюджет повторов фиксируется на старте каждого вызова
        - 4xx не ретраятся, 5xx/сетевые ошибки/таймауты ретраятся с backoff
        - Свежий таймаут на каждую попытку
        - Наблюдатели (логирование, метрики) никогда не влияют на результат
    """

    def __init__(
        self,
        config: Optional[TrelloClientConfig] = None,
        *,
        api_key: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
        verbose_logging: Optional[bool] = None,
        observers: Optional[Iterable[RequestObserver]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[SleepFunc] = None,
        **kwargs,
    ):
        """
        Инициализация исполнителя.

        Args:
            config: Готовый TrelloClientConfig (если указан, остальные параметры конфигурации игнорируются)
            api_key: Trello API key
            token: Trello token
            timeout: Таймаут попытки (мс)
            retries: Бюджет повторов
            verbose_logging: Включить LoggingPlugin
            observers: Наблюдатели за попытками
            transport: httpx транспорт (для тестов и прокси)
            sleep: Корутина ожидания backoff (для тестов)
            **kwargs: Прочие поля TrelloClientConfig (retry, logging)

        Raises:
            ConfigurationError: Нет credentials
        """
        if config is not None:
            self._config = config
        else:
            self._config = TrelloClientConfig.resolve(
                api_key,
                token,
                timeout=timeout,
                retries=retries,
                verbose_logging=verbose_logging,
                **kwargs,
            )

        observer_list: List[RequestObserver] = list(observers) if observers else []
        if self._config.verbose_logging and not any(
            isinstance(o, LoggingPlugin) for o in observer_list
        ):
            observer_list.append(LoggingPlugin())
        observer_list.sort(key=lambda o: getattr(o, 'priority', 50))
        self._observers = observer_list

        self._trello_logger: Optional[TrelloLogger] = None
        if self._config.verbose_logging:
            if self._config.logging is not None:
                self._trello_logger = configure_logging(self._config.logging)
            elif not logging.getLogger().handlers:
                # Приложение логирование не настроило: пишем в stderr
                self._trello_logger = configure_logging(LoggingConfig())

        self._transport = transport
        self._sleep = sleep

        # Клиент создаётся лениво или при входе в context manager
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            client_kwargs = {
                "timeout": httpx.Timeout(self._config.timeout_seconds),
                "follow_redirects": True,
            }
            if self._transport is not None:
                client_kwargs["transport"] = self._transport
            self._client = httpx.AsyncClient(**client_kwargs)
        return self._client

    async def __aenter__(self) -> "AsyncTrelloHTTPClient":
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Закрыть клиент и освободить ресурсы."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        if self._trello_logger is not None:
            self._trello_logger.close()
            self._trello_logger = None

    # ==================== Запросы ====================

    async def submit(
        self,
        path: str,
        method: str = "GET",
        payload: Optional[Mapping[str, Any]] = None,
        as_query: bool = False,
    ) -> Any:
        """
        Выполнить логический запрос.

        Args:
            path: Путь endpoint'а относительно https://api.trello.com/1
            method: GET, POST, PUT или DELETE
            payload: Данные запроса
            as_query: Кодировать payload в query string вместо JSON body

        Returns:
            Декодированное тело успешного ответа (JSON или текст)

        Raises:
            ClientError: 4xx, без повторов
            ExhaustedRetriesError: Бюджет повторов исчерпан (last_error - ошибка последней попытки)
            InvalidResponseError: Успешный ответ с битым JSON
            TransportError: Неизвестный сбой транспорта, без повторов
        """
        mode = EncodingMode.AS_QUERY if as_query else EncodingMode.AS_BODY
        return await self.execute(RequestSpec(path, method, payload, mode))

    async def execute(self, spec: RequestSpec) -> Any:
        """Выполнить RequestSpec: цикл попыток с backoff."""
        prepared = build_request(self._config, spec)
        context = RequestContext(spec, prepared)
        safe_url = mask_url(context.url)

        transport = HTTPTransport(await self._get_client())

        # Новый RetryEngine на каждый вызов: бюджет фиксируется здесь
        retry_engine = RetryEngine(self._config.retry, self._config.retries, sleep=self._sleep)

        correlation_token = set_correlation_id(context.request_id)
        try:
            for _ in range(retry_engine.total_retries + 1):
                attempt = Attempt(number=retry_engine.attempt)
                self._notify("before_attempt", context, attempt)
                cause: Optional[BaseException] = None

                try:
                    response = await transport.send(prepared, self._config.timeout_ms)
                except InvalidResponseError as e:
                    error = e
                except TRANSPORT_EXCEPTIONS as e:
                    cause = e
                    error = ErrorHandler.classify_exception(
                        e, safe_url, attempt.elapsed_ms(), self._config.timeout_ms
                    )
                else:
                    self._notify("after_attempt", context, attempt, response)
                    if response.ok:
                        return response.body
                    error = ErrorHandler.classify_response(response, safe_url)

                self._notify("on_failure", context, attempt, error)

                if not retry_engine.should_retry(error):
                    if ErrorHandler.is_retryable_error(error):
                        raise ExhaustedRetriesError(
                            retry_engine.total_retries, error, safe_url
                        ) from error
                    if cause is not None:
                        raise error from cause
                    raise error

                delay_ms = retry_engine.get_wait_time_ms()
                self._notify(
                    "on_retry", context, attempt, error, delay_ms, retry_engine.retries_left - 1
                )
                await retry_engine.async_wait()
                retry_engine.increment()
        finally:
            reset_correlation_id(correlation_token)

        raise RuntimeError("retry loop finished without an outcome")

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET запрос, params в query string."""
        return await self.submit(path, "GET", params, as_query=True)

    async def post(self, path: str, data: Optional[Mapping[str, Any]] = None, as_query: bool = False) -> Any:
        """POST запрос."""
        return await self.submit(path, "POST", data, as_query=as_query)

    async def put(self, path: str, data: Optional[Mapping[str, Any]] = None, as_query: bool = False) -> Any:
        """PUT запрос."""
        return await self.submit(path, "PUT", data, as_query=as_query)

    async def delete(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """DELETE запрос."""
        return await self.submit(path, "DELETE", params, as_query=True)

    # ==================== Наблюдатели ====================

    def _notify(self, hook: str, *args: Any) -> None:
        for observer in self._observers:
            try:
                getattr(observer, hook)(*args)
            except Exception as e:
                message = f"Observer {observer.__class__.__name__} error in {hook}: {e}"
                try:
                    warnings.warn(message)
                except Warning:
                    # Фильтр "error" превращает предупреждение в исключение
                    logger.warning(message)

    def add_observer(self, observer: RequestObserver) -> None:
        """Добавить наблюдателя и пересортировать по приоритету."""
        self._observers.append(observer)
        self._observers.sort(key=lambda o: getattr(o, 'priority', 50))

    def remove_observer(self, observer: RequestObserver) -> None:
        """Удалить наблюдателя."""
        if observer in self._observers:
            self._observers.remove(observer)

    # ==================== Properties ====================

    @property
    def config(self) -> TrelloClientConfig:
        """Эффективная конфигурация."""
        return self._config

    @property
    def observers(self) -> List[RequestObserver]:
        return list(self._observers)
