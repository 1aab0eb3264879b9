# src/trello_client/client.py
"""
TrelloClient - фасад над общим исполнителем и доменными клиентами.
"""

from typing import Any, Iterable, Optional

import httpx

from .async_client import AsyncTrelloHTTPClient
from .core.config import TrelloClientConfig
from .core.retry_engine import SleepFunc
from .domains import (
    AutomationClient,
    BoardsClient,
    CardFeaturesClient,
    CardsClient,
    CustomFieldsClient,
    LabelsClient,
    ListsClient,
    MembersClient,
    OrganizationsClient,
    PowerUpsClient,
)
from .plugins.plugin import RequestObserver


class TrelloClient:
    """
    Асинхронный клиент Trello API.

    Все доменные клиенты делят один AsyncTrelloHTTPClient, а значит одну
    конфигурацию, один httpx клиент и одни наблюдатели.

    Example:
        >>> async with TrelloClient(api_key="...", token="...", retries=5) as trello:
        ...     boards = await trello.boards.get_boards()
        ...     lists = await trello.lists.get_lists(boards[0]["id"])
        ...     await trello.cards.create_card(idList=lists[0]["id"], name="Hello")

    Credentials и настройки без явных значений берутся из окружения
    (TRELLO_API_KEY, TRELLO_TOKEN, TRELLO_TIMEOUT, TRELLO_RETRIES,
    TRELLO_VERBOSE_LOGGING) один раз при создании.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        token: Optional[str] = None,
        *,
        timeout: Optional[int] = None,
        retries: Optional[int] = None,
        verbose_logging: Optional[bool] = None,
        config: Optional[TrelloClientConfig] = None,
        observers: Optional[Iterable[RequestObserver]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[SleepFunc] = None,
        **kwargs: Any,
    ):
        self.http = AsyncTrelloHTTPClient(
            config,
            api_key=api_key,
            token=token,
            timeout=timeout,
            retries=retries,
            verbose_logging=verbose_logging,
            observers=observers,
            transport=transport,
            sleep=sleep,
            **kwargs,
        )

        self.boards = BoardsClient(self.http)
        self.lists = ListsClient(self.http)
        self.cards = CardsClient(self.http)
        self.card_features = CardFeaturesClient(self.http)
        self.members = MembersClient(self.http)
        self.organizations = OrganizationsClient(self.http)
        self.labels = LabelsClient(self.http)
        self.custom_fields = CustomFieldsClient(self.http)
        self.automation = AutomationClient(self.http)
        self.power_ups = PowerUpsClient(self.http)

    @property
    def config(self) -> TrelloClientConfig:
        return self.http.config

    async def request(
        self,
        path: str,
        method: str = "GET",
        payload: Optional[dict] = None,
        as_query: bool = False,
    ) -> Any:
        """Произвольный запрос к Trello API через общий исполнитель."""
        return await self.http.submit(path, method, payload, as_query)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "TrelloClient":
        await self.http.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return (
            f"TrelloClient(base_url={self.config.base_url!r}, "
            f"timeout_ms={self.config.timeout_ms}, retries={self.config.retries})"
        )
