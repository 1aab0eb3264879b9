# src/trello_client/domains/base.py

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

if TYPE_CHECKING:
    from ..async_client import AsyncTrelloHTTPClient


class DomainClient:
    """
    Базовый класс доменных клиентов.

    Доменный клиент не хранит состояния кроме ссылки на общий исполнитель:
    каждый метод - это один вызов submit(path, method, payload, as_query).
    """

    def __init__(self, http: 'AsyncTrelloHTTPClient'):
        self._http = http

    async def _request(
        self,
        path: str,
        method: str = "GET",
        payload: Optional[Mapping[str, Any]] = None,
        as_query: bool = False,
    ) -> Any:
        return await self._http.submit(path, method, payload, as_query)


def compact(**values: Any) -> Dict[str, Any]:
    """Словарь без None значений (необязательные параметры не отправляются)."""
    return {key: value for key, value in values.items() if value is not None}
