# src/trello_client/domains/automation.py
"""Webhooks, поиск, batch запросы и приглашения."""

from typing import Any, Dict, List, Optional, Sequence

from .base import DomainClient, compact

# Trello принимает не больше 10 URL в одном /batch
MAX_BATCH_URLS = 10


class AutomationClient(DomainClient):

    # ==================== Webhooks ====================

    async def get_webhooks(self) -> List[Dict[str, Any]]:
        return await self._request("/webhooks")

    async def create_webhook(
        self,
        callback_url: str,
        model_id: str,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Зарегистрировать webhook.

        Args:
            callback_url: Куда Trello будет слать события
            model_id: ID доски, списка, карточки или участника
            description: Описание
        """
        payload = compact(callbackURL=callback_url, idModel=model_id, description=description)
        return await self._request("/webhooks", "POST", payload)

    async def update_webhook(self, webhook_id: str, **updates: Any) -> Dict[str, Any]:
        """Обновить webhook (callbackURL, description, idModel, active)."""
        return await self._request(f"/webhooks/{webhook_id}", "PUT", updates)

    async def delete_webhook(self, webhook_id: str) -> None:
        await self._request(f"/webhooks/{webhook_id}", "DELETE")

    # ==================== Search & batch ====================

    async def search(
        self,
        query: str,
        model_types: Optional[Sequence[str]] = None,
        board_ids: Optional[Sequence[str]] = None,
        organization_ids: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        """
        Полнотекстовый поиск.

        Списки отправляются одним параметром через запятую.

        Example:
            >>> await client.automation.search("bug", model_types=["cards"], board_ids=["b1", "b2"])
        """
        params = compact(
            query=query,
            modelTypes=model_types,
            idBoards=board_ids,
            idOrganizations=organization_ids,
        )
        return await self._request("/search", "GET", params, as_query=True)

    async def batch(self, urls: Sequence[str]) -> List[Dict[str, Any]]:
        """
        Выполнить до 10 GET запросов одним вызовом.

        Args:
            urls: Пути вида '/boards/abc', без credentials

        Raises:
            ValueError: Пустой список или больше 10 URL
        """
        if not urls:
            raise ValueError("batch requires at least one URL")
        if len(urls) > MAX_BATCH_URLS:
            raise ValueError(f"batch accepts at most {MAX_BATCH_URLS} URLs, got {len(urls)}")
        return await self._request("/batch", "GET", {"urls": list(urls)}, as_query=True)

    # ==================== Invitations ====================

    async def invite_to_board(
        self,
        board_id: str,
        email: str,
        full_name: Optional[str] = None,
        type: Optional[str] = None,
    ) -> Any:
        payload = compact(email=email, fullName=full_name, type=type)
        return await self._request(f"/boards/{board_id}/members", "PUT", payload)
