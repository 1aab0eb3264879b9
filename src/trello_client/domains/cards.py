# src/trello_client/domains/cards.py

from typing import Any, Dict, List, Optional

from .base import DomainClient, compact


class CardsClient(DomainClient):
    """
    Клиент для карточек.

    Example:
        >>> card = await client.cards.create_card(idList="list-id", name="Fix login", due="2025-01-31")
        >>> await client.cards.move_card(card["id"], "done-list-id", pos=1)
    """

    async def get_cards(self, board_id: str) -> List[Dict[str, Any]]:
        """Все карточки доски."""
        return await self._request(f"/boards/{board_id}/cards")

    async def get_card(self, card_id: str) -> Dict[str, Any]:
        return await self._request(f"/cards/{card_id}")

    async def create_card(self, **options: Any) -> Dict[str, Any]:
        """
        Создать карточку.

        Args:
            **options: idList (обязательно), name, desc, pos, due, idMembers, idLabels...
                Списки (idMembers, idLabels) отправляются через запятую.
        """
        return await self._request("/cards", "POST", options, as_query=True)

    async def update_card(self, card_id: str, **updates: Any) -> Dict[str, Any]:
        return await self._request(f"/cards/{card_id}", "PUT", updates)

    async def move_card(self, card_id: str, list_id: str, pos: Optional[float] = None) -> Dict[str, Any]:
        return await self._request(f"/cards/{card_id}", "PUT", compact(idList=list_id, pos=pos))

    async def delete_card(self, card_id: str) -> None:
        await self._request(f"/cards/{card_id}", "DELETE")

    async def archive_card(self, card_id: str) -> Dict[str, Any]:
        return await self._request(f"/cards/{card_id}", "PUT", {"closed": True})

    async def unarchive_card(self, card_id: str) -> Dict[str, Any]:
        return await self._request(f"/cards/{card_id}", "PUT", {"closed": False})

    async def copy_card(self, card_id: str, list_id: str, name: Optional[str] = None) -> Dict[str, Any]:
        """Скопировать карточку в список."""
        payload = compact(idCardSource=card_id, idList=list_id, name=name)
        return await self._request("/cards", "POST", payload)

    async def subscribe(self, card_id: str, value: bool = True) -> Dict[str, Any]:
        return await self._request(f"/cards/{card_id}/subscribed", "PUT", {"value": value})

    async def vote(self, card_id: str, value: bool = True) -> Any:
        """Проголосовать за карточку (value=False снимает голос)."""
        return await self._request(f"/cards/{card_id}/membersVoted", "POST" if value else "DELETE")
