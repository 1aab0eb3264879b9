# src/trello_client/domains/lists.py

from typing import Any, Dict, List, Optional

from .base import DomainClient, compact


class ListsClient(DomainClient):
    """Клиент для списков (колонок) Trello."""

    async def get_lists(self, board_id: str, cards: str = "none", fields: str = "") -> List[Dict[str, Any]]:
        """
        Списки доски.

        Args:
            board_id: ID доски
            cards: 'all' чтобы включить карточки, 'none' без них
            fields: Поля через запятую (пусто - все)
        """
        return await self._request(f"/boards/{board_id}/lists?cards={cards}&fields={fields}")

    async def get_list(self, list_id: str, fields: Optional[str] = None) -> Dict[str, Any]:
        return await self._request(f"/lists/{list_id}", "GET", compact(fields=fields), as_query=True)

    async def create_list(self, name: str, board_id: str, **options: Any) -> Dict[str, Any]:
        """Создать список (options: pos, idListSource)."""
        payload = {"name": name, "idBoard": board_id, **options}
        return await self._request("/lists", "POST", payload, as_query=True)

    async def update_list(self, list_id: str, **fields: Any) -> Dict[str, Any]:
        return await self._request(f"/lists/{list_id}", "PUT", fields, as_query=True)

    async def close_list(self, list_id: str) -> Dict[str, Any]:
        return await self._request(f"/lists/{list_id}", "PUT", {"closed": True})

    async def archive_all_cards(self, list_id: str) -> Any:
        return await self._request(f"/lists/{list_id}/archiveAllCards", "POST")

    async def move_all_cards(self, list_id: str, board_id: str, target_list_id: str) -> Any:
        """Перенести все карточки в другой список (возможно на другой доске)."""
        payload = {"idBoard": board_id, "idList": target_list_id}
        return await self._request(f"/lists/{list_id}/moveAllCards", "POST", payload, as_query=True)

    async def set_closed(self, list_id: str, value: bool) -> Dict[str, Any]:
        return await self._request(f"/lists/{list_id}/closed", "PUT", {"value": value}, as_query=True)

    async def move_to_board(self, list_id: str, board_id: str) -> Dict[str, Any]:
        return await self._request(f"/lists/{list_id}/idBoard", "PUT", {"value": board_id}, as_query=True)

    async def update_field(self, list_id: str, field: str, value: Any) -> Dict[str, Any]:
        """Обновить одно поле списка (name, pos, subscribed...)."""
        return await self._request(f"/lists/{list_id}/{field}", "PUT", {"value": value}, as_query=True)

    async def get_cards(self, list_id: str, fields: str = "all") -> List[Dict[str, Any]]:
        return await self._request(f"/lists/{list_id}/cards?fields={fields}")

    async def get_actions(self, list_id: str, filter: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self._request(f"/lists/{list_id}/actions", "GET", compact(filter=filter), as_query=True)

    async def get_board(self, list_id: str, fields: Optional[str] = None) -> Dict[str, Any]:
        """Доска, которой принадлежит список."""
        return await self._request(f"/lists/{list_id}/board", "GET", compact(fields=fields), as_query=True)
