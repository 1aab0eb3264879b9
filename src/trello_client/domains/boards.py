# src/trello_client/domains/boards.py
"""Операции с досками: CRUD, участники, настройки и выборки содержимого."""

from typing import Any, Dict, List, Optional

from .base import DomainClient, compact

# Настройки, которые Trello обновляет только по одной, каждая своим endpoint'ом
MY_PREFS_FIELDS = (
    "emailPosition",
    "idEmailList",
    "showSidebar",
    "showSidebarActivity",
    "showSidebarBoardActions",
    "showSidebarMembers",
)


class BoardsClient(DomainClient):
    """
    Клиент для досок Trello.

    Example:
        >>> boards = await client.boards.get_boards(filter="open", fields="id,name")
        >>> board = await client.boards.create_board(name="Roadmap", defaultLists=False)
    """

    # ==================== Basic ====================

    async def get_boards(self, filter: str = "open", fields: str = "all") -> List[Dict[str, Any]]:
        """
        Доски текущего пользователя.

        Args:
            filter: 'open', 'closed' или 'all'
            fields: Список полей через запятую ('all' для всех)
        """
        return await self._request(f"/members/me/boards?filter={filter}&fields={fields}")

    async def get_board(self, board_id: str) -> Dict[str, Any]:
        return await self._request(f"/boards/{board_id}")

    async def create_board(self, name: str, **options: Any) -> Dict[str, Any]:
        """
        Создать доску.

        Args:
            name: Название доски
            **options: desc, idOrganization, defaultLists, prefs_permissionLevel и т.д.
        """
        return await self._request("/boards", "POST", {"name": name, **options}, as_query=True)

    async def update_board(self, board_id: str, **fields: Any) -> Dict[str, Any]:
        return await self._request(f"/boards/{board_id}", "PUT", fields, as_query=True)

    async def close_board(self, board_id: str) -> Dict[str, Any]:
        """Архивировать доску."""
        return await self._request(f"/boards/{board_id}", "PUT", {"closed": True})

    async def delete_board(self, board_id: str) -> None:
        await self._request(f"/boards/{board_id}", "DELETE")

    # ==================== Queries ====================

    async def get_board_detailed(self, board_id: str, **query: Any) -> Dict[str, Any]:
        """
        Доска вместе со связанными сущностями.

        Args:
            board_id: ID доски
            **query: lists, cards, members, checklists, labels, actions, fields...
        """
        return await self._request(f"/boards/{board_id}", "GET", query, as_query=True)

    async def get_board_field(self, board_id: str, field: str) -> Any:
        return await self._request(f"/boards/{board_id}/{field}")

    async def get_board_actions(self, board_id: str, **query: Any) -> List[Dict[str, Any]]:
        """История действий на доске (filter, limit, since, before...)."""
        return await self._request(f"/boards/{board_id}/actions", "GET", query, as_query=True)

    async def get_board_cards(self, board_id: str, filter: Optional[str] = None) -> List[Dict[str, Any]]:
        path = f"/boards/{board_id}/cards/{filter}" if filter else f"/boards/{board_id}/cards"
        return await self._request(path)

    async def get_board_lists(self, board_id: str, filter: Optional[str] = None) -> List[Dict[str, Any]]:
        path = f"/boards/{board_id}/lists/{filter}" if filter else f"/boards/{board_id}/lists"
        return await self._request(path)

    async def get_board_checklists(self, board_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/boards/{board_id}/checklists")

    async def get_board_labels(self, board_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/boards/{board_id}/labels")

    # ==================== Members ====================

    async def get_board_members(self, board_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/boards/{board_id}/members")

    async def add_member_to_board(
        self,
        board_id: str,
        email: str,
        type: Optional[str] = None,
        full_name: Optional[str] = None,
    ) -> Any:
        """Пригласить пользователя на доску по email."""
        payload = compact(email=email, type=type, fullName=full_name)
        return await self._request(f"/boards/{board_id}/members", "PUT", payload, as_query=True)

    async def update_board_member(self, board_id: str, member_id: str, type: Optional[str] = None) -> Any:
        return await self._request(
            f"/boards/{board_id}/members/{member_id}", "PUT", compact(type=type), as_query=True
        )

    async def remove_board_member(self, board_id: str, member_id: str) -> None:
        await self._request(f"/boards/{board_id}/members/{member_id}", "DELETE")

    # ==================== Utilities ====================

    async def generate_calendar_key(self, board_id: str) -> Any:
        return await self._request(f"/boards/{board_id}/calendarKey/generate", "POST")

    async def generate_email_key(self, board_id: str) -> Any:
        return await self._request(f"/boards/{board_id}/emailKey/generate", "POST")

    async def mark_as_viewed(self, board_id: str) -> Any:
        return await self._request(f"/boards/{board_id}/markedAsViewed", "POST")

    async def update_my_prefs(self, board_id: str, **prefs: Any) -> Dict[str, Any]:
        """
        Обновить личные настройки доски.

        Каждая настройка обновляется отдельным запросом, запросы идут
        последовательно. Неизвестные и None настройки пропускаются.

        Returns:
            Словарь {настройка: ответ API}
        """
        results: Dict[str, Any] = {}
        for name in MY_PREFS_FIELDS:
            value = prefs.get(name)
            if value is None:
                continue
            results[name] = await self._request(
                f"/boards/{board_id}/myPrefs/{name}", "PUT", {"value": value}, as_query=True
            )
        return results
