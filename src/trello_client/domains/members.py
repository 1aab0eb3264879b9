# src/trello_client/domains/members.py

from typing import Any, Dict, List, Optional

from .base import DomainClient, compact


class MembersClient(DomainClient):
    """Участники досок и их организации."""

    async def get_board_members(self, board_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/boards/{board_id}/members")

    async def remove_member_from_board(self, board_id: str, member_id: str) -> None:
        await self._request(f"/boards/{board_id}/members/{member_id}", "DELETE")

    async def get_organizations(self) -> List[Dict[str, Any]]:
        """Организации (workspaces) текущего пользователя."""
        return await self._request("/members/me/organizations")

    async def get_member_organizations(
        self,
        member_id: str,
        filter: Optional[str] = None,
        fields: Optional[str] = None,
        paid_account: Optional[bool] = None,
    ) -> List[Dict[str, Any]]:
        """
        Организации произвольного участника.

        Args:
            member_id: ID или username участника
            filter: 'all', 'members', 'none' или 'public'
            fields: Поля через запятую
            paid_account: Только платные
        """
        query = compact(filter=filter, fields=fields, paid_account=paid_account)
        return await self._request(f"/members/{member_id}/organizations", "GET", query, as_query=True)
