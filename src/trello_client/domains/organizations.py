# src/trello_client/domains/organizations.py

from typing import Any, Dict, List, Optional

from .base import DomainClient, compact


class OrganizationsClient(DomainClient):

    async def get_boards(self, organization_id: str, **query: Any) -> List[Dict[str, Any]]:
        """Доски организации (fields, filter, lists, members...)."""
        return await self._request(
            f"/organizations/{organization_id}/boards", "GET", query, as_query=True
        )

    async def invite_member(
        self,
        organization_id: str,
        email: str,
        full_name: Optional[str] = None,
        type: Optional[str] = None,
    ) -> Any:
        payload = compact(email=email, fullName=full_name, type=type)
        return await self._request(f"/organizations/{organization_id}/members", "PUT", payload)
