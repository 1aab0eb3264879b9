# src/trello_client/domains/card_features.py
"""Чеклисты, вложения, комментарии, custom fields, метки и участники карточек."""

from typing import Any, Dict, List, Optional

from .base import DomainClient, compact


class CardFeaturesClient(DomainClient):

    # ==================== Checklists ====================

    async def get_checklists(self, card_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/cards/{card_id}/checklists")

    async def add_checklist(self, card_id: str, name: str) -> Dict[str, Any]:
        return await self._request(f"/cards/{card_id}/checklists", "POST", {"name": name})

    async def update_checklist(self, checklist_id: str, **updates: Any) -> Dict[str, Any]:
        """Обновить чеклист (name, pos)."""
        return await self._request(f"/checklists/{checklist_id}", "PUT", updates)

    async def delete_checklist(self, checklist_id: str) -> None:
        await self._request(f"/checklists/{checklist_id}", "DELETE")

    # ==================== Attachments ====================

    async def get_attachments(self, card_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/cards/{card_id}/attachments")

    async def add_attachment(self, card_id: str, url: str, name: Optional[str] = None) -> Dict[str, Any]:
        """Прикрепить ссылку к карточке."""
        return await self._request(f"/cards/{card_id}/attachments", "POST", compact(url=url, name=name))

    async def delete_attachment(self, card_id: str, attachment_id: str) -> None:
        await self._request(f"/cards/{card_id}/attachments/{attachment_id}", "DELETE")

    # ==================== Comments ====================

    async def get_comments(self, card_id: str) -> List[Dict[str, Any]]:
        """Комментарии - это actions типа commentCard."""
        return await self._request(
            f"/cards/{card_id}/actions", "GET", {"filter": "commentCard"}, as_query=True
        )

    async def add_comment(self, card_id: str, text: str) -> Dict[str, Any]:
        return await self._request(f"/cards/{card_id}/actions/comments", "POST", {"text": text})

    async def update_comment(self, card_id: str, action_id: str, text: str) -> Dict[str, Any]:
        return await self._request(
            f"/cards/{card_id}/actions/{action_id}/comments", "PUT", {"text": text}
        )

    async def delete_comment(self, card_id: str, action_id: str) -> None:
        await self._request(f"/cards/{card_id}/actions/{action_id}/comments", "DELETE")

    # ==================== Custom fields ====================

    async def get_custom_field_items(self, card_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/cards/{card_id}/customFieldItems")

    async def set_custom_field(self, card_id: str, field_id: str, value: Any) -> Dict[str, Any]:
        """
        Установить значение custom field.

        Args:
            value: Объект значения Trello, например {"text": "abc"} или {"number": "42"}
        """
        return await self._request(
            f"/cards/{card_id}/customField/{field_id}/item", "PUT", {"value": value}
        )

    # ==================== Labels ====================

    async def get_labels(self, card_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/cards/{card_id}/labels")

    async def add_label(self, card_id: str, label_id: str) -> Any:
        return await self._request(f"/cards/{card_id}/idLabels", "POST", {"value": label_id})

    async def remove_label(self, card_id: str, label_id: str) -> None:
        await self._request(f"/cards/{card_id}/idLabels/{label_id}", "DELETE")

    # ==================== Members ====================

    async def get_members(self, card_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/cards/{card_id}/members")

    async def add_member(self, card_id: str, member_id: str) -> Any:
        return await self._request(f"/cards/{card_id}/idMembers", "POST", {"value": member_id})

    async def remove_member(self, card_id: str, member_id: str) -> None:
        await self._request(f"/cards/{card_id}/idMembers/{member_id}", "DELETE")
