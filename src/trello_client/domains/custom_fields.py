# src/trello_client/domains/custom_fields.py

from typing import Any, Dict, List, Union

from .base import DomainClient

CUSTOM_FIELD_TYPES = frozenset({'checkbox', 'list', 'number', 'text', 'date'})


class CustomFieldsClient(DomainClient):
    """Определения custom fields доски и опции списочных полей."""

    async def get_board_custom_fields(self, board_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/boards/{board_id}/customFields")

    async def create(
        self,
        board_id: str,
        name: str,
        type: str,
        pos: Union[str, float] = "bottom",
        **options: Any,
    ) -> Dict[str, Any]:
        """
        Создать custom field на доске.

        Args:
            board_id: ID доски (idModel)
            name: Название поля
            type: checkbox, list, number, text или date
            pos: 'top', 'bottom' или число
            **options: options, display_cardFront

        Raises:
            ValueError: Неизвестный тип поля
        """
        if type not in CUSTOM_FIELD_TYPES:
            raise ValueError(f"Unknown custom field type: {type}")
        payload = {
            "idModel": board_id,
            "modelType": "board",
            "name": name,
            "type": type,
            "pos": pos,
            **options,
        }
        return await self._request("/customFields", "POST", payload)

    async def get(self, field_id: str) -> Dict[str, Any]:
        return await self._request(f"/customFields/{field_id}")

    async def update(self, field_id: str, **updates: Any) -> Dict[str, Any]:
        """Обновить поле (name, pos, 'display/cardFront')."""
        return await self._request(f"/customFields/{field_id}", "PUT", updates)

    async def delete(self, field_id: str) -> None:
        await self._request(f"/customFields/{field_id}", "DELETE")

    async def get_options(self, field_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/customFields/{field_id}/options")

    async def add_option(self, field_id: str) -> Dict[str, Any]:
        return await self._request(f"/customFields/{field_id}/options", "POST")

    async def get_option(self, field_id: str, option_id: str) -> Dict[str, Any]:
        return await self._request(f"/customFields/{field_id}/options/{option_id}")

    async def delete_option(self, field_id: str, option_id: str) -> None:
        await self._request(f"/customFields/{field_id}/options/{option_id}", "DELETE")
