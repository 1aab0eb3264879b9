# src/trello_client/domains/labels.py

from typing import Any, Dict

from .base import DomainClient


class LabelsClient(DomainClient):

    async def create_label(self, board_id: str, name: str, color: str) -> Dict[str, Any]:
        return await self._request("/labels", "POST", {"idBoard": board_id, "name": name, "color": color})

    async def delete_label(self, label_id: str) -> None:
        await self._request(f"/labels/{label_id}", "DELETE")
