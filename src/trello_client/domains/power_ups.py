# src/trello_client/domains/power_ups.py

from typing import Any, Dict, List

from .base import DomainClient


class PowerUpsClient(DomainClient):

    async def get_board_power_ups(self, board_id: str) -> List[Dict[str, Any]]:
        return await self._request(f"/boards/{board_id}/powerUps")

    async def enable(self, board_id: str, power_up: str) -> Any:
        return await self._request(f"/boards/{board_id}/powerUps", "POST", {"value": power_up})

    async def disable(self, board_id: str, power_up: str) -> None:
        await self._request(f"/boards/{board_id}/powerUps/{power_up}", "DELETE")
