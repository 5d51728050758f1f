from __future__ import annotations

from typing import Any

from .base import ApiGroup, Identifier, require_id
from .models import TradeRequest, validate_input


class TradeApi(ApiGroup):
    """Player-to-player trades; the service owns every acceptance rule."""

    async def create(self, trade: TradeRequest | dict[str, Any]) -> Any:
        req = validate_input(TradeRequest, trade)
        return await self._http.post("/trades", json=req.body())

    async def list_pending(self) -> Any:
        return await self._http.get("/trades/pending")

    async def get_history(self) -> Any:
        return await self._http.get("/trades/history")

    async def get(self, trade_id: Identifier) -> Any:
        return await self._http.get(f"/trades/{require_id('trade_id', trade_id)}")

    async def accept(self, trade_id: Identifier) -> Any:
        return await self._http.post(f"/trades/{require_id('trade_id', trade_id)}/accept")

    async def reject(self, trade_id: Identifier) -> Any:
        return await self._http.post(f"/trades/{require_id('trade_id', trade_id)}/reject")

    async def cancel(self, trade_id: Identifier) -> Any:
        return await self._http.post(f"/trades/{require_id('trade_id', trade_id)}/cancel")
