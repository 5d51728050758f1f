from __future__ import annotations

from typing import Any

from .base import ApiGroup


class AuctionApi(ApiGroup):
    async def get_pool(self) -> Any:
        return await self._http.get("/auction/pool")

    async def get_results(self) -> Any:
        return await self._http.get("/auction/results")

    async def get_stats(self) -> Any:
        return await self._http.get("/auction/stats")
