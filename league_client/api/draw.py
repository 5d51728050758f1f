from __future__ import annotations

from typing import Any

from ..errors import ValidationError
from .base import ApiGroup, Identifier, require_int_id

DRAW_POOL_TYPES = frozenset({"initial_guarantee", "initial_normal"})


class DrawApi(ApiGroup):
    """Unified draw: the service decides whether a draw is guaranteed or normal."""

    async def draw(self) -> Any:
        return await self._http.post("/draw")

    async def get_status(self) -> Any:
        return await self._http.get("/draw/status")

    async def get_results(self) -> Any:
        return await self._http.get("/draw/results")

    async def get_pool(self, pool_type: str | None = None) -> Any:
        """Return one pool, or both pools keyed by kind when `pool_type` is None."""
        if pool_type is not None and pool_type not in DRAW_POOL_TYPES:
            raise ValidationError(
                f"pool_type must be one of {sorted(DRAW_POOL_TYPES)}, got {pool_type!r}"
            )
        return await self._http.get("/draw/pool", params={"type": pool_type})


class DraftApi(ApiGroup):
    async def get_pool(self) -> Any:
        return await self._http.get("/draft/pool")

    async def pick(self, general_id: Identifier) -> Any:
        gid = require_int_id("general_id", general_id)
        return await self._http.post("/draft/pick", json={"general_id": gid})
