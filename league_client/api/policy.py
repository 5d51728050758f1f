from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..errors import ValidationError
from .base import ApiGroup, Identifier, require_int_id


class PolicyApi(ApiGroup):
    """Policy bidding: bid for a pick slot, then choose a club in bid order."""

    async def get_status(self) -> Any:
        return await self._http.get("/policy/status")

    async def get_my_bid(self) -> Any:
        """Return the caller's bid together with its club preferences."""
        return await self._http.get("/policy/bid")

    async def place_bid(self, amount: int) -> Any:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise ValidationError(f"bid amount must be a non-negative integer, got {amount!r}")
        return await self._http.post("/policy/bid", json={"bid_amount": amount})

    async def set_preferences(self, club_ids: Sequence[Identifier]) -> Any:
        ids = [require_int_id("club_id", cid) for cid in club_ids]
        if len(set(ids)) != len(ids):
            raise ValidationError("club preferences must not repeat a club")
        return await self._http.post("/policy/preferences", json={"club_ids": ids})

    async def select_club(self, club_id: Identifier) -> Any:
        cid = require_int_id("club_id", club_id)
        return await self._http.post("/policy/select", json={"club_id": cid})

    async def get_results(self) -> Any:
        return await self._http.get("/policy/results")

    async def list_clubs(self, *, league: str | None = None, tag: str | None = None) -> Any:
        """List clubs with their tags; `tag` takes precedence over `league` server-side."""
        return await self._http.get("/policy/clubs", params={"league": league, "tag": tag})

    async def get_club_filters(self) -> Any:
        return await self._http.get("/policy/clubs/filters")
