from __future__ import annotations

from typing import Any

from .base import ApiGroup, Identifier, require_id


class GameApi(ApiGroup):
    """Season phase, season sign-up and the public player listing."""

    async def get_phase(self) -> Any:
        return await self._http.get("/phase")

    async def sign_up(self) -> Any:
        return await self._http.post("/signup")

    async def get_players(self) -> Any:
        return await self._http.get("/players")

    async def get_player_roster(self, player_id: Identifier) -> Any:
        return await self._http.get(f"/players/{require_id('player_id', player_id)}/roster")

    async def get_statistics(self) -> Any:
        return await self._http.get("/statistics")

    async def get_registration_config(self) -> Any:
        return await self._http.get("/config/registration")


class AssetApi(ApiGroup):
    """Read-only catalogue of generals, treasures, clubs, cities and rules."""

    async def get_generals(self) -> Any:
        return await self._http.get("/generals")

    async def get_general(self, general_id: Identifier) -> Any:
        return await self._http.get(f"/generals/{require_id('general_id', general_id)}")

    async def get_treasures(self) -> Any:
        return await self._http.get("/treasures")

    async def get_treasure(self, treasure_id: Identifier) -> Any:
        return await self._http.get(f"/treasures/{require_id('treasure_id', treasure_id)}")

    async def get_clubs(self) -> Any:
        return await self._http.get("/clubs")

    async def get_club(self, club_id: Identifier) -> Any:
        return await self._http.get(f"/clubs/{require_id('club_id', club_id)}")

    async def get_club_detail(self, club_id: Identifier) -> Any:
        return await self._http.get(f"/clubs/{require_id('club_id', club_id)}/detail")

    async def get_cities(self) -> Any:
        return await self._http.get("/cities")

    async def get_rules(self) -> Any:
        return await self._http.get("/rules")
