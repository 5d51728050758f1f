from __future__ import annotations

from typing import Any

from .base import ApiGroup
from .models import LoginRequest, ProfileUpdate, RegisterRequest, validate_input


class AuthApi(ApiGroup):
    """Account operations: credentials exchange and the caller's own records."""

    async def register(self, data: RegisterRequest | dict[str, Any]) -> Any:
        req = validate_input(RegisterRequest, data)
        return await self._http.post("/auth/register", json=req.body())

    async def login(self, credentials: LoginRequest | dict[str, Any]) -> Any:
        req = validate_input(LoginRequest, credentials)
        return await self._http.post("/auth/login", json=req.body())

    async def get_current_user(self) -> Any:
        return await self._http.get("/me")

    async def update_profile(self, nickname: str) -> Any:
        req = validate_input(ProfileUpdate, {"nickname": nickname})
        return await self._http.put("/me", json=req.body())

    async def get_my_roster(self) -> Any:
        return await self._http.get("/me/roster")

    async def get_my_draw_records(self) -> Any:
        return await self._http.get("/me/draws")

    async def get_my_draft_records(self) -> Any:
        return await self._http.get("/me/drafts")
