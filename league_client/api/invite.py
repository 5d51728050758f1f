from __future__ import annotations

from typing import Any

from .base import ApiGroup, require_text


class InviteApi(ApiGroup):
    async def validate(self, code: str) -> Any:
        """Check an invite code before registering; works without a session."""
        return await self._http.get(
            "/invite-codes/validate", params={"code": require_text("code", code)}
        )
