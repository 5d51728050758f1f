from __future__ import annotations

from datetime import datetime
from typing import Any

from ..errors import ValidationError
from .base import ApiGroup, Identifier, require_id, require_int_id, require_text
from .models import (
    AuctionAssignment,
    InviteCodeRequest,
    PhaseChange,
    SelectionStart,
    validate_input,
)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class AdminApi(ApiGroup):
    """Administrator operations.

    Every method is a single remote call; multi-step workflows (season reset,
    invite issuance, policy selection) are sequenced by the operator, not here.
    Admin privilege is enforced by the service, which answers 403 otherwise.
    """

    # Season and phase control

    async def set_phase(self, change: PhaseChange | dict[str, Any]) -> Any:
        req = validate_input(PhaseChange, change)
        return await self._http.post("/admin/phase", json=req.body())

    async def reset_season(self) -> Any:
        return await self._http.post("/admin/reset")

    async def list_trades(self) -> Any:
        return await self._http.get("/admin/trades")

    async def import_data(self, filename: str, content: bytes) -> Any:
        """Upload a spreadsheet of generals/treasures/cities/clubs/rules."""
        name = require_text("filename", filename)
        if not content:
            raise ValidationError("import file is empty")
        return await self._http.post("/admin/import", files={"file": (name, content)})

    # Invite codes

    async def generate_invite_codes(
        self, request: InviteCodeRequest | dict[str, Any] | None = None
    ) -> Any:
        req = validate_input(InviteCodeRequest, request if request is not None else {})
        return await self._http.post("/admin/invite-codes", json=req.body())

    async def list_invite_codes(self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Any:
        _check_page(page, page_size)
        return await self._http.get(
            "/admin/invite-codes", params={"page": page, "page_size": page_size}
        )

    async def delete_invite_code(self, code_id: Identifier) -> Any:
        return await self._http.delete(f"/admin/invite-codes/{require_id('code_id', code_id)}")

    async def get_invite_code_usages(self, code_id: Identifier) -> Any:
        return await self._http.get(
            f"/admin/invite-codes/{require_id('code_id', code_id)}/usages"
        )

    async def get_invite_code_stats(self) -> Any:
        return await self._http.get("/admin/invite-codes/stats")

    # Draw administration

    async def reset_user_draw(self, user_id: Identifier) -> Any:
        return await self._http.post(f"/admin/draw/reset/{require_id('user_id', user_id)}")

    async def reset_all_draws(self) -> Any:
        return await self._http.post("/admin/draw/reset-all")

    async def draw_for_user(self, user_id: Identifier) -> Any:
        return await self._http.post(f"/admin/draw/user/{require_id('user_id', user_id)}")

    async def draw_for_all(self) -> Any:
        return await self._http.post("/admin/draw/all")

    # Auction administration

    async def assign_auction(self, assignment: AuctionAssignment | dict[str, Any]) -> Any:
        req = validate_input(AuctionAssignment, assignment)
        return await self._http.post("/admin/auction/assign", json=req.body())

    async def reset_auction(self, general_id: Identifier) -> Any:
        return await self._http.delete(f"/admin/auction/{require_id('general_id', general_id)}")

    # Policy bidding administration

    async def close_policy_bidding(self) -> Any:
        return await self._http.post("/admin/policy/close-bidding")

    async def start_policy_selection(
        self, start_time: datetime | None = None, timeout_minutes: int = 0
    ) -> Any:
        req = validate_input(
            SelectionStart, {"start_time": start_time, "timeout_minutes": timeout_minutes}
        )
        return await self._http.post("/admin/policy/start-selection", json=req.body())

    async def list_policy_bids(self) -> Any:
        return await self._http.get("/admin/policy/bids")

    async def reset_policy_phase(self) -> Any:
        return await self._http.post("/admin/policy/reset")

    async def reset_user_policy(self, user_id: Identifier) -> Any:
        return await self._http.post(f"/admin/policy/reset/{require_id('user_id', user_id)}")

    async def select_club_for_user(self, user_id: Identifier, club_id: Identifier) -> Any:
        uid = require_id("user_id", user_id)
        cid = require_int_id("club_id", club_id)
        return await self._http.post(f"/admin/policy/select/{uid}", json={"club_id": cid})

    async def check_policy_timeout(self) -> Any:
        return await self._http.post("/admin/policy/check-timeout")

    async def force_next_selector(self) -> Any:
        return await self._http.post("/admin/policy/force-next")


def _check_page(page: int, page_size: int) -> None:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValidationError(f"page must be >= 1, got {page!r}")
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise ValidationError(f"page_size must be an integer, got {page_size!r}")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValidationError(f"page_size must be within 1..{MAX_PAGE_SIZE}, got {page_size}")
