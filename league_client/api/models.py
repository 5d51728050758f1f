"""Request and response shapes exchanged with the game service.

Request models validate caller input before transmission; response models are
lenient (`extra="allow"`) so fields the service adds later pass through.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from ..errors import ValidationError


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class LoginRequest(_Request):
    """Credentials for an existing account."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(_Request):
    """New account; the service defaults nickname to username."""
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)
    nickname: Optional[str] = Field(default=None, max_length=50)
    invite_code: Optional[str] = None


class ProfileUpdate(_Request):
    nickname: str = Field(..., min_length=1, max_length=50)


class TradeRequest(_Request):
    """A trade proposal: what the proposer offers and what it asks for."""
    receiver_id: int = Field(..., gt=0)
    offer_generals: list[int] = Field(default_factory=list)
    offer_treasures: list[int] = Field(default_factory=list)
    offer_space: int = Field(default=0, ge=0)
    request_generals: list[int] = Field(default_factory=list)
    request_treasures: list[int] = Field(default_factory=list)
    request_space: int = Field(default=0, ge=0)
    message: str = ""


class PhaseChange(_Request):
    """Admin phase transition; phase is free-form so new server phases work."""
    phase: str = Field(..., min_length=1)
    round_number: int = 0
    draft_round: int = 0


class InviteCodeRequest(_Request):
    count: int = Field(default=1, ge=1, le=100)
    type: int = Field(default=0, ge=0, le=1)  # 0 single-use, 1 multi-use
    max_uses: int = Field(default=1, ge=1)
    expire_days: int = Field(default=0, ge=0)  # 0 never expires
    remark: str = ""


class AuctionAssignment(_Request):
    """Record an auction outcome; no user_id means the general went unsold."""
    general_id: int = Field(..., gt=0)
    user_id: Optional[int] = Field(default=None, gt=0)
    price: int = Field(default=0, ge=0)
    remark: str = ""


class SelectionStart(_Request):
    start_time: Optional[datetime] = None
    timeout_minutes: int = Field(default=0, ge=0)


class UserProfile(BaseModel):
    """The authenticated account as the service reports it."""
    model_config = ConfigDict(extra="allow")

    id: int
    username: str = ""
    nickname: str = ""
    is_admin: bool = False
    is_registered: bool = False
    space: int = 0
    used_space: int = 0
    club_id: Optional[int] = None

    @property
    def remaining_space(self) -> int:
        return self.space - self.used_space


class AuthResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    token: str = Field(..., min_length=1)
    user: UserProfile
    message: Optional[str] = None


M = TypeVar("M", bound=_Request)


def validate_input(model: type[M], data: Any) -> M:
    """Coerce caller input into `model`, raising the client's ValidationError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"invalid {model.__name__}: {e}") from e
