from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import ValidationError

if TYPE_CHECKING:
    from ..service.pipeline import RequestPipeline

Identifier = int | str


class ApiGroup:
    """A stateless family of remote operations sharing one pipeline."""

    def __init__(self, pipeline: RequestPipeline) -> None:
        self._http = pipeline


def require_id(name: str, value: Identifier | None) -> str:
    """Return `value` as a path segment, or raise before anything is sent."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{name} is required")
    if isinstance(value, int):
        if value <= 0:
            raise ValidationError(f"{name} must be a positive integer, got {value}")
        return str(value)
    if isinstance(value, str) and value.strip() and "/" not in value:
        return value.strip()
    raise ValidationError(f"{name} must be a positive integer or non-empty id, got {value!r}")


def require_text(name: str, value: str | None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string")
    return value.strip()


def require_int_id(name: str, value: Identifier | None) -> int:
    """Like require_id, for identifiers that travel as JSON integers."""
    segment = require_id(name, value)
    if not segment.isdigit() or int(segment) == 0:
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")
    return int(segment)
