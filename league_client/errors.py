"""Error taxonomy for the client.

Every failure a caller can observe derives from `ClientError`. The `code`
attribute is a stable machine-readable tag for logging and CLI output.
"""
from __future__ import annotations

from typing import Any

__all__ = [
    "ClientError",
    "TransportError",
    "AuthorizationError",
    "DomainError",
    "ValidationError",
    "AuthError",
    "NavigationError",
]


class ClientError(RuntimeError):
    """Base class for all client-side failures."""

    code: str = "client_error"


class TransportError(ClientError):
    """No response was received (connection failure or timeout)."""

    code = "transport_error"


class AuthorizationError(ClientError):
    """The service rejected the presented credential (HTTP 401).

    Raised after the session has already been torn down; callers still receive
    it and decide their own local recovery.
    """

    code = "unauthorized"
    status = 401

    def __init__(self, detail: str = "unauthorized") -> None:
        super().__init__(detail)
        self.detail = detail


class DomainError(ClientError):
    """Any other non-2xx response, carrying the service's detail message."""

    code = "domain_error"

    def __init__(self, status: int, detail: str, payload: Any = None) -> None:
        super().__init__(f"{status}: {detail}")
        self.status = status
        self.detail = detail
        self.payload = payload


class ValidationError(ClientError):
    """Malformed caller input, caught before anything is transmitted."""

    code = "invalid_input"


class AuthError(ClientError):
    """Login or registration failed; the underlying error is chained."""

    code = "auth_failed"


class NavigationError(ClientError):
    """A navigation attempt kept redirecting without settling."""

    code = "navigation_loop"
