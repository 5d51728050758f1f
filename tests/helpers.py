"""Test helpers: a scripted stand-in for the game service over MockTransport."""
from __future__ import annotations

from collections.abc import Awaitable, Callable

import httpx


BASE_URL = "http://league.test/api"
API_PREFIX = "/api"

USER = {
    "id": 7,
    "username": "alice",
    "nickname": "Alice",
    "is_admin": False,
    "is_registered": True,
    "space": 350,
    "used_space": 120,
}
ADMIN = {**USER, "id": 1, "username": "root", "nickname": "Root", "is_admin": True}

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


class FakeService:
    """Answers scripted routes and records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Handler] = {}

    def on(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json: object = None,
        handler: Handler | None = None,
    ) -> None:
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status, json=json)

        self._routes[(method, API_PREFIX + path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response | Awaitable[httpx.Response]:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


