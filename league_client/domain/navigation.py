"""Router: runs every navigation attempt through the guard.

The router is the only place that follows guard redirects. `Router.push` is also
the navigation callback handed to the request pipeline, so a 401 anywhere lands
the user on the login route through the same checks as a user-initiated move.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Protocol

from ..errors import NavigationError
from ..logging_conf import get_logger
from .routes import ROUTES, AuthState, RouteDescriptor, guard, match_route, normalize_route_path

logger = get_logger("league_client.navigation")

# The stock route table settles after one hop; the bound catches cyclic custom tables.
MAX_REDIRECTS = 5
# Only the most recent locations are kept.
HISTORY_LIMIT = 100


class AuthStateSource(Protocol):
    def auth_state(self) -> AuthState: ...


@dataclass(frozen=True)
class Location:
    """Where the router ended up after a push."""

    path: str
    route: RouteDescriptor
    redirected_from: str | None = None


class Router:
    def __init__(
        self,
        session: AuthStateSource,
        routes: tuple[RouteDescriptor, ...] = ROUTES,
    ) -> None:
        self._session = session
        self._routes = routes
        self._current: Location | None = None
        self._history: deque[Location] = deque(maxlen=HISTORY_LIMIT)

    @property
    def current(self) -> Location | None:
        return self._current

    @property
    def history(self) -> list[Location]:
        return list(self._history)

    def resolve(self, path: str) -> Location:
        """Apply the guard to `path`, following redirects, without moving."""
        requested = path
        seen: list[str] = []
        for _ in range(MAX_REDIRECTS + 1):
            route = match_route(path, self._routes)
            decision = guard(route, self._session.auth_state())
            if decision.allowed:
                return Location(
                    path=normalize_route_path(path),
                    route=route,
                    redirected_from=requested if seen else None,
                )
            seen.append(path)
            path = decision.redirect_to
        raise NavigationError(f"navigation to {requested!r} did not settle: {seen}")

    def push(self, path: str) -> Location:
        """Navigate to `path`; the guard may land the router somewhere else."""
        location = self.resolve(path)
        if location.redirected_from is not None:
            logger.info(
                "navigation.redirect",
                extra={
                    "event": "navigation_redirect",
                    "requested": location.redirected_from,
                    "target": location.path,
                },
            )
        self._current = location
        self._history.append(location)
        return location
