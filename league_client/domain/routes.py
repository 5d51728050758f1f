from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "LOGIN_PATH",
    "REGISTER_PATH",
    "ROOT_PATH",
    "RouteDescriptor",
    "ROUTES",
    "AuthState",
    "GuardDecision",
    "normalize_route_path",
    "match_route",
    "guard",
]

LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
ROOT_PATH = "/"

_GUEST_ONLY = frozenset({LOGIN_PATH, REGISTER_PATH})
_PARAM_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


@dataclass(frozen=True)
class RouteDescriptor:
    """Static access requirements for one navigable location."""

    path: str
    name: str
    requires_auth: bool = False
    requires_admin: bool = False

    def matches(self, path: str) -> bool:
        return _compile(self.path).fullmatch(path) is not None


@dataclass(frozen=True)
class AuthState:
    """Authorization flags derived from the session at navigation time."""

    is_authenticated: bool = False
    is_admin: bool = False


@dataclass(frozen=True)
class GuardDecision:
    """Outcome of the guard: allow, or redirect to `redirect_to`."""

    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None


ALLOW = GuardDecision()


def _authed(path: str, name: str) -> RouteDescriptor:
    return RouteDescriptor(path=path, name=name, requires_auth=True)


ROUTES: tuple[RouteDescriptor, ...] = (
    RouteDescriptor(path=LOGIN_PATH, name="login"),
    RouteDescriptor(path=REGISTER_PATH, name="register"),
    _authed(ROOT_PATH, "dashboard"),
    _authed("/roster", "my_roster"),
    _authed("/generals", "generals"),
    _authed("/treasures", "treasures"),
    _authed("/clubs", "clubs"),
    _authed("/cities", "cities"),
    _authed("/rules", "rules"),
    _authed("/players", "players"),
    _authed("/players/:id", "player_detail"),
    _authed("/draw", "draw"),
    _authed("/draft", "draft"),
    _authed("/trade", "trade"),
    _authed("/auction", "auction"),
    _authed("/policy", "policy"),
    # Nested under the authenticated layout, so it inherits requires_auth.
    RouteDescriptor(path="/admin", name="admin", requires_auth=True, requires_admin=True),
)


def _compile(template: str) -> re.Pattern[str]:
    parts = _PARAM_RE.split(template)
    # split() alternates literal text and captured parameter names
    pattern = "".join(
        re.escape(part) if i % 2 == 0 else f"(?P<{part}>[^/]+)" for i, part in enumerate(parts)
    )
    return re.compile(pattern)


def normalize_route_path(path: str) -> str:
    """Deterministically normalize a navigation target.

    Rules:
    - Drop any query string or fragment.
    - Strip surrounding whitespace and collapse repeated slashes.
    - Ensure a single leading "/" and no trailing "/" (except the root).

    Raises:
        ValueError: if the path is not a string.
    """
    if not isinstance(path, str):
        raise ValueError("route path must be a string")

    p = re.split(r"[?#]", path.strip(), maxsplit=1)[0]
    p = re.sub(r"/+", "/", "/" + p)
    if len(p) > 1:
        p = p.rstrip("/") or ROOT_PATH
    return p


def match_route(path: str, routes: tuple[RouteDescriptor, ...] = ROUTES) -> RouteDescriptor:
    """Return the descriptor for `path`.

    Unknown locations resolve to an unrestricted descriptor: they carry no
    access requirements, so the guard lets them through.
    """
    p = normalize_route_path(path)
    for route in routes:
        if route.matches(p):
            return route
    return RouteDescriptor(path=p, name="unknown")


def guard(route: RouteDescriptor, state: AuthState) -> GuardDecision:
    """Decide whether navigation to `route` may proceed.

    First matching rule wins:
      1. auth required, not authenticated      -> /login
      2. admin required, not admin             -> /
      3. login/register while authenticated    -> /
      4. otherwise                             -> allow
    """
    if route.requires_auth and not state.is_authenticated:
        return GuardDecision(redirect_to=LOGIN_PATH)
    if route.requires_admin and not state.is_admin:
        return GuardDecision(redirect_to=ROOT_PATH)
    if route.path in _GUEST_ONLY and state.is_authenticated:
        return GuardDecision(redirect_to=ROOT_PATH)
    return ALLOW
