"""Credential store: the sole owner and writer of the session.

Holds the bearer token and the authenticated profile, persists the token in a
single storage slot, and derives every authorization flag on read. Mutations
happen synchronously between awaits, so concurrent teardowns cannot interleave.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from ..api.models import AuthResponse, LoginRequest, RegisterRequest, UserProfile
from ..domain.routes import AuthState
from ..errors import AuthError, AuthorizationError, ClientError, ValidationError
from ..logging_conf import get_logger
from .storage import MemoryTokenStorage, TokenStorage

if TYPE_CHECKING:
    from ..api.auth import AuthApi
    from ..api.game import GameApi

logger = get_logger("league_client.session")


class SessionStore:
    def __init__(self, storage: TokenStorage | None = None) -> None:
        self._storage = storage if storage is not None else MemoryTokenStorage()
        self._token: str | None = None
        self._user: UserProfile | None = None
        self._auth: AuthApi | None = None
        self._game: GameApi | None = None

    def bind(self, auth: AuthApi, game: GameApi | None = None) -> None:
        """Attach the remote operations the store calls on the caller's behalf."""
        self._auth = auth
        self._game = game

    # ------------------------
    # Derived state
    # ------------------------

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def user(self) -> UserProfile | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        # A token whose profile is still loading counts as authenticated.
        return bool(self._token)

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.is_admin

    @property
    def is_registered(self) -> bool:
        return self._user is not None and self._user.is_registered

    @property
    def remaining_space(self) -> int:
        if self._user is None:
            return 0
        return self._user.space - self._user.used_space

    def auth_state(self) -> AuthState:
        return AuthState(is_authenticated=self.is_authenticated, is_admin=self.is_admin)

    # ------------------------
    # Mutations
    # ------------------------

    async def login(self, credentials: LoginRequest | dict[str, Any]) -> UserProfile:
        """Exchange credentials for a session; the session is untouched on failure."""
        auth = self._require_auth()
        held = self._token, self._user
        try:
            payload = await auth.login(credentials)
        except ValidationError:
            raise
        except AuthorizationError as e:
            self._reinstate(*held)
            raise AuthError(f"login failed: {e}") from e
        except ClientError as e:
            raise AuthError(f"login failed: {e}") from e
        return self._establish(payload, "login")

    async def register(self, data: RegisterRequest | dict[str, Any]) -> UserProfile:
        """Create an account and start a session for it."""
        auth = self._require_auth()
        held = self._token, self._user
        try:
            payload = await auth.register(data)
        except ValidationError:
            raise
        except AuthorizationError as e:
            self._reinstate(*held)
            raise AuthError(f"registration failed: {e}") from e
        except ClientError as e:
            raise AuthError(f"registration failed: {e}") from e
        return self._establish(payload, "register")

    async def refresh_profile(self) -> UserProfile | None:
        """Re-fetch the profile for the held token.

        Returns None without a network call when no token is held. Any failure
        ends the session before it is re-raised, unless the session has already
        moved to another token.
        """
        token = self._token
        if not token:
            return None
        auth = self._require_auth()
        try:
            payload = await auth.get_current_user()
            user = UserProfile.model_validate(payload)
        except (ClientError, PydanticValidationError):
            if self._token == token:
                self.logout()
            raise
        # Logout or a new login may have happened while the request was in flight.
        if self._token == token:
            self._user = user
        return user

    async def sign_up(self) -> Any:
        """Join the current season, then refresh the profile's registration flag."""
        if self._game is None:
            raise RuntimeError("SessionStore.sign_up requires a bound GameApi")
        result = await self._game.sign_up()
        await self.refresh_profile()
        return result

    def logout(self) -> None:
        """Forget the session locally; idempotent and network-free."""
        had_session = self._token is not None
        self._user = None
        self._token = None
        self._storage.clear()
        if had_session:
            logger.info("session.logout", extra={"event": "session_logout"})

    async def restore(self) -> None:
        """Adopt a persisted token and fetch its profile, best-effort.

        Startup must render the signed-out state rather than fail, so a refresh
        error is logged and dropped; refresh_profile already cleared the session.
        """
        token = self._storage.load()
        if not token:
            return
        self._token = token
        self._user = None
        try:
            await self.refresh_profile()
        except (ClientError, PydanticValidationError) as e:
            logger.warning(
                "session.restore_failed",
                extra={"event": "session_restore_failed", "error": str(e)},
            )
            return
        logger.info("session.restored", extra={"event": "session_restored"})

    # ------------------------
    # Internals
    # ------------------------

    def _require_auth(self) -> AuthApi:
        if self._auth is None:
            raise RuntimeError("SessionStore is not bound to an AuthApi")
        return self._auth

    def _establish(self, payload: Any, via: str) -> UserProfile:
        try:
            resp = AuthResponse.model_validate(payload)
        except PydanticValidationError as e:
            raise AuthError(f"{via} returned a malformed session payload") from e
        # Persist first: if the slot cannot be written, memory stays unchanged.
        self._storage.save(resp.token)
        self._token = resp.token
        self._user = resp.user
        logger.info(
            "session.established",
            extra={"event": "session_established", "via": via, "user_id": resp.user.id},
        )
        return resp.user

    def _reinstate(self, token: str | None, user: UserProfile | None) -> None:
        # A rejected credential check is a 401 and tears the session down like
        # any other; put back the session held before the attempt.
        if token is None or self._token is not None:
            return
        self._storage.save(token)
        self._token = token
        self._user = user
        logger.info("session.reinstated", extra={"event": "session_reinstated"})
