import asyncio
import json

import httpx
import pytest

from league_client.errors import AuthError, AuthorizationError, DomainError, ValidationError
from league_client.service.session import SessionStore
from league_client.service.storage import MemoryTokenStorage
from tests.helpers import ADMIN, USER


def _login_ok(service, token="t1", user=USER):
    service.on("POST", "/auth/login", json={"message": "ok", "token": token, "user": user})


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_holds_and_persists_token(self, client, service, storage):
        _login_ok(service)

        user = await client.session.login({"username": "a", "password": "b"})

        assert user.id == USER["id"]
        assert client.session.token == "t1"
        assert storage.load() == "t1"
        assert client.session.user == user

    @pytest.mark.asyncio
    async def test_authenticated_strictly_between_login_and_logout(self, client, service):
        _login_ok(service)
        assert client.session.is_authenticated is False

        await client.session.login({"username": "a", "password": "b"})
        assert client.session.is_authenticated is True

        client.session.logout()
        assert client.session.is_authenticated is False

    @pytest.mark.asyncio
    async def test_remote_failure_raises_auth_error_and_leaves_session(self, client, service, storage):
        service.on("POST", "/auth/login", status=400, json={"error": "bad credentials"})

        with pytest.raises(AuthError) as exc_info:
            await client.session.login({"username": "a", "password": "wrong"})

        assert "bad credentials" in str(exc_info.value.__cause__)
        assert client.session.token is None
        assert client.session.user is None
        assert storage.load() is None

    @pytest.mark.asyncio
    async def test_rejected_credentials_with_401_leave_session(self, client, service, storage):
        service.on("POST", "/auth/login", status=401, json={"error": "invalid username or password"})

        with pytest.raises(AuthError) as exc_info:
            await client.session.login({"username": "a", "password": "wrong"})

        assert isinstance(exc_info.value.__cause__, AuthorizationError)
        assert client.session.token is None
        assert storage.load() is None

    @pytest.mark.asyncio
    async def test_401_on_login_keeps_the_session_already_held(self, client, service, storage):
        _login_ok(service)
        user = await client.session.login({"username": "a", "password": "b"})
        service.on("POST", "/auth/login", status=401, json={"error": "invalid username or password"})

        with pytest.raises(AuthError):
            await client.session.login({"username": "root", "password": "wrong"})

        assert service.last.headers["Authorization"] == "Bearer t1"
        assert client.session.token == "t1"
        assert client.session.user == user
        assert storage.load() == "t1"

    @pytest.mark.asyncio
    async def test_401_on_register_keeps_the_session_already_held(self, client, service, storage):
        _login_ok(service)
        await client.session.login({"username": "a", "password": "b"})
        service.on("POST", "/auth/register", status=401, json={"error": "unauthorized"})

        with pytest.raises(AuthError):
            await client.session.register({"username": "carol", "password": "secret1"})

        assert client.session.token == "t1"
        assert storage.load() == "t1"

    @pytest.mark.asyncio
    async def test_malformed_credentials_rejected_before_transmission(self, client, service):
        with pytest.raises(ValidationError):
            await client.session.login({"username": "a"})
        assert service.requests == []

    @pytest.mark.asyncio
    async def test_malformed_session_payload_is_an_auth_error(self, client, service, storage):
        service.on("POST", "/auth/login", json={"message": "ok"})

        with pytest.raises(AuthError):
            await client.session.login({"username": "a", "password": "b"})
        assert storage.load() is None

    @pytest.mark.asyncio
    async def test_register_establishes_session(self, client, service, storage):
        service.on("POST", "/auth/register", status=201, json={"token": "t2", "user": USER})

        user = await client.session.register(
            {"username": "alice", "password": "secret1", "invite_code": "ABCD"}
        )

        assert user.username == "alice"
        assert storage.load() == "t2"
        assert json.loads(service.last.content) == {
            "username": "alice",
            "password": "secret1",
            "invite_code": "ABCD",
        }


class TestDerivedFlags:
    @pytest.mark.asyncio
    async def test_flags_follow_profile(self, client, service):
        _login_ok(service, user=ADMIN)
        await client.session.login({"username": "root", "password": "pw"})
        assert client.session.is_admin is True
        assert client.session.is_registered is True

        client.session.logout()
        assert client.session.is_admin is False
        assert client.session.is_registered is False

    @pytest.mark.asyncio
    async def test_remaining_space_is_recomputed_on_every_read(self, client, service):
        _login_ok(service)
        await client.session.login({"username": "a", "password": "b"})
        assert client.session.remaining_space == 230

        client.session.user.used_space = 300
        assert client.session.remaining_space == 50
        assert client.session.remaining_space == client.session.user.remaining_space

    def test_remaining_space_without_profile_is_zero(self):
        assert SessionStore().remaining_space == 0

    def test_token_without_profile_counts_as_authenticated(self):
        session = SessionStore(MemoryTokenStorage("t1"))
        session._token = "t1"
        state = session.auth_state()
        assert state.is_authenticated is True
        assert state.is_admin is False


class TestRefreshProfile:
    @pytest.mark.asyncio
    async def test_no_token_returns_none_without_network(self, client, service):
        assert await client.session.refresh_profile() is None
        assert service.requests == []

    @pytest.mark.asyncio
    async def test_refresh_replaces_profile(self, client, service):
        _login_ok(service)
        await client.session.login({"username": "a", "password": "b"})
        service.on("GET", "/me", json={**USER, "used_space": 0})

        user = await client.session.refresh_profile()

        assert user.used_space == 0
        assert client.session.remaining_space == 350

    @pytest.mark.asyncio
    async def test_failure_logs_out_and_reraises(self, client, service, storage):
        _login_ok(service)
        await client.session.login({"username": "a", "password": "b"})
        service.on("GET", "/me", status=500, json={"error": "boom"})

        with pytest.raises(DomainError) as exc_info:
            await client.session.refresh_profile()

        assert exc_info.value.status == 500
        assert client.session.is_authenticated is False
        assert storage.load() is None

    @pytest.mark.asyncio
    async def test_late_failure_for_a_replaced_token_keeps_new_session(self, client, service, storage):
        release = asyncio.Event()
        started = asyncio.Event()

        async def slow_reject(request: httpx.Request) -> httpx.Response:
            started.set()
            await release.wait()
            return httpx.Response(401, json={"error": "invalid or expired token"})

        _login_ok(service, token="t1")
        await client.session.login({"username": "a", "password": "b"})
        service.on("GET", "/me", handler=slow_reject)

        refresh = asyncio.create_task(client.session.refresh_profile())
        await started.wait()
        _login_ok(service, token="t2")
        await client.session.login({"username": "a", "password": "b"})
        release.set()
        with pytest.raises(AuthorizationError):
            await refresh

        assert client.session.token == "t2"
        assert client.session.user is not None
        assert storage.load() == "t2"


class TestLogout:
    def test_logout_without_session_is_safe(self):
        storage = MemoryTokenStorage()
        session = SessionStore(storage)
        session.logout()
        session.logout()
        assert session.token is None and session.user is None

    @pytest.mark.asyncio
    async def test_logout_makes_no_network_call(self, client, service):
        _login_ok(service)
        await client.session.login({"username": "a", "password": "b"})
        sent = len(service.requests)

        client.session.logout()

        assert len(service.requests) == sent
        assert client.session.token is None


class TestRestore:
    @pytest.mark.asyncio
    async def test_no_persisted_token_means_no_network(self, client, service):
        await client.start()
        assert client.session.is_authenticated is False
        assert service.requests == []

    @pytest.mark.asyncio
    async def test_persisted_token_is_adopted_and_profile_loaded(self, client, service, storage):
        storage.save("t9")
        service.on("GET", "/me", json=USER)

        await client.start()

        assert client.session.token == "t9"
        assert client.session.user.id == USER["id"]
        assert service.last.headers["Authorization"] == "Bearer t9"

    @pytest.mark.asyncio
    async def test_rejected_token_is_cleared_without_raising(self, client, service, storage):
        storage.save("stale")
        service.on("GET", "/me", status=401, json={"error": "invalid or expired token"})

        await client.start()

        assert client.session.is_authenticated is False
        assert storage.load() is None
        assert client.router.current.path == "/login"

    @pytest.mark.asyncio
    async def test_unreachable_service_is_swallowed_at_startup(self, client, service, storage):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        storage.save("t1")
        service.on("GET", "/me", handler=refuse)

        await client.start()

        assert client.session.is_authenticated is False


class TestSignUp:
    @pytest.mark.asyncio
    async def test_sign_up_refreshes_registration_flag(self, client, service):
        _login_ok(service, user={**USER, "is_registered": False})
        await client.session.login({"username": "a", "password": "b"})
        assert client.session.is_registered is False
        service.on("POST", "/signup", json={"message": "ok"})
        service.on("GET", "/me", json=USER)

        result = await client.session.sign_up()

        assert result == {"message": "ok"}
        assert client.session.is_registered is True


class TestUnauthorizedDuringUse:
    @pytest.mark.asyncio
    async def test_401_clears_session(self, client, service, storage):
        _login_ok(service)
        await client.session.login({"username": "a", "password": "b"})
        service.on("GET", "/me/roster", status=401, json={"error": "invalid or expired token"})

        with pytest.raises(AuthorizationError):
            await client.auth.get_my_roster()

        assert client.session.is_authenticated is False
        assert storage.load() is None
