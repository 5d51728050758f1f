"""The shared request pipeline every domain operation goes through.

Two stages wrap the single suspension point (the transport call):

- `before_send` injects the bearer credential held by the session, if any
- `after_receive` classifies the response; a 401 tears the session down and
  redirects to the login route before the failure is re-raised to the caller,
  unless the request carried a credential the session has since replaced

Both stages run synchronously, so a token read or a teardown can never be split
by another task. Nothing is retried here; retries belong to the caller.
"""
from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from http import HTTPStatus
from typing import Any, Protocol

import httpx

from ..domain.routes import LOGIN_PATH
from ..errors import AuthorizationError, DomainError, TransportError
from ..logging_conf import get_logger
from ..settings import DEFAULT_BASE_URL

logger = get_logger("league_client.pipeline")

Navigate = Callable[[str], object]

REQUEST_TIMEOUT_S = 10.0


class CredentialSource(Protocol):
    @property
    def token(self) -> str | None: ...

    def logout(self) -> None: ...


class RequestPipeline:
    def __init__(
        self,
        session: CredentialSource,
        navigate: Navigate | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._session = session
        self._navigate = navigate
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=REQUEST_TIMEOUT_S,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def __aenter__(self) -> RequestPipeline:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------
    # Stages
    # ------------------------

    def before_send(self, request: httpx.Request) -> httpx.Request:
        """Attach `Authorization: Bearer <token>` when a token is held."""
        token = self._session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        return request

    def after_receive(self, response: httpx.Response) -> Any:
        """Return the decoded payload of a 2xx response or raise a typed error."""
        if response.is_success:
            return _payload(response)

        detail = _detail(response)
        if response.status_code == HTTPStatus.UNAUTHORIZED:
            self._teardown(response)
            raise AuthorizationError(detail)
        raise DomainError(response.status_code, detail, _payload(response))

    def _teardown(self, response: httpx.Response) -> None:
        sent = _bearer(response.request)
        current = self._session.token
        # The session moved on to another credential while this request was in flight.
        if current is not None and sent != current:
            logger.info(
                "session.stale_unauthorized",
                extra={
                    "event": "session_stale_unauthorized",
                    "method": response.request.method,
                    "path": response.request.url.path,
                },
            )
            return
        logger.warning(
            "session.unauthorized",
            extra={
                "event": "session_unauthorized",
                "method": response.request.method,
                "path": response.request.url.path,
            },
        )
        self._session.logout()
        if self._navigate is not None:
            try:
                self._navigate(LOGIN_PATH)
            except Exception:
                logger.exception(
                    "navigation.failed",
                    extra={"event": "navigation_failed", "target": LOGIN_PATH},
                )

    # ------------------------
    # Transport
    # ------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request through both stages and return its payload."""
        query = {k: v for k, v in (params or {}).items() if v is not None}
        request = self._client.build_request(
            method, path, json=json, params=query or None, files=files
        )
        self.before_send(request)

        start = time.perf_counter()
        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            self._log_transport_failure(request, start, e)
            raise TransportError(f"{method} {path} timed out") from e
        except httpx.TransportError as e:
            self._log_transport_failure(request, start, e)
            raise TransportError(f"{method} {path} failed: {e}") from e

        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "method": method,
                "path": request.url.path,
                "status_code": response.status_code,
                "elapsed_ms": round((time.perf_counter() - start) * 1000.0, 2),
            },
        )
        return self.after_receive(response)

    def _log_transport_failure(self, request: httpx.Request, start: float, exc: Exception) -> None:
        logger.warning(
            "request.transport_error",
            extra={
                "event": "request_transport_error",
                "method": request.method,
                "path": request.url.path,
                "elapsed_ms": round((time.perf_counter() - start) * 1000.0, 2),
                "error": str(exc),
            },
        )

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self.request("POST", path, json=json, files=files)

    async def put(self, path: str, *, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


def _payload(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _detail(response: httpx.Response) -> str:
    """Extract the service's error message, falling back to the raw body."""
    body = _payload(response)
    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            if body.get(key):
                return str(body[key])
    if isinstance(body, str) and body:
        return body
    return response.reason_phrase or f"HTTP {response.status_code}"


def _bearer(request: httpx.Request) -> str | None:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):]
