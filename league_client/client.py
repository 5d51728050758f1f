"""`LeagueClient`: wires storage, session, router, pipeline and the API groups.

    async with LeagueClient() as client:      # restores a persisted session
        await client.session.login({"username": "a", "password": "b"})
        phase = await client.game.get_phase()
"""
from __future__ import annotations

import httpx

from .api import (
    AdminApi,
    AssetApi,
    AuctionApi,
    AuthApi,
    DraftApi,
    DrawApi,
    GameApi,
    InviteApi,
    PolicyApi,
    TradeApi,
)
from .domain.navigation import Router
from .domain.routes import ROUTES, RouteDescriptor
from .service.pipeline import RequestPipeline
from .service.session import SessionStore
from .service.storage import FileTokenStorage, TokenStorage
from .settings import ClientSettings


class LeagueClient:
    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        storage: TokenStorage | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        routes: tuple[RouteDescriptor, ...] = ROUTES,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.session = SessionStore(
            storage if storage is not None else FileTokenStorage(self.settings.token_path)
        )
        self.router = Router(self.session, routes)
        self.pipeline = RequestPipeline(
            self.session,
            self.router.push,
            base_url=self.settings.base_url,
            transport=transport,
        )

        self.auth = AuthApi(self.pipeline)
        self.game = GameApi(self.pipeline)
        self.assets = AssetApi(self.pipeline)
        self.draw = DrawApi(self.pipeline)
        self.draft = DraftApi(self.pipeline)
        self.trades = TradeApi(self.pipeline)
        self.auction = AuctionApi(self.pipeline)
        self.policy = PolicyApi(self.pipeline)
        self.admin = AdminApi(self.pipeline)
        self.invites = InviteApi(self.pipeline)

        self.session.bind(self.auth, self.game)

    async def start(self) -> None:
        """Restore a persisted session, if any; never raises for a stale token."""
        await self.session.restore()

    async def aclose(self) -> None:
        await self.pipeline.aclose()

    async def __aenter__(self) -> LeagueClient:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
