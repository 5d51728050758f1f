"""Shared fixtures for unit tests."""
from __future__ import annotations

import logging

import pytest
import pytest_asyncio

from league_client.client import LeagueClient
from league_client.logging_conf import is_json_handler
from league_client.service.storage import MemoryTokenStorage
from league_client.settings import ClientSettings
from tests.helpers import BASE_URL, FakeService


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def storage() -> MemoryTokenStorage:
    return MemoryTokenStorage()


@pytest_asyncio.fixture
async def client(service, storage):
    c = LeagueClient(ClientSettings(base_url=BASE_URL), storage=storage, transport=service.transport)
    yield c
    await c.aclose()


@pytest.fixture(autouse=True)
def json_logging_isolated():
    """Run each test without the JSON root handler and drop any it installs."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if is_json_handler(h)]
    saved_level = root.level
    for handler in saved:
        root.removeHandler(handler)
    yield root
    for handler in [h for h in root.handlers if is_json_handler(h)]:
        handler.close()
        root.removeHandler(handler)
    for handler in saved:
        root.addHandler(handler)
    root.setLevel(saved_level)
