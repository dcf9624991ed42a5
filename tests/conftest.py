"""Shared pytest fixtures for the hero service layer."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from heroes.config import ApiSettings
from heroes.services.heroes import HeroService
from heroes.services.in_memory import InMemoryHeroBackend
from heroes.services.messages import MessageService
from heroes.services.transport import HttpTransport


@pytest.fixture
def api_settings() -> ApiSettings:
    return ApiSettings(base_url="http://heroes.test/")


@pytest.fixture
def messages() -> MessageService:
    return MessageService()


@pytest.fixture
def backend() -> InMemoryHeroBackend:
    return InMemoryHeroBackend()


@pytest_asyncio.fixture
async def http_client(backend):
    async with httpx.AsyncClient(transport=backend.as_transport()) as client:
        yield client


@pytest.fixture
def hero_service(http_client, api_settings, messages) -> HeroService:
    return HeroService(HttpTransport(http_client, api_settings), messages)
