"""Application entrypoint."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import httpx

from heroes.config import HeroSettings, get_settings
from heroes.logging import configure_logging, logger
from heroes.services.heroes import HeroService
from heroes.services.in_memory import InMemoryHeroBackend
from heroes.services.messages import MessageService
from heroes.services.roster import HeroRoster
from heroes.services.search import HeroSearch
from heroes.services.transport import HttpTransport


@dataclass(slots=True)
class AppContext:
    """Process-wide collaborators, built once and passed to every consumer."""

    settings: HeroSettings
    http_client: httpx.AsyncClient
    messages: MessageService
    hero_service: HeroService
    search: HeroSearch
    roster: HeroRoster

    async def aclose(self) -> None:
        await self.search.aclose()
        await self.http_client.aclose()


def build_context(
    settings: HeroSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AppContext:
    settings = settings or get_settings()
    if transport is None and settings.use_in_memory_backend:
        transport = InMemoryHeroBackend(
            collection_path=httpx.URL(settings.api.collection_url()).path
        ).as_transport()

    http_client = httpx.AsyncClient(transport=transport)
    messages = MessageService(max_messages=settings.max_messages)
    hero_service = HeroService(HttpTransport(http_client, settings.api), messages)
    return AppContext(
        settings=settings,
        http_client=http_client,
        messages=messages,
        hero_service=hero_service,
        search=HeroSearch(hero_service, debounce_seconds=settings.search.debounce_seconds),
        roster=HeroRoster(hero_service),
    )


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, environment=settings.environment)
    context = build_context(settings)
    logger.info(
        "heroes_starting",
        environment=settings.environment,
        in_memory=settings.use_in_memory_backend,
    )
    try:
        await context.roster.load()
        logger.info("dashboard", heroes=[hero.name for hero in context.roster.top_heroes()])

        context.search.subscribe(
            lambda batch: logger.info("search_results", heroes=[hero.name for hero in batch])
        )
        for term in ("m", "ma", "mag"):
            context.search.push_term(term)
        await asyncio.sleep(settings.search.debounce_seconds * 2)
        context.search.flush()
        await context.search.drain()

        for message in context.messages.messages:
            logger.info("status", message=message)
    finally:
        await context.aclose()


if __name__ == "__main__":
    asyncio.run(main())
