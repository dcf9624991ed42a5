from __future__ import annotations

import pytest

from heroes.domain.models import Hero
from heroes.services.roster import HeroRoster


@pytest.mark.asyncio
async def test_load_and_dashboard_slice(hero_service):
    roster = HeroRoster(hero_service)
    await roster.load()

    assert len(roster.heroes) == 10
    assert [hero.name for hero in roster.top_heroes()] == [
        "Narco",
        "Bombasto",
        "Celeritas",
        "Magneta",
    ]


@pytest.mark.asyncio
async def test_add_trims_name_and_ignores_blank(hero_service, messages):
    roster = HeroRoster(hero_service)
    await roster.load()

    assert await roster.add("   ") is None
    created = await roster.add("  Zorro ")

    assert created == Hero(id=21, name="Zorro")
    assert roster.heroes[-1] == created
    assert messages.messages[-1] == "HeroService: added hero w/ id=21"


@pytest.mark.asyncio
async def test_delete_removes_locally_and_remotely(hero_service, backend):
    roster = HeroRoster(hero_service)
    await roster.load()
    target = roster.heroes[0]

    await roster.delete(target)

    assert target not in roster.heroes
    assert target.id not in {hero.id for hero in backend.heroes}


@pytest.mark.asyncio
async def test_save_replaces_local_copy(hero_service, backend):
    roster = HeroRoster(hero_service)
    await roster.load()

    await roster.save(Hero(id=19, name="Magma Prime"))

    assert Hero(id=19, name="Magma Prime") in roster.heroes
    assert Hero(id=19, name="Magma Prime") in backend.heroes
