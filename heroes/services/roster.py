"""Locally held hero list backing the list and dashboard views."""

from __future__ import annotations

from heroes.domain.models import Hero
from heroes.services.heroes import HeroService


class HeroRoster:
    def __init__(self, hero_service: HeroService) -> None:
        self._service = hero_service
        self.heroes: list[Hero] = []

    async def load(self) -> list[Hero]:
        self.heroes = await self._service.get_heroes()
        return self.heroes

    async def add(self, name: str) -> Hero | None:
        name = name.strip()
        if not name:
            return None
        hero = await self._service.add_hero(Hero(name=name))
        if hero is not None:
            self.heroes.append(hero)
        return hero

    async def delete(self, hero: Hero) -> None:
        # Removed locally before the request; a failed delete is only logged.
        self.heroes = [item for item in self.heroes if item.id != hero.id]
        await self._service.delete_hero(hero)

    async def save(self, hero: Hero) -> None:
        await self._service.update_hero(hero)
        self.heroes = [hero if item.id == hero.id else item for item in self.heroes]

    def top_heroes(self, count: int = 4) -> list[Hero]:
        return self.heroes[1 : 1 + count]


__all__ = ["HeroRoster"]
