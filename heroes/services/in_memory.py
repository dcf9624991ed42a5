"""In-memory hero data service for local runs and tests."""

from __future__ import annotations

import json
from typing import Any, Iterable

import httpx

from heroes.domain.models import Hero
from heroes.logging import logger

SEED_HEROES = (
    Hero(id=11, name="Dr Nice"),
    Hero(id=12, name="Narco"),
    Hero(id=13, name="Bombasto"),
    Hero(id=14, name="Celeritas"),
    Hero(id=15, name="Magneta"),
    Hero(id=16, name="RubberMan"),
    Hero(id=17, name="Dynama"),
    Hero(id=18, name="Dr IQ"),
    Hero(id=19, name="Magma"),
    Hero(id=20, name="Tornado"),
)

FIRST_ID = 11


class InMemoryHeroBackend:
    """Serves the hero collection from a dict behind ``httpx.MockTransport``."""

    def __init__(
        self,
        heroes: Iterable[Hero] | None = None,
        *,
        collection_path: str = "/api/heroes",
    ) -> None:
        seed = SEED_HEROES if heroes is None else heroes
        self._heroes: dict[int, Hero] = {hero.id: hero.model_copy() for hero in seed}
        self._collection_path = "/" + collection_path.strip("/")

    @property
    def heroes(self) -> list[Hero]:
        return [hero.model_copy() for hero in self._heroes.values()]

    def gen_id(self) -> int:
        return max(self._heroes) + 1 if self._heroes else FIRST_ID

    def as_transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.rstrip("/")
        if path == self._collection_path:
            member = None
        elif path.startswith(self._collection_path + "/"):
            member = path[len(self._collection_path) + 1 :]
        else:
            return _error(404, f"Collection not found: {request.url.path}")

        logger.debug("in_memory_request", method=request.method, path=path)
        if member is None:
            if request.method == "GET":
                return self._list(request.url.params)
            if request.method == "POST":
                return self._create(request)
            if request.method == "PUT":
                return self._update(request)
            return _error(405, f"Method not allowed: {request.method}")

        try:
            hero_id = int(member)
        except ValueError:
            return _error(404, f"Hero not found: {member}")
        if request.method == "GET":
            hero = self._heroes.get(hero_id)
            if hero is None:
                return _error(404, f"Hero id={hero_id} not found")
            return httpx.Response(200, json=hero.model_dump())
        if request.method == "DELETE":
            if self._heroes.pop(hero_id, None) is None:
                return _error(404, f"Hero id={hero_id} not found")
            return httpx.Response(204)
        return _error(405, f"Method not allowed: {request.method}")

    def _list(self, params: httpx.QueryParams) -> httpx.Response:
        heroes = list(self._heroes.values())
        name = params.get("name")
        if name:
            heroes = [hero for hero in heroes if name.lower() in hero.name.lower()]
        hero_id = params.get("id")
        if hero_id:
            heroes = [hero for hero in heroes if str(hero.id) == hero_id]
        return httpx.Response(200, json=[hero.model_dump() for hero in heroes])

    def _create(self, request: httpx.Request) -> httpx.Response:
        body = _read_body(request)
        if body is None or not isinstance(body.get("id", 0), int):
            return _error(400, "Malformed hero body")
        hero_id = body.get("id") or self.gen_id()
        if hero_id in self._heroes:
            return _error(409, f"Hero id={hero_id} already exists")
        hero = Hero(id=hero_id, name=str(body.get("name", "")))
        self._heroes[hero_id] = hero
        return httpx.Response(201, json=hero.model_dump())

    def _update(self, request: httpx.Request) -> httpx.Response:
        body = _read_body(request)
        if body is None or not isinstance(body.get("id"), int):
            return _error(400, "Malformed hero body")
        hero_id = body["id"]
        if hero_id not in self._heroes:
            return _error(404, f"Hero id={hero_id} not found")
        self._heroes[hero_id] = Hero(id=hero_id, name=str(body.get("name", "")))
        return httpx.Response(204)


def _read_body(request: httpx.Request) -> dict[str, Any] | None:
    try:
        body = json.loads(request.content or b"null")
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _error(status_code: int, detail: str) -> httpx.Response:
    return httpx.Response(status_code, json={"error": detail})


__all__ = ["FIRST_ID", "InMemoryHeroBackend", "SEED_HEROES"]
