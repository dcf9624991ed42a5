"""Hero data access with uniform failure handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from heroes.domain.models import Hero
from heroes.logging import logger
from heroes.services.exceptions import TransportFailure
from heroes.services.messages import MessageService
from heroes.services.transport import Transport

T = TypeVar("T")

_hero_list = TypeAdapter(list[Hero])


@dataclass(slots=True)
class OperationResult(Generic[T]):
    """Outcome of one remote call: the payload, or the safe default plus the error."""

    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _parse_hero(payload: Any) -> Hero:
    return Hero.model_validate(payload)


def _parse_heroes(payload: Any) -> list[Hero]:
    return _hero_list.validate_python(payload)


def _ignore(payload: Any) -> None:
    return None


class HeroService:
    """Reads and writes heroes through a ``Transport``.

    No method raises: a failed call is logged and answered with the
    operation's safe default (``[]`` for collections, ``None`` otherwise).
    Every call that reaches the transport adds exactly one status message.
    """

    def __init__(self, transport: Transport, messages: MessageService) -> None:
        self._transport = transport
        self._messages = messages

    async def get_heroes(self) -> list[Hero]:
        result = await self._execute(
            "get_heroes",
            lambda: self._transport.get(""),
            parse=_parse_heroes,
            default=[],
            describe=lambda _: "fetched heroes",
        )
        return result.value

    async def get_hero(self, hero_id: int) -> Hero | None:
        """GET hero by id. A missing hero answers 404 and yields ``None``."""

        result = await self._execute(
            f"get_hero id={hero_id}",
            lambda: self._transport.get(str(hero_id)),
            parse=_parse_hero,
            default=None,
            describe=lambda _: f"fetched hero id={hero_id}",
        )
        return result.value

    async def get_hero_no_404(self, hero_id: int) -> Hero | None:
        """Look a hero up by id filter, so "not found" is not a failure."""

        def _first(payload: Any) -> Hero | None:
            heroes = _parse_heroes(payload)
            return heroes[0] if heroes else None

        result = await self._execute(
            f"get_hero id={hero_id}",
            lambda: self._transport.get("", params={"id": hero_id}),
            parse=_first,
            default=None,
            describe=lambda hero: (
                f"fetched hero id={hero_id}" if hero else f"did not find hero id={hero_id}"
            ),
        )
        return result.value

    async def search(self, term: str) -> list[Hero]:
        if not term.strip():
            return []
        result = await self._execute(
            f'search term="{term}"',
            lambda: self._transport.get("", params={"name": term}),
            parse=_parse_heroes,
            default=[],
            describe=lambda heroes: (
                f'found heroes matching "{term}"' if heroes else f'no heroes matching "{term}"'
            ),
        )
        return result.value

    async def add_hero(self, hero: Hero) -> Hero | None:
        result = await self._execute(
            "add_hero",
            lambda: self._transport.post("", json=hero.to_payload()),
            parse=_parse_hero,
            default=None,
            describe=lambda created: f"added hero w/ id={created.id}",
        )
        return result.value

    async def update_hero(self, hero: Hero) -> None:
        await self._execute(
            f"update_hero id={hero.id}",
            lambda: self._transport.put("", json=hero.to_payload()),
            parse=_ignore,
            default=None,
            describe=lambda _: f"updated hero id={hero.id}",
        )

    async def delete_hero(self, hero: Hero | int) -> None:
        hero_id = hero if isinstance(hero, int) else hero.id
        if hero_id is None:
            self._fail("delete_hero id=None", "hero has no id", None)
            return
        await self._execute(
            f"delete_hero id={hero_id}",
            lambda: self._transport.delete(str(hero_id)),
            parse=_ignore,
            default=None,
            describe=lambda _: f"deleted hero id={hero_id}",
        )

    async def _execute(
        self,
        operation: str,
        request: Callable[[], Awaitable[Any]],
        *,
        parse: Callable[[Any], T],
        default: T,
        describe: Callable[[T], str],
    ) -> OperationResult[T]:
        try:
            value = parse(await request())
        except TransportFailure as exc:
            return self._fail(operation, exc.message, default)
        except ValidationError as exc:
            return self._fail(
                operation,
                f"malformed payload ({exc.error_count()} validation errors)",
                default,
            )

        self._log(describe(value))
        return OperationResult(value)

    def _fail(self, operation: str, error: str, default: T) -> OperationResult[T]:
        logger.error("hero_request_failed", operation=operation, error=error)
        self._log(f"{operation} failed: {error}")
        return OperationResult(default, error=error)

    def _log(self, message: str) -> None:
        self._messages.add(f"HeroService: {message}")


__all__ = ["HeroService", "OperationResult"]
