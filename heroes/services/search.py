"""Incremental hero search driven by raw keystroke terms."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol

from heroes.domain.models import Hero
from heroes.logging import logger

BatchConsumer = Callable[[list[Hero]], None]

_NOTHING = object()


class SupportsSearch(Protocol):
    async def search(self, term: str) -> list[Hero]: ...


class HeroSearch:
    """Turns a noisy stream of search terms into timely result batches.

    A term is dispatched once ``debounce_seconds`` pass without newer input,
    and only when it differs from the previously dispatched term. Each
    dispatch starts a new generation; a query result is delivered only while
    its generation is still the newest, so a slow response for an older term
    can never overwrite the results of a newer one. Superseded queries are
    left to finish and their results dropped.
    """

    def __init__(self, hero_service: SupportsSearch, *, debounce_seconds: float = 0.3) -> None:
        self._service = hero_service
        self._debounce_seconds = debounce_seconds
        self._timer: asyncio.TimerHandle | None = None
        self._pending_term: str | None = None
        self._last_dispatched: object = _NOTHING
        self._generation = 0
        self._tasks: set[asyncio.Task] = set()
        self._subscribers: list[BatchConsumer] = []
        self._latest: list[Hero] = []
        self._closed = False

    @property
    def latest(self) -> list[Hero]:
        return list(self._latest)

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, callback: BatchConsumer) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def push_term(self, term: str) -> None:
        """Feed one raw term; must be called from inside the running loop."""

        if self._closed:
            return
        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._pending_term = term
        self._timer = loop.call_later(self._debounce_seconds, self._on_quiet)

    def flush(self) -> None:
        """Accept the pending term now instead of waiting out the window."""

        if self._timer is None:
            return
        self._cancel_timer()
        self._on_quiet()

    async def drain(self) -> None:
        """Wait until every in-flight query has settled."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        self._closed = True
        self._cancel_timer()
        self._pending_term = None
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_quiet(self) -> None:
        self._timer = None
        term, self._pending_term = self._pending_term, None
        if term is None:
            return
        if term == self._last_dispatched:
            logger.debug("search_duplicate_skipped", term=term)
            return
        self._dispatch(term)

    def _dispatch(self, term: str) -> None:
        self._last_dispatched = term
        self._generation += 1
        generation = self._generation
        logger.debug("search_dispatched", term=term, generation=generation)

        task = asyncio.get_running_loop().create_task(self._run(term, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, term: str, generation: int) -> None:
        try:
            batch = list(await self._service.search(term))
        except Exception:
            logger.exception("search_failed", term=term, generation=generation)
            batch = []

        if generation != self._generation:
            logger.debug(
                "search_stale_discarded",
                term=term,
                generation=generation,
                current=self._generation,
            )
            return
        self._deliver(batch)

    def _deliver(self, batch: list[Hero]) -> None:
        self._latest = batch
        for callback in list(self._subscribers):
            try:
                callback(list(batch))
            except Exception:
                logger.exception("search_subscriber_failed")


__all__ = ["BatchConsumer", "HeroSearch", "SupportsSearch"]
