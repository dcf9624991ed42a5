"""User-facing status messages."""

from __future__ import annotations

from collections import deque

from heroes.logging import logger


class MessageService:
    """Append-only message log the presentation layer polls for display.

    ``max_messages`` turns the log into a ring buffer; by default it is
    unbounded.
    """

    def __init__(self, max_messages: int | None = None) -> None:
        self._max_messages = max_messages
        self._messages: deque[str] = deque(maxlen=max_messages)

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    def add(self, message: str) -> None:
        self._messages.append(message)
        logger.debug("status_message", message=message)

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)


__all__ = ["MessageService"]
