"""Pydantic models shared across the service layer."""

from __future__ import annotations

from pydantic import BaseModel


class Hero(BaseModel):
    id: int | None = None
    name: str

    def to_payload(self) -> dict:
        """Body sent to the data service; a new hero carries no id."""

        return self.model_dump(exclude_none=True)


__all__ = ["Hero"]
