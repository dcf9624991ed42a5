"""Request/response transport to the remote hero collection."""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from heroes.config import ApiSettings
from heroes.services.exceptions import TransportFailure


class Transport(Protocol):
    """Asynchronous access to one remote collection.

    Paths are relative to the collection root (``""`` is the collection
    itself, ``"11"`` a member). Each call returns the decoded JSON body, or
    ``None`` for an empty body, and raises ``TransportFailure`` otherwise.
    """

    async def get(self, path: str = "", params: dict[str, Any] | None = None) -> Any: ...

    async def post(self, path: str, json: Any) -> Any: ...

    async def put(self, path: str, json: Any) -> Any: ...

    async def delete(self, path: str) -> Any: ...


class HttpTransport:
    """``Transport`` over a shared ``httpx.AsyncClient``."""

    _headers = {"Content-Type": "application/json"}

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: ApiSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or ApiSettings()

    async def get(self, path: str = "", params: dict[str, Any] | None = None) -> Any:
        return await self._send("GET", path, params=params)

    async def post(self, path: str, json: Any) -> Any:
        return await self._send("POST", path, json=json)

    async def put(self, path: str, json: Any) -> Any:
        return await self._send("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self._send("DELETE", path)

    def url_for(self, path: str) -> str:
        base = self._settings.collection_url()
        path = str(path).strip("/")
        return f"{base}/{path}" if path else base

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        url = self.url_for(path)
        try:
            response = await self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers if json is not None else None,
                timeout=self._settings.request_timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise TransportFailure(
                f"Http failure response for {url}: {status_code} {exc.response.reason_phrase}",
                status_code=status_code,
            ) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportFailure(f"Http failure during {method} {url}: {exc}") from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportFailure(
                f"Http failure during parsing for {url}: {exc}",
                status_code=response.status_code,
            ) from exc


__all__ = ["HttpTransport", "Transport"]
