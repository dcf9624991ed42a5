"""Tests for the httpx-backed transport."""

from __future__ import annotations

import json

import httpx
import pytest

from heroes.config import ApiSettings
from heroes.services.exceptions import TransportFailure
from heroes.services.transport import HttpTransport


def _transport(handler) -> tuple[httpx.AsyncClient, HttpTransport]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    settings = ApiSettings(base_url="http://heroes.test/", heroes_path="/api/heroes/")
    return client, HttpTransport(client, settings)


@pytest.mark.asyncio
async def test_get_resolves_paths_against_collection():
    requested: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, json={"id": 11, "name": "Dr Nice"})

    client, transport = _transport(handler)
    async with client:
        payload = await transport.get("11")
        await transport.get("", params={"name": "ma"})

    assert payload == {"id": 11, "name": "Dr Nice"}
    assert requested == [
        "http://heroes.test/api/heroes/11",
        "http://heroes.test/api/heroes?name=ma",
    ]


@pytest.mark.asyncio
async def test_post_sends_json_body():
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"name": "Zorro"}
        return httpx.Response(201, json={"id": 99, "name": "Zorro"})

    client, transport = _transport(handler)
    async with client:
        payload = await transport.post("", json={"name": "Zorro"})

    assert payload == {"id": 99, "name": "Zorro"}


@pytest.mark.asyncio
async def test_empty_body_returns_none():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    client, transport = _transport(handler)
    async with client:
        assert await transport.delete("11") is None


@pytest.mark.asyncio
async def test_status_error_becomes_transport_failure():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "missing"})

    client, transport = _transport(handler)
    async with client:
        with pytest.raises(TransportFailure) as excinfo:
            await transport.get("42")

    assert excinfo.value.status_code == 404
    assert "http://heroes.test/api/heroes/42" in str(excinfo.value)
    assert "404 Not Found" in str(excinfo.value)


@pytest.mark.asyncio
async def test_network_error_becomes_transport_failure():
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, transport = _transport(handler)
    async with client:
        with pytest.raises(TransportFailure) as excinfo:
            await transport.put("", json={"id": 1, "name": "x"})

    assert excinfo.value.status_code is None
    assert "connection refused" in excinfo.value.message


@pytest.mark.asyncio
async def test_undecodable_body_becomes_transport_failure():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>not json</html>")

    client, transport = _transport(handler)
    async with client:
        with pytest.raises(TransportFailure, match="parsing"):
            await transport.get("")


@pytest.mark.asyncio
async def test_oversized_query_becomes_transport_failure():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    client, transport = _transport(handler)
    async with client:
        with pytest.raises(TransportFailure, match="Http failure during GET"):
            await transport.get("", params={"name": "a" * 70000})
