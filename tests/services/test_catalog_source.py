"""Tests for the PokeAPI adapter using ``httpx.MockTransport``."""

from __future__ import annotations

import httpx
import pytest

from pokedex.errors import DecodeError, ErrorType, NetworkError, NotFoundError
from pokedex.services.caching import LocalCache
from pokedex.services.catalog_source import PokeApiCatalogSource
from pokedex.settings import AppSettings
from tests.support.fake_sources import bulbasaur_payload

BASE_URL = "https://pokeapi.test/api/v2/"


class RecordingHandler:
    """Serve canned responses and remember every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/api/v2/pokemon":
            limit = int(request.url.params["limit"])
            offset = int(request.url.params["offset"])
            results = [
                {"name": f"mon-{n}", "url": f"{BASE_URL}pokemon/{n}/"}
                for n in range(offset + 1, min(offset + limit, 30) + 1)
            ]
            return httpx.Response(200, json={"count": 30, "next": None, "previous": None, "results": results})
        if path == "/api/v2/pokemon/bulbasaur":
            return httpx.Response(200, json=bulbasaur_payload())
        if path == "/api/v2/pokemon/garbled":
            return httpx.Response(200, content=b"<html>oops</html>")
        if path == "/api/v2/pokemon/shapeless":
            return httpx.Response(200, json={"name": "shapeless"})
        if path == "/api/v2/pokemon/overloaded":
            return httpx.Response(503, json={"detail": "busy"})
        return httpx.Response(404, text="Not Found")


def _source(
    handler: RecordingHandler, *, cache: LocalCache | None = None, **kwargs
) -> PokeApiCatalogSource:
    return PokeApiCatalogSource(
        base_url=BASE_URL,
        timeout=5.0,
        user_agent="pokedex-tests",
        cache=cache,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_fetch_page_sends_limit_and_offset() -> None:
    handler = RecordingHandler()
    async with _source(handler) as source:
        page = await source.fetch_page(20, 20)

    assert page.count == 30
    assert [record.name for record in page.results][:2] == ["mon-21", "mon-22"]
    assert len(page.results) == 10
    request = handler.requests[0]
    assert request.url.params["limit"] == "20"
    assert request.url.params["offset"] == "20"
    assert request.headers["User-Agent"] == "pokedex-tests"


@pytest.mark.asyncio
async def test_fetch_detail_normalises_case_and_parses() -> None:
    handler = RecordingHandler()
    async with _source(handler) as source:
        detail = await source.fetch_detail("  Bulbasaur ")

    assert detail.id == 1
    assert detail.ability_count == 2
    assert detail.stats[0].stat.name == "hp"
    assert detail.sprites.front_default == "https://sprites.example/1.png"
    assert handler.requests[0].url.path == "/api/v2/pokemon/bulbasaur"


@pytest.mark.asyncio
async def test_fetch_detail_without_normalisation_keeps_case() -> None:
    handler = RecordingHandler()
    async with _source(handler) as source:
        with pytest.raises(NotFoundError):
            await source.fetch_detail("Bulbasaur", case_normalized=False)

    assert handler.requests[0].url.path == "/api/v2/pokemon/Bulbasaur"


@pytest.mark.asyncio
async def test_unknown_name_maps_to_not_found() -> None:
    async with _source(RecordingHandler()) as source:
        with pytest.raises(NotFoundError) as excinfo:
            await source.fetch_detail("missingno")

    assert excinfo.value.error_type is ErrorType.NOT_FOUND
    assert "pokemon/missingno" in str(excinfo.value)


@pytest.mark.asyncio
async def test_empty_name_is_rejected_without_a_request() -> None:
    handler = RecordingHandler()
    async with _source(handler) as source:
        with pytest.raises(NotFoundError):
            await source.fetch_detail("   ")

    assert handler.requests == []


@pytest.mark.asyncio
async def test_server_error_maps_to_network_error() -> None:
    async with _source(RecordingHandler()) as source:
        with pytest.raises(NetworkError) as excinfo:
            await source.fetch_detail("overloaded")

    assert "HTTP 503" in str(excinfo.value)


@pytest.mark.asyncio
async def test_transport_failure_maps_to_network_error() -> None:
    def explode(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    source = PokeApiCatalogSource(
        base_url=BASE_URL,
        timeout=5.0,
        user_agent="pokedex-tests",
        transport=httpx.MockTransport(explode),
    )
    async with source:
        with pytest.raises(NetworkError) as excinfo:
            await source.fetch_page(20, 0)

    assert "ConnectError" in str(excinfo.value)


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["garbled", "shapeless"])
async def test_malformed_bodies_map_to_decode_error(name: str) -> None:
    async with _source(RecordingHandler()) as source:
        with pytest.raises(DecodeError):
            await source.fetch_detail(name)


@pytest.mark.asyncio
async def test_successful_responses_are_cached() -> None:
    handler = RecordingHandler()
    cache = LocalCache()
    async with _source(handler, cache=cache) as source:
        first_page = await source.fetch_page(20, 0)
        second_page = await source.fetch_page(20, 0)
        first_detail = await source.fetch_detail("bulbasaur")
        second_detail = await source.fetch_detail("BULBASAUR")

    assert first_page == second_page
    assert first_detail == second_detail
    assert len(handler.requests) == 2
    assert len(cache) == 2


@pytest.mark.asyncio
async def test_failures_are_not_cached() -> None:
    handler = RecordingHandler()
    async with _source(handler, cache=LocalCache()) as source:
        for _ in range(2):
            with pytest.raises(NotFoundError):
                await source.fetch_detail("missingno")

    assert len(handler.requests) == 2


@pytest.mark.asyncio
async def test_zero_ttl_disables_caching() -> None:
    handler = RecordingHandler()
    cache = LocalCache()
    async with _source(handler, cache=cache, page_cache_ttl=0) as source:
        await source.fetch_page(20, 0)
        await source.fetch_page(20, 0)

    assert len(handler.requests) == 2
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_from_settings_uses_configured_values() -> None:
    handler = RecordingHandler()
    configured = AppSettings(
        POKEAPI_BASE_URL="https://pokeapi.test/api/v2",
        POKEDEX_USER_AGENT="configured-agent",
        DETAIL_CACHE_TTL_SECONDS=0,
    )

    async with PokeApiCatalogSource.from_settings(
        configured, transport=httpx.MockTransport(handler)
    ) as source:
        await source.fetch_detail("bulbasaur")
        await source.fetch_detail("bulbasaur")

    assert source.detail_cache_ttl == 0
    assert len(handler.requests) == 2
    assert handler.requests[0].headers["User-Agent"] == "configured-agent"
    assert str(handler.requests[0].url) == "https://pokeapi.test/api/v2/pokemon/bulbasaur"
