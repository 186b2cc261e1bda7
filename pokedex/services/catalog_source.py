"""Catalog source protocol and the PokeAPI adapter built on ``httpx``.

The view-model only depends on :class:`CatalogSourceProtocol`.  The concrete
:class:`PokeApiCatalogSource` translates HTTP and parsing failures into the
taxonomy defined in :mod:`pokedex.errors` and keeps successful responses in an
in-process TTL cache.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from pokedex.errors import DecodeError, NetworkError, NotFoundError
from pokedex.schemas.catalog import CatalogPage
from pokedex.schemas.detail import CreatureDetail
from pokedex.services.caching import CacheableService, LocalCache, cached
from pokedex.services.catalog_cache import (
    catalog_page_cache_key,
    creature_detail_cache_key,
    deserialize_catalog_page,
    deserialize_creature_detail,
    serialize_catalog_page,
    serialize_creature_detail,
)
from pokedex.settings import AppSettings

logger = logging.getLogger(__name__)


class CatalogSourceProtocol(Protocol):
    """Minimal source surface required by the view-model."""

    async def fetch_page(self, limit: int, offset: int) -> CatalogPage:
        """Return ``limit`` records starting at ``offset`` plus the total count."""

    async def fetch_detail(
        self, name: str, *, case_normalized: bool = True
    ) -> CreatureDetail:
        """Return the full detail record for ``name``."""


class PokeApiCatalogSource(CacheableService):
    """Catalog source backed by the public PokeAPI REST endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float,
        user_agent: str,
        page_cache_ttl: int = 300,
        detail_cache_ttl: int = 3600,
        cache: LocalCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(cache=cache)
        self.page_cache_ttl = page_cache_ttl
        self.detail_cache_ttl = detail_cache_ttl
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        cache: LocalCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "PokeApiCatalogSource":
        return cls(
            base_url=settings.normalized_api_base_url,
            timeout=settings.request_timeout_seconds,
            user_agent=settings.user_agent,
            page_cache_ttl=settings.page_cache_ttl_seconds,
            detail_cache_ttl=settings.detail_cache_ttl_seconds,
            cache=cache if cache is not None else LocalCache(),
            transport=transport,
        )

    async def __aenter__(self) -> "PokeApiCatalogSource":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @cached(
        lambda _self, limit, offset: catalog_page_cache_key(limit=limit, offset=offset),
        ttl=lambda self: self.page_cache_ttl,
        serializer=serialize_catalog_page,
        deserializer=deserialize_catalog_page,
        deserialize_error_message=(
            "Failed to deserialize cached catalog page for key {key}: {error}"
        ),
    )
    async def fetch_page(self, limit: int, offset: int) -> CatalogPage:
        payload = await self._get_json("pokemon", params={"limit": limit, "offset": offset})
        try:
            return CatalogPage.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(
                "Malformed catalog page response", detail=str(exc)
            ) from exc

    async def fetch_detail(
        self, name: str, *, case_normalized: bool = True
    ) -> CreatureDetail:
        resolved = name.strip()
        if case_normalized:
            resolved = resolved.lower()
        if not resolved:
            raise NotFoundError("Creature name must not be empty")
        return await self._fetch_detail(resolved)

    @cached(
        lambda _self, name: creature_detail_cache_key(name),
        ttl=lambda self: self.detail_cache_ttl,
        serializer=serialize_creature_detail,
        deserializer=deserialize_creature_detail,
        deserialize_error_message=(
            "Failed to deserialize cached creature detail for key {key}: {error}"
        ),
    )
    async def _fetch_detail(self, name: str) -> CreatureDetail:
        payload = await self._get_json(f"pokemon/{name}")
        try:
            return CreatureDetail.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(
                f"Malformed detail response for '{name}'", detail=str(exc)
            ) from exc

    async def _get_json(
        self, path: str, *, params: dict[str, Any] | None = None
    ) -> Any:
        """Issue a GET request and return the decoded JSON body."""

        logger.debug("GET %s params=%s", path, params)
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                raise NotFoundError(
                    f"Resource not found: {path}", detail=str(exc)
                ) from exc
            raise NetworkError(
                f"Request to {path} failed with HTTP {status}", detail=str(exc)
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(
                f"Request to {path} failed: {exc.__class__.__name__}", detail=str(exc)
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(
                f"Response from {path} is not valid JSON", detail=str(exc)
            ) from exc


__all__ = ["CatalogSourceProtocol", "PokeApiCatalogSource"]
