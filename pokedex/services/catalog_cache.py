"""Cache helper utilities for catalog pages and creature details.

Key generation and (de)serialisation live here so
:class:`~pokedex.services.catalog_source.PokeApiCatalogSource` stays focused on
HTTP access while cache policy is defined in a single location.
"""

from __future__ import annotations

from typing import Any

from pokedex.schemas.catalog import CatalogPage
from pokedex.schemas.detail import CreatureDetail

_PAGE_PREFIX = "catalog:page"
_DETAIL_PREFIX = "catalog:detail"


# ---------------------------------------------------------------------------
# Catalog page cache helpers
# ---------------------------------------------------------------------------
def catalog_page_cache_key(*, limit: int, offset: int) -> str | None:
    """Build a cache key for a catalog page.

    Negative or zero-sized windows are never cached.
    """

    if limit <= 0 or offset < 0:
        return None
    return f"{_PAGE_PREFIX}:{limit}:{offset}"


def serialize_catalog_page(page: CatalogPage) -> dict[str, Any]:
    return page.model_dump()


def deserialize_catalog_page(payload: Any) -> CatalogPage:
    if not isinstance(payload, dict):
        raise TypeError("Expected cached catalog page to be a mapping")
    return CatalogPage.model_validate(payload)


# ---------------------------------------------------------------------------
# Creature detail cache helpers
# ---------------------------------------------------------------------------
def creature_detail_cache_key(name: str) -> str | None:
    """Return the canonical cache key for a creature detail.

    Names are keyed exactly as requested; callers normalise case beforehand.
    """

    if not name:
        return None
    return f"{_DETAIL_PREFIX}:{name}"


def serialize_creature_detail(detail: CreatureDetail) -> dict[str, Any]:
    return detail.model_dump()


def deserialize_creature_detail(payload: Any) -> CreatureDetail:
    if not isinstance(payload, dict):
        raise TypeError("Expected cached creature detail to be a mapping")
    return CreatureDetail.model_validate(payload)


__all__ = [
    "catalog_page_cache_key",
    "creature_detail_cache_key",
    "deserialize_catalog_page",
    "deserialize_creature_detail",
    "serialize_catalog_page",
    "serialize_creature_detail",
]
