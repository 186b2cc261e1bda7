"""Incrementally loaded, append-only list of catalog entries.

:class:`PaginationCache` owns the authoritative loaded list, the page cursor
and the end-of-catalog flag.  It knows nothing about search or the published
client state; the view-model copies its results into
:class:`~pokedex.schemas.catalog.ClientState` snapshots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pokedex.schemas.catalog import CatalogEntry
from pokedex.services.catalog_source import CatalogSourceProtocol
from pokedex.services.entry_factory import (
    InitialFavoritePolicy,
    build_entries,
    never_favorite,
)
from pokedex.settings import DEFAULT_PAGE_SIZE, DEFAULT_SPRITE_URL_TEMPLATE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageLoadResult:
    """Outcome of one successful page request."""

    new_entries: tuple[CatalogEntry, ...]
    entries: tuple[CatalogEntry, ...]
    total_count: int
    current_page: int
    end_reached: bool


class PaginationCache:
    def __init__(
        self,
        source: CatalogSourceProtocol,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        sprite_url_template: str = DEFAULT_SPRITE_URL_TEMPLATE,
        favorite_policy: InitialFavoritePolicy = never_favorite,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be a positive integer")
        self._source = source
        self._page_size = page_size
        self._sprite_url_template = sprite_url_template
        self._favorite_policy = favorite_policy
        self._entries: list[CatalogEntry] = []
        self._current_page = 0
        self._end_reached = False

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def end_reached(self) -> bool:
        return self._end_reached

    @property
    def next_offset(self) -> int:
        return self._current_page * self._page_size

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    async def load_next_page(self) -> PageLoadResult:
        """Fetch the next page and append its entries.

        Any exception raised by the source or by entry derivation propagates
        before the cache is touched, so a failed call leaves the entries and
        the cursor exactly as they were.
        """

        offset = self.next_offset
        logger.debug("Requesting catalog page %d (limit=%d, offset=%d)",
                     self._current_page, self._page_size, offset)
        page = await self._source.fetch_page(self._page_size, offset)
        derived = build_entries(
            page.results,
            sprite_url_template=self._sprite_url_template,
            favorite_policy=self._favorite_policy,
        )

        known = {entry.number for entry in self._entries}
        fresh: list[CatalogEntry] = []
        for entry in derived:
            if entry.number in known:
                logger.warning(
                    "Dropping duplicate catalog entry #%d (%s) at offset %d",
                    entry.number,
                    entry.name,
                    offset,
                )
                continue
            known.add(entry.number)
            fresh.append(entry)

        self._entries.extend(fresh)
        self._current_page += 1
        self._end_reached = (
            self._end_reached or self._current_page * self._page_size >= page.count
        )
        logger.info(
            "Loaded catalog page %d: %d new entries, %d/%d loaded",
            self._current_page - 1,
            len(fresh),
            len(self._entries),
            page.count,
        )
        return PageLoadResult(
            new_entries=tuple(fresh),
            entries=tuple(self._entries),
            total_count=page.count,
            current_page=self._current_page,
            end_reached=self._end_reached,
        )

    def replace_entry(self, entry: CatalogEntry) -> bool:
        """Swap the stored entry sharing ``entry.number`` in place.

        Returns ``False`` when no loaded entry has that number.
        """

        for index, existing in enumerate(self._entries):
            if existing.number == entry.number:
                self._entries[index] = entry
                return True
        return False


__all__ = ["PageLoadResult", "PaginationCache"]
