"""Stateful owner of the client state snapshot.

:class:`CatalogViewModel` coordinates the pagination cache, the pure state
transitions and the catalog source.  It is the single writer of
:class:`~pokedex.schemas.catalog.ClientState`:

* every operation replaces the snapshot wholesale and notifies subscribers;
* only :meth:`load_next_page` and :meth:`load_detail` await the source, and
  their results are applied to the snapshot that is current *after* the
  await, so searches and toggles issued meanwhile are preserved;
* a second :meth:`load_next_page` while one is in flight is a no-op.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pokedex.errors import describe_error
from pokedex.schemas.catalog import ClientState, LoadStatus
from pokedex.schemas.detail import CreatureDetail
from pokedex.services import state_transitions
from pokedex.services.catalog_source import CatalogSourceProtocol
from pokedex.services.entry_factory import InitialFavoritePolicy, never_favorite
from pokedex.services.favorites_filter import find_entry
from pokedex.services.pagination_cache import PaginationCache
from pokedex.settings import DEFAULT_PAGE_SIZE, DEFAULT_SPRITE_URL_TEMPLATE

logger = logging.getLogger(__name__)

StateListener = Callable[[ClientState], None]


class CatalogViewModel:
    """Coordinates paging, searching, favorites and detail loading."""

    def __init__(
        self,
        source: CatalogSourceProtocol,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        sprite_url_template: str = DEFAULT_SPRITE_URL_TEMPLATE,
        favorite_policy: InitialFavoritePolicy = never_favorite,
    ) -> None:
        self._source = source
        self._pagination = PaginationCache(
            source,
            page_size=page_size,
            sprite_url_template=sprite_url_template,
            favorite_policy=favorite_policy,
        )
        self._state = ClientState()
        self._listeners: list[StateListener] = []

    # ------------------------------------------------------------------
    # Snapshot access
    # ------------------------------------------------------------------
    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def load_status(self) -> LoadStatus:
        return self._state.load_status

    @property
    def page_size(self) -> int:
        return self._pagination.page_size

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for every published snapshot.

        Returns a callable that removes the listener again.
        """

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self, state: ClientState) -> ClientState:
        if state is self._state:
            return state
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)
        return state

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def load_next_page(self) -> ClientState:
        """Request the next page unless one is already in flight.

        Cancelling the caller clears ``is_loading`` before the cancellation
        propagates, so a later call can retry.
        """

        if self._state.is_loading:
            logger.debug("Page request already in flight; ignoring load_next_page")
            return self._state
        if self._state.end_reached:
            logger.debug("Catalog exhausted at page %d", self._state.current_page)
            return self._state

        self._publish(state_transitions.begin_page_load(self._state))
        try:
            result = await self._pagination.load_next_page()
        except asyncio.CancelledError:
            logger.info(
                "Catalog page %d request cancelled", self._pagination.current_page
            )
            self._publish(state_transitions.abort_page_load(self._state))
            raise
        except Exception as exc:
            message = describe_error(exc)
            logger.warning(
                "Failed to load catalog page %d: %s",
                self._pagination.current_page,
                message,
            )
            return self._publish(state_transitions.fail_page_load(self._state, message))

        return self._publish(state_transitions.apply_page(self._state, result))

    def search(self, term: str) -> ClientState:
        return self._publish(
            state_transitions.search(self._state, term, self._pagination.entries)
        )

    def toggle_favorites_only(self) -> ClientState:
        return self._publish(
            state_transitions.toggle_favorites_only(
                self._state, self._pagination.entries
            )
        )

    def toggle_favorite(self, number: int) -> ClientState:
        current = find_entry(self._state.cached_items, number) or find_entry(
            self._state.items, number
        )
        if current is None:
            logger.debug("toggle_favorite ignored unknown entry #%d", number)
            return self._state

        # The pagination cache is updated first so a cache promotion inside
        # the transition already carries the flipped flag.
        self._pagination.replace_entry(
            current.model_copy(update={"favorite": not current.favorite})
        )
        return self._publish(
            state_transitions.toggle_favorite(
                self._state, number, self._pagination.entries
            )
        )

    async def load_detail(self, name: str) -> ClientState:
        """Fetch the detail record for ``name`` into ``current_detail``."""

        self._publish(state_transitions.begin_detail_load(self._state))
        try:
            detail: CreatureDetail = await self._source.fetch_detail(
                name, case_normalized=True
            )
        except asyncio.CancelledError:
            logger.info("Detail request for %r cancelled", name)
            self._publish(state_transitions.abort_detail_load(self._state))
            raise
        except Exception as exc:
            message = describe_error(exc)
            logger.warning("Failed to load detail for %r: %s", name, message)
            return self._publish(
                state_transitions.fail_detail_load(self._state, message)
            )

        logger.info("Loaded detail for #%d %s", detail.id, detail.name)
        return self._publish(state_transitions.apply_detail(self._state, detail))

    def clear_detail(self) -> ClientState:
        return self._publish(state_transitions.clear_detail(self._state))

    async def aclose(self) -> None:
        """Release the source when it exposes an ``aclose`` coroutine."""

        self._listeners.clear()
        closer = getattr(self._source, "aclose", None)
        if closer is not None:
            await closer()


__all__ = ["CatalogViewModel", "StateListener"]
