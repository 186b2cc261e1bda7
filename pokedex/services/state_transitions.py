"""Pure state transitions driving the catalog view-model.

Each function takes the latest :class:`ClientState` (plus whatever input the
operation needs) and returns the replacement snapshot.  Nothing here performs
I/O or keeps state, which keeps every transition testable in isolation.

``loaded`` arguments always refer to the pagination cache's full entry list.
"""

from __future__ import annotations

from collections.abc import Sequence

from pokedex.schemas.catalog import CatalogEntry, ClientState
from pokedex.schemas.detail import CreatureDetail
from pokedex.services.favorites_filter import (
    filter_entries,
    flip_favorite,
    flip_favorites_only,
)
from pokedex.services.pagination_cache import PageLoadResult


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
def promote_cache(state: ClientState, loaded: Sequence[CatalogEntry]) -> ClientState:
    """Refresh ``cached_items`` when the pagination cache has grown past it."""

    if len(state.cached_items) < len(loaded):
        return state.model_copy(update={"cached_items": tuple(loaded)})
    return state


def search(
    state: ClientState, term: str, loaded: Sequence[CatalogEntry] = ()
) -> ClientState:
    """Apply ``term`` (and the favorites flag) to the visible list.

    A term no longer than the previous one restarts from the full cached list;
    a longer term narrows the current result further.
    """

    state = promote_cache(state, loaded)
    items = state.items
    if len(term) <= len(state.last_search_term):
        items = state.cached_items

    if not term and not state.favorites_only:
        return state.model_copy(
            update={"items": state.cached_items, "last_search_term": term}
        )

    return state.model_copy(
        update={
            "items": filter_entries(items, term, state.favorites_only),
            "last_search_term": term,
        }
    )


# ---------------------------------------------------------------------------
# Favorites
# ---------------------------------------------------------------------------
def toggle_favorite(
    state: ClientState, number: int, loaded: Sequence[CatalogEntry] = ()
) -> ClientState:
    """Flip entry ``number``; re-run the active search in favorites-only mode."""

    toggled = flip_favorite(state, number)
    if toggled is state or not toggled.favorites_only:
        return toggled
    return search(toggled, toggled.last_search_term, loaded)


def toggle_favorites_only(
    state: ClientState, loaded: Sequence[CatalogEntry] = ()
) -> ClientState:
    flipped = flip_favorites_only(state)
    return search(flipped, flipped.last_search_term, loaded)


# ---------------------------------------------------------------------------
# Page loading
# ---------------------------------------------------------------------------
def begin_page_load(state: ClientState) -> ClientState:
    return state.model_copy(update={"is_loading": True})


def apply_page(state: ClientState, result: PageLoadResult) -> ClientState:
    """Merge a loaded page into the latest snapshot.

    New entries reach ``items`` only when they pass the active filter, so the
    visible list keeps matching ``last_search_term``/``favorites_only``.
    """

    state = promote_cache(state, result.entries)
    visible = state.items + filter_entries(
        result.new_entries, state.last_search_term, state.favorites_only
    )
    return state.model_copy(
        update={
            "items": visible,
            "end_reached": state.end_reached or result.end_reached,
            "current_page": max(state.current_page, result.current_page),
            "load_error": "",
            "is_loading": False,
        }
    )


def fail_page_load(state: ClientState, message: str) -> ClientState:
    return state.model_copy(update={"load_error": message, "is_loading": False})


def abort_page_load(state: ClientState) -> ClientState:
    """Drop the in-flight flag of a cancelled request; nothing else changes."""

    return state.model_copy(update={"is_loading": False})


# ---------------------------------------------------------------------------
# Detail loading
# ---------------------------------------------------------------------------
def begin_detail_load(state: ClientState) -> ClientState:
    return state.model_copy(update={"is_detail_loading": True})


def apply_detail(state: ClientState, detail: CreatureDetail) -> ClientState:
    return state.model_copy(
        update={
            "current_detail": detail,
            "load_error": "",
            "is_detail_loading": False,
        }
    )


def fail_detail_load(state: ClientState, message: str) -> ClientState:
    return state.model_copy(update={"load_error": message, "is_detail_loading": False})


def abort_detail_load(state: ClientState) -> ClientState:
    return state.model_copy(update={"is_detail_loading": False})


def clear_detail(state: ClientState) -> ClientState:
    return state.model_copy(update={"current_detail": None})


__all__ = [
    "abort_detail_load",
    "abort_page_load",
    "apply_detail",
    "apply_page",
    "begin_detail_load",
    "begin_page_load",
    "clear_detail",
    "fail_detail_load",
    "fail_page_load",
    "promote_cache",
    "search",
    "toggle_favorite",
    "toggle_favorites_only",
]
