"""Favorite flags and search filtering over client state snapshots.

The helpers here never re-run a search on their own.  The composed
"toggle then refresh the visible list" transitions live in
:mod:`pokedex.services.state_transitions`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pokedex.schemas.catalog import CatalogEntry, ClientState


def matches(entry: CatalogEntry, term: str, favorites_only: bool) -> bool:
    """Return ``True`` when ``entry`` passes the name and favorites filters."""

    if favorites_only and not entry.favorite:
        return False
    return term.casefold() in entry.name.casefold()


def filter_entries(
    entries: Iterable[CatalogEntry], term: str, favorites_only: bool
) -> tuple[CatalogEntry, ...]:
    return tuple(entry for entry in entries if matches(entry, term, favorites_only))


def find_entry(entries: Iterable[CatalogEntry], number: int) -> CatalogEntry | None:
    return next((entry for entry in entries if entry.number == number), None)


def flip_entries(
    entries: Sequence[CatalogEntry], number: int
) -> tuple[CatalogEntry, ...]:
    """Return ``entries`` with the favorite flag of ``number`` inverted."""

    return tuple(
        entry.model_copy(update={"favorite": not entry.favorite})
        if entry.number == number
        else entry
        for entry in entries
    )


def flip_favorite(state: ClientState, number: int) -> ClientState:
    """Flip ``favorite`` for ``number`` in both ``items`` and ``cached_items``.

    Order is preserved and nothing is added or removed.  Unknown numbers
    return ``state`` itself.
    """

    if find_entry(state.cached_items, number) is None and find_entry(state.items, number) is None:
        return state
    return state.model_copy(
        update={
            "items": flip_entries(state.items, number),
            "cached_items": flip_entries(state.cached_items, number),
        }
    )


def flip_favorites_only(state: ClientState) -> ClientState:
    return state.model_copy(update={"favorites_only": not state.favorites_only})


__all__ = [
    "filter_entries",
    "find_entry",
    "flip_entries",
    "flip_favorite",
    "flip_favorites_only",
    "matches",
]
