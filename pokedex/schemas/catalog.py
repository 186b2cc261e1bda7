"""Catalog list schemas and the immutable client state snapshot."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from pokedex.schemas.detail import CreatureDetail


class SourceRecord(BaseModel):
    """One row of a catalog page as delivered by the source."""

    name: str
    url: str


class CatalogPage(BaseModel):
    """A page of source records plus the total size of the catalog."""

    count: int = Field(ge=0)
    next: str | None = None
    previous: str | None = None
    results: list[SourceRecord] = Field(default_factory=list)


class CatalogEntry(BaseModel):
    """A displayable catalog entry. Identity is ``number``."""

    model_config = ConfigDict(frozen=True)

    name: str
    image_url: str
    number: int = Field(ge=1)
    favorite: bool = False


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


class ClientState(BaseModel):
    """Snapshot published by the view-model after every transition.

    Snapshots are frozen; transitions build a replacement with
    ``model_copy(update=...)``. ``items`` is always the filtered view of
    ``cached_items`` for ``last_search_term`` and ``favorites_only``.
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[CatalogEntry, ...] = ()
    cached_items: tuple[CatalogEntry, ...] = ()
    current_detail: CreatureDetail | None = None
    last_search_term: str = ""
    favorites_only: bool = False
    is_loading: bool = False
    is_detail_loading: bool = False
    load_error: str = ""
    end_reached: bool = False
    current_page: int = Field(default=0, ge=0)

    @property
    def load_status(self) -> LoadStatus:
        if self.is_loading:
            return LoadStatus.LOADING
        if self.load_error:
            return LoadStatus.ERROR
        return LoadStatus.IDLE


__all__ = [
    "CatalogEntry",
    "CatalogPage",
    "ClientState",
    "LoadStatus",
    "SourceRecord",
]
