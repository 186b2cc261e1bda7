"""Pydantic schemas for catalog data and client state."""

from pokedex.schemas.catalog import (  # noqa: F401
    CatalogEntry,
    CatalogPage,
    ClientState,
    LoadStatus,
    SourceRecord,
)
from pokedex.schemas.detail import (  # noqa: F401
    AbilitySlot,
    CreatureDetail,
    NamedResource,
    Sprites,
    StatValue,
    TypeSlot,
)
from pokedex.schemas.presentation import (  # noqa: F401
    AboutSection,
    CreatureDetailView,
    SpritePair,
    StatBar,
)
