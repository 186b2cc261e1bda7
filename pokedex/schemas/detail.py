from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NamedResource(BaseModel):
    name: str
    url: str | None = None


class AbilitySlot(BaseModel):
    ability: NamedResource
    is_hidden: bool = False
    slot: int | None = None


class TypeSlot(BaseModel):
    slot: int | None = None
    type: NamedResource


class StatValue(BaseModel):
    base_stat: int
    effort: int = 0
    stat: NamedResource


class Sprites(BaseModel):
    # PokeAPI reports missing variants as explicit nulls.
    front_default: str | None = None
    front_female: str | None = None
    front_shiny: str | None = None
    front_shiny_female: str | None = None
    back_default: str | None = None
    back_female: str | None = None
    back_shiny: str | None = None
    back_shiny_female: str | None = None


class CreatureDetail(BaseModel):
    """Full record for one creature as returned by ``GET pokemon/{name}``.

    ``height`` is expressed in decimetres and ``weight`` in hectograms; the
    presentation helpers divide both by ten for metric display.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    name: str
    base_experience: int | None = None
    height: int = 0
    weight: int = 0
    abilities: list[AbilitySlot] = Field(default_factory=list)
    stats: list[StatValue] = Field(default_factory=list)
    types: list[TypeSlot] = Field(default_factory=list)
    sprites: Sprites = Field(default_factory=Sprites)

    @property
    def ability_count(self) -> int:
        return len(self.abilities)
