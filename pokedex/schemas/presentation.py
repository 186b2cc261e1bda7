from __future__ import annotations

from pydantic import BaseModel, Field


class AboutSection(BaseModel):
    height: str
    weight: str
    experience: str
    abilities: str


class StatBar(BaseModel):
    name: str
    abbreviation: str
    value: int
    max_value: int
    fraction: float = Field(ge=0.0, le=1.0)
    color: str


class SpritePair(BaseModel):
    front: str | None = None
    back: str | None = None


class CreatureDetailView(BaseModel):
    """Display-ready projection of a :class:`CreatureDetail`."""

    number: int
    name: str
    type_names: list[str] = Field(default_factory=list)
    type_colors: list[str] = Field(default_factory=list)
    about: AboutSection
    stats: list[StatBar] = Field(default_factory=list)
    sprites: SpritePair = Field(default_factory=SpritePair)
