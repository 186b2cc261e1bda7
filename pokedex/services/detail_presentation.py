"""Presentation helpers turning a :class:`CreatureDetail` into display values.

Measurements arrive in decimetres and hectograms, so both are divided by ten
before formatting.  Heights use the legacy feet label, which prints the
two-decimal inch value split at the decimal point (0.7 m is ``2'76"``).
"""

from __future__ import annotations

import colorsys
import logging
import random
from collections.abc import Sequence

from pokedex.schemas.detail import CreatureDetail, Sprites, StatValue
from pokedex.schemas.presentation import (
    AboutSection,
    CreatureDetailView,
    SpritePair,
    StatBar,
)
from pokedex.services.entry_factory import title_case

logger = logging.getLogger(__name__)

KG_TO_LB = 2.20462262
METERS_TO_INCH_DISPLAY = 3.93700787
DEFAULT_STAT_MAX = 100
DEFAULT_FREE_COLOR = "#FFFFFF"
LOW_LIGHTNESS_THRESHOLD = 0.1

TYPE_COLORS: dict[str, str] = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
    "ice": "#96D9D6",
    "fighting": "#C22E28",
    "poison": "#A33EA1",
    "ground": "#E2BF65",
    "flying": "#A98FF3",
    "psychic": "#F95587",
    "bug": "#A6B91A",
    "rock": "#B6A136",
    "ghost": "#735797",
    "dragon": "#6F35FC",
    "dark": "#705746",
    "steel": "#B7B7CE",
    "fairy": "#D685AD",
}
UNKNOWN_TYPE_COLOR = "#000000"

STAT_COLORS: dict[str, str] = {
    "hp": "#F5FF00",
    "attack": "#9B6868",
    "defense": "#00A1FF",
    "special-attack": "#FF7F00",
    "special-defense": "#FF00E1",
    "speed": "#00FF26",
}
UNKNOWN_STAT_COLOR = "#FFFFFF"

STAT_ABBREVIATIONS: dict[str, str] = {
    "hp": "HP",
    "attack": "Atk",
    "defense": "Def",
    "special-attack": "SpAtk",
    "special-defense": "SpDef",
    "speed": "Spd",
}


# ---------------------------------------------------------------------------
# Measurements
# ---------------------------------------------------------------------------
def scale_measurement(raw: int) -> float:
    """Convert decimetres/hectograms into metres/kilograms."""

    return raw / 10


def format_number(value: float) -> str:
    """Render ``7.0`` as ``"7"`` and ``6.9`` as ``"6.9"``."""

    if value % 1.0 == 0.0:
        return str(int(value))
    return str(value)


def kg_to_lb(kilograms: str) -> str:
    return f"{float(kilograms) * KG_TO_LB:.1f}"


def height_to_feet(meters: str) -> str:
    """Legacy feet/inch label: ``"0.7"`` renders as ``2'76"``."""

    inches = f"{float(meters) * METERS_TO_INCH_DISPLAY:.2f}"
    whole, _, fraction = inches.partition(".")
    return f"{whole}'{fraction}\""


def build_about_section(detail: CreatureDetail) -> AboutSection:
    height = format_number(scale_measurement(detail.height))
    weight = format_number(scale_measurement(detail.weight))
    experience = detail.base_experience if detail.base_experience is not None else 0
    return AboutSection(
        height=f"{height} m ({height_to_feet(height)})",
        weight=f"{weight} kg ({kg_to_lb(weight)} lbs)",
        experience=str(experience),
        abilities=str(detail.ability_count),
    )


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------
def stat_abbreviation(stat_name: str) -> str:
    return STAT_ABBREVIATIONS.get(stat_name.lower(), "")


def stat_color(stat_name: str) -> str:
    return STAT_COLORS.get(stat_name.lower(), UNKNOWN_STAT_COLOR)


def type_color(type_name: str) -> str:
    return TYPE_COLORS.get(type_name.lower(), UNKNOWN_TYPE_COLOR)


def build_stat_bar(stat: StatValue, max_value: int = DEFAULT_STAT_MAX) -> StatBar:
    fraction = stat.base_stat / max_value if max_value > 0 else 0.0
    return StatBar(
        name=stat.stat.name,
        abbreviation=stat_abbreviation(stat.stat.name),
        value=stat.base_stat,
        max_value=max_value,
        fraction=min(max(fraction, 0.0), 1.0),
        color=stat_color(stat.stat.name),
    )


def build_stat_bars(
    detail: CreatureDetail, max_value: int = DEFAULT_STAT_MAX
) -> list[StatBar]:
    return [build_stat_bar(stat, max_value) for stat in detail.stats]


# ---------------------------------------------------------------------------
# Sprites
# ---------------------------------------------------------------------------
def select_sprites(sprites: Sprites) -> SpritePair:
    """Pick one front and one back sprite, preferring the default artwork."""

    front = (
        sprites.front_default
        or sprites.front_female
        or sprites.front_shiny
        or sprites.front_shiny_female
    )
    back = (
        sprites.back_default
        or sprites.back_female
        or sprites.back_shiny
        or sprites.back_shiny_female
    )
    return SpritePair(front=front, back=back)


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------
def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) == 8:
        # ARGB; alpha does not affect lightness.
        value = value[2:]
    if len(value) != 6:
        raise ValueError(f"Expected a #RRGGBB color, got {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def lightness(color: str) -> float:
    """Return the HSL lightness of ``color`` in ``[0, 1]``."""

    red, green, blue = _hex_to_rgb(color)
    _, light, _ = colorsys.rgb_to_hls(red / 255, green / 255, blue / 255)
    return light


def contrast_text_color(background: str) -> str:
    """White text on very dark backgrounds, black otherwise."""

    if lightness(background) < LOW_LIGHTNESS_THRESHOLD:
        return "#FFFFFF"
    return "#000000"


def pick_free_color(
    candidates: Sequence[str],
    used: list[str],
    rng: random.Random | None = None,
    default: str = DEFAULT_FREE_COLOR,
) -> str:
    """Return a random candidate not yet in ``used`` and record it there.

    When every candidate is taken ``default`` is returned and ``used`` is left
    unchanged.
    """

    generator = rng if rng is not None else random.Random()
    shuffled = list(candidates)
    generator.shuffle(shuffled)
    for color in shuffled:
        if color not in used:
            used.append(color)
            return color
    logger.debug("All %d candidate colors in use; falling back to %s",
                 len(candidates), default)
    return default


def build_detail_view(
    detail: CreatureDetail, *, stat_max_value: int = DEFAULT_STAT_MAX
) -> CreatureDetailView:
    """Bundle every derived value the detail screen renders."""

    ordered_types = sorted(
        detail.types, key=lambda slot: slot.slot if slot.slot is not None else 0
    )
    type_names = [slot.type.name for slot in ordered_types]
    return CreatureDetailView(
        number=detail.id,
        name=title_case(detail.name),
        type_names=type_names,
        type_colors=[type_color(name) for name in type_names],
        about=build_about_section(detail),
        stats=build_stat_bars(detail, stat_max_value),
        sprites=select_sprites(detail.sprites),
    )


__all__ = [
    "STAT_ABBREVIATIONS",
    "STAT_COLORS",
    "TYPE_COLORS",
    "build_about_section",
    "build_detail_view",
    "build_stat_bar",
    "build_stat_bars",
    "contrast_text_color",
    "format_number",
    "height_to_feet",
    "kg_to_lb",
    "lightness",
    "pick_free_color",
    "scale_measurement",
    "select_sprites",
    "stat_abbreviation",
    "stat_color",
    "type_color",
]
