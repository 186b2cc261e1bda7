"""Derive displayable :class:`CatalogEntry` objects from raw source records."""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable

from pokedex.errors import DecodeError
from pokedex.schemas.catalog import CatalogEntry, SourceRecord
from pokedex.settings import DEFAULT_SPRITE_URL_TEMPLATE

# Receives the source record and its extracted number; returns the initial
# ``favorite`` flag for the entry.
InitialFavoritePolicy = Callable[[SourceRecord, int], bool]


def never_favorite(record: SourceRecord, number: int) -> bool:
    return False


def random_favorite_policy(rng: random.Random | None = None) -> InitialFavoritePolicy:
    """Return a policy flipping a coin per entry.

    Used by the ``--random-favorites`` demo mode; pass a seeded ``rng`` for
    reproducible results.
    """

    generator = rng if rng is not None else random.Random()

    def _policy(record: SourceRecord, number: int) -> bool:
        return generator.random() < 0.5

    return _policy


def extract_number(reference_url: str) -> int:
    """Return the trailing numeric identifier of a resource URL.

    A single trailing ``/`` is ignored, so ``.../pokemon/25/`` and
    ``.../pokemon/25`` both yield ``25``.
    """

    trimmed = reference_url[:-1] if reference_url.endswith("/") else reference_url
    index = len(trimmed)
    while index > 0 and trimmed[index - 1].isdecimal():
        index -= 1
    digits = trimmed[index:]
    if not digits:
        raise DecodeError(f"No numeric identifier in reference URL: {reference_url!r}")
    number = int(digits)
    if number < 1:
        raise DecodeError(f"Entry numbers start at 1, got {number} from {reference_url!r}")
    return number


def build_image_url(number: int, template: str = DEFAULT_SPRITE_URL_TEMPLATE) -> str:
    return template.replace("{number}", str(number))


def title_case(name: str) -> str:
    """Titlecase the first character and leave the rest untouched."""

    if not name:
        return name
    return name[0].title() + name[1:]


def build_entry(
    record: SourceRecord,
    *,
    sprite_url_template: str = DEFAULT_SPRITE_URL_TEMPLATE,
    favorite_policy: InitialFavoritePolicy = never_favorite,
) -> CatalogEntry:
    number = extract_number(record.url)
    return CatalogEntry(
        name=title_case(record.name),
        image_url=build_image_url(number, sprite_url_template),
        number=number,
        favorite=favorite_policy(record, number),
    )


def build_entries(
    records: Iterable[SourceRecord],
    *,
    sprite_url_template: str = DEFAULT_SPRITE_URL_TEMPLATE,
    favorite_policy: InitialFavoritePolicy = never_favorite,
) -> list[CatalogEntry]:
    return [
        build_entry(
            record,
            sprite_url_template=sprite_url_template,
            favorite_policy=favorite_policy,
        )
        for record in records
    ]


__all__ = [
    "InitialFavoritePolicy",
    "build_entries",
    "build_entry",
    "build_image_url",
    "extract_number",
    "never_favorite",
    "random_favorite_policy",
    "title_case",
]
