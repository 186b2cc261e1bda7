from __future__ import annotations

import random

import pytest

from pokedex.errors import DecodeError
from pokedex.schemas.catalog import SourceRecord
from pokedex.services.entry_factory import (
    build_entries,
    build_entry,
    build_image_url,
    extract_number,
    never_favorite,
    random_favorite_policy,
    title_case,
)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://pokeapi.co/api/v2/pokemon/25/", 25),
        ("https://pokeapi.co/api/v2/pokemon/6", 6),
        ("https://pokeapi.co/api/v2/pokemon/10034/", 10034),
    ],
)
def test_extract_number_handles_trailing_slash(url: str, expected: int) -> None:
    assert extract_number(url) == expected


@pytest.mark.parametrize(
    "url",
    [
        "https://pokeapi.co/api/v2/pokemon/pikachu/",
        "https://pokeapi.co/api/v2/pokemon//",
        "https://pokeapi.co/api/v2/pokemon/0/",
        "https://pokeapi.co/api/v2/pokemon/\u00b2/",
        "https://pokeapi.co/api/v2/pokemon/1\u00b2",
    ],
)
def test_extract_number_rejects_urls_without_a_valid_number(url: str) -> None:
    with pytest.raises(DecodeError):
        extract_number(url)


def test_build_image_url_substitutes_number() -> None:
    assert build_image_url(25) == (
        "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/25.png"
    )
    assert build_image_url(7, "https://cdn.example/{number}.webp") == (
        "https://cdn.example/7.webp"
    )


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("pikachu", "Pikachu"),
        ("mr-mime", "Mr-mime"),
        ("Eevee", "Eevee"),
        ("\u01c6emal", "\u01c5emal"),
        ("", ""),
    ],
)
def test_title_case_only_touches_first_character(raw: str, expected: str) -> None:
    assert title_case(raw) == expected


def test_build_entry_defaults_to_not_favorite() -> None:
    record = SourceRecord(name="pikachu", url="https://pokeapi.co/api/v2/pokemon/25/")

    entry = build_entry(record)

    assert entry.name == "Pikachu"
    assert entry.number == 25
    assert entry.image_url.endswith("/25.png")
    assert entry.favorite is False


def test_build_entries_uses_favorite_policy() -> None:
    records = [
        SourceRecord(name="bulbasaur", url="https://pokeapi.co/api/v2/pokemon/1/"),
        SourceRecord(name="ivysaur", url="https://pokeapi.co/api/v2/pokemon/2/"),
    ]

    entries = build_entries(records, favorite_policy=lambda record, number: number == 2)

    assert [entry.favorite for entry in entries] == [False, True]
    assert never_favorite(records[0], 1) is False


def test_random_favorite_policy_is_reproducible_with_seed() -> None:
    record = SourceRecord(name="x", url="https://pokeapi.co/api/v2/pokemon/1/")
    first = random_favorite_policy(random.Random(7))
    second = random_favorite_policy(random.Random(7))

    assert [first(record, n) for n in range(1, 21)] == [
        second(record, n) for n in range(1, 21)
    ]
