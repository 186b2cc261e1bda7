"""Composition root: logging, environment checks, wiring and a small CLI."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

import httpx

from pokedex.schemas.catalog import ClientState
from pokedex.services.catalog_source import PokeApiCatalogSource
from pokedex.services.catalog_view_model import CatalogViewModel
from pokedex.services.detail_presentation import build_detail_view
from pokedex.services.entry_factory import never_favorite, random_favorite_policy
from pokedex.settings import AppSettings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(active_settings: AppSettings | None = None) -> None:
    resolved = active_settings or get_settings()
    logging.basicConfig(level=resolved.log_level_numeric, format=LOG_FORMAT)


def _validate_environment(*, active_settings: AppSettings | None = None) -> list[str]:
    """Log warnings for questionable configuration and return them."""

    resolved = active_settings or get_settings()
    warnings = resolved.optional_config_warnings()

    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)

    return warnings


def create_view_model(
    active_settings: AppSettings | None = None,
    *,
    random_favorites: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CatalogViewModel:
    """Wire a :class:`CatalogViewModel` against the PokeAPI source."""

    resolved = active_settings or get_settings()
    source = PokeApiCatalogSource.from_settings(resolved, transport=transport)
    return CatalogViewModel(
        source,
        page_size=resolved.page_size,
        sprite_url_template=resolved.sprite_url_template,
        favorite_policy=random_favorite_policy() if random_favorites else never_favorite,
    )


def render_entries(state: ClientState) -> list[str]:
    lines = [
        f"#{entry.number:03d} {entry.name}{' *' if entry.favorite else ''}"
        for entry in state.items
    ]
    lines.append(
        f"-- {len(state.items)} shown / {len(state.cached_items)} loaded, "
        f"page {state.current_page}{' (end)' if state.end_reached else ''}"
    )
    return lines


def render_detail(state: ClientState) -> list[str]:
    if state.current_detail is None:
        return []
    view = build_detail_view(state.current_detail)
    lines = [
        f"#{view.number:03d} {view.name} [{', '.join(view.type_names)}]",
        f"Height: {view.about.height}",
        f"Weight: {view.about.weight}",
        f"Experience: {view.about.experience}",
        f"Abilities: {view.about.abilities}",
    ]
    lines.extend(f"{bar.abbreviation or bar.name:>5} {bar.value:>3}" for bar in view.stats)
    if view.sprites.front:
        lines.append(f"Front sprite: {view.sprites.front}")
    if view.sprites.back:
        lines.append(f"Back sprite: {view.sprites.back}")
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokedex",
        description="Browse the creature catalog from the command line.",
    )
    parser.add_argument("--pages", type=int, default=1, help="Number of pages to load")
    parser.add_argument("--search", default="", help="Case-insensitive name filter")
    parser.add_argument(
        "--favorite",
        type=int,
        action="append",
        default=[],
        metavar="NUMBER",
        help="Mark an entry as favorite (repeatable)",
    )
    parser.add_argument(
        "--favorites-only", action="store_true", help="Only show favorite entries"
    )
    parser.add_argument(
        "--random-favorites",
        action="store_true",
        help="Seed favorites randomly while loading (demo mode)",
    )
    parser.add_argument("--detail", default=None, help="Show the detail of NAME")
    return parser


async def run(
    args: argparse.Namespace,
    *,
    active_settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    view_model = create_view_model(
        active_settings, random_favorites=args.random_favorites, transport=transport
    )
    try:
        for _ in range(max(args.pages, 0)):
            state = await view_model.load_next_page()
            if state.load_error:
                print(f"error: {state.load_error}")
                return 1
            if state.end_reached:
                break

        for number in args.favorite:
            view_model.toggle_favorite(number)
        if args.favorites_only:
            view_model.toggle_favorites_only()
        state = view_model.search(args.search)
        for line in render_entries(state):
            print(line)

        if args.detail:
            state = await view_model.load_detail(args.detail)
            if state.load_error:
                print(f"error: {state.load_error}")
                return 1
            for line in render_detail(state):
                print(line)
    finally:
        await view_model.aclose()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    active_settings = get_settings()
    configure_logging(active_settings)
    _validate_environment(active_settings=active_settings)
    return asyncio.run(run(args, active_settings=active_settings))


__all__ = [
    "LOG_FORMAT",
    "build_parser",
    "configure_logging",
    "create_view_model",
    "main",
    "render_detail",
    "render_entries",
    "run",
]
