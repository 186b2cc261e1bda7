"""Pytest configuration helpers for the Pokedex client.

The ``pytest`` plugin system automatically imports ``tests.conftest``. We use
that behavior to ensure the repository root is present on ``sys.path`` before
any test modules import application code, and to share the fake catalog
sources across test modules.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tests import _ensure_repo_on_path

_ensure_repo_on_path()

from pokedex.schemas.detail import CreatureDetail  # noqa: E402
from pokedex.services.catalog_view_model import CatalogViewModel  # noqa: E402
from pokedex.settings import get_settings  # noqa: E402
from tests.support.fake_sources import (  # noqa: E402
    InMemoryCatalogSource,
    bulbasaur_payload,
)


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    """Drop the cached settings singleton so env overrides take effect."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def bulbasaur() -> CreatureDetail:
    return CreatureDetail.model_validate(bulbasaur_payload())


@pytest.fixture
def source(bulbasaur: CreatureDetail) -> InMemoryCatalogSource:
    """Forty records, served twenty at a time by the default view-model."""

    return InMemoryCatalogSource(details={"bulbasaur": bulbasaur})


@pytest.fixture
def view_model(source: InMemoryCatalogSource) -> CatalogViewModel:
    return CatalogViewModel(source, page_size=20)
