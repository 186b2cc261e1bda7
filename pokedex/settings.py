"""Centralized configuration management for the Pokedex client."""

from __future__ import annotations

import logging
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so every consumer importing :mod:`pokedex.settings` sees the
# same values regardless of import order.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_API_BASE_URL = "https://pokeapi.co/api/v2/"
DEFAULT_SPRITE_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{number}.png"
)
DEFAULT_PAGE_SIZE = 20
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
DEFAULT_PAGE_CACHE_TTL_SECONDS = 300
DEFAULT_DETAIL_CACHE_TTL_SECONDS = 3600
DEFAULT_USER_AGENT = "pokedex-client/0.1"
DEFAULT_LOG_LEVEL = "INFO"
SPRITE_NUMBER_PLACEHOLDER = "{number}"


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Values are read from the process environment (and a local ``.env`` file).
    Helper properties translate raw values into the shapes consumed by the
    catalog source and the logging setup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        alias="POKEAPI_BASE_URL",
        description="Root of the REST API serving the catalog and detail resources.",
    )
    sprite_url_template: str = Field(
        default=DEFAULT_SPRITE_URL_TEMPLATE,
        alias="SPRITE_URL_TEMPLATE",
        description=(
            "Template used to synthesise list artwork URLs. The ``{number}``"
            " placeholder is replaced by the entry number."
        ),
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        alias="PAGE_SIZE",
        ge=1,
        le=100,
        description="Number of catalog entries requested per page.",
    )
    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        alias="REQUEST_TIMEOUT_SECONDS",
        gt=0,
        description="Timeout applied to every HTTP request issued by the catalog source.",
    )
    page_cache_ttl_seconds: int = Field(
        default=DEFAULT_PAGE_CACHE_TTL_SECONDS,
        alias="PAGE_CACHE_TTL_SECONDS",
        ge=0,
        description="Lifetime of cached catalog pages. Zero disables page caching.",
    )
    detail_cache_ttl_seconds: int = Field(
        default=DEFAULT_DETAIL_CACHE_TTL_SECONDS,
        alias="DETAIL_CACHE_TTL_SECONDS",
        ge=0,
        description="Lifetime of cached creature details. Zero disables detail caching.",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        alias="POKEDEX_USER_AGENT",
        description="User-Agent header sent with API requests.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    @property
    def normalized_api_base_url(self) -> str:
        """Return the API base URL with exactly one trailing slash."""

        return self.api_base_url.strip().rstrip("/") + "/"

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for questionable configuration."""

        warnings: list[str] = []

        if self.page_cache_ttl_seconds == 0 and self.detail_cache_ttl_seconds == 0:
            warnings.append(
                "PAGE_CACHE_TTL_SECONDS and DETAIL_CACHE_TTL_SECONDS are both 0 - "
                "every request will hit the remote API"
            )

        if SPRITE_NUMBER_PLACEHOLDER not in self.sprite_url_template:
            warnings.append(
                "SPRITE_URL_TEMPLATE has no {number} placeholder - "
                "every entry will share the same artwork URL"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_DETAIL_CACHE_TTL_SECONDS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_PAGE_CACHE_TTL_SECONDS",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "DEFAULT_SPRITE_URL_TEMPLATE",
    "DEFAULT_USER_AGENT",
    "SPRITE_NUMBER_PLACEHOLDER",
    "get_settings",
]
