"""Client-side catalog engine for browsing PokeAPI creatures."""

__version__ = "0.1.0"
