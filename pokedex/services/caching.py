"""In-process caching utilities shared by catalog sources.

The :func:`cached` decorator adds a thin asynchronous wrapper around source
methods: it consults a :class:`LocalCache` before invoking the wrapped call and
stores successful results afterwards, with optional serialisation hooks so
cached payloads stay plain JSON-compatible data.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, Concatenate, ParamSpec, TypeVar, cast

logger = logging.getLogger(__name__)

_LOCAL_CACHE_DEFAULT_TTL = 300

P = ParamSpec("P")
T = TypeVar("T")

CacheKeyBuilder = Callable[Concatenate["CacheableService", P], str | None]
CacheTtlResolver = Callable[["CacheableService"], int | None]
CacheSerializer = Callable[[T], Any]
CacheDeserializer = Callable[[Any], T]
DecoratedCallable = Callable[Concatenate["CacheableService", P], Awaitable[T]]


class LocalCache:
    """Dictionary-backed TTL cache guarded by an :class:`asyncio.Lock`."""

    def __init__(self, default_ttl: int = _LOCAL_CACHE_DEFAULT_TTL) -> None:
        self._default_ttl = default_ttl
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Any | None:
        """Return a cached value if it has not expired."""

        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            expires_at, value = entry
            if expires_at < time.time():
                self._entries.pop(key, None)
                return None
            return value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store ``value`` honouring an optional TTL."""

        ttl_seconds = ttl if ttl is not None and ttl > 0 else self._default_ttl
        async with self._lock:
            self._entries[key] = (time.time() + ttl_seconds, value)

    def __len__(self) -> int:
        return len(self._entries)


class CacheableService:
    """Base class exposing ``_cache_get``/``_cache_set`` helpers.

    Passing ``cache=None`` disables caching entirely; the helpers then behave
    as a permanent miss.
    """

    def __init__(self, cache: LocalCache | None = None) -> None:
        self._cache = cache

    async def _cache_get(self, key: str) -> Any:
        if self._cache is None:
            return None
        return await self._cache.get(key)

    async def _cache_set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if self._cache is not None and value is not None:
            await self._cache.set(key, value, ttl=ttl)


def cached(
    key_builder: CacheKeyBuilder[P],
    *,
    ttl: int | CacheTtlResolver | None = None,
    serializer: CacheSerializer[T] | None = None,
    deserializer: CacheDeserializer[T] | None = None,
    deserialize_error_message: str | None = None,
) -> Callable[[DecoratedCallable], DecoratedCallable]:
    """Decorate an async service method with transparent caching behaviour.

    Parameters
    ----------
    key_builder:
        Callable that returns the cache key for the invocation.  Returning
        ``None`` short-circuits caching for the call.
    ttl:
        Cache lifetime in seconds, or a callable resolving it from the service
        instance.  A resolved value of ``0`` disables caching for the call.
    serializer / deserializer:
        Optional hooks that convert between Python objects and JSON-serialisable
        payloads.  They are invoked before writing to the cache and after
        reading from it respectively.
    deserialize_error_message:
        Optional ``str.format`` template used for logging if the cached payload
        cannot be deserialised.
    """

    def decorator(func: DecoratedCallable) -> DecoratedCallable:
        @wraps(func)
        async def wrapper(
            self: "CacheableService", *args: P.args, **kwargs: P.kwargs
        ) -> T:
            resolved_ttl = ttl(self) if callable(ttl) else ttl
            cache_key = key_builder(self, *args, **kwargs)
            if resolved_ttl == 0:
                cache_key = None

            if cache_key:
                cached_value = await self._cache_get(cache_key)
                if cached_value is not None:
                    if deserializer is not None:
                        try:
                            return deserializer(cached_value)
                        except Exception as exc:
                            if deserialize_error_message:
                                logger.warning(
                                    deserialize_error_message.format(
                                        key=cache_key, error=exc
                                    )
                                )
                    else:
                        return cast(T, cached_value)

            result = await func(self, *args, **kwargs)

            if cache_key and result is not None:
                payload: Any = result
                if serializer is not None:
                    payload = serializer(result)
                try:
                    await self._cache_set(cache_key, payload, ttl=resolved_ttl)
                except Exception as exc:  # pragma: no cover - cache backend issues
                    logger.warning(
                        "Failed to persist cache entry for key %s: %s", cache_key, exc
                    )

            return result

        return wrapper

    return decorator


__all__ = ["CacheableService", "LocalCache", "cached"]
