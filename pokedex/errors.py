"""Error taxonomy for catalog source failures.

Every failure raised by a catalog source is one of the classes below. The
view-model collapses them into the single ``load_error`` string carried by
:class:`~pokedex.schemas.catalog.ClientState`; :func:`describe_error` is the
one place that conversion happens.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "CatalogSourceError",
    "DecodeError",
    "ErrorType",
    "NetworkError",
    "NotFoundError",
    "describe_error",
]


class ErrorType(str, Enum):
    """Types of errors that can occur while talking to the catalog source."""

    NETWORK_ERROR = "network_error"
    NOT_FOUND = "not_found"
    DECODE_ERROR = "decode_error"


class CatalogSourceError(Exception):
    """Base class for failures reported by a catalog source."""

    error_type: ErrorType = ErrorType.NETWORK_ERROR

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class NetworkError(CatalogSourceError):
    """Transport failure or unexpected HTTP status."""

    error_type = ErrorType.NETWORK_ERROR


class NotFoundError(CatalogSourceError):
    """The requested creature does not exist."""

    error_type = ErrorType.NOT_FOUND


class DecodeError(CatalogSourceError):
    """The response body could not be parsed into the expected shape."""

    error_type = ErrorType.DECODE_ERROR


def describe_error(exc: BaseException) -> str:
    """Return the human-readable message stored in ``ClientState.load_error``.

    Exceptions without a message fall back to their class name so the result
    is never empty.
    """

    message = str(exc).strip()
    if message:
        return message
    return type(exc).__name__
