"""Exceptions raised while setting up a cache."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path

__all__ = ["CacheError", "ConfigurationError", "ErrorCode"]


class ErrorCode(IntEnum):
    """Reason codes carried by :class:`ConfigurationError`."""

    GENERIC = 0
    CACHE_DIR_MISSING = 1
    CACHE_DIR_NOT_READABLE = 2
    CACHE_DIR_NOT_WRITABLE = 3


class CacheError(RuntimeError):
    """Base class for errors raised by the cache package."""


class ConfigurationError(CacheError):
    """Raised when a cache cannot be set up with the given configuration.

    Per-operation failures (missing keys, unreadable documents, failed writes)
    are never raised; they are reported through return values instead.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.GENERIC,
        *,
        path: Path | str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.path = Path(path) if path is not None else None
