"""Versioned cache proxy used by browscap lookups."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Final

from .types import CacheAdapter, CacheResult

__all__ = ["CACHE_LIFETIME", "VersionedCacheProxy"]

logger = logging.getLogger(__name__)

CACHE_LIFETIME: Final[int] = 315_360_000  # ~10 years (60 * 60 * 24 * 365 * 10)

VERSION_KEY: Final[str] = "browscap.version"
RELEASE_DATE_KEY: Final[str] = "browscap.releaseDate"
TYPE_KEY: Final[str] = "browscap.type"

_CONTENT_FIELD: Final[str] = "content"


class VersionedCacheProxy:
    """Wrap a cache adapter, suffixing keys with the browscap data version.

    Values are stored inside a ``{"content": value}`` envelope so that a
    ``None`` payload is distinguishable from a missing entry. The data
    version, release date and type are read lazily from unversioned keys
    and kept for the lifetime of the instance; create a new proxy to pick up
    a changed version.
    """

    def __init__(self, adapter: CacheAdapter, update_interval: int = CACHE_LIFETIME) -> None:
        self._adapter = adapter
        self._adapter.set_expiration(update_interval)
        self._version: int | None = None
        self._release_date: str | None = None
        self._type: str | None = None

    @property
    def adapter(self) -> CacheAdapter:
        return self._adapter

    def get_version(self) -> int | None:
        """Return the data version, or ``None`` if it is not stored yet."""
        if self._version is None:
            value, success = self.get_item(VERSION_KEY, with_version=False)
            if success and value is not None:
                try:
                    self._version = int(value)
                except (TypeError, ValueError):
                    logger.warning("Ignoring non-numeric cache version %r", value)
        return self._version

    def get_release_date(self) -> str | None:
        if self._release_date is None:
            value, success = self.get_item(RELEASE_DATE_KEY, with_version=False)
            if success and value is not None:
                self._release_date = value
        return self._release_date

    def get_type(self) -> str | None:
        if self._type is None:
            value, success = self.get_item(TYPE_KEY, with_version=False)
            if success and value is not None:
                self._type = value
        return self._type

    def physical_key(self, key: str, with_version: bool = True) -> str:
        """Return the adapter key for ``key``.

        An unresolved version yields a key with an empty suffix (``"key."``)
        rather than an error.
        """
        if not with_version:
            return key
        version = self.get_version()
        return f"{key}.{'' if version is None else version}"

    def get_item(self, key: str, with_version: bool = True) -> CacheResult:
        cache_id = self.physical_key(key, with_version)
        if not self._adapter.has_item(cache_id):
            return CacheResult.missing()

        data, success = self._adapter.get_item(cache_id)
        if not success:
            return CacheResult.missing()
        if not isinstance(data, Mapping) or _CONTENT_FIELD not in data:
            logger.debug("Cache entry %r has no %r field", cache_id, _CONTENT_FIELD)
            return CacheResult.missing()
        return CacheResult.found(data[_CONTENT_FIELD])

    def set_item(self, key: str, content: Any, with_version: bool = True) -> bool:
        """Store ``content`` under ``key``; returns whether the write succeeded."""
        data = {_CONTENT_FIELD: content}
        return self._adapter.set_item(self.physical_key(key, with_version), data)

    def has_item(self, key: str, with_version: bool = True) -> bool:
        return self._adapter.has_item(self.physical_key(key, with_version))

    def remove_item(self, key: str, with_version: bool = True) -> bool:
        return self._adapter.remove_item(self.physical_key(key, with_version))

    def flush(self) -> bool:
        """Flush the underlying storage.

        The version, release date and type already read by this instance are
        kept, so they may be stale until a new proxy is created.
        """
        return self._adapter.flush()
