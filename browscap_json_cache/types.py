"""Package-wide type definitions."""

from __future__ import annotations

from typing import Any, NamedTuple, Protocol, runtime_checkable


class CacheResult(NamedTuple):
    """Outcome of a cache lookup.

    ``success`` is the only reliable signal of a hit: ``value`` may legitimately
    be ``None`` when a ``None`` payload was stored through an envelope.
    """

    value: Any
    success: bool

    @classmethod
    def missing(cls) -> CacheResult:
        """Return the result reported for absent or unreadable entries."""
        return cls(None, False)

    @classmethod
    def found(cls, value: Any) -> CacheResult:
        return cls(value, True)


@runtime_checkable
class CacheAdapter(Protocol):
    """Storage capability a :class:`~browscap_json_cache.proxy.VersionedCacheProxy` sits on."""

    def has_item(self, key: str) -> bool: ...

    def get_item(self, key: str) -> CacheResult: ...

    def set_item(self, key: str, value: Any) -> bool: ...

    def remove_item(self, key: str) -> bool: ...

    def flush(self) -> bool: ...

    def set_expiration(self, seconds: int) -> None: ...
