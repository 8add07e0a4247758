"""
Browscap JSON cache package.

File-backed storage for browscap data: :class:`FileStoreAdapter` keeps one
JSON document per key and :class:`VersionedCacheProxy` adds the data-version
key suffix and the ``content`` envelope on top of any adapter.
"""

from __future__ import annotations

from browscap_json_cache.cache import FileStoreAdapter
from browscap_json_cache.errors import CacheError, ConfigurationError, ErrorCode
from browscap_json_cache.proxy import CACHE_LIFETIME, VersionedCacheProxy
from browscap_json_cache.settings import AdapterConfig, get_settings
from browscap_json_cache.types import CacheAdapter, CacheResult

__version__ = "0.1.0"

__all__ = [
    "CACHE_LIFETIME",
    "AdapterConfig",
    "CacheAdapter",
    "CacheError",
    "CacheResult",
    "ConfigurationError",
    "ErrorCode",
    "FileStoreAdapter",
    "VersionedCacheProxy",
    "get_settings",
]
