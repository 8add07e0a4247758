"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
from collections import Counter
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from browscap_json_cache import settings
from browscap_json_cache.cache import FileStoreAdapter
from browscap_json_cache.settings import AdapterConfig
from browscap_json_cache.types import CacheResult

_ENV_VARS = (
    "BROWSCAP_CACHE_DIR",
    "BROWSCAP_CACHE_NAMESPACE",
    "BROWSCAP_CACHE_EXPIRATION",
    "BROWSCAP_CACHE_READONLY",
    "BROWSCAP_CACHE_VERSION",
    "BROWSCAP_DOTENV_PATH",
    "BROWSCAP_LOG_LEVEL",
)


class CountingAdapter:
    """In-memory adapter that records how often each operation is called."""

    def __init__(self, items: dict[str, Any] | None = None) -> None:
        self.items: dict[str, Any] = dict(items or {})
        self.calls: Counter[str] = Counter()
        self.expiration: int | None = None

    def has_item(self, key: str) -> bool:
        self.calls["has_item"] += 1
        return key in self.items

    def get_item(self, key: str) -> CacheResult:
        self.calls["get_item"] += 1
        if key not in self.items or self.items[key] is None:
            return CacheResult.missing()
        return CacheResult.found(self.items[key])

    def set_item(self, key: str, value: Any) -> bool:
        self.calls["set_item"] += 1
        self.items[key] = value
        return True

    def remove_item(self, key: str) -> bool:
        self.calls["remove_item"] += 1
        return self.items.pop(key, None) is not None

    def flush(self) -> bool:
        self.calls["flush"] += 1
        self.items.clear()
        return True

    def set_expiration(self, seconds: int) -> None:
        self.expiration = seconds


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep developer BROWSCAP_* variables and memoized settings out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings, "_CACHED_SETTINGS", None)
    yield
    # load_dotenv writes to os.environ directly.
    for name in _ENV_VARS:
        os.environ.pop(name, None)


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def adapter(cache_dir: Path) -> FileStoreAdapter:
    return FileStoreAdapter(AdapterConfig(root_dir=cache_dir))


@pytest.fixture
def counting_adapter() -> CountingAdapter:
    return CountingAdapter()
