"""Disk-backed cache adapter storing one JSON document per key."""

from __future__ import annotations

import json
import logging
import os
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import ConfigurationError, ErrorCode
from .settings import AdapterConfig
from .types import CacheResult

__all__ = ["FileStoreAdapter"]

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


def _is_readable(path: Path) -> bool:
    return os.access(path, os.R_OK)


def _is_writable(path: Path) -> bool:
    return os.access(path, os.W_OK)


class FileStoreAdapter:
    """Cache adapter mapping each key to ``{root}/{key}.json``.

    Keys are used verbatim in file names, so callers must only supply keys
    that are safe as file names. A stored JSON ``null`` reads back as a miss;
    wrap payloads in an envelope when ``None`` is a meaningful value.
    """

    def __init__(self, config: AdapterConfig) -> None:
        self._readonly = config.readonly
        self.set_namespace(config.namespace)
        self.set_expiration(config.cache_expiration)
        self.set_cache_version(config.cache_version)
        self._root = self._prepare_root(config.root_dir)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> FileStoreAdapter:
        """Create an adapter from a loose ``{"dir": ..., ...}`` mapping."""
        return cls(AdapterConfig.from_params(params))

    @property
    def root(self) -> Path:
        return self._root

    @property
    def readonly(self) -> bool:
        return self._readonly

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def expiration(self) -> int:
        return self._expiration

    @property
    def cache_version(self) -> str:
        return self._cache_version

    def set_namespace(self, namespace: str) -> None:
        self._namespace = namespace

    def set_expiration(self, seconds: int) -> None:
        """Record the expiration interval; entries are not expired automatically."""
        self._expiration = int(seconds)

    def set_cache_version(self, version: str) -> None:
        self._cache_version = version

    def key_path(self, key: str) -> Path:
        """Return the file backing ``key``."""
        return self._root / f"{key}{_SUFFIX}"

    def has_item(self, key: str) -> bool:
        try:
            return self.key_path(key).exists()
        except OSError:
            return False

    def get_item(self, key: str) -> CacheResult:
        if not self.has_item(key):
            return CacheResult.missing()

        path = self.key_path(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Could not read cache file %s: %s", path, exc)
            return CacheResult.missing()

        try:
            value = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.debug("Cache file %s is not valid JSON: %s", path, exc)
            return CacheResult.missing()
        if value is None:
            return CacheResult.missing()
        return CacheResult.found(value)

    def set_item(self, key: str, value: Any) -> bool:
        path = self.key_path(key)
        try:
            payload = json.dumps(value, indent=4, ensure_ascii=False, allow_nan=False) + "\n"
        except (TypeError, ValueError) as exc:
            logger.warning("Cannot serialize value for cache key %r: %s", key, exc)
            return False

        try:
            self._write_atomic(path, payload.encode("utf-8"))
        except OSError as exc:
            logger.warning("Failed to write cache file %s: %s", path, exc)
            return False
        return True

    def remove_item(self, key: str) -> bool:
        path = self.key_path(key)
        try:
            path.unlink()
        except OSError as exc:
            logger.debug("Failed to remove cache file %s: %s", path, exc)
            return False
        return True

    def flush(self) -> bool:
        """Delete the root directory and everything below it."""
        if not self._root.is_dir():
            return False
        try:
            shutil.rmtree(self._root)
        except OSError as exc:
            logger.warning("Failed to flush cache directory %s: %s", self._root, exc)
            return False
        logger.debug("Flushed cache directory %s", self._root)
        return True

    def _prepare_root(self, root_dir: Path | str | None) -> Path:
        if root_dir is None or not str(root_dir).strip():
            raise ConfigurationError(
                "A directory to read/store the browscap cache files is required.",
                ErrorCode.CACHE_DIR_MISSING,
            )

        root = Path(root_dir)
        if root.is_file():
            # Tolerate configurations that point at a cache file instead of its directory.
            logger.debug("Cache path %s is a file; using its parent directory", root)
            root = root.parent
        elif not root.is_dir():
            try:
                root.mkdir(mode=0o777, parents=True, exist_ok=True)
            except OSError as exc:
                logger.debug("Could not create cache directory %s: %s", root, exc)
            if not root.is_dir():
                raise ConfigurationError(
                    "The file storage directory does not exist and could not be "
                    f'created. Please make sure the directory is writable: "{root}"',
                    path=root,
                )
            logger.debug("Created cache directory %s", root)

        if not _is_readable(root):
            raise ConfigurationError(
                f'It is not possible to read from the given cache path "{root}"',
                ErrorCode.CACHE_DIR_NOT_READABLE,
                path=root,
            )
        if not self._readonly and not _is_writable(root):
            raise ConfigurationError(
                f'It is not possible to write to the given cache path "{root}"',
                ErrorCode.CACHE_DIR_NOT_WRITABLE,
                path=root,
            )
        return root

    @staticmethod
    def _write_atomic(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            tmp_path.write_bytes(data)
            tmp_path.replace(path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
