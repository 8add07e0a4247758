from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from typing import Any, Callable

from browscap_json_cache.cache import FileStoreAdapter
from browscap_json_cache.proxy import VersionedCacheProxy
from browscap_json_cache.settings import AdapterConfig, get_settings
from browscap_json_cache.types import CacheResult


@dataclass(frozen=True)
class CacheSession:
    """Dispatch cache calls to the raw adapter or the versioned proxy."""

    adapter: FileStoreAdapter
    proxy: VersionedCacheProxy
    raw: bool = False
    with_version: bool = True

    def get(self, key: str) -> CacheResult:
        if self.raw:
            return self.adapter.get_item(key)
        return self.proxy.get_item(key, with_version=self.with_version)

    def set(self, key: str, value: Any) -> bool:
        if self.raw:
            return self.adapter.set_item(key, value)
        return self.proxy.set_item(key, value, with_version=self.with_version)

    def has(self, key: str) -> bool:
        if self.raw:
            return self.adapter.has_item(key)
        return self.proxy.has_item(key, with_version=self.with_version)

    def remove(self, key: str) -> bool:
        if self.raw:
            return self.adapter.remove_item(key)
        return self.proxy.remove_item(key, with_version=self.with_version)


def resolve_config(args: argparse.Namespace) -> AdapterConfig:
    if args.dir is not None:
        config = AdapterConfig.from_params({"dir": args.dir})
    else:
        config = get_settings()
    if args.readonly:
        config = config.replace(readonly=True)
    return config


def open_session(args: argparse.Namespace) -> CacheSession:
    adapter = FileStoreAdapter(resolve_config(args))
    return CacheSession(
        adapter=adapter,
        proxy=VersionedCacheProxy(adapter),
        raw=args.raw,
        with_version=not args.no_version,
    )


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


def cmd_get(session: CacheSession, args: argparse.Namespace) -> int:
    value, success = session.get(args.key)
    if not success:
        print(f"Key not found: {args.key}", file=sys.stderr)
        return 1
    _print_json(value)
    return 0


def cmd_set(session: CacheSession, args: argparse.Namespace) -> int:
    try:
        value = json.loads(args.value)
    except json.JSONDecodeError as exc:
        print(f"Input error: value is not valid JSON ({exc})", file=sys.stderr)
        return 1
    if not session.set(args.key, value):
        print(f"Failed to store key: {args.key}", file=sys.stderr)
        return 1
    return 0


def cmd_has(session: CacheSession, args: argparse.Namespace) -> int:
    present = session.has(args.key)
    print("true" if present else "false")
    return 0 if present else 1


def cmd_remove(session: CacheSession, args: argparse.Namespace) -> int:
    if not session.remove(args.key):
        print(f"Failed to remove key: {args.key}", file=sys.stderr)
        return 1
    return 0


def cmd_flush(session: CacheSession, args: argparse.Namespace) -> int:
    if not session.adapter.flush():
        print(f"Failed to flush {session.adapter.root}", file=sys.stderr)
        return 1
    return 0


def cmd_info(session: CacheSession, args: argparse.Namespace) -> int:
    proxy = session.proxy
    _print_json(
        {
            "version": proxy.get_version(),
            "release_date": proxy.get_release_date(),
            "type": proxy.get_type(),
        }
    )
    return 0


COMMANDS: dict[str, Callable[[CacheSession, argparse.Namespace], int]] = {
    "get": cmd_get,
    "set": cmd_set,
    "has": cmd_has,
    "remove": cmd_remove,
    "flush": cmd_flush,
    "info": cmd_info,
}
