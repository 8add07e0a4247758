"""Cache configuration loading."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from dotenv import load_dotenv

from .errors import ConfigurationError, ErrorCode

_DEFAULT_NAMESPACE: Final[str] = "browscap-json"
_DEFAULT_CACHE_EXPIRATION: Final[int] = 0
_DEFAULT_CACHE_VERSION: Final[str] = "browscap-json-cache"

_CACHED_SETTINGS: AdapterConfig | None = None

# Accepted spellings for each field in loose parameter mappings.
_PARAM_ALIASES: Final[dict[str, tuple[str, ...]]] = {
    "root_dir": ("dir", "root_dir"),
    "namespace": ("namespace",),
    "cache_expiration": ("cacheExpiration", "cache_expiration"),
    "readonly": ("readonly",),
    "cache_version": ("cacheVersion", "cache_version"),
}


@dataclass(frozen=True)
class AdapterConfig:
    """Settings for a file-backed cache adapter."""

    root_dir: Path | None = None
    namespace: str = _DEFAULT_NAMESPACE
    cache_expiration: int = _DEFAULT_CACHE_EXPIRATION
    readonly: bool = False
    cache_version: str = _DEFAULT_CACHE_VERSION

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> AdapterConfig:
        """Build a config from a loose mapping, applying defaults first.

        Both ``cacheExpiration`` and ``cache_expiration`` style keys are
        recognised. Unknown keys are ignored, and ``None`` or blank strings
        count as absent.
        """
        values: dict[str, Any] = {}
        for field_name, aliases in _PARAM_ALIASES.items():
            for alias in aliases:
                raw = params.get(alias)
                if raw is None or (isinstance(raw, str) and not raw.strip()):
                    continue
                values[field_name] = raw
                break

        if "root_dir" in values:
            values["root_dir"] = Path(values["root_dir"]).expanduser()
        if "namespace" in values:
            values["namespace"] = str(values["namespace"])
        if "cache_expiration" in values:
            values["cache_expiration"] = _coerce_seconds(values["cache_expiration"])
        if "readonly" in values:
            values["readonly"] = _coerce_flag(values["readonly"])
        if "cache_version" in values:
            values["cache_version"] = str(values["cache_version"])
        return cls(**values)

    def replace(self, **changes: Any) -> AdapterConfig:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


_TRUE_VALUES: Final[set[str]] = {"1", "true", "yes", "on"}
_FALSE_VALUES: Final[set[str]] = {"0", "false", "no", "off"}


def _coerce_bool(value: str | None, *, default: bool) -> bool:
    """Convert common textual boolean representations to bool."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _coerce_bool(value, default=False)
    return False


def _coerce_seconds(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Cache expiration must be a whole number of seconds (got {value!r})."
        ) from exc


def get_settings(*, force_reload: bool = False) -> AdapterConfig:
    """Load configuration, optionally reloading from the environment."""
    global _CACHED_SETTINGS  # noqa: PLW0603
    if not force_reload and _CACHED_SETTINGS is not None:
        return _CACHED_SETTINGS

    dotenv_override = os.getenv("BROWSCAP_DOTENV_PATH")
    if dotenv_override:
        load_dotenv(dotenv_override, override=True)
    else:
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path=dotenv_path)

    cache_dir = os.getenv("BROWSCAP_CACHE_DIR")
    if not cache_dir or not cache_dir.strip():
        raise ConfigurationError(
            "BROWSCAP_CACHE_DIR must be set in the environment or .env file.",
            ErrorCode.CACHE_DIR_MISSING,
        )

    expiration_raw = os.getenv("BROWSCAP_CACHE_EXPIRATION")
    if expiration_raw is None or not expiration_raw.strip():
        cache_expiration = _DEFAULT_CACHE_EXPIRATION
    else:
        cache_expiration = max(_coerce_seconds(expiration_raw), 0)

    _CACHED_SETTINGS = AdapterConfig(
        root_dir=Path(cache_dir).expanduser(),
        namespace=os.getenv("BROWSCAP_CACHE_NAMESPACE", _DEFAULT_NAMESPACE),
        cache_expiration=cache_expiration,
        readonly=_coerce_bool(os.getenv("BROWSCAP_CACHE_READONLY"), default=False),
        cache_version=os.getenv("BROWSCAP_CACHE_VERSION", _DEFAULT_CACHE_VERSION),
    )
    return _CACHED_SETTINGS
