"""Application configuration: packaged defaults merged with optional user overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "STEAMCALC_CONFIG"
ORIGIN_ENV_VAR = "STEAMCALC_ASSET_ORIGIN"
CACHE_DIR_ENV_VAR = "STEAMCALC_CACHE_DIR"
DEFAULT_CACHE_DIR = Path.home() / ".cache" / "steamcalc"


@dataclass(frozen=True)
class AssetCacheConfig:
    """Settings for the offline asset cache worker."""

    cache_name: str
    precache: tuple[str, ...]
    fallback: str
    origin: str | None = None
    cache_dir: Path = DEFAULT_CACHE_DIR


@dataclass(frozen=True)
class AppConfig:
    """Immutable configuration loaded once at startup."""

    saturation_table: tuple[tuple[float, float], ...]
    asset_cache: AssetCacheConfig


def load_defaults() -> Dict[str, Any]:
    """Load the default configuration shipped inside the package."""

    text = resources.files("steamcalc").joinpath("defaults").joinpath("defaults.json").read_text(encoding="utf-8")
    return json.loads(text)


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load a user configuration JSON file."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Failed to load configuration from {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration root in {path} must be a JSON object")
    return dict(data)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries without mutating the inputs."""

    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def build_config(data: Mapping[str, Any]) -> AppConfig:
    """Convert a merged configuration mapping into an :class:`AppConfig`."""

    try:
        table = tuple((float(pressure), float(temperature)) for pressure, temperature in data["saturation_table"])
        cache = data["asset_cache"]
        asset_cache = AssetCacheConfig(
            cache_name=str(cache["cache_name"]),
            precache=tuple(str(path) for path in cache["precache"]),
            fallback=str(cache["fallback"]),
            origin=cache.get("origin") or None,
            cache_dir=Path(cache.get("cache_dir") or DEFAULT_CACHE_DIR).expanduser(),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    return AppConfig(saturation_table=table, asset_cache=asset_cache)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Build the application configuration from defaults and environment hints."""

    merged = load_defaults()
    path = config_path
    if path is None and os.getenv(CONFIG_ENV_VAR):
        path = Path(os.environ[CONFIG_ENV_VAR])
    if path is not None:
        logger.info("Loading configuration overrides from %s", path)
        merged = deep_merge(merged, load_config_file(path))

    origin = os.getenv(ORIGIN_ENV_VAR)
    if origin:
        merged = deep_merge(merged, {"asset_cache": {"origin": origin}})
    cache_dir = os.getenv(CACHE_DIR_ENV_VAR)
    if cache_dir:
        merged = deep_merge(merged, {"asset_cache": {"cache_dir": cache_dir}})
    return build_config(merged)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Return the process-wide configuration, loading it on first use."""

    return load_config()


__all__ = [
    "AppConfig",
    "AssetCacheConfig",
    "CACHE_DIR_ENV_VAR",
    "CONFIG_ENV_VAR",
    "DEFAULT_CACHE_DIR",
    "ORIGIN_ENV_VAR",
    "build_config",
    "deep_merge",
    "get_config",
    "load_config",
    "load_config_file",
    "load_defaults",
]
