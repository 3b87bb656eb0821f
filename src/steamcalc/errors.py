"""Exception types shared across the calculator and the asset cache."""

from __future__ import annotations


class SteamCalcError(Exception):
    """Base class for errors raised by :mod:`steamcalc`."""


class ConfigError(SteamCalcError):
    """Raised when a configuration file cannot be loaded or is malformed."""


class ValidationError(SteamCalcError, ValueError):
    """Raised when user input cannot be parsed into a number."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AssetCacheError(SteamCalcError):
    """Base class for asset cache lifecycle failures."""


class InstallError(AssetCacheError):
    """Raised when the precache step of a worker install fails."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


__all__ = [
    "SteamCalcError",
    "ConfigError",
    "ValidationError",
    "AssetCacheError",
    "InstallError",
]
