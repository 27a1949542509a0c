from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from lrukit.cache import CacheStats, LRUCache
from lrukit.config import CacheConfig, load_config
from lrukit.errors import (
    ConfigurationError,
    EmptyOrderError,
    InvariantViolationError,
    LRUKitError,
    ReplayError,
    StaleHandleError,
)


def _package_version() -> str:
    try:
        return version("lrukit")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "CacheConfig",
    "CacheStats",
    "ConfigurationError",
    "EmptyOrderError",
    "InvariantViolationError",
    "LRUCache",
    "LRUKitError",
    "ReplayError",
    "StaleHandleError",
    "__version__",
    "load_config",
]
