"""Cache configuration loading.

This module only reads `lrukit.toml` and validates it. The cache itself never
calls in here; callers load a `CacheConfig` and pass it to
`LRUCache.from_config`.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lrukit.cache import validate_capacity
from lrukit.errors import ConfigurationError

CONFIG_FILENAME = "lrukit.toml"


@dataclass(frozen=True)
class CacheConfig:
    capacity: int

    def __post_init__(self) -> None:
        validate_capacity(self.capacity)


def find_project_root(start: Path) -> Path:
    """Walk upward from `start` (file or directory) looking for `lrukit.toml`."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        if (cur / CONFIG_FILENAME).is_file():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent

    raise ConfigurationError(f"Could not find {CONFIG_FILENAME} by walking upward from start path.")


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Expected [{name}] to be a table.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigurationError(f"Expected {name} to be an integer.")
    return value


def load_config(*, root: Path | None = None, config_path: Path | None = None) -> CacheConfig:
    """Load and validate `lrukit.toml`.

    If neither `root` nor `config_path` are provided, the project root is
    discovered by walking upward from the current working directory.
    """

    if config_path is None:
        if root is None:
            root = find_project_root(Path.cwd())
        config_path = root / CONFIG_FILENAME

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise ConfigurationError(f"Missing {CONFIG_FILENAME} at: {config_path}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

    version = data.get("version", None)
    if version is None:
        raise ConfigurationError(f"Missing required `version = 1` in {CONFIG_FILENAME}.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise ConfigurationError(f"Unsupported config version: {version_i} (expected 1).")

    cache_tbl = _as_table(data.get("cache"), name="cache")
    if "capacity" not in cache_tbl:
        raise ConfigurationError(f"Missing required cache.capacity in {CONFIG_FILENAME}.")
    capacity = _as_int(cache_tbl["capacity"], name="cache.capacity")

    # Validation
    if capacity < 1:
        raise ConfigurationError("Invalid config: cache.capacity must be >= 1.")

    return CacheConfig(capacity=capacity)
