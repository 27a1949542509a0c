"""Bounded key-value cache with least-recently-used eviction.

`LRUCache` keeps two structures in lockstep: an `EntryDirectory` for O(1)
lookup by key and a `RecencyOrder` holding the keys from least to most
recently touched. Every `get` hit and every `set` moves the key to the
most-recent end; inserting a new key into a full cache first evicts the
least-recent one.

The cache is not thread-safe. `get` reorders internal state, so callers that
share an instance across threads must serialize all calls themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lrukit.directory import EntryDirectory
from lrukit.errors import ConfigurationError, InvariantViolationError, StaleHandleError
from lrukit.order import RecencyOrder

if TYPE_CHECKING:  # pragma: no cover
    from lrukit.config import CacheConfig

logger = logging.getLogger("lrukit.cache")


@dataclass(frozen=True, slots=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def lookups(self) -> int:
        return self.hits + self.misses


def validate_capacity(capacity: object) -> int:
    """Return `capacity` if it is a positive int, else raise ConfigurationError."""

    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ConfigurationError(
            f"capacity must be an integer, got {type(capacity).__name__}."
        )
    if capacity < 1:
        raise ConfigurationError(f"capacity must be >= 1, got {capacity}.")
    return capacity


class LRUCache:
    """A fixed-capacity mapping that evicts the least recently used key.

    >>> cache = LRUCache(2)
    >>> cache.set("a", 1)
    >>> cache.set("b", 2)
    >>> cache.get("a")
    1
    >>> cache.set("c", 3)  # evicts "b"
    >>> cache.get("b") is None
    True
    """

    __slots__ = ("_capacity", "_directory", "_order", "_hits", "_misses", "_evictions")

    def __init__(self, capacity: int) -> None:
        self._capacity = validate_capacity(capacity)
        self._directory = EntryDirectory()
        self._order = RecencyOrder()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @classmethod
    def from_config(cls, config: CacheConfig) -> LRUCache:
        return cls(config.capacity)

    def get(self, key: Hashable, default: object = None) -> object:
        """Return the value for `key` and mark it most recent, or `default` on a miss."""

        entry = self._directory.get(key)
        if entry is None:
            self._misses += 1
            return default

        self._order.remove(entry.handle)
        entry.handle = self._order.append_most_recent(key)
        self._hits += 1
        return entry.value

    def set(self, key: Hashable, value: object) -> None:
        """Insert or update `key`, evicting the least recent key when full."""

        entry = self._directory.get(key)
        if entry is not None:
            self._order.remove(entry.handle)
            self._directory.put(key, value, self._order.append_most_recent(key))
            return

        if self._directory.size() == self._capacity:
            self._evict_least_recent()
        self._directory.put(key, value, self._order.append_most_recent(key))

    def _evict_least_recent(self) -> None:
        victim = self._order.least_recent()
        entry = self._directory.get(victim)
        assert entry is not None
        self._order.remove(entry.handle)
        self._directory.remove(victim)
        self._evictions += 1
        logger.debug("Evicted least recently used key %r", victim)

    def size(self) -> int:
        return self._directory.size()

    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._directory.size()

    def __contains__(self, key: object) -> bool:
        # Membership test only; does not count as a use.
        return key in self._directory

    def peek(self, key: Hashable, default: object = None) -> object:
        """Return the value for `key` without touching its recency."""

        entry = self._directory.get(key)
        if entry is None:
            return default
        return entry.value

    def keys(self) -> list[Hashable]:
        """Snapshot of resident keys, least recent first."""

        return list(self._order)

    def items(self) -> list[tuple[Hashable, object]]:
        """Snapshot of resident `(key, value)` pairs, least recent first."""

        out: list[tuple[Hashable, object]] = []
        for key in self._order:
            entry = self._directory.get(key)
            assert entry is not None
            out.append((key, entry.value))
        return out

    @property
    def stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, evictions=self._evictions)

    def check_invariants(self) -> None:
        """Raise InvariantViolationError if the directory and order disagree."""

        size = self._directory.size()
        if size > self._capacity:
            raise InvariantViolationError(f"size {size} exceeds capacity {self._capacity}.")
        if len(self._order) != size:
            raise InvariantViolationError(
                f"recency order holds {len(self._order)} keys, directory holds {size}."
            )
        if set(self._order) != set(self._directory.keys()):
            raise InvariantViolationError("recency order and directory hold different keys.")

        for entry in self._directory.entries():
            try:
                key = self._order.key_at(entry.handle)
            except StaleHandleError as e:
                raise InvariantViolationError(
                    f"entry {entry.key!r} holds a stale handle {entry.handle}."
                ) from e
            if key != entry.key:
                raise InvariantViolationError(
                    f"entry {entry.key!r} handle {entry.handle} points at {key!r}."
                )

    def __repr__(self) -> str:
        return f"LRUCache(capacity={self._capacity}, size={self._directory.size()})"
