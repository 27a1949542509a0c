from __future__ import annotations

from collections.abc import Hashable, KeysView
from dataclasses import dataclass


@dataclass(slots=True)
class CacheEntry:
    key: Hashable
    value: object
    handle: int


class EntryDirectory:
    """Hash map from key to its `CacheEntry` (value plus recency handle)."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[Hashable, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: Hashable) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: Hashable, value: object, handle: int) -> None:
        """Insert or overwrite the entry for `key` (last write wins)."""

        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = CacheEntry(key=key, value=value, handle=handle)
        else:
            entry.value = value
            entry.handle = handle

    def remove(self, key: Hashable) -> None:
        """Delete the entry for `key`; a missing key is ignored."""

        self._entries.pop(key, None)

    def size(self) -> int:
        return len(self._entries)

    def keys(self) -> KeysView[Hashable]:
        return self._entries.keys()

    def entries(self) -> list[CacheEntry]:
        return list(self._entries.values())
