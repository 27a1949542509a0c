"""Recency order: keys from least to most recently used.

Nodes live in a slot map (parallel lists indexed by an integer handle) rather
than in per-node objects, so the directory holds plain ints instead of
references into the list. Freed slots are recycled through a free list.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator

from lrukit.errors import EmptyOrderError, StaleHandleError

# Link value for "no neighbour".
_NIL = -1

_FREE = object()


class RecencyOrder:
    """Doubly linked sequence of keys addressed by stable integer handles.

    The head is the least recently used key and the tail the most recently
    used one. A handle stays valid across insertions and removals of other
    elements and is invalidated only when its own element is removed.
    """

    __slots__ = ("_keys", "_prev", "_next", "_free", "_head", "_tail", "_len")

    def __init__(self) -> None:
        self._keys: list[object] = []
        self._prev: list[int] = []
        self._next: list[int] = []
        self._free: list[int] = []
        self._head = _NIL
        self._tail = _NIL
        self._len = 0

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[Hashable]:
        """Iterate keys from least to most recent."""

        h = self._head
        while h != _NIL:
            yield self._keys[h]  # type: ignore[misc]
            h = self._next[h]

    def _alloc(self, key: Hashable) -> int:
        if self._free:
            h = self._free.pop()
            self._keys[h] = key
            return h
        self._keys.append(key)
        self._prev.append(_NIL)
        self._next.append(_NIL)
        return len(self._keys) - 1

    def _check_live(self, handle: int) -> None:
        if not (0 <= handle < len(self._keys)) or self._keys[handle] is _FREE:
            raise StaleHandleError(f"Handle {handle} does not refer to a live element.")

    def append_most_recent(self, key: Hashable) -> int:
        """Insert `key` at the tail and return its handle."""

        h = self._alloc(key)
        self._prev[h] = self._tail
        self._next[h] = _NIL
        if self._tail == _NIL:
            self._head = h
        else:
            self._next[self._tail] = h
        self._tail = h
        self._len += 1
        return h

    def remove(self, handle: int) -> None:
        """Unlink the element at `handle` and release its slot."""

        self._check_live(handle)
        prev_h = self._prev[handle]
        next_h = self._next[handle]
        if prev_h == _NIL:
            self._head = next_h
        else:
            self._next[prev_h] = next_h
        if next_h == _NIL:
            self._tail = prev_h
        else:
            self._prev[next_h] = prev_h

        self._keys[handle] = _FREE
        self._prev[handle] = _NIL
        self._next[handle] = _NIL
        self._free.append(handle)
        self._len -= 1

    def least_recent(self) -> Hashable:
        """Return the head key without removing it."""

        if self._head == _NIL:
            raise EmptyOrderError("Recency order is empty.")
        return self._keys[self._head]  # type: ignore[return-value]

    def key_at(self, handle: int) -> Hashable:
        """Return the key stored at a live `handle`."""

        self._check_live(handle)
        return self._keys[handle]  # type: ignore[return-value]
