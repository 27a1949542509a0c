"""Operation scripts: parse a line-oriented list of cache calls and replay it.

Grammar (one operation per line, `#` comments and blank lines ignored)::

    set KEY VALUE     # VALUE is the rest of the line
    get KEY
    size
    capacity
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from lrukit.cache import LRUCache
from lrukit.errors import ReplayError

logger = logging.getLogger("lrukit.replay")

OpName = Literal["set", "get", "size", "capacity"]

_ARITY: dict[str, int] = {"set": 2, "get": 1, "size": 0, "capacity": 0}

_MISS = object()


@dataclass(frozen=True, slots=True)
class Operation:
    line_no: int
    name: OpName
    key: str | None = None
    value: str | None = None


@dataclass(frozen=True, slots=True)
class ReplayResult:
    op: OpName
    key: str | None = None
    value: object = None
    hit: bool | None = None

    def to_text(self) -> str:
        if self.op == "get":
            if self.hit:
                return f"hit {self.key} {self.value}"
            return f"miss {self.key}"
        return f"{self.op} {self.value}"

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {"op": self.op}
        if self.op == "get":
            out["key"] = self.key
            out["hit"] = bool(self.hit)
            if self.hit:
                out["value"] = self.value
        else:
            out["value"] = self.value
        return out


def parse_line(line: str, *, line_no: int) -> Operation | None:
    """Parse one script line; returns None for blanks and comments."""

    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    parts = stripped.split(None, 2)
    name = parts[0].lower()
    if name not in _ARITY:
        raise ReplayError(line_no, f"unknown operation {parts[0]!r}")

    args = parts[1:]
    if len(args) != _ARITY[name]:
        raise ReplayError(
            line_no, f"{name} takes {_ARITY[name]} argument(s), got {len(args)}"
        )

    if name == "set":
        return Operation(line_no=line_no, name="set", key=args[0], value=args[1])
    if name == "get":
        return Operation(line_no=line_no, name="get", key=args[0])
    if name == "size":
        return Operation(line_no=line_no, name="size")
    return Operation(line_no=line_no, name="capacity")


def parse_script(text: str) -> list[Operation]:
    ops: list[Operation] = []
    for i, line in enumerate(text.splitlines(), start=1):
        op = parse_line(line, line_no=i)
        if op is not None:
            ops.append(op)
    return ops


def apply_operation(cache: LRUCache, op: Operation) -> ReplayResult | None:
    """Run `op` against `cache`; `set` produces no result."""

    if op.name == "set":
        cache.set(op.key, op.value)
        return None
    if op.name == "get":
        value = cache.get(op.key, _MISS)
        if value is _MISS:
            return ReplayResult(op="get", key=op.key, hit=False)
        return ReplayResult(op="get", key=op.key, value=value, hit=True)
    if op.name == "size":
        return ReplayResult(op="size", value=cache.size())
    return ReplayResult(op="capacity", value=cache.capacity())


def replay(cache: LRUCache, ops: Iterable[Operation]) -> list[ReplayResult]:
    results: list[ReplayResult] = []
    count = 0
    for op in ops:
        count += 1
        res = apply_operation(cache, op)
        if res is not None:
            results.append(res)
    logger.debug("Replayed %d operations against %r (%s)", count, cache, cache.stats)
    return results
