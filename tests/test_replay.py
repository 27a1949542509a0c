from __future__ import annotations

import pytest

from lrukit.cache import LRUCache
from lrukit.errors import ReplayError
from lrukit.replay import Operation, ReplayResult, parse_line, parse_script, replay

SCENARIO = """\
# capacity 3 walkthrough
set k1 v1
set k2 v2
set k3 v3
size
set k4 v4
get k1
get k4

get k2
set k5 v5
get k3
set k4 v44
set k6 v6
get k2
get k4
get k5
get k6
size
capacity
"""


def test_parse_line_skips_blanks_and_comments() -> None:
    assert parse_line("", line_no=1) is None
    assert parse_line("   ", line_no=2) is None
    assert parse_line("  # note", line_no=3) is None


def test_parse_set_keeps_rest_of_line_as_value() -> None:
    op = parse_line("set greeting hello there  world  ", line_no=4)
    assert op == Operation(line_no=4, name="set", key="greeting", value="hello there  world")


def test_parse_is_case_insensitive_on_operation_names() -> None:
    op = parse_line("GET a", line_no=1)
    assert op == Operation(line_no=1, name="get", key="a")


@pytest.mark.parametrize(
    "line",
    ["del a", "set a", "get", "get a b", "size 1", "capacity x"],
)
def test_parse_rejects_bad_lines(line: str) -> None:
    with pytest.raises(ReplayError) as ei:
        parse_line(line, line_no=9)
    assert ei.value.line_no == 9


def test_parse_script_reports_original_line_number() -> None:
    with pytest.raises(ReplayError) as ei:
        parse_script("set a 1\n\n# c\nbogus\n")
    assert ei.value.line_no == 4


def test_replay_scenario() -> None:
    cache = LRUCache(3)
    results = replay(cache, parse_script(SCENARIO))

    assert [r.to_text() for r in results] == [
        "size 3",
        "miss k1",
        "hit k4 v4",
        "hit k2 v2",
        "miss k3",
        "miss k2",
        "hit k4 v44",
        "hit k5 v5",
        "hit k6 v6",
        "size 3",
        "capacity 3",
    ]
    assert cache.items() == [("k4", "v44"), ("k5", "v5"), ("k6", "v6")]
    assert cache.stats.evictions == 3


def test_result_json_shapes() -> None:
    assert ReplayResult(op="get", key="a", value="1", hit=True).to_json() == {
        "op": "get",
        "key": "a",
        "hit": True,
        "value": "1",
    }
    assert ReplayResult(op="get", key="a", hit=False).to_json() == {
        "op": "get",
        "key": "a",
        "hit": False,
    }
    assert ReplayResult(op="size", value=2).to_json() == {"op": "size", "value": 2}
