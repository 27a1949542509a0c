from __future__ import annotations

from pathlib import Path

import pytest

from lrukit.config import CacheConfig, find_project_root, load_config
from lrukit.errors import ConfigurationError


def _write(root: Path, *lines: str) -> Path:
    p = root / "lrukit.toml"
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return p


def test_load_minimal_config(tmp_path: Path) -> None:
    _write(tmp_path, "version = 1", "", "[cache]", "capacity = 128")
    cfg = load_config(root=tmp_path)

    assert cfg == CacheConfig(capacity=128)


def test_load_config_from_explicit_path(tmp_path: Path) -> None:
    sub = tmp_path / "conf"
    sub.mkdir()
    p = _write(sub, "version = 1", "[cache]", "capacity = 3")

    assert load_config(config_path=p).capacity == 3


def test_load_config_discovers_root_from_cwd(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "version = 1", "[cache]", "capacity = 5")
    deep = tmp_path / "a" / "b"
    deep.mkdir(parents=True)
    monkeypatch.chdir(deep)

    assert load_config().capacity == 5


def test_missing_capacity_has_no_default(tmp_path: Path) -> None:
    _write(tmp_path, "version = 1")
    with pytest.raises(ConfigurationError) as ei:
        load_config(root=tmp_path)
    assert "cache.capacity" in str(ei.value)


@pytest.mark.parametrize("value", ["0", "-1"])
def test_capacity_must_be_ge_1(tmp_path: Path, value: str) -> None:
    _write(tmp_path, "version = 1", "[cache]", f"capacity = {value}")
    with pytest.raises(ConfigurationError):
        load_config(root=tmp_path)


@pytest.mark.parametrize("value", ["true", '"3"', "3.0"])
def test_capacity_must_be_an_integer(tmp_path: Path, value: str) -> None:
    _write(tmp_path, "version = 1", "[cache]", f"capacity = {value}")
    with pytest.raises(ConfigurationError) as ei:
        load_config(root=tmp_path)
    assert "cache.capacity" in str(ei.value)


def test_cache_must_be_a_table(tmp_path: Path) -> None:
    _write(tmp_path, "version = 1", "cache = 3")
    with pytest.raises(ConfigurationError):
        load_config(root=tmp_path)


def test_version_is_required(tmp_path: Path) -> None:
    _write(tmp_path, "[cache]", "capacity = 3")
    with pytest.raises(ConfigurationError):
        load_config(root=tmp_path)


def test_unsupported_version_raises(tmp_path: Path) -> None:
    _write(tmp_path, "version = 2", "[cache]", "capacity = 3")
    with pytest.raises(ConfigurationError) as ei:
        load_config(root=tmp_path)
    assert "version" in str(ei.value)


def test_invalid_toml_raises(tmp_path: Path) -> None:
    p = tmp_path / "lrukit.toml"
    p.write_text("version = \n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(root=tmp_path)


def test_invalid_utf8_raises(tmp_path: Path) -> None:
    (tmp_path / "lrukit.toml").write_bytes(b"version = 1\n\xff\xfe\n")
    with pytest.raises(ConfigurationError):
        load_config(root=tmp_path)


def test_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(config_path=tmp_path / "lrukit.toml")


def test_find_project_root_success(tmp_path: Path) -> None:
    _write(tmp_path, "version = 1")
    deep = tmp_path / "a" / "b"
    deep.mkdir(parents=True)

    assert find_project_root(deep) == tmp_path
    some_file = deep / "x.py"
    some_file.write_text("x=1\n", encoding="utf-8")
    assert find_project_root(some_file) == tmp_path


def test_find_project_root_failure(tmp_path: Path) -> None:
    deep = tmp_path / "a" / "b"
    deep.mkdir(parents=True)
    with pytest.raises(ConfigurationError) as ei:
        find_project_root(deep)
    assert "lrukit.toml" in str(ei.value)


def test_cache_config_validates_directly() -> None:
    with pytest.raises(ConfigurationError):
        CacheConfig(capacity=0)
    assert CacheConfig(capacity=1).capacity == 1
