from __future__ import annotations

import json
from pathlib import Path

import pytest

from trustpkg.core.utils.io import (
    atomic_write,
    ensure_directory,
    iter_yaml_files,
    read_json,
    read_text,
    read_yaml,
    write_json_atomic,
)


def test_write_json_atomic_creates_parents_and_trailing_newline(tmp_path: Path) -> None:
    target = tmp_path / "out" / "package.json"
    write_json_atomic(target, {"b": 1, "a": "ü"})

    text = target.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert text.index('"a"') < text.index('"b"')
    assert "ü" in text
    assert read_json(target) == {"a": "ü", "b": 1}


def test_write_json_atomic_can_keep_insertion_order(tmp_path: Path) -> None:
    target = tmp_path / "package.json"
    write_json_atomic(target, {"name": "x", "bundle": "y", "version": "z"}, sort_keys=False)
    assert list(json.loads(target.read_text())) == ["name", "bundle", "version"]


def test_atomic_write_leaves_no_temp_file_on_failure(tmp_path: Path) -> None:
    target = tmp_path / "package.json"
    target.write_text("original", encoding="utf-8")

    def _boom(f) -> None:
        f.write("partial")
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        atomic_write(target, _boom)

    assert target.read_text(encoding="utf-8") == "original"
    assert [p.name for p in tmp_path.iterdir()] == ["package.json"]


def test_read_json_and_read_text_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_json(tmp_path / "missing.json")
    with pytest.raises(FileNotFoundError, match="missing.txt"):
        read_text(tmp_path / "missing.txt")


def test_read_yaml_default_and_errors(tmp_path: Path) -> None:
    assert read_yaml(tmp_path / "missing.yaml", default={}) == {}

    broken = tmp_path / "broken.yaml"
    broken.write_text("a: [unclosed\n", encoding="utf-8")
    assert read_yaml(broken, default={"fallback": True}) == {"fallback": True}

    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert read_yaml(empty, default={}) == {}


def test_iter_yaml_files_prefers_yaml_extension(tmp_path: Path) -> None:
    (tmp_path / "b.yml").write_text("b: 1\n")
    (tmp_path / "a.yaml").write_text("a: 1\n")
    (tmp_path / "a.yml").write_text("a: 2\n")
    (tmp_path / "notes.txt").write_text("ignored\n")

    assert [p.name for p in iter_yaml_files(tmp_path)] == ["a.yaml", "b.yml"]
    assert iter_yaml_files(tmp_path / "nope") == []


def test_ensure_directory(tmp_path: Path) -> None:
    created = ensure_directory(tmp_path / "x" / "y")
    assert created.is_dir()

    with pytest.raises(FileNotFoundError):
        ensure_directory(tmp_path / "z", create=False)

    a_file = tmp_path / "file"
    a_file.write_text("")
    with pytest.raises(NotADirectoryError):
        ensure_directory(a_file)
