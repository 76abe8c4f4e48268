import json
from pathlib import Path
import threading

import pytest

from vibematch.core import (
    ensure_parent_dir,
    file_lock,
    lock_path_for,
    read_json,
    write_json,
)


def test_read_json_missing_file_returns_default(tmp_path: Path) -> None:
    path = tmp_path / "missing.json"

    assert read_json(str(path), default={"value": 123}) == {"value": 123}
    assert read_json(path) is None


def test_read_json_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "invalid.json"
    path.write_text("{ invalid json", encoding="utf-8")

    with pytest.raises(json.JSONDecodeError):
        read_json(path, default={"ok": True})


def test_write_json_creates_parent_dirs_and_roundtrips(tmp_path: Path) -> None:
    data = {"users": {"u1": {"city": "Zürich"}}, "list": [1, 2]}
    path = tmp_path / "nested" / "path" / "store.json"

    write_json(path, data)

    assert path.exists()
    assert read_json(path) == data


def test_write_json_replaces_without_leftover_temp_files(tmp_path: Path) -> None:
    path = tmp_path / "store.json"

    write_json(path, {"version": 1})
    write_json(path, {"version": 2})

    assert read_json(path) == {"version": 2}
    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


def test_write_json_failure_keeps_previous_file(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    write_json(path, {"version": 1})

    with pytest.raises(TypeError):
        write_json(path, {"version": object()})

    assert read_json(path) == {"version": 1}
    assert [p.name for p in tmp_path.iterdir()] == ["store.json"]


def test_ensure_parent_dir(tmp_path: Path) -> None:
    file_path = tmp_path / "parent" / "sub" / "file.json"

    ensure_parent_dir(file_path)

    assert file_path.parent.is_dir()
    assert not file_path.exists()


def test_lock_path_is_a_sidecar_file(tmp_path: Path) -> None:
    assert lock_path_for(tmp_path / "store.json") == tmp_path / "store.json.lock"


def test_file_lock_excludes_a_second_holder(tmp_path: Path) -> None:
    lock_path = tmp_path / "store.json.lock"
    acquired = threading.Event()

    def contender() -> None:
        with file_lock(lock_path):
            acquired.set()

    with file_lock(lock_path):
        thread = threading.Thread(target=contender)
        thread.start()
        assert acquired.wait(timeout=0.2) is False

    thread.join(timeout=5)
    assert acquired.is_set()
