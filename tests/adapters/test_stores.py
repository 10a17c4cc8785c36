from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_shield_config.adapters.stores.json_file import JsonFileStore
from lib_shield_config.adapters.stores.memory import InMemoryStore
from lib_shield_config.domain.errors import InvalidFormat


def test_memory_store_round_trip() -> None:
    store = InMemoryStore({"a": 1})
    store.set("b", 2)
    store.synchronize()
    assert store.get("a") == 1
    assert store.get("b") == 2
    assert store.get("c") is None
    assert store.synchronize_calls == 1


def test_json_store_missing_file_is_empty(tmp_path: Path) -> None:
    store = JsonFileStore(tmp_path / "nested" / "store.json")
    assert store.get("anything") is None


def test_json_store_persists_between_instances(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    JsonFileStore(path).set("shield.opens.lastSeen.app:x", 12.5)
    reopened = JsonFileStore(path)
    assert reopened.get("shield.opens.lastSeen.app:x") == 12.5
    assert json.loads(path.read_text(encoding="utf-8")) == {"shield.opens.lastSeen.app:x": 12.5}


def test_json_store_set_keeps_writes_from_other_instances(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    first = JsonFileStore(path)
    second = JsonFileStore(path)
    first.set("a", 1)
    second.set("b", 2)
    assert JsonFileStore(path).get("a") == 1
    assert JsonFileStore(path).get("b") == 2


def test_json_store_synchronize_sees_external_changes(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    store = JsonFileStore(path)
    path.write_text('{"shield.config.v1": {"messages": ["hi"]}}', encoding="utf-8")
    assert store.get("shield.config.v1") is None
    store.synchronize()
    assert store.get("shield.config.v1") == {"messages": ["hi"]}


def test_json_store_rejects_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        JsonFileStore(path)


def test_json_store_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "store.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        JsonFileStore(path)
