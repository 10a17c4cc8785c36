"""Adapter contract tests: default adapters satisfy the application-layer ports."""

from __future__ import annotations

from pathlib import Path

from lib_shield_config.adapters.hashing import Sha256TokenHasher
from lib_shield_config.adapters.native import StoreNativeConfigLookup
from lib_shield_config.adapters.selections import StoreSelectionIndex
from lib_shield_config.adapters.stores.json_file import JsonFileStore
from lib_shield_config.adapters.stores.memory import InMemoryStore
from lib_shield_config.application import ports


def test_stores_are_key_value_stores(tmp_path: Path) -> None:
    assert isinstance(InMemoryStore(), ports.KeyValueStore)
    assert isinstance(JsonFileStore(tmp_path / "store.json"), ports.KeyValueStore)


def test_hasher_contract() -> None:
    assert isinstance(Sha256TokenHasher(), ports.TokenHasher)


def test_selection_index_and_native_lookup_contracts() -> None:
    store = InMemoryStore()
    assert isinstance(StoreSelectionIndex(store, Sha256TokenHasher()), ports.SelectionIndex)
    assert isinstance(StoreNativeConfigLookup(store), ports.NativeConfigLookup)
