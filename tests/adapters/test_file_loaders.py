from __future__ import annotations

from pathlib import Path

import pytest

from lib_shield_config.adapters.file_loaders import structured as structured_module
from lib_shield_config.adapters.file_loaders.structured import (
    JSONFileLoader,
    TOMLFileLoader,
    YAMLFileLoader,
    load_document_file,
)
from lib_shield_config.domain.errors import InvalidFormat, NotFound


def test_toml_document(tmp_path: Path) -> None:
    path = tmp_path / "shields.toml"
    path.write_text('messages = ["a", "b"]\n\n[perApp."com.x"]\nmessages = ["c"]\n', encoding="utf-8")
    data = load_document_file(str(path))
    assert data["messages"] == ["a", "b"]
    assert data["perApp"]["com.x"]["messages"] == ["c"]


def test_json_document(tmp_path: Path) -> None:
    path = tmp_path / "shields.json"
    path.write_text('{"loopMessages": false}', encoding="utf-8")
    assert JSONFileLoader().load(str(path)) == {"loopMessages": False}


def test_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "shields.toml"
    path.write_text("messages = [", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        TOMLFileLoader().load(str(path))


def test_json_must_be_mapping(tmp_path: Path) -> None:
    path = tmp_path / "shields.json"
    path.write_text('["a"]', encoding="utf-8")
    with pytest.raises(InvalidFormat):
        load_document_file(str(path))


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        load_document_file(str(tmp_path / "absent.json"))


def test_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "shields.ini"
    path.write_text("[x]", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        load_document_file(str(path))


@pytest.mark.skipif(structured_module.yaml is None, reason="PyYAML not installed")
def test_yaml_document(tmp_path: Path) -> None:
    path = tmp_path / "shields.yaml"
    path.write_text("messages:\n  - hello\n", encoding="utf-8")
    assert YAMLFileLoader().load(str(path)) == {"messages": ["hello"]}


@pytest.mark.skipif(structured_module.yaml is None, reason="PyYAML not installed")
def test_empty_yaml_is_empty_mapping(tmp_path: Path) -> None:
    path = tmp_path / "shields.yml"
    path.write_text("", encoding="utf-8")
    assert load_document_file(str(path)) == {}
