"""End-to-end CLI coverage for the commands exposed by lib_shield_config."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

import lib_cli_exit_tools

from lib_shield_config import cli
from lib_shield_config.adapters.stores.json_file import JsonFileStore
from lib_shield_config.domain.errors import InvalidFormat
from lib_shield_config.domain.keys import CONFIG_KEY


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def _store(tmp_path: Path, config: dict) -> Path:
    path = tmp_path / "store.json"
    path.write_text(json.dumps({CONFIG_KEY: config}), encoding="utf-8")
    return path


def test_resolve_application_from_store(tmp_path: Path) -> None:
    path = _store(tmp_path, {"perApp": {"com.x": {"messages": ["Back to work"]}}})
    result = _runner().invoke(
        cli.cli,
        ["resolve", "--store", str(path), "--bundle-id", "com.x", "--app-name", "X"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["entityKey"] == "app:com.x"
    assert payload["openCount"] == 1
    assert payload["placeholders"]["shieldMessage"] == "Back to work"
    assert payload["config"] is None
    assert JsonFileStore(path).get(CONFIG_KEY) == {"perApp": {"com.x": {"messages": ["Back to work"]}}}


def test_resolve_no_bump_leaves_count(tmp_path: Path) -> None:
    path = _store(tmp_path, {})
    result = _runner().invoke(cli.cli, ["resolve", "--store", str(path), "--bundle-id", "com.x", "--no-bump"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["openCount"] == 0
    count = _runner().invoke(cli.cli, ["count", "app:com.x", "--store", str(path)])
    assert count.output.strip() == "0"


def test_count_after_resolve(tmp_path: Path) -> None:
    path = _store(tmp_path, {})
    _runner().invoke(cli.cli, ["resolve", "--store", str(path), "--domain", "Example.com"])
    result = _runner().invoke(cli.cli, ["count", "domain:example.com", "--store", str(path)])
    assert result.exit_code == 0
    assert result.output.strip() == "1"


def test_resolve_with_config_file_and_template(tmp_path: Path) -> None:
    config = tmp_path / "shields.toml"
    config.write_text(
        'messages = ["Go study"]\n\n[globalPlaceholders]\nappName = "Retention"\n',
        encoding="utf-8",
    )
    result = _runner().invoke(
        cli.cli,
        [
            "resolve",
            "--config",
            str(config),
            "--domain",
            "news.example",
            "--category-token",
            "cat",
            "--template",
            "{shieldMessage} with {appName} on {domainDisplayName}",
            "--indent",
            "2",
        ],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["rendered"] == ["Go study with Retention on news.example"]
    assert payload["placeholders"]["tokenType"] == "web_domain_category"


def test_resolve_rejects_mixed_entities() -> None:
    result = _runner().invoke(cli.cli, ["resolve", "--bundle-id", "com.x", "--domain", "a.com"])
    assert result.exit_code != 0


def test_resolve_uses_store_path_setting(tmp_path: Path) -> None:
    path = _store(tmp_path, {"messages": ["from env store"]})
    result = _runner().invoke(
        cli.cli,
        ["resolve", "--bundle-id", "com.x"],
        env={"LIB_SHIELD_CONFIG_STORE__PATH": str(path)},
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["placeholders"]["shieldMessage"] == "from env store"


def test_pick_loop_and_clamp() -> None:
    looped = _runner().invoke(cli.cli, ["pick", "--open-count", "4", "a", "b", "c"])
    clamped = _runner().invoke(cli.cli, ["pick", "--open-count", "4", "--clamp", "a", "b", "c"])
    assert looped.output.strip() == "a"
    assert clamped.output.strip() == "c"


def test_pick_without_items_prints_nothing() -> None:
    result = _runner().invoke(cli.cli, ["pick", "--open-count", "1"])
    assert result.exit_code == 0
    assert result.output == ""


def test_info_command() -> None:
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "shield" in result.output.lower()


def test_main_restores_traceback_flag() -> None:
    previous = lib_cli_exit_tools.config.traceback
    exit_code = cli.main(["--traceback", "pick", "--open-count", "1", "a"])
    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback == previous


def test_resolve_reports_invalid_config(tmp_path: Path) -> None:
    config = tmp_path / "broken.json"
    config.write_text("{oops", encoding="utf-8")
    result = _runner().invoke(cli.cli, ["resolve", "--config", str(config)])
    assert result.exit_code != 0
    assert isinstance(result.exception, InvalidFormat)
