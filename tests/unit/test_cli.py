"""Tests for the hostplug command-line interface."""
from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock, patch

import yaml
from click.testing import CliRunner

from hostplug.cli.main import cli


class AutoSave:
    def __init__(self, host: object) -> None:
        pass

    def destroy(self) -> None:
        pass


def _make_runner() -> CliRunner:
    return CliRunner()


def _entry_points(*names: str) -> list[MagicMock]:
    eps = []
    for name in names:
        ep = MagicMock()
        ep.name = name
        ep.load.return_value = AutoSave
        eps.append(ep)
    return eps


class TestVersionCommand:
    def test_shows_version(self) -> None:
        result = _make_runner().invoke(cli, ["version"])
        assert result.exit_code == 0
        assert "hostplug" in result.output
        assert "0.1.0" in result.output


class TestPluginsCommand:
    def test_no_plugins_message(self) -> None:
        with patch(
            "hostplug.plugins.registry.importlib.metadata.entry_points",
            return_value=[],
        ):
            result = _make_runner().invoke(cli, ["plugins"])
        assert result.exit_code == 0
        assert "No plugins registered" in result.output

    def test_table_lists_normalized_names(self) -> None:
        with patch(
            "hostplug.plugins.registry.importlib.metadata.entry_points",
            return_value=_entry_points("autoSave"),
        ):
            result = _make_runner().invoke(cli, ["plugins"])
        assert result.exit_code == 0
        assert "AutoSave" in result.output

    def test_json_output(self) -> None:
        with patch(
            "hostplug.plugins.registry.importlib.metadata.entry_points",
            return_value=_entry_points("autoSave", "comments"),
        ):
            result = _make_runner().invoke(cli, ["plugins", "--format", "json"])
        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert [row["name"] for row in rows] == ["AutoSave", "Comments"]
        assert rows[0]["factory"].endswith(":AutoSave")

    def test_yaml_output(self) -> None:
        with patch(
            "hostplug.plugins.registry.importlib.metadata.entry_points",
            return_value=_entry_points("autoSave"),
        ):
            result = _make_runner().invoke(cli, ["plugins", "--format", "yaml"])
        assert result.exit_code == 0
        rows = yaml.safe_load(result.output)
        assert rows[0]["name"] == "AutoSave"

    def test_custom_group_is_passed_through(self) -> None:
        with patch(
            "hostplug.plugins.registry.importlib.metadata.entry_points",
            return_value=[],
        ) as entry_points:
            result = _make_runner().invoke(cli, ["plugins", "--group", "acme.plugins"])
        assert result.exit_code == 0
        entry_points.assert_called_once_with(group="acme.plugins")


class TestHooksCommand:
    def test_lists_lifecycle_hooks(self) -> None:
        result = _make_runner().invoke(cli, ["hooks"])
        assert result.exit_code == 0
        assert "construct" in result.output
        assert "afterDestroy" in result.output


class TestLogLevelOption:
    def test_configures_logging_level(self) -> None:
        with patch("hostplug.cli.main.logging.basicConfig") as basic_config:
            result = _make_runner().invoke(cli, ["--log-level", "debug", "hooks"])
        assert result.exit_code == 0
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG

    def test_rejects_unknown_log_level(self) -> None:
        result = _make_runner().invoke(cli, ["--log-level", "loud", "hooks"])
        assert result.exit_code != 0
