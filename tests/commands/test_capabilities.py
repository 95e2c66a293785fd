"""Tests for the capabilities command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from nativeprobe.cli import cli
from tests.conftest import write_fake_plugin


@pytest.mark.usefixtures("_isolated_project")
class TestCapabilitiesCommand:
    def test_lists_builtins(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "capabilities"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        names = [item["name"] for item in data["data"]["items"]]
        assert names == ["lib:<name>", "sqlite"]

    def test_includes_local_plugins(self, cli_runner: CliRunner, project_root: Path) -> None:
        write_fake_plugin(project_root)
        result = cli_runner.invoke(cli, ["--json", "capabilities"])
        assert result.exit_code == 0
        items = json.loads(result.stdout)["data"]["items"]
        sources = {item["name"]: item["source"] for item in items}
        assert sources["fake_good"] == "plugin:nativeprobe_local_plugin_fake_caps"
        assert sources["sqlite"] == "builtin"

    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["capabilities"])
        assert result.exit_code == 0
        assert "sqlite" in result.stdout
        assert "builtin" in result.stdout
