"""
Tests for CLI commands — global options, setup, preflight, node-version,
generate and workspace.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from phpjs_env.core.config.loader import CONFIG_ENV_VAR
from phpjs_env.core.models.step import StepResult
from phpjs_env.core.services.host_setup.domain.errors import FetchError
from phpjs_env.main import cli

PREFLIGHT = "phpjs_env.core.services.host_setup.orchestration.run_preflight"
PROCEDURE = "phpjs_env.core.services.host_setup.orchestration.SetupProcedure"
NODE_RELEASE = "phpjs_env.core.services.host_setup.execution.latest_node_release"


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path: Path):
    """Run every command from an empty directory with no config file."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "PHP + Node.js" in result.output
        for command in ("setup", "preflight", "node-version", "generate", "workspace"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bad_config(self, tmp_path: Path):
        config = tmp_path / "broken.yml"
        config.write_text("- not a mapping\n")
        result = CliRunner().invoke(cli, ["--config", str(config), "preflight"])
        assert result.exit_code == 1
        assert "Expected a YAML mapping" in result.output


class TestSetupCommand:
    def test_exit_status_is_procedure_status(self):
        with patch(PROCEDURE) as proc_cls:
            proc_cls.return_value.run.return_value = 1
            result = CliRunner().invoke(cli, ["setup"])
        assert result.exit_code == 1

    def test_log_file_and_answers_passed(self, tmp_path: Path):
        config = tmp_path / "phpjs-env.yml"
        config.write_text("answers:\n  install_vscode: false\n")
        log_file = tmp_path / "setup.log"

        with patch(PROCEDURE) as proc_cls:
            proc_cls.return_value.run.return_value = 0
            result = CliRunner().invoke(cli, ["setup", "--log-file", str(log_file)])

        assert result.exit_code == 0
        settings = proc_cls.call_args.args[0]
        assert settings.log_file == str(log_file)
        assert proc_cls.call_args.kwargs["answers"].install_vscode is False


class TestPreflightCommand:
    def test_all_ok(self):
        results = [StepResult.success("root", "Running as root")]
        with patch(PREFLIGHT, return_value=results):
            result = CliRunner().invoke(cli, ["preflight"])
        assert result.exit_code == 0
        assert "Ready for setup" in result.output

    def test_failure_exits_1(self):
        results = [
            StepResult.failure("root", "This script must be run as root. Please use 'sudo'."),
            StepResult.skip("user", "no user"),
        ]
        with patch(PREFLIGHT, return_value=results):
            result = CliRunner().invoke(cli, ["preflight"])
        assert result.exit_code == 1
        assert "must be run as root" in result.output

    def test_json(self):
        results = [StepResult.success("disk", "10GB available", metadata={"available_gb": 10})]
        with patch(PREFLIGHT, return_value=results):
            result = CliRunner().invoke(cli, ["preflight", "--json"])
        data = json.loads(result.output)
        assert data[0]["step"] == "disk"
        assert data[0]["metadata"]["available_gb"] == 10


class TestNodeVersionCommand:
    def test_resolves(self):
        with patch(NODE_RELEASE, return_value=("v22.12.0", "22")) as lookup:
            result = CliRunner().invoke(cli, ["node-version", "--channel", "LTS"])
        assert result.exit_code == 0
        assert "v22.12.0" in result.output
        assert lookup.call_args.args[2] == "lts"

    def test_json(self):
        with patch(NODE_RELEASE, return_value=("v23.3.0", "23")):
            result = CliRunner().invoke(cli, ["node-version", "--channel", "current", "--json"])
        assert json.loads(result.output) == {"channel": "current", "version": "v23.3.0", "major": "23"}

    def test_fetch_error(self):
        with patch(NODE_RELEASE, side_effect=FetchError("Failed to fetch index")):
            result = CliRunner().invoke(cli, ["node-version"])
        assert result.exit_code == 1
        assert "Failed to fetch index" in result.output

    def test_rejects_unknown_channel(self):
        result = CliRunner().invoke(cli, ["node-version", "--channel", "nightly"])
        assert result.exit_code == 2


class TestGenerateCommand:
    def test_preview_does_not_write(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["generate", "nix"])
        assert result.exit_code == 0
        assert "Preview: .idx/dev.nix" in result.output
        assert "packages = with pkgs; [" in result.output
        assert not (tmp_path / ".idx").exists()

    def test_write_all(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["generate", "all", "--write"])
        assert result.exit_code == 0
        assert (tmp_path / ".idx" / "dev.nix").is_file()
        assert (tmp_path / ".devcontainer" / "Dockerfile").is_file()
        assert (tmp_path / ".devcontainer" / "devcontainer.json").is_file()

    def test_refuses_overwrite_without_force(self, tmp_path: Path):
        CliRunner().invoke(cli, ["generate", "devcontainer", "--write"])
        (tmp_path / ".devcontainer" / "Dockerfile").write_text("custom")

        result = CliRunner().invoke(cli, ["generate", "devcontainer", "--write"])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert (tmp_path / ".devcontainer" / "Dockerfile").read_text() == "custom"

        result = CliRunner().invoke(cli, ["generate", "devcontainer", "--write", "--force"])
        assert result.exit_code == 0
        assert (tmp_path / ".devcontainer" / "Dockerfile").read_text() != "custom"

    def test_rerun_reports_up_to_date(self, tmp_path: Path):
        CliRunner().invoke(cli, ["generate", "nix", "--write"])
        result = CliRunner().invoke(cli, ["generate", "nix", "--write"])
        assert result.exit_code == 0
        assert "Up to date: .idx/dev.nix" in result.output

    def test_uses_config_descriptor(self, tmp_path: Path):
        (tmp_path / "phpjs-env.yml").write_text("workspace:\n  channel: stable-24.05\n")
        result = CliRunner().invoke(cli, ["generate", "nix", "--json"])
        data = json.loads(result.output)
        assert 'channel = "stable-24.05";' in data["files"][0]["content"]

    def test_invalid_descriptor(self, tmp_path: Path):
        (tmp_path / "phpjs-env.yml").write_text("container:\n  node_channel: edge\n")
        result = CliRunner().invoke(cli, ["generate", "devcontainer"])
        assert result.exit_code == 1
        assert "Invalid Node.js channel" in result.output


class TestWorkspaceCommand:
    def test_update_skips_without_manifests(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["workspace", "update", "--dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "Updating dependencies..." in result.output
        assert "Skipping composer: composer.json not found." in result.output
        assert "Skipping pnpm: package.json not found." in result.output

    def test_update_json(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["workspace", "update", "--json"])
        data = json.loads(result.output)
        assert [r["status"] for r in data] == ["skipped", "skipped"]
