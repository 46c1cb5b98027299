"""
Tests for configuration loading — phpjs-env.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from phpjs_env.core.config.loader import (
    CONFIG_ENV_VAR,
    ConfigError,
    find_config_file,
    load_config,
)
from phpjs_env.core.models.settings import SetupConfig


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def valid_config_yml(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        settings:
          required_disk_gb: 8
          log_file: /tmp/phpjs-setup.log
          php_packages: [php, php-cli]
        answers:
          os_upgrade: false
          node_channel: current
        workspace:
          channel: stable-24.05
          packages: [php, nodejs_22]
        container:
          node_channel: "22"
          forward_ports: [8000, 5173]
    """)
    path = tmp_path / "phpjs-env.yml"
    path.write_text(content)
    return path


class TestLoadConfig:
    def test_valid(self, valid_config_yml: Path):
        config = load_config(valid_config_yml)
        assert config.settings.required_disk_gb == 8
        assert config.settings.php_packages == ["php", "php-cli"]
        assert config.answers.os_upgrade is False
        assert config.answers.node_channel == "current"
        assert config.answers.install_vscode is None
        assert config.workspace.channel == "stable-24.05"
        assert config.container.forward_ports == [8000, 5173]

    def test_untouched_fields_keep_defaults(self, valid_config_yml: Path):
        config = load_config(valid_config_yml)
        assert config.settings.gai_conf == "/etc/gai.conf"
        assert len(config.settings.essential_packages) == 6

    def test_defaults(self):
        config = SetupConfig()
        assert config.settings.required_disk_gb == 5
        assert config.settings.log_file == "/var/log/phpjs-dev-environment-setup.log"
        assert len(config.settings.php_packages) == 34
        assert config.settings.upgrade_from_codename == "bookworm"
        assert config.settings.upgrade_to_codename == "trixie"

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "phpjs-env.yml"
        path.write_text("")
        assert load_config(path) == SetupConfig()

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "phpjs-env.yml"
        path.write_text("settings: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "phpjs-env.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(path)

    def test_invalid_answer(self, tmp_path: Path):
        path = tmp_path / "phpjs-env.yml"
        path.write_text("answers:\n  node_channel: nightly\n")
        with pytest.raises(ConfigError, match="Invalid setup configuration"):
            load_config(path)

    def test_env_var(self, valid_config_yml: Path, monkeypatch, tmp_path: Path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(valid_config_yml))
        monkeypatch.chdir(tmp_path)
        assert load_config().settings.required_disk_gb == 8

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "gone.yml"))
        with pytest.raises(ConfigError):
            load_config()


class TestFindConfigFile:
    def test_walks_up(self, valid_config_yml: Path):
        nested = valid_config_yml.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == valid_config_yml.resolve()

    def test_not_found(self, tmp_path: Path):
        nested = tmp_path / "empty"
        nested.mkdir()
        assert find_config_file(nested) is None

    def test_no_file_means_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == SetupConfig()
