"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- load_config() precedence: kwargs > env vars > YAML > defaults
- validation failures surfaced as ConfigError
"""

from __future__ import annotations

from pathlib import Path

import pytest

from covrelay.config.loader import CONFIG_FILENAME, _load_yaml, load_config
from covrelay.config.models import DEFAULT_CODACY_URL
from covrelay.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        """Returns empty dict for empty file."""
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("token: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        """A list at the top level is not a config document."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults(self, tmp_path: Path) -> None:
        """Without any source, every failure switch is on."""
        config = load_config(tmp_path)

        assert config.token is None
        assert config.api_token is None
        assert config.url == DEFAULT_CODACY_URL
        assert config.fail_on_report_not_found
        assert config.fail_on_report_sending
        assert config.fail_on_unknown
        assert config.fail_on_xml_parse_error
        assert config.ignore_test_build_directory
        assert config.report_reject_list == []
        assert config.projects == []
        assert config.http.timeout_sec == 30.0

    def test_reads_repo_yaml(self, tmp_path: Path) -> None:
        """Values come from <base_dir>/.covrelay.yaml."""
        (tmp_path / CONFIG_FILENAME).write_text(
            "token: yaml-token\n"
            "fail_on_unknown: false\n"
            "report_reject_list: [legacy]\n"
            "projects:\n"
            "  - compile_source_roots: [core/src/main/java]\n"
            "    build:\n"
            "      directory: core/target\n"
            "      test_output_directory: core/target/test-classes\n"
        )

        config = load_config(tmp_path)

        assert config.token == "yaml-token"
        assert config.fail_on_unknown is False
        assert config.report_reject_list == ["legacy"]
        [project] = config.projects
        assert project.compile_source_roots == ["core/src/main/java"]
        assert project.build is not None
        assert project.build.directory == "core/target"

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """COVRELAY__ variables beat the YAML file."""
        (tmp_path / CONFIG_FILENAME).write_text("token: yaml-token\n")
        monkeypatch.setenv("COVRELAY__TOKEN", "env-token")
        monkeypatch.setenv("COVRELAY__FAIL_ON_REPORT_SENDING", "false")

        config = load_config(tmp_path)

        assert config.token == "env-token"
        assert config.fail_on_report_sending is False

    def test_nested_env_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Double underscores address nested sections."""
        monkeypatch.setenv("COVRELAY__API_TOKEN__TOKEN", "secret")
        monkeypatch.setenv("COVRELAY__API_TOKEN__PROVIDER", "gh")
        monkeypatch.setenv("COVRELAY__API_TOKEN__USERNAME", "acme")
        monkeypatch.setenv("COVRELAY__API_TOKEN__PROJECT_NAME", "widgets")
        monkeypatch.setenv("COVRELAY__LOGGING__LEVEL", "DEBUG")

        config = load_config(tmp_path)

        assert config.api_token is not None
        assert config.api_token.provider == "gh"
        assert config.api_token.project_name == "widgets"
        assert config.logging.level == "DEBUG"

    def test_kwargs_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Direct overrides win over everything else."""
        monkeypatch.setenv("COVRELAY__URL", "https://env.example.com")

        config = load_config(tmp_path, url="https://cli.example.com/")

        assert config.url == "https://cli.example.com"

    def test_empty_url_means_unset(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, url="  ")
        assert config.url is None

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        """An explicit file replaces the repo file."""
        (tmp_path / CONFIG_FILENAME).write_text("token: repo\n")
        explicit = tmp_path / "ci.yaml"
        explicit.write_text("token: ci\n")

        assert load_config(tmp_path, config_path=explicit).token == "ci"

    def test_missing_explicit_config_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path, config_path=tmp_path / "missing.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_invalid_value_names_field(self, tmp_path: Path) -> None:
        """Validation errors carry the dotted field path."""
        (tmp_path / CONFIG_FILENAME).write_text("http:\n  timeout_sec: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "http.timeout_sec"

    def test_relative_log_file_rejected(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text(
            "logging:\n  outputs:\n    - destination: logs/run.log\n"
        )

        with pytest.raises(ConfigError, match="absolute"):
            load_config(tmp_path)
