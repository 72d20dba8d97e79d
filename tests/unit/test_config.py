"""Unit tests for configuration loading."""

from pathlib import Path
from textwrap import dedent

import pytest

from deckstatus.config import (
    ConfigError,
    DeckStatusConfig,
    load_config,
    resolve_config_path,
)


@pytest.fixture
def temp_config(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_content = dedent("""
        server:
          host: 0.0.0.0
          port: 9000

        http:
          timeout: 5

        logging:
          dir: /tmp/deckstatus-logs
          level: DEBUG
          console: false

        buttons:
          - context: build-key
            action: azure.pipelinestatus
            settings:
              organization: contoso
              project: web
              pipeline1: "42"
          - context: repo-key
            action: github.action
    """).strip()

    config_path = tmp_path / "deckstatus.yaml"
    config_path.write_text(config_content)
    return config_path


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_config(self, temp_config: Path) -> None:
        config = load_config(temp_config)

        assert config.server.host == "0.0.0.0"
        assert config.server.port == 9000
        assert config.http.timeout == 5.0
        assert config.logging.level == "DEBUG"
        assert config.logging.console is False

    def test_load_buttons(self, temp_config: Path) -> None:
        config = load_config(temp_config)

        assert [b.context for b in config.buttons] == ["build-key", "repo-key"]
        assert config.buttons[0].settings["pipeline1"] == "42"
        assert config.buttons[1].settings == {}

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_load_invalid_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "deckstatus.yaml"
        config_path.write_text("buttons: [unclosed")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_path)

    def test_load_non_mapping(self, tmp_path: Path) -> None:
        config_path = tmp_path / "deckstatus.yaml"
        config_path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="mapping"):
            load_config(config_path)

    def test_load_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "deckstatus.yaml"
        config_path.write_text("")

        config = load_config(config_path)

        assert config.server.port == 8765
        assert config.http.timeout == 30.0
        assert config.buttons == []


@pytest.mark.unit
class TestFromDict:
    """Tests for DeckStatusConfig.from_dict validation."""

    def test_timeout_can_be_disabled(self) -> None:
        config = DeckStatusConfig.from_dict({"http": {"timeout": None}})

        assert config.http.timeout is None

    def test_bad_port(self) -> None:
        with pytest.raises(ConfigError):
            DeckStatusConfig.from_dict({"server": {"port": "eighty"}})

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(ConfigError, match="'server' must be a mapping"):
            DeckStatusConfig.from_dict({"server": "localhost"})

    def test_buttons_must_be_list(self) -> None:
        with pytest.raises(ConfigError, match="must be a list"):
            DeckStatusConfig.from_dict({"buttons": {"context": "a"}})

    def test_button_missing_fields(self) -> None:
        with pytest.raises(ConfigError, match="missing required fields: action"):
            DeckStatusConfig.from_dict({"buttons": [{"context": "a"}]})

    def test_duplicate_context(self) -> None:
        buttons = [
            {"context": "a", "action": "github.action"},
            {"context": "a", "action": "azure.prcount"},
        ]

        with pytest.raises(ConfigError, match="Duplicate"):
            DeckStatusConfig.from_dict({"buttons": buttons})

    def test_settings_must_be_mapping(self) -> None:
        with pytest.raises(ConfigError):
            DeckStatusConfig.from_dict(
                {"buttons": [{"context": "a", "action": "github.action", "settings": [1]}]}
            )


@pytest.mark.unit
class TestResolveConfigPath:
    """Tests for resolve_config_path function."""

    def test_explicit_path(self, tmp_path: Path) -> None:
        assert resolve_config_path(tmp_path / "x.yaml") == tmp_path / "x.yaml"

    def test_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DECKSTATUS_CONFIG", str(tmp_path / "env.yaml"))

        assert resolve_config_path() == tmp_path / "env.yaml"

    def test_current_directory(self, temp_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DECKSTATUS_CONFIG", raising=False)
        monkeypatch.chdir(temp_config.parent)

        assert resolve_config_path() == temp_config

    def test_not_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DECKSTATUS_CONFIG", raising=False)
        monkeypatch.chdir(tmp_path)

        assert resolve_config_path() is None
