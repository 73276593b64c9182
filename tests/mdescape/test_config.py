"""Tests for escaping configuration loading and merging."""

from pathlib import Path

import pytest
import yaml

from mdescape.config import EscapeConfig, load_config, merge_cli_overrides
from mdescape.exceptions import ConfigurationError


def write_config(project_root: Path, data: object) -> Path:
    config_dir = project_root / ".mdescape"
    config_dir.mkdir()
    config_path = config_dir / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(data, f)
    return config_path


def test_default_config(config: EscapeConfig) -> None:
    """Test default configuration values."""
    assert config.text_types == ["text", "html"]
    assert config.passthrough_types == []
    assert config.max_value_length is None
    assert config.log_level == "WARNING"


def test_load_config_no_file(tmp_path: Path) -> None:
    """Test loading config when no file exists."""
    config = load_config(tmp_path)
    assert config.text_types == ["text", "html"]


def test_load_config_with_file(tmp_path: Path) -> None:
    """Test loading config from .mdescape/config.yaml."""
    write_config(
        tmp_path,
        {"escape": {"text_types": ["text"], "max_value_length": 1000}, "other": {"x": 1}},
    )

    config = load_config(tmp_path)

    assert config.text_types == ["text"]
    assert config.max_value_length == 1000
    assert config.passthrough_types == []


def test_load_config_without_escape_section(tmp_path: Path) -> None:
    write_config(tmp_path, {"other": {"x": 1}})
    assert load_config(tmp_path) == EscapeConfig()


def test_load_config_invalid_yaml(tmp_path: Path) -> None:
    config_dir = tmp_path / ".mdescape"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text("escape: [unclosed")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_config(tmp_path)


def test_load_config_invalid_values(tmp_path: Path) -> None:
    write_config(tmp_path, {"escape": {"max_value_length": -1}})

    with pytest.raises(ConfigurationError, match="Invalid escape config"):
        load_config(tmp_path)


def test_env_overrides_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MDESCAPE_MAX_VALUE_LENGTH", "50")
    assert load_config(tmp_path).max_value_length == 50


def test_file_overrides_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MDESCAPE_MAX_VALUE_LENGTH", "50")
    write_config(tmp_path, {"escape": {"max_value_length": 10}})
    assert load_config(tmp_path).max_value_length == 10


def test_merge_cli_overrides(config: EscapeConfig) -> None:
    updated = merge_cli_overrides(config, max_value_length=5, log_level="DEBUG")

    assert updated.max_value_length == 5
    assert updated.log_level == "DEBUG"
    assert config.max_value_length is None
    assert config.log_level == "WARNING"


def test_merge_cli_overrides_none_keeps_values() -> None:
    config = EscapeConfig(max_value_length=7)
    assert merge_cli_overrides(config).max_value_length == 7


def test_merge_cli_overrides_rejects_non_positive(config: EscapeConfig) -> None:
    with pytest.raises(ConfigurationError, match="must be positive"):
        merge_cli_overrides(config, max_value_length=0)
