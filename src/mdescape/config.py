"""Escaping configuration schema and loading."""

import logging
from pathlib import Path

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mdescape.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_DIR = ".mdescape"
CONFIG_FILE = "config.yaml"


class EscapeConfig(BaseSettings):
    """Configuration for the tree transform.

    Loaded from .mdescape/config.yaml under the 'escape:' section, falling
    back to MDESCAPE_* environment variables. Precedence:
    1. CLI flags (highest)
    2. .mdescape/config.yaml
    3. Environment variables
    4. Defaults (lowest)

    Example:
        ```bash
        MDESCAPE_MAX_VALUE_LENGTH=100000 mdescape tree doc.json
        ```
    """

    text_types: list[str] = Field(
        default_factory=lambda: ["text", "html"],
        description="Node types whose value is escaped",
    )
    passthrough_types: list[str] = Field(
        default_factory=list,
        description="Node types returned untouched, children included (opt-in)",
    )
    max_value_length: int | None = Field(
        default=None,
        gt=0,
        description="Refuse to escape values longer than this many characters",
    )
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")

    model_config = SettingsConfigDict(
        env_prefix="MDESCAPE_",
        case_sensitive=False,
    )


def load_config(project_root: Path | None = None) -> EscapeConfig:
    """Load escaping configuration from .mdescape/config.yaml.

    Args:
        project_root: Directory containing .mdescape/. Defaults to cwd.

    Returns:
        EscapeConfig with values from file, environment or defaults

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = project_root / CONFIG_DIR / CONFIG_FILE

    if not config_path.exists():
        return EscapeConfig()

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    section = raw_config.get("escape") or {}
    logger.debug("Loaded escape config from %s", config_path)

    try:
        return EscapeConfig(**section)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid escape config in {config_path}: {e}") from e


def merge_cli_overrides(
    config: EscapeConfig,
    max_value_length: int | None = None,
    log_level: str | None = None,
) -> EscapeConfig:
    """Return a copy of config with CLI flag overrides applied."""
    updated = config.model_copy(deep=True)

    if max_value_length is not None:
        if max_value_length <= 0:
            raise ConfigurationError("max_value_length must be positive")
        updated.max_value_length = max_value_length

    if log_level is not None:
        updated.log_level = log_level

    return updated
