"""Configuration loader."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigError
from .models import ConfigModel

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FEEDBRIEF_CONFIG"


def default_config_path() -> Path:
    """Config path from the environment, else the per-user default."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "feedbrief" / "config.yaml"


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = default_config_path()
        self.config_path = Path(config_path)
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def exists(self) -> bool:
        return self.config_path.exists()

    def save(self, config: ConfigModel) -> None:
        """Persist a new configuration and make it current."""
        save_config(config, self.config_path)
        self._config = config


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file, falling back to defaults when absent."""
    if not config_path.exists():
        logger.info("Config file %s not found, using defaults", config_path)
        return ConfigModel()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigError(f"Config file must contain a mapping: {config_path}")

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            config.model_dump(exclude_none=True),
            f,
            default_flow_style=False,
            sort_keys=False,
        )
