"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel

CONFIG_ENV = "FEEDSHELF_CONFIG"
DATABASE_ENV = "FEEDSHELF_DATABASE"
LOG_LEVEL_ENV = "FEEDSHELF_LOG_LEVEL"


def default_config_path() -> Path:
    """Config path from the environment, else ~/.config/feedshelf/config.yaml."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "feedshelf" / "config.yaml"


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Environment variables win over values from the file."""
    database_path = os.environ.get(DATABASE_ENV)
    if database_path:
        data["database"] = {**(data.get("database") or {}), "path": database_path}

    log_level = os.environ.get(LOG_LEVEL_ENV)
    if log_level:
        data["logging"] = {**(data.get("logging") or {}), "level": log_level}

    return data


class Config:
    """Lazily loaded configuration plus resolved filesystem paths."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = config_path or default_config_path()
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def database_path(self) -> Path:
        """SQLite file with ``~`` expanded."""
        return Path(self.config.database.path).expanduser()

    @property
    def log_dir(self) -> Optional[Path]:
        log_dir = self.config.logging.log_dir
        return Path(log_dir).expanduser() if log_dir else None


def load_config(config_path: Path) -> ConfigModel:
    """
    Load configuration from a YAML file.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not valid YAML or holds invalid values
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}") from e

    if not isinstance(config_data, dict):
        raise ValueError(f"Invalid configuration: expected a mapping in {config_path}")

    try:
        return ConfigModel(**_apply_env_overrides(config_data))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Write configuration as YAML, creating parent directories."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
