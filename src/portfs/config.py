"""Configuration management for portfs."""

import logging
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

BackendName = Literal["auto", "posix", "windows", "host"]


def _config_paths() -> list[Path]:
    """Candidate YAML config files, in priority order."""
    paths = []
    if explicit := os.environ.get("PORTFS_CONFIG_FILE"):
        paths.append(Path(explicit).expanduser())
    paths.extend(
        [
            Path("portfs.yaml"),
            Path("portfs.yml"),
            Path.home() / ".config" / "portfs" / "config.yaml",
        ]
    )
    return paths


def _load_yaml_config() -> dict[str, Any]:
    """Load YAML config file if it exists."""
    for path in _config_paths():
        if path.exists():
            logger.debug(f"Loading config from {path}")
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
            return data

    return {}


class Settings(BaseSettings):
    """Settings loaded from YAML + environment variables (PORTFS_*)."""

    model_config = SettingsConfigDict(
        env_prefix="PORTFS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Backend used by default_file_system() and portfs.Path()
    backend: BackendName = "auto"
    read_only: bool = False
    copy_buffer_size: int = Field(default=64 * 1024, gt=0)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @model_validator(mode="before")
    @classmethod
    def load_yaml_config(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Load YAML config and merge with env vars.

        Priority: Environment Variables > YAML Config > Defaults
        """
        yaml_config = _load_yaml_config()

        for key, val in yaml_config.items():
            if val is not None and key not in values:
                values[key] = val

        return values


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the current settings instance."""
    return settings


def reload_settings() -> Settings:
    """Reload settings (useful after environment changes)."""
    global settings
    settings = Settings()
    return settings
