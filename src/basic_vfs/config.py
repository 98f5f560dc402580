"""Configuration management for basic-vfs."""

import json
import os
from pathlib import Path
from typing import Literal, Optional

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from basic_vfs.utils import data_dir_path, setup_logging

CONFIG_FILE_NAME = "config.json"

Environment = Literal["test", "dev", "user"]


class BasicVfsConfig(BaseSettings):
    """Pydantic model for basic-vfs global configuration."""

    env: Environment = Field(default="dev", description="Environment name")

    # overridden by ~/.basic-vfs/config.json
    log_level: str = "INFO"

    strict_ids: bool = Field(
        default=False,
        description="Validate that entity ids are unique whenever a tree is wrapped by the service or loaded from a snapshot.",
    )

    deletion_notices: bool = Field(
        default=True,
        description="Emit one notice per destroyed node through the default reporter. When disabled the service discards notices unless a reporter is passed explicitly.",
    )

    render_indent: int = Field(
        default=2,
        description="Indent used when writing JSON snapshots.",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="BASIC_VFS_",
        extra="ignore",
    )

    @property
    def is_test_env(self) -> bool:
        """Check if running in a test environment."""
        return (
            self.env == "test"
            or os.getenv("BASIC_VFS_ENV", "").lower() == "test"
            or os.getenv("PYTEST_CURRENT_TEST") is not None
        )

    @property
    def data_dir_path(self) -> Path:
        """Get app state directory for config and logs."""
        return data_dir_path()


# Module-level cache for configuration
_CONFIG_CACHE: Optional[BasicVfsConfig] = None


class ConfigManager:
    """Manages basic-vfs configuration."""

    def __init__(self) -> None:
        self.config_dir = data_dir_path()
        self.config_file = self.config_dir / CONFIG_FILE_NAME

        # Ensure config directory exists
        self.config_dir.mkdir(parents=True, exist_ok=True)

    @property
    def config(self) -> BasicVfsConfig:
        """Get configuration, loading it lazily if needed."""
        return self.load_config()

    def load_config(self) -> BasicVfsConfig:
        """Load configuration from file or create default.

        Environment variables take precedence over file config values.
        Uses a module-level cache across ConfigManager instances.
        """
        global _CONFIG_CACHE

        if _CONFIG_CACHE is not None:
            return _CONFIG_CACHE

        if not self.config_file.exists():
            config = BasicVfsConfig()
            self.save_config(config)
            return config

        try:
            file_data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file {self.config_file}: {e}")
            raise SystemExit(
                f"Error: config file is not valid JSON: {self.config_file}\n"
                f"  {e}\n"
                f"Fix or delete the file and re-run."
            )

        # File data is the base; fields set through BASIC_VFS_* variables win
        env_dict = BasicVfsConfig().model_dump()
        merged_data = file_data.copy()
        for field_name in BasicVfsConfig.model_fields.keys():
            if f"BASIC_VFS_{field_name.upper()}" in os.environ:
                merged_data[field_name] = env_dict[field_name]

        _CONFIG_CACHE = BasicVfsConfig(**merged_data)
        return _CONFIG_CACHE

    def save_config(self, config: BasicVfsConfig) -> None:
        """Save configuration to file and invalidate cache."""
        global _CONFIG_CACHE
        save_basic_vfs_config(self.config_file, config)
        _CONFIG_CACHE = None


def save_basic_vfs_config(file_path: Path, config: BasicVfsConfig) -> None:
    """Save configuration to file."""
    try:
        config_dict = config.model_dump(mode="json")
        file_path.write_text(json.dumps(config_dict, indent=2))
    except OSError as e:  # pragma: no cover
        logger.error(f"Failed to save config: {e}")


def reset_config_cache() -> None:
    """Drop the cached configuration so the next load reads the file again."""
    global _CONFIG_CACHE
    _CONFIG_CACHE = None


def init_cli_logging(config: Optional[BasicVfsConfig] = None) -> None:  # pragma: no cover
    """Initialize logging for CLI commands - file only.

    CLI commands should not log to stdout to avoid interfering with
    command output and shell integration.
    """
    config = config or ConfigManager().config
    setup_logging(log_level=config.log_level, log_to_file=True)
