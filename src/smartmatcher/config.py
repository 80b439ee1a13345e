"""Unified configuration management for smartmatcher using Pydantic v2."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Default directories
DEFAULT_CONFIG_DIR = Path("~/.config/smartmatcher").expanduser()
DEFAULT_DATA_DIR = Path("~/.local/share/smartmatcher").expanduser()

DEFAULT_CONFIG_PATHS: List[Path] = [
    Path("config.yaml"),
    DEFAULT_CONFIG_DIR / "config.yaml",
    Path("/etc/smartmatcher/config.yaml"),
]


class APIConfig(BaseModel):
    """Backend API configuration."""

    base_url: str = Field(
        "http://localhost:8000/api", description="Base URL of the matcher backend"
    )
    timeout: float = Field(30.0, gt=0, description="Total request timeout in seconds")
    connect_timeout: float = Field(10.0, gt=0, description="Connect timeout in seconds")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Logging level")
    file: Optional[Path] = Field(None, description="Path to log file")
    file_level: str = Field("DEBUG", description="Logging level for file output")
    max_size: int = Field(
        10 * 1024 * 1024, description="Maximum log file size in bytes"
    )
    backup_count: int = Field(5, description="Number of backup log files to keep")
    format: str = Field(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s",
        description="Log message format",
    )

    @field_validator("file", mode="before")
    @classmethod
    def resolve_log_file(cls, v: Optional[Union[str, Path]]) -> Optional[Path]:
        if v is None:
            return None
        return Path(v).expanduser().resolve()


class StorageConfig(BaseModel):
    """Local persistent storage (session token, user e-mail and role)."""

    path: Path = Field(
        DEFAULT_DATA_DIR / "storage.json",
        description="JSON file backing the local key/value store",
    )

    @field_validator("path", mode="before")
    @classmethod
    def resolve_path(cls, v: Union[str, Path]) -> Path:
        return Path(v).expanduser().resolve()


class AppConfig(BaseSettings):
    """Main application configuration.

    Loads configuration from the following sources in order:
    1. Default values defined in this class
    2. Environment variables (with SMARTMATCHER_ prefix)
    3. YAML configuration file
    """

    model_config = SettingsConfigDict(
        env_prefix="SMARTMATCHER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    name: str = Field("Smart Document Matcher", description="Application name")
    version: str = Field("0.1.0", description="Application version")
    debug: bool = Field(False, description="Enable debug mode")

    api: APIConfig = Field(default_factory=APIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "AppConfig":
        """Load configuration from a YAML file.

        Args:
            config_path: Path to the configuration file.

        Returns:
            Loaded AppConfig instance.

        Raises:
            ConfigurationError: If the file is not a mapping or fails validation.
        """
        config_path = Path(config_path).expanduser().resolve()
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Return the configuration most recently loaded by :func:`load_config`."""
    return config


def load_config(config_path: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load application configuration.

    Args:
        config_path: Optional path to a YAML config file. When omitted the
            default locations are searched and the first existing file wins.

    Returns:
        Loaded AppConfig instance.

    Raises:
        FileNotFoundError: If ``config_path`` is given but does not exist.
    """
    global config

    if config_path:
        path = Path(config_path).expanduser().resolve()
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        config = AppConfig.from_file(path)
        logger.debug("Loaded configuration from %s", path)
        return config

    for path in DEFAULT_CONFIG_PATHS:
        if path.exists():
            config = AppConfig.from_file(path)
            logger.debug("Loaded configuration from %s", path)
            return config

    logger.debug("No configuration file found, using defaults")
    config = AppConfig()
    return config


def save_config(
    config_path: Optional[Union[str, Path]] = None,
    app_config: Optional[AppConfig] = None,
) -> Path:
    """Save a configuration to a YAML file.

    Args:
        config_path: Destination file. Defaults to ``~/.config/smartmatcher/config.yaml``.
        app_config: Configuration to write. Defaults to the global instance.

    Returns:
        The path written to.
    """
    path = Path(config_path or DEFAULT_CONFIG_DIR / "config.yaml").expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    data: Dict[str, Any] = (app_config or config).model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info("Saved configuration to %s", path)
    return path
