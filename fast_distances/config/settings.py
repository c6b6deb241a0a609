"""
Configuration management for fast_distances.

Provides a dataclass for library settings and utilities for loading them
from YAML files and environment variables. Settings never alter metric
formulas; they only choose the dtype for non-float inputs and how the
package logs.
"""

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

import numpy as np
import yaml

from ..core.exceptions import ConfigurationError
from ..utils.logging import ROOT_LOGGER, get_logger, setup_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "FAST_DISTANCES_CONFIG"
VALID_DTYPES = ("float32", "float64")
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """
    Settings container for fast_distances.

    Attributes:
        default_dtype: Working dtype for inputs without floating precision
            (ints, bools, Python lists of ints)
        log_level: Level of the package root logger
        log_format: Custom logging format string
        log_file: Optional file to mirror log output to
    """
    default_dtype: str = "float64"
    log_level: str = "WARNING"
    log_format: Optional[str] = None
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.default_dtype not in VALID_DTYPES:
            raise ConfigurationError(
                f"default_dtype must be one of {VALID_DTYPES}, "
                f"got '{self.default_dtype}'"
            )
        self.log_level = str(self.log_level).upper()
        if self.log_level not in VALID_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {VALID_LEVELS}, got '{self.log_level}'"
            )

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.default_dtype)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Create Settings from dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {sorted(unknown)}"
            )
        return cls(**data)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            default_dtype=os.getenv("FAST_DISTANCES_DEFAULT_DTYPE", "float64"),
            log_level=os.getenv("FAST_DISTANCES_LOG_LEVEL", "WARNING"),
            log_file=os.getenv("FAST_DISTANCES_LOG_FILE"),
        )

    def to_dict(self) -> dict:
        """Convert Settings to dictionary."""
        return asdict(self)


def get_default_config_path() -> Optional[Path]:
    """Get path to the configuration file named by the environment, if any."""
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return Path(env_config)
    return None


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, uses $FAST_DISTANCES_CONFIG,
            falling back to environment-variable settings.

    Returns:
        Settings object with loaded configuration

    Raises:
        ConfigurationError: If the file is malformed or holds invalid values

    Example:
        >>> settings = load_config("./fast_distances.yaml")
    """
    path = Path(config_path) if config_path is not None else get_default_config_path()

    if path is None:
        return Settings.from_env()

    if not path.exists():
        logger.warning("Config file %s not found, using defaults", path)
        return Settings()

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}"
        )

    logger.debug("Loaded configuration from %s", path)
    return Settings.from_dict(data)


def configure_logging(settings: Settings) -> logging.Logger:
    """Apply the logging part of the settings to the package root logger."""
    return setup_logger(
        ROOT_LOGGER,
        level=settings.log_level,
        format_string=settings.log_format,
        log_file=settings.log_file,
    )


# Global settings
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the active settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the active settings and reconfigure logging."""
    global _settings
    _settings = settings
    configure_logging(settings)
    logger.info("Settings updated: %s", settings.to_dict())
