"""
Configuration module for fast_distances.

Example:
    >>> from fast_distances.config import load_config, set_settings
    >>>
    >>> settings = load_config("./fast_distances.yaml")
    >>> set_settings(settings)
"""

from .settings import (
    Settings,
    load_config,
    get_default_config_path,
    get_settings,
    set_settings,
    configure_logging,
)

__all__ = [
    "Settings",
    "load_config",
    "get_default_config_path",
    "get_settings",
    "set_settings",
    "configure_logging",
]
