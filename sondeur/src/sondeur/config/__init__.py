"""
Configuration package.
"""

from sondeur.config.settings import (
    SondeurConfig,
    get_settings,
    load_config,
    reset_settings,
)

__all__ = ["SondeurConfig", "get_settings", "load_config", "reset_settings"]
