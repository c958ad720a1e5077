"""
Configuration Package

Usage:
    # Singleton pattern (preferred)
    from config import get_config
    config = get_config()
    schemes = config.vector_url_schemes

    # Debug output
    from config import debug_config
    info = debug_config()
"""

from typing import Optional

from .defaults import SourceDefaults, HostDefaults, LoggingDefaults
from .style_config import StyleUtilsConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[StyleUtilsConfig] = None


def get_config() -> StyleUtilsConfig:
    """
    Get global configuration singleton.

    Returns:
        StyleUtilsConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = StyleUtilsConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get configuration for debugging.

    Returns:
        Dictionary with configuration values
    """
    return get_config().debug_dict()


__all__ = [
    "StyleUtilsConfig",
    "SourceDefaults",
    "HostDefaults",
    "LoggingDefaults",
    "get_config",
    "reset_config",
    "debug_config",
]
