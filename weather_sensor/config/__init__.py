"""Configuration loading and validation."""

from .config_manager import ConfigManager, ConfigError

__all__ = ['ConfigManager', 'ConfigError']
