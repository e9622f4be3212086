"""Configuration loading and validation for vrfcodec."""

from .loader import load_config, get_config_value, ConfigError, DEFAULT_CONFIG
from .validator import validate_config, ValidationError

__all__ = [
    "load_config",
    "get_config_value",
    "ConfigError",
    "DEFAULT_CONFIG",
    "validate_config",
    "ValidationError",
]
