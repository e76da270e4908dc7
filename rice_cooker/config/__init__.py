"""
Configuration module.

Defaults, YAML file overrides and validation for appliance and logging
parameters.
"""
from .defaults import CookerParams, DefaultConfig, LoggingParams, get_default_config
from .loader import ConfigLoader, load_settings

__all__ = [
    "CookerParams",
    "DefaultConfig",
    "LoggingParams",
    "get_default_config",
    "ConfigLoader",
    "load_settings",
]
