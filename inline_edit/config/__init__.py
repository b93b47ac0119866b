"""
Configuration module.

Default parameters, YAML profile loading with 3-tier precedence, and
validation of editor and input settings.
"""
from .defaults import DefaultConfig, get_default_config
from .loader import ConfigLoader
from .validation import ConfigValidator

__all__ = ["ConfigLoader", "ConfigValidator", "DefaultConfig", "get_default_config"]
