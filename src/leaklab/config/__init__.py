"""
Configuration management for the leaklab package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import find_unknown_settings, known_settings, read_config_file
from .validators import (
    validate_app_config,
    validate_leak_config,
    validate_server_config,
    validate_status_config,
)

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    # Advanced interface
    "read_config_file",
    "find_unknown_settings",
    "known_settings",
    "validate_app_config",
    "validate_leak_config",
    "validate_server_config",
    "validate_status_config",
]
