"""
Configuration

Typed configuration structs loaded from config.yaml with environment
variable substitution.
"""

from .structs import (
    DEFAULT_BASE_URL,
    NetworkConfig,
    SunxCredentials,
    SigningConfig,
    DispatcherConfig,
    SunxConfig,
)
from .config_manager import (
    load_config,
    parse_config,
    get_config,
    reset_config,
    substitute_env_vars,
    load_env_file,
)

__all__ = [
    'DEFAULT_BASE_URL',
    'NetworkConfig',
    'SunxCredentials',
    'SigningConfig',
    'DispatcherConfig',
    'SunxConfig',
    'load_config',
    'parse_config',
    'get_config',
    'reset_config',
    'substitute_env_vars',
    'load_env_file',
]
