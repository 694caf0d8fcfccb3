"""
Connector Configuration Management

YAML-based configuration with environment variable substitution.

Key Features:
- config.yaml searched in the project root and current working directory
- ``.env`` loaded with python-dotenv before substitution
- ``${VAR}`` and ``${VAR:default}`` placeholders
- Typed msgspec structs with validation, failing fast with ConfigurationError

Usage:
    from sunx_perps.config import get_config

    config = get_config()
    credentials = config.credentials
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import msgspec
import yaml
from dotenv import load_dotenv

from sunx_perps.infrastructure.exceptions.system import ConfigurationError
from .structs import SunxConfig


_ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

_logger = logging.getLogger(__name__)


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def default_config_paths() -> List[Path]:
    """Locations searched for config.yaml, in order."""
    return [
        _project_root() / 'config.yaml',
        Path.cwd() / 'config.yaml',
    ]


def load_env_file(env_file: Optional[Union[str, Path]] = None) -> bool:
    """
    Load environment variables from a .env file without overriding the process environment.

    Tries the explicit path first, then the project root and the current directory.
    """
    candidates = [Path(env_file)] if env_file else [_project_root() / '.env', Path.cwd() / '.env']
    for env_path in candidates:
        if env_path.exists():
            load_dotenv(dotenv_path=env_path, override=False)
            _logger.info(f"Loaded environment variables from: {env_path}")
            return True

    _logger.debug("No .env file found - using system environment variables only")
    return False


def substitute_env_vars(content: str) -> str:
    """
    Substitute environment variables in configuration content.

    Supports syntax:
    - ${VAR_NAME} - Required environment variable (empty when unset, with a warning)
    - ${VAR_NAME:default} - Optional with default value
    """
    def replace_var(match):
        var_expr = match.group(1)

        if ':' in var_expr:
            var_name, default_value = var_expr.split(':', 1)
            env_value = os.getenv(var_name.strip())
            return default_value if env_value is None else env_value

        var_name = var_expr.strip()
        env_value = os.getenv(var_name)
        if env_value is None:
            _logger.warning(f"Environment variable {var_name} not set - using empty value")
            return ""
        return env_value

    return _ENV_VAR_PATTERN.sub(replace_var, content)


def parse_config(config_data: Dict[str, Any]) -> SunxConfig:
    """
    Build a validated SunxConfig from already-substituted YAML data.

    Raises:
        ConfigurationError: Missing sections or invalid values
    """
    if not isinstance(config_data, dict):
        raise ConfigurationError("Configuration root must be a mapping")

    sunx = config_data.get('sunx')
    if not isinstance(sunx, dict):
        raise ConfigurationError("Missing 'sunx' section in configuration", 'sunx')

    env_config = config_data.get('environment') or {}
    environment = env_config.get('name', 'dev')

    data = {
        'credentials': {
            'access_key_id': str(sunx.get('access_key_id') or ''),
            'secret_key': str(sunx.get('secret_key') or ''),
            'base_url': str(sunx.get('base_url') or 'https://api.sunx.io').rstrip('/'),
        },
        'environment': environment,
        'debug': env_config.get('debug', environment == 'dev'),
        'api_version': sunx.get('api_version', 'sapi_v1'),
    }
    for section in ('network', 'signing', 'dispatcher', 'logging'):
        if config_data.get(section) is not None:
            data[section] = config_data[section]

    try:
        config = msgspec.convert(data, type=SunxConfig, strict=False)
    except msgspec.ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    try:
        config.validate()
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    if config.environment == 'prod' and not config.credentials.has_private_api:
        _logger.warning("Production environment detected but SunX credentials are not configured")

    return config


def load_config(path: Optional[Union[str, Path]] = None,
                env_file: Optional[Union[str, Path]] = None) -> SunxConfig:
    """
    Load configuration from YAML.

    Args:
        path: Explicit config file; searched locations are used when omitted
        env_file: Explicit .env file

    Raises:
        ConfigurationError: No config file found or configuration invalid
    """
    load_env_file(env_file)

    config_paths = [Path(path)] if path else default_config_paths()
    for config_path in config_paths:
        if not config_path.exists():
            continue
        try:
            raw_content = config_path.read_text(encoding='utf-8')
            config_data = yaml.safe_load(substitute_env_vars(raw_content))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e

        _logger.info(f"Configuration loaded from: {config_path}")
        return parse_config(config_data or {})

    raise ConfigurationError(
        f"No valid config.yaml found. Searched paths: {[str(p) for p in config_paths]}"
    )


_cached_config: Optional[SunxConfig] = None


def get_config() -> SunxConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reset_config() -> None:
    """Forget the cached configuration (tests, reloads)."""
    global _cached_config
    _cached_config = None
