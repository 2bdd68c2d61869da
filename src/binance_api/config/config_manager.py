"""
Configuration Management

YAML-based configuration for the Binance client with secrets kept in the
environment.

Supported substitution in the YAML text:
- ${VAR_NAME} - environment variable, empty when unset
- ${VAR_NAME:default} - environment variable with default value

Example config.yaml:

    binance:
      base_url: https://api.binance.com
      api_key: ${BINANCE_API_KEY}
      secret_key: ${BINANCE_SECRET_KEY}
      recv_window: ${BINANCE_RECV_WINDOW:5000}
    network:
      request_timeout: 10
      connect_timeout: 5
    logging:
      console:
        min_level: DEBUG
        color: true

Usage:
    from binance_api.config import load_config

    client_config, logging_config = load_config("config.yaml")
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type, TypeVar, Union

import msgspec
import yaml
from dotenv import load_dotenv

from binance_api.config.structs import (
    ApiCredentials, ClientConfig, NetworkConfig,
    DEFAULT_BASE_URL, DEFAULT_RECV_WINDOW, DEFAULT_API_KEY_HEADER
)
from binance_api.infrastructure.exceptions import ConfigurationError
from binance_api.infrastructure.logging import LoggingConfig

T = TypeVar('T')

# Pre-compiled regex patterns
ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')
ENV_VAR_DEFAULT_PATTERN = re.compile(r'^([^:]+):(.*)$')

logger = logging.getLogger(__name__)


def guess_file_paths(file_name: str) -> list[Path]:
    """
    Returns a list of possible file locations to search.
    """
    return [
        Path.cwd() / file_name,   # Current working directory
        Path.home() / file_name,  # User home directory (fallback)
    ]


def substitute_env_vars(content: str) -> str:
    """
    Substitute environment variables in configuration content.

    Raises:
        ConfigurationError: If environment variable substitution fails
    """
    def replace_var(match):
        var_expr = match.group(1)

        default_match = ENV_VAR_DEFAULT_PATTERN.match(var_expr)
        if default_match:
            var_name, default_value = default_match.groups()
            env_value = os.getenv(var_name.strip())
            if env_value is None:
                logger.debug(f"Using default value for {var_name}: {default_value}")
                return default_value
            return env_value

        # Allow empty for public-only mode
        var_name = var_expr.strip()
        env_value = os.getenv(var_name)
        if env_value is None:
            logger.warning(f"Environment variable {var_name} not set - using empty value")
            return ""
        return env_value

    try:
        return ENV_VAR_PATTERN.sub(replace_var, content)
    except re.error as e:
        raise ConfigurationError(f"Failed to substitute environment variables: {e}") from e


def safe_get_config_value(config: Dict[str, Any], key: str, default: T, value_type: Type[T], config_name: str) -> T:
    """Safely extract and validate configuration value with type checking.

    Raises:
        ConfigurationError: If value cannot be cast to expected type
    """
    value = config.get(key, default)
    if value is None or value == "":
        return default
    try:
        return value_type(value)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(
            f"Invalid value for {config_name}.{key}: {value} (expected {value_type.__name__})",
            f"{config_name}.{key}"
        ) from e


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def parse_network_config(part_config: Dict[str, Any]) -> NetworkConfig:
    """Parse network configuration from dictionary with validation."""
    network = NetworkConfig(
        request_timeout=safe_get_config_value(part_config, 'request_timeout', 10.0, float, 'network'),
        connect_timeout=safe_get_config_value(part_config, 'connect_timeout', 5.0, float, 'network'),
        max_concurrent=safe_get_config_value(part_config, 'max_concurrent', 10, int, 'network'),
    )
    try:
        network.validate()
    except ValueError as e:
        raise ConfigurationError(f"Invalid network configuration: {e}", "network") from e
    return network


def parse_client_config(part_config: Dict[str, Any], network: NetworkConfig) -> ClientConfig:
    """Parse the ``binance`` section into a ClientConfig."""
    client_config = ClientConfig(
        base_url=safe_get_config_value(part_config, 'base_url', DEFAULT_BASE_URL, str, 'binance').rstrip('/'),
        credentials=ApiCredentials(
            api_key=_optional_str(part_config.get('api_key')),
            secret_key=_optional_str(part_config.get('secret_key')),
        ),
        recv_window=safe_get_config_value(part_config, 'recv_window', DEFAULT_RECV_WINDOW, int, 'binance'),
        network=network,
        api_key_header=safe_get_config_value(
            part_config, 'api_key_header', DEFAULT_API_KEY_HEADER, str, 'binance'
        ),
    )
    try:
        client_config.validate()
    except ValueError as e:
        raise ConfigurationError(f"Invalid binance configuration: {e}", "binance") from e
    return client_config


def parse_logging_config(part_config: Optional[Dict[str, Any]]) -> LoggingConfig:
    """Parse the ``logging`` section. Missing section means the default."""
    if not part_config:
        return LoggingConfig.default()
    try:
        logging_config = msgspec.convert(part_config, LoggingConfig, strict=False)
        logging_config.validate()
    except (msgspec.ValidationError, ValueError) as e:
        raise ConfigurationError(f"Invalid logging configuration: {e}", "logging") from e
    return logging_config


def load_config(path: Optional[Union[str, Path]] = None) -> Tuple[ClientConfig, LoggingConfig]:
    """
    Load client and logging configuration from a YAML file.

    The .env file (if present) is loaded first so its values are available
    for substitution. Without an explicit path, config.yaml is searched in
    the working directory and then the home directory.

    Raises:
        ConfigurationError: If the file is missing, malformed or invalid
    """
    for env_path in guess_file_paths('.env'):
        if env_path.exists():
            load_dotenv(env_path)
            logger.debug(f"Loaded environment from {env_path}")
            break

    config_paths = [Path(path)] if path is not None else guess_file_paths('config.yaml')
    config_path = next((p for p in config_paths if p.exists()), None)
    if config_path is None:
        searched_paths = ", ".join(str(p) for p in config_paths)
        raise ConfigurationError(
            f"No valid config.yaml found. Searched paths: {searched_paths}",
            "config_file"
        )

    raw_content = config_path.read_text(encoding='utf-8')
    try:
        config_data = yaml.safe_load(substitute_env_vars(raw_content)) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}", str(config_path)) from e

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping in {config_path}", str(config_path))

    network = parse_network_config(config_data.get('network') or {})
    client_config = parse_client_config(config_data.get('binance') or {}, network)
    logging_config = parse_logging_config(config_data.get('logging'))

    logger.info(f"Configuration loaded from: {config_path}")
    return client_config, logging_config


def config_from_env() -> ClientConfig:
    """
    Build a ClientConfig from BINANCE_* environment variables.

    Reads BINANCE_API_KEY, BINANCE_SECRET_KEY, BINANCE_RECV_WINDOW and
    BINANCE_BASE_URL.
    """
    env = {
        'api_key': os.getenv('BINANCE_API_KEY'),
        'secret_key': os.getenv('BINANCE_SECRET_KEY'),
        'recv_window': os.getenv('BINANCE_RECV_WINDOW'),
        'base_url': os.getenv('BINANCE_BASE_URL'),
    }
    return parse_client_config(env, NetworkConfig())
