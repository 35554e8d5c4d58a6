"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
YAML configuration file (~/.memoproxy/config.yaml).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from memoproxy.domain.models.errors import ConfigurationError

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".memoproxy"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "MEMOPROXY_"

DEFAULTS: Dict[str, Any] = {
    'logging.level': 'WARNING',
    'logging.file': None,
    'logging.format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'cache.max_entries': None,
    'cache.cache_failures': True,
    'gateway.latency_seconds': 0.0,
    'remote.latency_seconds': 0.0,
}

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False

def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flattens nested YAML mappings into dotted keys ('cache.max_entries')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat

def load_configuration(config_file: Optional[Path] = None, env_file: Optional[Path] = None) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables
    2. .env file
    3. YAML configuration file
    4. Default values (DEFAULTS)

    Args:
        config_file: Path to the YAML configuration file (DEFAULT_CONFIG_FILE if None).
        env_file: Path to the .env file (searches upwards from cwd if None).
    """
    global _config, _loaded
    if _loaded:
        logger.debug("Configuration already loaded.")
        return

    _config = {}
    config_file = config_file or DEFAULT_CONFIG_FILE

    # 1. Load from YAML file (Lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a mapping.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. Load from .env file (Medium priority)
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        # override=False: real environment variables take precedence
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("Skipping .env file loading (no file found).")

    # 3. Environment Variables (Highest priority) are handled in get_config

    _loaded = True
    logger.debug("Configuration loading process completed.")

def reset_configuration() -> None:
    """Forgets loaded configuration so the next load_configuration() rereads it."""
    global _config, _loaded
    _config = {}
    _loaded = False

def env_var_name(key: str) -> str:
    """Environment variable consulted for a key ('cache.max_entries' -> 'MEMOPROXY_CACHE_MAX_ENTRIES')."""
    return ENV_PREFIX + key.upper().replace('.', '_')

def _coerce(value: str) -> Any:
    """Converts common string forms from the environment to Python types."""
    lowered = value.strip().lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    if lowered in ('none', 'null', ''):
        return None
    try:
        if '.' in value:
            return float(value)
        return int(value)
    except (ValueError, TypeError):
        return value

def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by key.

    Priority:
    1. Test configuration (if set)
    2. Environment variable (MEMOPROXY_ prefixed)
    3. YAML config
    4. Built-in defaults, then `default`

    Args:
        key: The configuration key
        default: Default value if the key is not found anywhere

    Returns:
        The configuration value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = env_var_name(key)
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    if key in DEFAULTS and default is None:
        return DEFAULTS[key]

    logger.debug(f"Config key '{key}' not found. Returning default: {default}")
    return default

def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None

# --- Typed Accessors ---

def get_cache_max_entries() -> Optional[int]:
    """Gets the per-proxy entry bound. None or 0 means unbounded."""
    value = get_config('cache.max_entries')
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigurationError('cache.max_entries', f"expected an integer, got {value!r}")
    try:
        max_entries = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError('cache.max_entries', f"expected an integer, got {value!r}")
    if max_entries < 0:
        raise ConfigurationError('cache.max_entries', "must not be negative")
    return max_entries or None

def get_cache_failures() -> bool:
    """Whether failure results (e.g., declined payments) are cached."""
    flag = get_config('cache.cache_failures')
    if isinstance(flag, str):
        lowered = flag.strip().lower()
        if lowered in ('true', 'yes', '1'):
            return True
        if lowered in ('false', 'no', '0'):
            return False
        raise ConfigurationError('cache.cache_failures', f"expected a boolean, got {flag!r}")
    return bool(flag)

def get_latency_seconds(key: str) -> float:
    """Gets a simulated latency setting ('gateway.latency_seconds', 'remote.latency_seconds')."""
    value = get_config(key)
    try:
        latency = float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        raise ConfigurationError(key, f"expected a number, got {value!r}")
    if latency < 0:
        raise ConfigurationError(key, "must not be negative")
    return latency

def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """
    Set configuration values for testing purposes.
    These values will override any existing configuration.

    Args:
        config_dict: Dictionary of configuration values to set
    """
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")

def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
