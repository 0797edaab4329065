"""Configuration management for posturepolicy.

Handles loading and validation of YAML configuration files describing
where policies come from, where they are cached, and how to log.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CONFIG_PATH = "~/.posturepolicy/config.yaml"
DEFAULT_CACHE_DIR = "~/.posturepolicy"
DEFAULT_API_URL = "https://api.armosec.io"


@dataclass
class SourceConfig:
    """Configuration for the policy source backend."""

    type: str = "remote"
    api_url: str = DEFAULT_API_URL
    account_id: str = ""
    token: Optional[str] = None
    timeout: int = 30
    policy_paths: List[str] = field(default_factory=list)
    exceptions_path: Optional[str] = None
    controls_inputs_path: Optional[str] = None


@dataclass
class CacheConfig:
    """Configuration for the local artifact cache."""

    enabled: bool = True
    cache_dir: str = DEFAULT_CACHE_DIR


@dataclass
class LoggingConfig:
    """Configuration for logging output."""

    level: str = "INFO"
    log_dir: str = "~/.posturepolicy/logs"
    file_logging: bool = False


@dataclass
class PolicyFetchConfig:
    """Top-level configuration for posturepolicy."""

    cluster_name: str = ""
    source: SourceConfig = field(default_factory=SourceConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def parse_source_config(
    source_dict: Dict[str, Any], account_id: str = ""
) -> SourceConfig:
    """Parse a policy source configuration dictionary.

    Args:
        source_dict: Source configuration dictionary
        account_id: Account identifier from the top level, used unless the
            source section sets its own

    Returns:
        SourceConfig instance
    """
    return SourceConfig(
        type=source_dict.get("type", "remote"),
        api_url=source_dict.get("api_url", DEFAULT_API_URL),
        account_id=source_dict.get("account_id", account_id),
        token=source_dict.get("token") or None,
        timeout=source_dict.get("timeout", 30),
        policy_paths=source_dict.get("policy_paths", []),
        exceptions_path=source_dict.get("exceptions_path"),
        controls_inputs_path=source_dict.get("controls_inputs_path"),
    )


def parse_cache_config(cache_dict: Dict[str, Any]) -> CacheConfig:
    """Parse cache configuration dictionary."""
    return CacheConfig(
        enabled=cache_dict.get("enabled", True),
        cache_dir=cache_dict.get("cache_dir", DEFAULT_CACHE_DIR),
    )


def parse_logging_config(logging_dict: Dict[str, Any]) -> LoggingConfig:
    """Parse logging configuration dictionary."""
    return LoggingConfig(
        level=logging_dict.get("level", "INFO"),
        log_dir=logging_dict.get("log_dir", "~/.posturepolicy/logs"),
        file_logging=logging_dict.get("file_logging", False),
    )


def parse_config(config_dict: Dict[str, Any]) -> PolicyFetchConfig:
    """Parse the full configuration dictionary.

    Args:
        config_dict: Full configuration dictionary

    Returns:
        PolicyFetchConfig instance
    """
    account_id = config_dict.get("account_id", "")

    return PolicyFetchConfig(
        cluster_name=config_dict.get("cluster_name", ""),
        source=parse_source_config(config_dict.get("source", {}), account_id),
        cache=parse_cache_config(config_dict.get("cache", {})),
        logging=parse_logging_config(config_dict.get("logging", {})),
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        TypeError: If the YAML root is not a mapping
        yaml.YAMLError: If config file is invalid YAML
    """
    config_file = Path(config_path).expanduser()

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_file.open("r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise TypeError(
            f"Configuration root must be a mapping, got {type(config).__name__}"
        )

    return _expand_env_vars(config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand environment variables in configuration."""
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj


def load_typed_config(config_path: str = DEFAULT_CONFIG_PATH) -> PolicyFetchConfig:
    """Load and parse configuration into typed dataclasses.

    Args:
        config_path: Path to configuration file

    Returns:
        PolicyFetchConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    return parse_config(load_config(config_path))
