"""Common utilities for posturepolicy."""

from .logger import setup_logger, get_logger
from .config import PolicyFetchConfig, load_config, load_typed_config

__all__ = [
    "PolicyFetchConfig",
    "get_logger",
    "load_config",
    "load_typed_config",
    "setup_logger",
]
