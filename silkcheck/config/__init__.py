"""
Configuration module for silkcheck.

This module provides type-safe, validated configuration using Pydantic BaseSettings.

Usage:
    from silkcheck.config import get_config

    config = get_config()
    logger.info("Catalog configuration", path=str(config.catalog.path))
"""

import sys
import threading
from functools import lru_cache
from os import getenv

from .models import BUNDLED_CATALOG_PATH, AppConfig, CatalogConfig, LoggingConfig

__all__ = ["get_config", "reset_config", "AppConfig", "BUNDLED_CATALOG_PATH", "CatalogConfig", "LoggingConfig"]

_config_lock = threading.Lock()


def _is_test_mode() -> bool:
    """
    Detect if running in test environment.

    Returns:
        bool: True if running under pytest, False otherwise
    """
    if "pytest" in sys.modules:
        return True

    if getenv("PYTEST_CURRENT_TEST"):
        return True

    return False


@lru_cache(maxsize=1)
def _get_config_cached() -> AppConfig:
    """Production config loader with caching."""
    with _config_lock:
        return AppConfig()


def get_config() -> AppConfig:
    """
    Get application configuration (singleton in production, fresh in tests).

    Configuration is loaded from environment variables and .env file.

    Returns:
        AppConfig: The application configuration

    Raises:
        ValidationError: If configuration is invalid
    """
    if _is_test_mode():
        return AppConfig()
    return _get_config_cached()


def reset_config() -> None:
    """
    Reset the configuration cache.

    Forces the next get_config() call to re-read the environment.
    """
    with _config_lock:
        _get_config_cached.cache_clear()
