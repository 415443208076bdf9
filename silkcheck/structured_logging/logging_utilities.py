"""
Logging utilities for environment detection and log level resolution.
"""

import logging
import os
import sys

VALID_ENVIRONMENTS = ["local", "unit_test", "production"]


def detect_environment() -> str:
    """
    Detect the current environment based on various indicators.

    Returns:
        Environment name: "unit_test", "local", or "production"

    Note: The environment can be set explicitly via LOGGING_ENVIRONMENT:
        - unit_test: Unit testing with pytest
        - local: Local use of the checklist tool
        - production: Deployed behind a report or UI layer
    """
    # Check if running under pytest (unit tests)
    if "pytest" in sys.modules or "pytest" in sys.argv[0]:
        return "unit_test"

    logging_env = os.getenv("LOGGING_ENVIRONMENT", "")
    if logging_env in VALID_ENVIRONMENTS:
        return logging_env

    return "local"


def resolve_log_level(level: str) -> int:
    """
    Translate a level name into a stdlib logging level.

    Unknown names fall back to INFO.
    """
    resolved = logging.getLevelName(level.upper())
    if isinstance(resolved, int):
        return resolved
    return logging.INFO
