"""
Structlog-based logging configuration for silkcheck.

This is the main entry point for the logging system. Every module obtains its
logger through get_logger() so that output is routed through the stdlib
logging tree and carries any bound catalog context.
"""

# pylint: disable=too-few-public-methods  # Reason: Logging configuration classes with focused responsibility, minimal public interface

import json
import logging
import sys
from typing import Any, cast

import structlog
from structlog.contextvars import merge_contextvars
from structlog.stdlib import BoundLogger, LoggerFactory

from silkcheck.structured_logging.logging_utilities import detect_environment, resolve_log_level

# NOTE: This module uses structlog.get_logger() directly for its own messages
# because it is the logging infrastructure itself.
logger = structlog.get_logger(__name__)

_HANDLER_NAME = "silkcheck.console"


class _LoggingState:  # pylint: disable=too-few-public-methods  # Reason: State container class with focused responsibility, minimal public interface
    """State container for logging initialization to avoid global statements."""

    initialized: bool = False
    signature: str | None = None


_logging_state = _LoggingState()


def _install_console_handler(level: int) -> None:
    """Attach a single stderr handler to the root logger, replacing our previous one."""
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def configure_structlog(
    environment: str | None = None,
    log_level: str = "INFO",
    disable_logging: bool = False,
) -> None:
    """
    Configure structlog processors and the stdlib handler they write through.

    Args:
        environment: Environment name (auto-detected if None)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        disable_logging: When True, no console handler is installed
    """
    if environment is None:
        environment = detect_environment()

    level = resolve_log_level(log_level)

    processors = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "logger", "event"]),
    ]

    if not disable_logging:
        _install_console_handler(level)

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=False,
    )

    configured_logger = structlog.get_logger(__name__)
    configured_logger.debug("Structlog configured", environment=environment, log_level=log_level)


def setup_logging(config: dict[str, Any], *, force_reconfigure: bool = False) -> None:
    """
    Set up logging from a configuration dictionary.

    Args:
        config: Application configuration dictionary (see AppConfig.to_dict)
        force_reconfigure: When True, reconfigure even if already initialized
    """
    config_signature = json.dumps(config, sort_keys=True, default=str)

    if _logging_state.initialized and not force_reconfigure:
        setup_logger = get_logger("silkcheck.structured_logging.setup")
        setup_logger.debug(
            "setup_logging skipped; logging system already initialized",
            config_signature=_logging_state.signature,
        )
        return

    logging_config = config.get("logging", {})
    environment = logging_config.get("environment", detect_environment())
    log_level = logging_config.get("level", "INFO")
    disable_logging = logging_config.get("disable_logging", False)

    configure_structlog(environment, log_level, disable_logging)

    setup_logger = get_logger("silkcheck.structured_logging.setup")
    setup_logger.info(
        "Logging system initialized",
        environment=environment,
        log_level=log_level,
        disable_logging=disable_logging,
    )

    _logging_state.initialized = True
    _logging_state.signature = config_signature


def get_logger(name: str) -> Any:  # Returns BoundLogger but typed as Any for flexibility
    """
    Get a Structlog logger with the specified name.

    This is the public API for obtaining loggers. All application code
    should use this function rather than calling structlog.get_logger()
    directly.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured Structlog logger instance
    """
    return structlog.get_logger(name)


def log_exception_once(
    bound_logger: BoundLogger,
    level: str,
    message: str,
    *,
    exc: Exception | None = None,
    mark_logged: bool = True,
    **kwargs: Any,
) -> None:
    """
    Log an exception once, respecting exceptions that have already been logged.

    Args:
        bound_logger: Structlog bound logger instance.
        level: Logging level to use (for example, "error" or "warning").
        message: Log message to emit.
        exc: Optional exception to include in the log entry.
        mark_logged: When True, mark the exception as logged to prevent duplicates.
        **kwargs: Additional key-value pairs for structured logging.
    """
    if exc is not None:
        already_logged = getattr(exc, "already_logged", False)
        if already_logged:
            return
        kwargs.setdefault("error_type", type(exc).__name__)
        kwargs.setdefault("error", str(exc))

    log_method = getattr(bound_logger, level.lower(), bound_logger.error)
    log_method(message, **kwargs)

    if exc is not None and mark_logged:
        marker = getattr(exc, "mark_logged", None)
        if callable(marker):
            marker()  # pylint: disable=not-callable  # Reason: callable() check confirms marker is callable at runtime, pylint cannot detect this through getattr
        else:
            cast(Any, exc).already_logged = True
