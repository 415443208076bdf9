import logging
import os
from unittest.mock import MagicMock, patch

import pytest
import structlog

from silkcheck.structured_logging import enhanced_logging_config
from silkcheck.structured_logging.enhanced_logging_config import (
    configure_structlog,
    get_logger,
    log_exception_once,
    setup_logging,
)
from silkcheck.structured_logging.logging_context import (
    bind_catalog_context,
    clear_catalog_context,
    get_current_context,
    unbind_catalog_context,
)
from silkcheck.structured_logging.logging_utilities import detect_environment, resolve_log_level


@pytest.fixture()
def fresh_logging_state(monkeypatch):
    monkeypatch.setattr(enhanced_logging_config, "_logging_state", enhanced_logging_config._LoggingState())
    yield
    configure_structlog(environment="unit_test", log_level="INFO")


@pytest.fixture(autouse=True)
def isolated_context():
    clear_catalog_context()
    yield
    clear_catalog_context()


def test_detect_environment_under_pytest():
    assert detect_environment() == "unit_test"


@pytest.mark.parametrize(
    ("name", "expected"), [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("loud", logging.INFO)]
)
def test_resolve_log_level(name, expected):
    assert resolve_log_level(name) == expected


def test_setup_logging_is_idempotent(fresh_logging_state):
    config = {"logging": {"environment": "unit_test", "level": "WARNING", "disable_logging": False}}

    with patch.object(enhanced_logging_config, "configure_structlog") as configure:
        setup_logging(config)
        setup_logging(config)

    configure.assert_called_once_with("unit_test", "WARNING", False)


def test_setup_logging_force_reconfigure(fresh_logging_state):
    config = {"logging": {"level": "INFO"}}

    with patch.object(enhanced_logging_config, "configure_structlog") as configure:
        setup_logging(config)
        setup_logging(config, force_reconfigure=True)

    assert configure.call_count == 2


def test_configure_structlog_installs_single_console_handler(fresh_logging_state):
    configure_structlog(environment="unit_test", log_level="INFO")
    configure_structlog(environment="unit_test", log_level="INFO")

    handlers = [handler for handler in logging.getLogger().handlers if handler.get_name() == "silkcheck.console"]
    assert len(handlers) == 1


def test_bound_catalog_context_is_attached_to_log_entries(caplog):
    logger = get_logger("silkcheck.tests.context")
    bind_catalog_context(scan_id="scan-1", category="Mask Shards")

    with caplog.at_level("INFO"):
        logger.info("Evaluating category")

    assert "category='Mask Shards'" in caplog.text
    assert "scan_id='scan-1'" in caplog.text


def test_bind_catalog_context_drops_none_values():
    bind_catalog_context(category="Crests", item=None, reason="rescan")

    assert get_current_context() == {"category": "Crests", "reason": "rescan"}


def test_unbind_catalog_context_defaults_to_catalog_keys():
    bind_catalog_context(scan_id="scan-1", category="Crests", item="Reaper", reason="rescan")

    unbind_catalog_context()

    assert get_current_context() == {"reason": "rescan"}


def test_log_exception_once_skips_already_logged_errors():
    bound_logger = MagicMock()
    error = RuntimeError("save unreadable")

    log_exception_once(bound_logger, "warning", "Scan failed", exc=error)
    log_exception_once(bound_logger, "warning", "Scan failed", exc=error)

    bound_logger.warning.assert_called_once_with("Scan failed", error_type="RuntimeError", error="save unreadable")
    assert error.already_logged is True


def test_get_logger_returns_structlog_logger():
    logger = get_logger("silkcheck.tests")

    assert hasattr(logger, "info")
    assert structlog.is_configured()


def test_logging_environment_variable_ignored_under_pytest():
    with patch.dict(os.environ, {"LOGGING_ENVIRONMENT": "production"}):
        assert detect_environment() == "unit_test"
