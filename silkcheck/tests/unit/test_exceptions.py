"""
Unit tests for the silkcheck exception hierarchy.
"""

from silkcheck.exceptions import (
    CatalogError,
    DescriptorError,
    ErrorContext,
    SilkcheckError,
    create_error_context,
)
from silkcheck.structured_logging.enhanced_logging_config import get_logger, log_exception_once


def test_silkcheck_error_defaults():
    """Test base error carries an empty context and details."""
    error = SilkcheckError("boom")

    assert error.message == "boom"
    assert str(error) == "boom"
    assert error.details == {}
    assert isinstance(error.context, ErrorContext)
    assert error.already_logged is True


def test_silkcheck_error_to_dict():
    """Test error serialisation includes context."""
    context = create_error_context(category="Crests", item="Reaper")
    error = SilkcheckError("boom", context=context, details={"hint": "check catalog"})

    data = error.to_dict()

    assert data["error_type"] == "SilkcheckError"
    assert data["context"]["category"] == "Crests"
    assert data["context"]["item"] == "Reaper"
    assert data["details"] == {"hint": "check catalog"}


def test_descriptor_error_records_type_and_key():
    """Test DescriptorError fills details and context from its arguments."""
    error = DescriptorError("bad key", descriptor_type="sceneData", internal_id=["Bone_East_20"])

    assert isinstance(error, SilkcheckError)
    assert not isinstance(error, ValueError)
    assert error.descriptor_type == "sceneData"
    assert error.context.descriptor_type == "sceneData"
    assert error.details["internal_id"] == "['Bone_East_20']"


def test_catalog_error_records_path():
    """Test CatalogError keeps the offending path."""
    error = CatalogError("missing", path="data/catalog")

    assert error.path == "data/catalog"
    assert error.details["path"] == "data/catalog"


def test_errors_log_on_construction(caplog):
    """Test errors are logged through structlog when raised."""
    with caplog.at_level("ERROR"):
        CatalogError("Category not found: Silk Hearts")

    assert "silkcheck error occurred" in caplog.text
    assert "CatalogError" in caplog.text


def test_mark_logged():
    """Test mark_logged flags the error."""
    error = SilkcheckError("boom")
    error.mark_logged()

    assert error.already_logged is True


def test_descriptor_error_is_not_logged_on_construction(caplog):
    """Test DescriptorError leaves logging to the code that isolates it."""
    with caplog.at_level("WARNING"):
        error = DescriptorError("bad key", descriptor_type="flag", internal_id=["hasDash"])

    assert caplog.records == []
    assert error.already_logged is False


def test_logged_error_is_not_repeated_by_log_exception_once(caplog):
    """Test an error logged on construction is not logged again."""
    with caplog.at_level("WARNING"):
        error = CatalogError("Category not found: Silk Hearts")
        log_exception_once(get_logger("silkcheck.tests"), "warning", "Lookup failed", exc=error)

    assert len(caplog.records) == 1
