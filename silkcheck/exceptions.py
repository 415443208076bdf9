"""
Exception hierarchy for silkcheck.

Only catalog and descriptor faults are errors. A save document that lacks
some structure is the normal case and never raises; it simply resolves to
"not unlocked".
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from silkcheck.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ErrorContext:
    """
    Contextual information for error handling.

    Identifies which catalog entry an error belongs to so that a report can
    point the catalog author at the offending item.
    """

    category: str | None = None
    item: str | None = None
    descriptor_type: str | None = None
    source: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging."""
        return {
            "category": self.category,
            "item": self.item,
            "descriptor_type": self.descriptor_type,
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class SilkcheckError(Exception):
    """
    Base exception for all silkcheck errors.

    Provides structured error handling with context and metadata
    for proper error categorization and debugging.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize silkcheck error.

        Args:
            message: Technical error message
            context: Error context information
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.details = details or {}
        self.timestamp = datetime.now()
        self.already_logged = False

        self._log_error()

    def _log_error(self):
        """Log the error with structured context."""
        logger.error(
            "silkcheck error occurred",
            error_type=self.__class__.__name__,
            message=self.message,
            context=self.context.to_dict(),
            details=self.details,
        )
        self.mark_logged()

    def mark_logged(self) -> None:
        """Flag the error so log_exception_once does not report it again."""
        self.already_logged = True

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for reports."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context.to_dict(),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class DescriptorError(SilkcheckError):
    """
    A lookup descriptor with an unrecognized tag or a key of the wrong shape.

    Not logged on construction. The code that catches one logs it once,
    with the category and item bound.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        descriptor_type: str | None = None,
        internal_id: Any | None = None,
        details: dict[str, Any] | None = None,
    ):
        context = context or ErrorContext()
        details = dict(details or {})
        if descriptor_type is not None:
            details["descriptor_type"] = descriptor_type
            if context.descriptor_type is None:
                context.descriptor_type = descriptor_type
        if internal_id is not None:
            details["internal_id"] = internal_id if isinstance(internal_id, str) else repr(internal_id)
        self.descriptor_type = descriptor_type
        self.internal_id = internal_id
        super().__init__(message, context, details)

    def _log_error(self):
        """Leave logging to the handler that isolates the fault."""


class CatalogError(SilkcheckError):
    """Catalog loading and lookup errors."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if path:
            details["path"] = path
        self.path = path
        super().__init__(message, context, details)


def create_error_context(**kwargs) -> ErrorContext:
    """
    Create an error context with the given parameters.

    Args:
        **kwargs: Context parameters

    Returns:
        ErrorContext object
    """
    return ErrorContext(**kwargs)
