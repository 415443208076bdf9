"""
Structured logging package for silkcheck.

All imports should use explicit paths like
'from silkcheck.structured_logging.enhanced_logging_config import get_logger'.

The directory is named 'structured_logging' rather than 'logging' to avoid
shadowing Python's standard library logging module.
"""

__all__ = []
