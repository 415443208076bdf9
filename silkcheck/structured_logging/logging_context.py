"""
Context management utilities for structured logging.

A catalog scan binds the category (and item) being evaluated so every log
entry emitted during resolution carries them without threading arguments
through the resolver.
"""

from typing import Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, unbind_contextvars

CATALOG_CONTEXT_KEYS = ("scan_id", "category", "item")


def bind_catalog_context(
    scan_id: str | None = None,
    category: str | None = None,
    item: str | None = None,
    **kwargs,
) -> None:
    """
    Bind catalog scan context to the current logging context.

    Args:
        scan_id: Identifier of the current scan, if the caller tracks one
        category: Name of the category being evaluated
        item: Name of the item being resolved
        **kwargs: Additional context variables
    """
    context_vars = {
        "scan_id": scan_id,
        "category": category,
        "item": item,
        **kwargs,
    }

    # Remove None values
    context_vars = {k: v for k, v in context_vars.items() if v is not None}

    bind_contextvars(**context_vars)


def unbind_catalog_context(*keys: str) -> None:
    """Remove the given keys (all catalog keys by default) from the logging context."""
    unbind_contextvars(*(keys or CATALOG_CONTEXT_KEYS))


def clear_catalog_context() -> None:
    """Clear the current logging context entirely."""
    clear_contextvars()


def get_current_context() -> dict[str, Any]:
    """Get the current logging context."""
    try:
        return structlog.contextvars.get_contextvars()
    except (AttributeError, KeyError):
        return {}

