"""Service layer wiring configuration, logging and the catalog together."""

from .completion_service import CompletionService

__all__ = ["CompletionService"]
