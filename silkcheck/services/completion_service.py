"""
Completion service.

Facade over the catalog registry and the completion aggregator. Callers only
hand over a decoded save document.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from silkcheck.config import AppConfig, get_config
from silkcheck.game.catalog.catalog_registry import CatalogRegistry
from silkcheck.game.catalog.models import CatalogItem
from silkcheck.game.completion import CategoryResult, CompletionReport, evaluate_catalog, evaluate_category
from silkcheck.game.unlocks.models import DescriptorBase
from silkcheck.game.unlocks.resolver import SaveDocument, resolve
from silkcheck.structured_logging.enhanced_logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class CompletionService:
    """Evaluates save documents against one loaded catalog."""

    def __init__(self, registry: CatalogRegistry):
        self.registry = registry

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> CompletionService:
        """
        Build a service from application configuration.

        Sets up logging, then loads the catalog directory named by
        config.catalog.path.

        Raises:
            CatalogError: If the catalog directory is missing, or an entry is
                invalid while config.catalog.strict is set
        """
        config = config or get_config()
        setup_logging(config.to_dict())

        registry = CatalogRegistry.load_from_path(config.catalog.path, strict=config.catalog.strict)
        logger.info(
            "Completion service ready",
            catalog_path=str(config.catalog.path),
            category_count=len(registry.categories()),
        )
        return cls(registry)

    def evaluate(self, save_document: SaveDocument) -> CompletionReport:
        return evaluate_catalog(self.registry.categories(), save_document)

    def evaluate_category(self, name: str, save_document: SaveDocument) -> CategoryResult:
        return evaluate_category(self.registry.get(name), save_document)

    def is_unlocked(
        self, item: CatalogItem | DescriptorBase | Mapping[str, Any], save_document: SaveDocument
    ) -> bool:
        """Resolve a single catalog item, descriptor or raw descriptor mapping."""
        descriptor = item.parsing_info if isinstance(item, CatalogItem) else item
        return resolve(descriptor, save_document)
