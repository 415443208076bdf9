"""
Completion scoring.

Resolves every item of a category against a save document, applies the
category's aggregation rule to the unlocked subset, and sums the scores of
the main categories into the overall completion percentage.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from silkcheck.exceptions import CatalogError, DescriptorError, ErrorContext
from silkcheck.game.catalog.models import CatalogItem, Category, ItemFault
from silkcheck.game.unlocks.resolver import SaveDocument, resolve
from silkcheck.structured_logging.enhanced_logging_config import get_logger, log_exception_once
from silkcheck.structured_logging.logging_context import bind_catalog_context, unbind_catalog_context

logger = get_logger(__name__)


@dataclass(frozen=True)
class ItemResolution:
    """Whether one catalog item is unlocked in the evaluated save."""

    item: CatalogItem
    unlocked: bool


@dataclass(frozen=True)
class CategoryResult:
    """Outcome of evaluating one category against a save."""

    category: Category
    resolutions: tuple[ItemResolution, ...]
    score: int | None
    faults: tuple[ItemFault, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.category.name

    @property
    def counts_toward_completion(self) -> bool:
        return self.category.counts_toward_completion

    @property
    def unlocked_items(self) -> list[CatalogItem]:
        return [resolution.item for resolution in self.resolutions if resolution.unlocked]

    @property
    def missing_items(self) -> list[CatalogItem]:
        return [resolution.item for resolution in self.resolutions if not resolution.unlocked]

    def missing_items_up_to(self, act: int) -> list[CatalogItem]:
        """Items still missing that can already be obtained by the given act."""
        return [item for item in self.missing_items if item.which_act <= act]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "necessity": self.category.necessity.value,
            "score": self.score,
            "unlocked": [item.name for item in self.unlocked_items],
            "missing": [item.name for item in self.missing_items],
            "faults": [fault.model_dump() for fault in self.faults],
        }


@dataclass(frozen=True)
class CompletionReport:
    """Per-category results for one save, in catalog order."""

    results: tuple[CategoryResult, ...]

    @property
    def overall_score(self) -> int:
        return overall_score(self.results)

    @property
    def faults(self) -> list[ItemFault]:
        return [fault for result in self.results for fault in result.faults]

    def get(self, name: str) -> CategoryResult:
        for result in self.results:
            if result.name == name:
                return result
        raise CatalogError(f"Category not found in report: {name}", context=ErrorContext(category=name))

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "categories": [result.to_dict() for result in self.results],
            "faults": [fault.model_dump() for fault in self.faults],
        }


def category_score(category: Category, unlocked_items: Sequence[CatalogItem]) -> int | None:
    """
    Apply the category's aggregation rule to its unlocked items.

    Args:
        category: The category being scored
        unlocked_items: The subset of its items found unlocked

    Returns:
        None for essential categories, otherwise the rule's value clamped at 0
    """
    if not category.counts_toward_completion or category.formula is None:
        return None

    raw_score = category.formula(list(unlocked_items))
    if raw_score < 0:
        logger.warning(
            "Negative category score clamped to zero",
            category=category.name,
            raw_score=raw_score,
            unlocked_count=len(unlocked_items),
        )
        return 0
    return raw_score


def overall_score(results: Iterable[CategoryResult]) -> int:
    """Sum of the main category scores."""
    return sum(result.score for result in results if result.counts_toward_completion and result.score is not None)


def evaluate_category(category: Category, save_document: SaveDocument) -> CategoryResult:
    """
    Resolve every item of a category and score the unlocked subset.

    A descriptor fault is isolated to its item: the item is reported in the
    result's faults and counts as neither unlocked nor missing.
    """
    resolutions: list[ItemResolution] = []
    faults: list[ItemFault] = list(category.faults)

    bind_catalog_context(category=category.name)
    try:
        for item in category.items:
            bind_catalog_context(item=item.name)
            try:
                unlocked = resolve(item.parsing_info, save_document)
            except DescriptorError as exc:
                log_exception_once(
                    logger,
                    "warning",
                    "Item skipped after descriptor fault",
                    exc=exc,
                    descriptor_type=exc.descriptor_type,
                )
                faults.append(
                    ItemFault(
                        category=category.name,
                        item=item.name,
                        error_type=type(exc).__name__,
                        message=exc.message,
                        descriptor_type=exc.descriptor_type,
                    )
                )
                continue
            resolutions.append(ItemResolution(item=item, unlocked=unlocked))
    finally:
        unbind_catalog_context("category", "item")

    unlocked_items = [resolution.item for resolution in resolutions if resolution.unlocked]
    score = category_score(category, unlocked_items)
    logger.debug(
        "Category evaluated",
        category=category.name,
        unlocked_count=len(unlocked_items),
        item_count=len(category.items),
        fault_count=len(faults),
        score=score,
    )
    return CategoryResult(category=category, resolutions=tuple(resolutions), score=score, faults=tuple(faults))


def evaluate_catalog(categories: Iterable[Category], save_document: SaveDocument) -> CompletionReport:
    """Evaluate every category against one save document."""
    scan_id = uuid.uuid4().hex
    bind_catalog_context(scan_id=scan_id)
    try:
        results = tuple(evaluate_category(category, save_document) for category in categories)
    finally:
        unbind_catalog_context("scan_id")

    report = CompletionReport(results=results)
    logger.info(
        "Catalog evaluated",
        scan_id=scan_id,
        category_count=len(results),
        overall_score=report.overall_score,
        fault_count=len(report.faults),
    )
    return report
