from __future__ import annotations

import json
from collections import defaultdict
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from silkcheck.exceptions import CatalogError, DescriptorError, ErrorContext
from silkcheck.game.catalog.models import CatalogItem, Category, ItemFault
from silkcheck.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class CatalogRegistry:
    """In-memory registry of validated catalog categories, in catalog order."""

    def __init__(self, categories: list[Category], invalid_entries: list[dict]):
        self._categories = categories
        self._invalid_entries = invalid_entries

    @classmethod
    def load_from_path(cls, directory: Path | str, *, strict: bool = False) -> CatalogRegistry:
        """Load every *.json file in directory, in filename order.

        A file holds either one category or a list of categories. Invalid
        categories and items are logged and skipped unless strict is set.
        """
        directory_path = Path(directory)
        if not directory_path.is_dir():
            raise CatalogError(f"Catalog directory not found: {directory_path}", path=str(directory_path))

        builder = _CatalogBuilder(strict=strict)
        for json_file in sorted(directory_path.glob("*.json")):
            try:
                payload = json.loads(json_file.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                logger.warning("invalid catalog file", file_path=str(json_file), error=str(exc))
                if strict:
                    raise CatalogError(f"Catalog file is not valid JSON: {json_file}", path=str(json_file)) from exc
                builder.invalid_entries.append(
                    {"category": json_file.stem, "source": str(json_file), "errors": str(exc)}
                )
                continue

            entries = payload if isinstance(payload, list) else [payload]
            builder.add_all(entries, source=str(json_file))

        builder.warn_on_shared_descriptors()
        registry = cls(builder.categories, builder.invalid_entries)
        logger.info(
            "Catalog loaded",
            path=str(directory_path),
            category_count=len(registry.categories()),
            item_count=sum(len(category.items) for category in registry.categories()),
            invalid_count=len(registry.invalid_entries()),
        )
        return registry

    @classmethod
    def from_payload(
        cls, payload: Iterable[Mapping[str, Any]], *, strict: bool = False, source: str = "<memory>"
    ) -> CatalogRegistry:
        """Build a registry from already decoded category mappings."""
        builder = _CatalogBuilder(strict=strict)
        builder.add_all(payload, source=source)
        builder.warn_on_shared_descriptors()
        return cls(builder.categories, builder.invalid_entries)

    def get(self, name: str) -> Category:
        for category in self._categories:
            if category.name == name:
                return category
        raise CatalogError(f"Category not found: {name}", context=ErrorContext(category=name))

    def categories(self) -> list[Category]:
        return list(self._categories)

    def main_categories(self) -> list[Category]:
        return [category for category in self._categories if category.counts_toward_completion]

    def find_by_act(self, act: int) -> list[CatalogItem]:
        return [item for category in self._categories for item in category.items if item.which_act == act]

    def faults(self) -> list[ItemFault]:
        return [fault for category in self._categories for fault in category.faults]

    def invalid_entries(self) -> list[dict]:
        return list(self._invalid_entries)


class _CatalogBuilder:
    """Accumulates validated categories and the entries rejected along the way."""

    def __init__(self, *, strict: bool):
        self.strict = strict
        self.categories: list[Category] = []
        self.invalid_entries: list[dict] = []
        self._seen_names: set[str] = set()

    def add_all(self, entries: Iterable[Any], *, source: str) -> None:
        for entry in entries:
            category = self._build_category(entry, source)
            if category is not None:
                self.categories.append(category)

    def _build_category(self, payload: Any, source: str) -> Category | None:
        if not isinstance(payload, Mapping):
            self._reject_category("<unnamed>", source, f"category must be a mapping, got {type(payload).__name__}")
            return None

        name = str(payload.get("name") or "<unnamed>")
        raw_items = payload.get("items", [])
        if not isinstance(raw_items, list):
            self._reject_category(name, source, "items must be a list")
            return None

        items: list[CatalogItem] = []
        faults: list[ItemFault] = []
        for raw_item in raw_items:
            item = self._build_item(name, raw_item, source, faults)
            if item is not None:
                items.append(item)

        try:
            category = Category.model_validate({**payload, "items": items, "faults": faults})
        except ValidationError as exc:
            self._reject_category(name, source, exc.errors(include_url=False, include_context=False))
            return None

        if category.name in self._seen_names:
            self._reject_category(category.name, source, "duplicate category name")
            return None
        self._seen_names.add(category.name)
        return category

    def _build_item(
        self, category_name: str, raw_item: Any, source: str, faults: list[ItemFault]
    ) -> CatalogItem | None:
        item_name = str(raw_item.get("name") or "<unnamed>") if isinstance(raw_item, Mapping) else "<unnamed>"
        try:
            return CatalogItem.model_validate(raw_item)
        except DescriptorError as exc:
            if self.strict:
                raise
            fault = ItemFault(
                category=category_name,
                item=item_name,
                error_type=type(exc).__name__,
                message=exc.message,
                descriptor_type=exc.descriptor_type,
            )
        except ValidationError as exc:
            if self.strict:
                raise CatalogError(
                    f"Invalid catalog item '{item_name}' in category '{category_name}'",
                    context=ErrorContext(category=category_name, item=item_name, source=source),
                    details={"errors": exc.errors(include_url=False, include_context=False)},
                ) from exc
            fault = ItemFault(
                category=category_name,
                item=item_name,
                error_type="ValidationError",
                message=str(exc),
            )

        logger.warning(
            "invalid catalog item skipped",
            category=category_name,
            item=item_name,
            source=source,
            error_type=fault.error_type,
            error=fault.message,
        )
        faults.append(fault)
        self.invalid_entries.append(
            {"category": category_name, "item": item_name, "source": source, "errors": fault.message}
        )
        return None

    def _reject_category(self, name: str, source: str, errors: Any) -> None:
        logger.warning("invalid catalog category", category=name, source=source, errors=errors)
        if self.strict:
            raise CatalogError(
                f"Invalid catalog category '{name}'",
                context=ErrorContext(category=name, source=source),
                details={"errors": errors},
            )
        self.invalid_entries.append({"category": name, "source": source, "errors": errors})

    def warn_on_shared_descriptors(self) -> None:
        owners: dict[Any, list[str]] = defaultdict(list)
        for category in self.categories:
            for item in category.items:
                owners[item.parsing_info].append(f"{category.name}/{item.name}")

        for descriptor, item_names in owners.items():
            if len(item_names) > 1:
                logger.warning(
                    "lookup descriptor shared by several items",
                    descriptor=descriptor.to_payload(),
                    items=item_names,
                )
