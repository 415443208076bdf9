"""Catalog package: categories, their items and aggregation rules."""

from .catalog_registry import CatalogRegistry
from .formulas import Formula, available_rules, build_formula, minus_baseline, per_item, per_n_items, register_rule
from .models import CatalogItem, Category, ItemFault, Necessity

__all__ = [
    "CatalogItem",
    "CatalogRegistry",
    "Category",
    "Formula",
    "ItemFault",
    "Necessity",
    "available_rules",
    "build_formula",
    "minus_baseline",
    "per_item",
    "per_n_items",
    "register_rule",
]
