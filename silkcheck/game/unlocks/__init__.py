"""Unlock resolution package.

Exposes the lookup descriptor variants and the resolver that evaluates them
against a decoded save document.
"""

from .constants import DescriptorType
from .models import (
    DESCRIPTOR_VARIANTS,
    CollectableCountDescriptor,
    CounterFlagDescriptor,
    DescriptorBase,
    EquipItemDescriptor,
    FlagDescriptor,
    InventoryItemDescriptor,
    LookupDescriptor,
    QuestDescriptor,
    SceneValueDescriptor,
    UpgradableInventoryItemDescriptor,
    parse_descriptor,
)
from .resolver import RESOLVERS, resolve

__all__ = [
    "DESCRIPTOR_VARIANTS",
    "CollectableCountDescriptor",
    "CounterFlagDescriptor",
    "DescriptorBase",
    "DescriptorType",
    "EquipItemDescriptor",
    "FlagDescriptor",
    "InventoryItemDescriptor",
    "LookupDescriptor",
    "QuestDescriptor",
    "RESOLVERS",
    "SceneValueDescriptor",
    "UpgradableInventoryItemDescriptor",
    "parse_descriptor",
    "resolve",
]
