"""Unlock resolution.

resolve() decides whether a single catalog item has been obtained in a save
document. It is a pure function: absent or malformed save data resolves to
False, and the only error it raises is DescriptorError for a descriptor it
cannot dispatch.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from silkcheck.exceptions import DescriptorError
from silkcheck.game.unlocks.constants import (
    AMOUNT_KEY,
    COLLECTABLE_LIST_KEY,
    EQUIP_LIST_KEY,
    IS_COMPLETED_KEY,
    IS_HIDDEN_KEY,
    IS_UNLOCKED_KEY,
    QUEST_LIST_KEY,
    SCENE_VALUE_KEY,
    TOOL_LIST_KEY,
    DescriptorType,
)
from silkcheck.game.unlocks.models import (
    CollectableCountDescriptor,
    CounterFlagDescriptor,
    DescriptorBase,
    EquipItemDescriptor,
    FlagDescriptor,
    InventoryItemDescriptor,
    QuestDescriptor,
    SceneValueDescriptor,
    UpgradableInventoryItemDescriptor,
    parse_descriptor,
)
from silkcheck.game.unlocks.save_data import (
    entry_data,
    find_named_entry,
    find_scene_value,
    is_number,
    player_data,
    saved_entries,
    scene_values,
)
from silkcheck.structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)

SaveDocument = Mapping[str, Any] | None


def _resolve_flag(descriptor: FlagDescriptor, save_document: SaveDocument) -> bool:
    return bool(player_data(save_document).get(descriptor.internal_id))


def _resolve_counter_flag(descriptor: CounterFlagDescriptor, save_document: SaveDocument) -> bool:
    value = player_data(save_document).get(descriptor.key)
    return is_number(value) and bool(value) and value >= descriptor.threshold


def _resolve_quest(descriptor: QuestDescriptor, save_document: SaveDocument) -> bool:
    quests = saved_entries(player_data(save_document), QUEST_LIST_KEY)
    entry = find_named_entry(quests, descriptor.internal_id)
    return entry is not None and bool(entry_data(entry).get(IS_COMPLETED_KEY))


def _resolve_scene_value(descriptor: SceneValueDescriptor, save_document: SaveDocument) -> bool:
    entry = find_scene_value(scene_values(save_document), descriptor.scene_name, descriptor.value_id)
    return entry is not None and bool(entry.get(SCENE_VALUE_KEY))


def _tool_is_unlocked(player: Mapping[str, Any], tool_name: str) -> bool:
    entry = find_named_entry(saved_entries(player, TOOL_LIST_KEY), tool_name)
    if entry is None:
        return False
    data = entry_data(entry)
    return bool(data.get(IS_UNLOCKED_KEY)) and not data.get(IS_HIDDEN_KEY)


def _resolve_inventory_item(descriptor: InventoryItemDescriptor, save_document: SaveDocument) -> bool:
    return _tool_is_unlocked(player_data(save_document), descriptor.internal_id)


def _resolve_upgradable_inventory_item(
    descriptor: UpgradableInventoryItemDescriptor, save_document: SaveDocument
) -> bool:
    player = player_data(save_document)
    return any(_tool_is_unlocked(player, variant_name) for variant_name in descriptor.internal_id)


def _resolve_equip_item(descriptor: EquipItemDescriptor, save_document: SaveDocument) -> bool:
    equips = saved_entries(player_data(save_document), EQUIP_LIST_KEY)
    entry = find_named_entry(equips, descriptor.internal_id)
    return entry is not None and bool(entry_data(entry).get(IS_UNLOCKED_KEY))


def _resolve_collectable_count(descriptor: CollectableCountDescriptor, save_document: SaveDocument) -> bool:
    collectables = saved_entries(player_data(save_document), COLLECTABLE_LIST_KEY)
    entry = find_named_entry(collectables, descriptor.internal_id)
    if entry is None:
        return False
    amount = entry_data(entry).get(AMOUNT_KEY)
    return is_number(amount) and amount > 0


RESOLVERS: dict[str, Callable[[Any, SaveDocument], bool]] = {
    DescriptorType.FLAG: _resolve_flag,
    DescriptorType.COUNTER_FLAG: _resolve_counter_flag,
    DescriptorType.QUEST: _resolve_quest,
    DescriptorType.SCENE_VALUE: _resolve_scene_value,
    DescriptorType.INVENTORY_ITEM: _resolve_inventory_item,
    DescriptorType.UPGRADABLE_INVENTORY_ITEM: _resolve_upgradable_inventory_item,
    DescriptorType.EQUIP_ITEM: _resolve_equip_item,
    DescriptorType.COLLECTABLE_COUNT: _resolve_collectable_count,
}


def resolve(descriptor: DescriptorBase | Mapping[str, Any], save_document: SaveDocument) -> bool:
    """
    Decide whether the item described by descriptor is unlocked in a save.

    Args:
        descriptor: A validated descriptor, or its raw catalog mapping
        save_document: The decoded save, possibly partial or None

    Returns:
        True if the item is unlocked, False otherwise (including when any
        part of the save document needed for the lookup is missing)

    Raises:
        DescriptorError: If the descriptor is malformed or its tag has no resolver
    """
    descriptor = parse_descriptor(descriptor)

    handler = RESOLVERS.get(descriptor.type)
    if handler is None:
        raise DescriptorError(
            f"Unknown lookup descriptor type: {descriptor.type!r}",
            descriptor_type=str(descriptor.type),
            internal_id=descriptor.internal_id,
        )

    unlocked = handler(descriptor, save_document)
    logger.debug(
        "Resolved lookup descriptor",
        descriptor_type=descriptor.type,
        internal_id=descriptor.internal_id,
        unlocked=unlocked,
    )
    return unlocked
