"""Constants describing lookup descriptor tags and the save document layout.

Tag values match the catalog format used by the checklist front end, and key
names match the decoded save file, so neither side needs a translation table.
"""

from enum import Enum


class DescriptorType(str, Enum):
    """Tags of the closed set of lookup descriptor variants."""

    FLAG = "flag"
    COUNTER_FLAG = "tempintflag"
    QUEST = "quest"
    SCENE_VALUE = "sceneData"
    INVENTORY_ITEM = "tool"
    UPGRADABLE_INVENTORY_ITEM = "upgradabletool"
    EQUIP_ITEM = "crest"
    COLLECTABLE_COUNT = "collectable"


KNOWN_DESCRIPTOR_TYPES: frozenset[str] = frozenset(member.value for member in DescriptorType)

# Top level of the save document
PLAYER_DATA_KEY = "playerData"
SCENE_DATA_KEY = "sceneData"
PERSISTENT_BOOLS_KEY = "persistentBools"
SERIALIZED_LIST_KEY = "serializedList"

# Named lists inside playerData, each wrapping its entries in "savedData"
QUEST_LIST_KEY = "QuestCompletionData"
TOOL_LIST_KEY = "Tools"
EQUIP_LIST_KEY = "ToolEquips"
COLLECTABLE_LIST_KEY = "Collectables"
SAVED_DATA_KEY = "savedData"

# Fields of a savedData entry
ENTRY_NAME_KEY = "Name"
ENTRY_DATA_KEY = "Data"
IS_COMPLETED_KEY = "IsCompleted"
IS_UNLOCKED_KEY = "IsUnlocked"
IS_HIDDEN_KEY = "IsHidden"
AMOUNT_KEY = "Amount"

# Fields of a persistent scene value
SCENE_NAME_KEY = "SceneName"
SCENE_VALUE_ID_KEY = "ID"
SCENE_VALUE_KEY = "Value"
