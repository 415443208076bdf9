"""Tolerant accessors over a decoded save document.

The save document comes from an external, versioned game and is never assumed
complete. Each accessor returns an empty mapping, an empty list or None
whenever a step of the path is missing or has an unexpected type.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from silkcheck.game.unlocks.constants import (
    ENTRY_DATA_KEY,
    ENTRY_NAME_KEY,
    PERSISTENT_BOOLS_KEY,
    PLAYER_DATA_KEY,
    SAVED_DATA_KEY,
    SCENE_DATA_KEY,
    SCENE_NAME_KEY,
    SCENE_VALUE_ID_KEY,
    SERIALIZED_LIST_KEY,
)

_EMPTY: Mapping[str, Any] = {}


def get_path(document: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None as soon as a step is absent."""
    current = document
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else _EMPTY


def as_entries(value: Any) -> list[Mapping[str, Any]]:
    """Keep the mapping entries of a list, in document order."""
    if isinstance(value, str | bytes) or not isinstance(value, Sequence):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def player_data(save_document: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return as_mapping(get_path(save_document, PLAYER_DATA_KEY))


def scene_values(save_document: Mapping[str, Any] | None) -> list[Mapping[str, Any]]:
    return as_entries(get_path(save_document, SCENE_DATA_KEY, PERSISTENT_BOOLS_KEY, SERIALIZED_LIST_KEY))


def saved_entries(player: Mapping[str, Any], list_key: str) -> list[Mapping[str, Any]]:
    return as_entries(get_path(player, list_key, SAVED_DATA_KEY))


def find_named_entry(entries: list[Mapping[str, Any]], name: str) -> Mapping[str, Any] | None:
    """Return the first entry whose Name equals name, or None."""
    return next((entry for entry in entries if entry.get(ENTRY_NAME_KEY) == name), None)


def find_scene_value(
    entries: list[Mapping[str, Any]], scene_name: str, value_id: str
) -> Mapping[str, Any] | None:
    """Return the first persistent value matching both scene and value id, or None."""
    return next(
        (
            entry
            for entry in entries
            if entry.get(SCENE_NAME_KEY) == scene_name and entry.get(SCENE_VALUE_ID_KEY) == value_id
        ),
        None,
    )


def entry_data(entry: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return as_mapping(get_path(entry, ENTRY_DATA_KEY))


def is_number(value: Any) -> bool:
    """True for int and float values; booleans are flags, not counters."""
    return isinstance(value, int | float) and not isinstance(value, bool)
