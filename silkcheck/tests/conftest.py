"""
Shared fixtures for the silkcheck test suite.

Builds small save documents in the layout the game writes, and small
in-memory catalogs, so tests never depend on a real save file.
"""

import os
from collections.abc import Callable
from typing import Any

import pytest

os.environ.setdefault("LOGGING_ENVIRONMENT", "unit_test")

from silkcheck.structured_logging.enhanced_logging_config import configure_structlog  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def configure_test_logging():
    """Route structlog through stdlib logging so caplog can see it."""
    configure_structlog(environment="unit_test", log_level="INFO")


def saved_list(entries: dict[str, dict[str, Any]]) -> dict[str, Any]:
    return {"savedData": [{"Name": name, "Data": data} for name, data in entries.items()]}


def build_save(
    flags: dict[str, Any] | None = None,
    quests: dict[str, dict[str, Any]] | None = None,
    tools: dict[str, dict[str, Any]] | None = None,
    crests: dict[str, dict[str, Any]] | None = None,
    collectables: dict[str, dict[str, Any]] | None = None,
    scene_values: list[tuple[str, str, Any]] | None = None,
) -> dict[str, Any]:
    player: dict[str, Any] = dict(flags or {})
    if quests is not None:
        player["QuestCompletionData"] = saved_list(quests)
    if tools is not None:
        player["Tools"] = saved_list(tools)
    if crests is not None:
        player["ToolEquips"] = saved_list(crests)
    if collectables is not None:
        player["Collectables"] = saved_list(collectables)

    save: dict[str, Any] = {"playerData": player}
    if scene_values is not None:
        save["sceneData"] = {
            "persistentBools": {
                "serializedList": [
                    {"SceneName": scene, "ID": value_id, "Value": value} for scene, value_id, value in scene_values
                ]
            }
        }
    return save


@pytest.fixture()
def make_save() -> Callable[..., dict[str, Any]]:
    return build_save


def flag_item(name: str, key: str | None = None, which_act: int = 1) -> dict[str, Any]:
    return {
        "name": name,
        "whichAct": which_act,
        "prereqs": [],
        "location": "",
        "parsingInfo": {"type": "flag", "internalId": key or name},
    }


@pytest.fixture()
def make_flag_item() -> Callable[..., dict[str, Any]]:
    return flag_item


@pytest.fixture()
def mask_shards_payload() -> dict[str, Any]:
    return {
        "name": "Mask Shards",
        "necessity": "main",
        "tooltip": "Every 4 mask shards grant 1% completion.",
        "formula": {"rule": "per_n_items", "per": 4},
        "items": [
            flag_item(f"Mask Shard {index}", f"maskShard{index}", which_act=1 + index % 3) for index in range(1, 11)
        ],
    }


@pytest.fixture()
def crests_payload() -> dict[str, Any]:
    names = ["Hunter", "Wanderer", "Reaper", "Beast", "Witch", "Architect", "Shaman"]
    return {
        "name": "Crests",
        "necessity": "main",
        "tooltip": "Each crest except the starting Hunter crest grants 1% completion.",
        "formula": {"rule": "minus_baseline", "baseline": 1},
        "items": [
            {
                "name": name,
                "whichAct": 1 if name in ("Hunter", "Wanderer") else 2,
                "prereqs": [],
                "location": "",
                "parsingInfo": {"type": "crest", "internalId": name},
            }
            for name in names
        ],
    }
