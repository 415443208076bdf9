import pytest
from pydantic import ValidationError

from silkcheck.exceptions import DescriptorError
from silkcheck.game.unlocks import (
    CounterFlagDescriptor,
    DescriptorType,
    FlagDescriptor,
    SceneValueDescriptor,
    UpgradableInventoryItemDescriptor,
    parse_descriptor,
)


def test_parse_descriptor_builds_flag_variant():
    descriptor = parse_descriptor({"type": "flag", "internalId": "hasNeedolin"})

    assert isinstance(descriptor, FlagDescriptor)
    assert descriptor.type == DescriptorType.FLAG
    assert descriptor.internal_id == "hasNeedolin"


def test_parse_descriptor_accepts_snake_case_key():
    descriptor = parse_descriptor({"type": "quest", "internal_id": "Save the Fleas"})

    assert descriptor.internal_id == "Save the Fleas"


def test_counter_flag_exposes_key_and_threshold():
    descriptor = parse_descriptor({"type": "tempintflag", "internalId": ["nailUpgrades", 2]})

    assert isinstance(descriptor, CounterFlagDescriptor)
    assert descriptor.key == "nailUpgrades"
    assert descriptor.threshold == 2


def test_scene_value_exposes_scene_and_value_id():
    descriptor = parse_descriptor({"type": "sceneData", "internalId": ["Bone_East_20", "Heart Piece"]})

    assert isinstance(descriptor, SceneValueDescriptor)
    assert descriptor.scene_name == "Bone_East_20"
    assert descriptor.value_id == "Heart Piece"


def test_upgradable_tool_accepts_empty_variant_list():
    descriptor = parse_descriptor({"type": "upgradabletool", "internalId": []})

    assert isinstance(descriptor, UpgradableInventoryItemDescriptor)
    assert descriptor.internal_id == ()


def test_parse_descriptor_returns_validated_descriptor_unchanged():
    descriptor = FlagDescriptor(internal_id="hasDash")

    assert parse_descriptor(descriptor) is descriptor


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "tempintflag", "internalId": ["nailUpgrades"]},
        {"type": "tempintflag", "internalId": ["nailUpgrades", 1, 2]},
        {"type": "tempintflag", "internalId": ["nailUpgrades", "1"]},
        {"type": "tempintflag", "internalId": "nailUpgrades"},
        {"type": "sceneData", "internalId": ["Bone_East_20"]},
        {"type": "sceneData", "internalId": ["Bone_East_20", 7]},
        {"type": "flag", "internalId": ""},
        {"type": "flag", "internalId": 12},
        {"type": "crest"},
        {"type": "upgradabletool", "internalId": "Curve Claw"},
        {"type": "quest", "internalId": "Old Hearts", "extra": True},
    ],
)
def test_parse_descriptor_rejects_wrong_key_shape(payload):
    with pytest.raises(DescriptorError) as exc_info:
        parse_descriptor(payload)

    assert exc_info.value.descriptor_type == payload["type"]


def test_parse_descriptor_rejects_unknown_tag():
    with pytest.raises(DescriptorError, match="Unknown lookup descriptor type"):
        parse_descriptor({"type": "journal", "internalId": "Moss Creep"})


def test_parse_descriptor_rejects_non_mapping():
    with pytest.raises(DescriptorError, match="must be a mapping"):
        parse_descriptor(["flag", "hasDash"])


def test_descriptors_are_frozen_and_hashable():
    first = parse_descriptor({"type": "sceneData", "internalId": ["Bone_East_20", "Heart Piece"]})
    second = parse_descriptor({"type": "sceneData", "internalId": ["Bone_East_20", "Heart Piece"]})

    assert first == second
    assert len({first, second}) == 1
    with pytest.raises(ValidationError):
        first.internal_id = ("Other", "Value")


def test_to_payload_uses_catalog_wire_format():
    descriptor = parse_descriptor({"type": "tempintflag", "internal_id": ["ToolPouchUpgrades", 3]})

    assert descriptor.to_payload() == {"type": "tempintflag", "internalId": ["ToolPouchUpgrades", 3]}
