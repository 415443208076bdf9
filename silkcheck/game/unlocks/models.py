"""Validated lookup descriptors.

A lookup descriptor says where, inside a save document, the unlock state of
one catalog item lives. The variants form a closed, tagged union so that the
shape of each identifying key is checked once, when the catalog is loaded,
instead of on every resolution.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)

from silkcheck.exceptions import DescriptorError
from silkcheck.game.unlocks.constants import KNOWN_DESCRIPTOR_TYPES, DescriptorType

NonEmptyStr = Annotated[str, StringConstraints(strict=True, min_length=1)]


def _internal_id_field() -> Any:
    return Field(
        validation_alias=AliasChoices("internalId", "internal_id"),
        serialization_alias="internalId",
    )


class DescriptorBase(BaseModel):
    """Shared configuration for every descriptor variant."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: str
    internal_id: Any

    def to_payload(self) -> dict[str, Any]:
        """Serialise back to the catalog wire format."""
        return self.model_dump(mode="json", by_alias=True)


class FlagDescriptor(DescriptorBase):
    """Unlocked when playerData holds a truthy value at the key."""

    type: Literal["flag"] = DescriptorType.FLAG.value
    internal_id: NonEmptyStr = _internal_id_field()


class CounterFlagDescriptor(DescriptorBase):
    """Unlocked when a numeric playerData counter reaches a threshold."""

    type: Literal["tempintflag"] = DescriptorType.COUNTER_FLAG.value
    internal_id: tuple[NonEmptyStr, StrictInt] = _internal_id_field()

    @property
    def key(self) -> str:
        return self.internal_id[0]

    @property
    def threshold(self) -> int:
        return self.internal_id[1]


class QuestDescriptor(DescriptorBase):
    """Unlocked when the named quest record is completed."""

    type: Literal["quest"] = DescriptorType.QUEST.value
    internal_id: NonEmptyStr = _internal_id_field()


class SceneValueDescriptor(DescriptorBase):
    """Unlocked when a per-scene persistent value is truthy."""

    type: Literal["sceneData"] = DescriptorType.SCENE_VALUE.value
    internal_id: tuple[NonEmptyStr, NonEmptyStr] = _internal_id_field()

    @property
    def scene_name(self) -> str:
        return self.internal_id[0]

    @property
    def value_id(self) -> str:
        return self.internal_id[1]


class InventoryItemDescriptor(DescriptorBase):
    """Unlocked when the named tool is unlocked and not hidden."""

    type: Literal["tool"] = DescriptorType.INVENTORY_ITEM.value
    internal_id: NonEmptyStr = _internal_id_field()


class UpgradableInventoryItemDescriptor(DescriptorBase):
    """Unlocked when any of the named tool variants is."""

    type: Literal["upgradabletool"] = DescriptorType.UPGRADABLE_INVENTORY_ITEM.value
    internal_id: tuple[NonEmptyStr, ...] = _internal_id_field()


class EquipItemDescriptor(DescriptorBase):
    """Unlocked when the named crest is unlocked."""

    type: Literal["crest"] = DescriptorType.EQUIP_ITEM.value
    internal_id: NonEmptyStr = _internal_id_field()


class CollectableCountDescriptor(DescriptorBase):
    """Unlocked when at least one of the named collectable is held."""

    type: Literal["collectable"] = DescriptorType.COLLECTABLE_COUNT.value
    internal_id: NonEmptyStr = _internal_id_field()


DESCRIPTOR_VARIANTS: tuple[type[DescriptorBase], ...] = (
    FlagDescriptor,
    CounterFlagDescriptor,
    QuestDescriptor,
    SceneValueDescriptor,
    InventoryItemDescriptor,
    UpgradableInventoryItemDescriptor,
    EquipItemDescriptor,
    CollectableCountDescriptor,
)

LookupDescriptor = Annotated[
    Union[
        FlagDescriptor,
        CounterFlagDescriptor,
        QuestDescriptor,
        SceneValueDescriptor,
        InventoryItemDescriptor,
        UpgradableInventoryItemDescriptor,
        EquipItemDescriptor,
        CollectableCountDescriptor,
    ],
    Field(discriminator="type"),
]

_descriptor_adapter: TypeAdapter[Any] = TypeAdapter(LookupDescriptor)


def parse_descriptor(payload: Any) -> DescriptorBase:
    """Build a typed descriptor from its catalog representation.

    Args:
        payload: A mapping such as {"type": "flag", "internalId": "hasDash"},
            or a descriptor instance. Instances of the concrete variants are
            returned unchanged; any other instance is validated again.

    Returns:
        The validated descriptor variant.

    Raises:
        DescriptorError: If the tag is unknown or the key has the wrong shape.
    """
    if isinstance(payload, DESCRIPTOR_VARIANTS):
        return payload

    if isinstance(payload, DescriptorBase):
        payload = payload.model_dump(by_alias=True)

    if not isinstance(payload, Mapping):
        raise DescriptorError(
            f"Lookup descriptor must be a mapping, got {type(payload).__name__}",
            details={"payload": repr(payload)},
        )

    tag = payload.get("type")
    internal_id = payload.get("internalId", payload.get("internal_id"))
    if not isinstance(tag, str) or tag not in KNOWN_DESCRIPTOR_TYPES:
        raise DescriptorError(
            f"Unknown lookup descriptor type: {tag!r}",
            descriptor_type=str(tag),
            internal_id=internal_id,
        )

    try:
        return _descriptor_adapter.validate_python(dict(payload))
    except ValidationError as exc:
        raise DescriptorError(
            f"Invalid internalId for '{tag}' descriptor",
            descriptor_type=tag,
            internal_id=internal_id,
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc
