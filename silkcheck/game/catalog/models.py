from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from silkcheck.game.catalog.formulas import build_formula
from silkcheck.game.unlocks.models import DescriptorBase, LookupDescriptor, parse_descriptor


class Necessity(str, Enum):
    """How a category contributes to completion.

    main categories add their score to the overall percentage; essential
    categories only group prerequisite-tracking items for display.
    """

    MAIN = "main"
    ESSENTIAL = "essential"


class CatalogItem(BaseModel):
    """One collectible, with its display metadata and lookup descriptor.

    which_act is the earliest act (0 for anytime) in which the item can be
    obtained; prereqs are advisory labels and are never evaluated.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1, max_length=200)
    which_act: int = Field(
        ge=0,
        le=3,
        validation_alias=AliasChoices("whichAct", "which_act"),
        serialization_alias="whichAct",
    )
    prereqs: tuple[str, ...] = Field(default_factory=tuple)
    location: str = ""
    parsing_info: LookupDescriptor = Field(
        validation_alias=AliasChoices("parsingInfo", "parsing_info"),
        serialization_alias="parsingInfo",
    )

    @field_validator("parsing_info", mode="before")
    @classmethod
    def validate_parsing_info(cls, value: Any) -> DescriptorBase:
        # DescriptorError is not a ValueError, so it escapes model validation unchanged.
        return parse_descriptor(value)

    @field_validator("prereqs")
    @classmethod
    def validate_prereqs(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not label.strip() for label in value):
            raise ValueError("Prerequisite labels cannot be blank")
        return value


class ItemFault(BaseModel):
    """A catalog item that could not be evaluated, kept for diagnostics."""

    model_config = ConfigDict(frozen=True)

    category: str
    item: str
    error_type: str
    message: str
    descriptor_type: str | None = None


class Category(BaseModel):
    """A named group of catalog items sharing one aggregation rule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1, max_length=200)
    necessity: Necessity
    tooltip: str = ""
    formula: Callable[[Sequence[CatalogItem]], int] | None = None
    items: tuple[CatalogItem, ...] = Field(default_factory=tuple)
    faults: tuple[ItemFault, ...] = Field(default_factory=tuple)

    @field_validator("formula", mode="before")
    @classmethod
    def validate_formula(cls, value: Any) -> Any:
        if value is None or callable(value):
            return value
        return build_formula(value)

    @model_validator(mode="after")
    def validate_formula_matches_necessity(self) -> Category:
        if self.necessity is Necessity.MAIN and self.formula is None:
            raise ValueError(f"main category '{self.name}' requires a formula")
        if self.necessity is Necessity.ESSENTIAL and self.formula is not None:
            raise ValueError(f"essential category '{self.name}' cannot define a formula")
        return self

    @property
    def counts_toward_completion(self) -> bool:
        return self.necessity is Necessity.MAIN
