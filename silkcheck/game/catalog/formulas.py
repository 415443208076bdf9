"""Aggregation rules that turn a category's unlocked items into a score.

A category's formula is any callable over the list of unlocked items. JSON
catalogs cannot carry code, so they name one of the rules registered here,
for example {"rule": "per_n_items", "per": 4}.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

Formula = Callable[[Sequence[Any]], int]
RuleFactory = Callable[..., Formula]

_RULES: dict[str, RuleFactory] = {}


def register_rule(name: str) -> Callable[[RuleFactory], RuleFactory]:
    """Register a rule factory under name so catalogs can refer to it."""

    def decorator(factory: RuleFactory) -> RuleFactory:
        if name in _RULES:
            raise ValueError(f"Aggregation rule '{name}' is already registered")
        _RULES[name] = factory
        return factory

    return decorator


def available_rules() -> list[str]:
    return sorted(_RULES)


def _require_int(name: str, value: Any, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"'{name}' must be >= {minimum}, got {value}")
    return value


@register_rule("per_item")
def per_item() -> Formula:
    """One point per unlocked item."""
    return len


@register_rule("per_n_items")
def per_n_items(per: int) -> Formula:
    """One point per complete group of `per` unlocked items."""
    per = _require_int("per", per, 1)

    def formula(items: Sequence[Any]) -> int:
        return len(items) // per

    return formula


@register_rule("minus_baseline")
def minus_baseline(baseline: int = 1) -> Formula:
    """One point per unlocked item beyond the free baseline entries every save starts with."""
    baseline = _require_int("baseline", baseline, 0)

    def formula(items: Sequence[Any]) -> int:
        return len(items) - baseline

    return formula


def build_formula(definition: str | Mapping[str, Any]) -> Formula:
    """
    Build a formula from a rule name or a {"rule": ..., **params} mapping.

    Raises:
        ValueError: If the rule is unknown or its parameters are invalid
    """
    if isinstance(definition, str):
        rule, params = definition, {}
    elif isinstance(definition, Mapping):
        params = dict(definition)
        rule = params.pop("rule", None)
    else:
        raise ValueError(f"Formula definition must be a rule name or mapping, got {type(definition).__name__}")

    factory = _RULES.get(rule) if isinstance(rule, str) else None
    if factory is None:
        raise ValueError(f"Unknown aggregation rule {rule!r}; known rules: {available_rules()}")

    try:
        return factory(**params)
    except TypeError as exc:
        raise ValueError(f"Invalid parameters for aggregation rule '{rule}': {exc}") from exc
