"""Parsing and validation for effect lists shared by items and furniture."""
from __future__ import annotations

from typing import List

from idlelife.data.errors import DataValidationError
from idlelife.domain.defs import EffectDef
from idlelife.domain.item_effects import effect_kinds, get_handler

_EFFECT_FIELDS = {"kind", "target", "amount", "chance", "cap", "effects"}


def parse_effect_list(raw_effects: object, context: str) -> List[EffectDef]:
    """Convert a raw JSON list into EffectDefs, rejecting unknown kinds and targets."""
    if not isinstance(raw_effects, list):
        raise DataValidationError(f"{context} effects must be a list.")
    return [
        _parse_effect(entry, f"{context} effects[{index}]")
        for index, entry in enumerate(raw_effects)
    ]


def _parse_effect(entry: object, context: str) -> EffectDef:
    if not isinstance(entry, dict):
        raise DataValidationError(f"{context} must be an object/dict.")
    unknown = set(entry) - _EFFECT_FIELDS
    if unknown:
        raise DataValidationError(f"{context} has unknown fields: {sorted(unknown)}.")

    kind = entry.get("kind")
    if not isinstance(kind, str):
        raise DataValidationError(f"{context} kind must be a string.")
    try:
        handler = get_handler(kind)
    except KeyError as exc:
        raise DataValidationError(
            f"{context} kind '{kind}' is unknown (expected one of {list(effect_kinds())})."
        ) from exc

    target = entry.get("target")
    if handler.targets is None:
        if target is not None:
            raise DataValidationError(f"{context} kind '{kind}' does not take a target.")
    elif target not in handler.targets:
        raise DataValidationError(f"{context} target '{target}' is invalid for kind '{kind}'.")

    amount = _number(entry.get("amount", 0), f"{context} amount")
    chance = _number(entry.get("chance", 1.0), f"{context} chance")
    if not 0 <= chance <= 1:
        raise DataValidationError(f"{context} chance must be between 0 and 1.")
    cap = entry.get("cap")
    if cap is not None:
        cap = _number(cap, f"{context} cap")

    nested: List[EffectDef] = []
    if handler.nested:
        nested = parse_effect_list(entry.get("effects"), context)
        if not nested:
            raise DataValidationError(f"{context} kind '{kind}' needs at least one nested effect.")
    elif "effects" in entry:
        raise DataValidationError(f"{context} kind '{kind}' does not take nested effects.")

    return EffectDef(kind=kind, target=target, amount=amount, chance=chance, cap=cap, effects=nested)


def _number(value: object, context: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataValidationError(f"{context} must be a number.")
    return value
