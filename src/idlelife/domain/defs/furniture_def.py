"""Furniture definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from idlelife.core.types import FurnitureSlot

from .effect_def import EffectDef


@dataclass(slots=True)
class FurnitureDef:
    """Home furniture; its effects apply once per day while placed."""

    id: str
    name: str
    slot: FurnitureSlot
    value: int
    description: str
    effects: List[EffectDef] = field(default_factory=list)
