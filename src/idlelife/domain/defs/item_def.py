"""Item definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from .effect_def import EffectDef

ItemType = Literal["food", "wood", "ore", "metal", "manual", "equipment"]


@dataclass(slots=True)
class ItemDef:
    """Inventory item definition."""

    id: str
    name: str
    type: ItemType
    value: int
    description: str
    use_label: str | None = None
    use_description: str | None = None
    use_consumes: bool = False
    effects: List[EffectDef] = field(default_factory=list)

    @property
    def usable(self) -> bool:
        return bool(self.effects)
