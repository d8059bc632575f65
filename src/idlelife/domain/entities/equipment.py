"""Equipment slot storage."""
from __future__ import annotations

from typing import Dict

from idlelife.core.types import EQUIPMENT_POSITIONS, EquipmentPosition

EquipmentSlots = Dict[EquipmentPosition, str | None]


def empty_equipment() -> EquipmentSlots:
    """Return all six equipment positions, unequipped."""
    return {position: None for position in EQUIPMENT_POSITIONS}
