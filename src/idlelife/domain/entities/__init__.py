"""Runtime entity exports."""

from .attributes import AttributeState, default_attributes
from .character import Character, CharacterProperties
from .equipment import EquipmentSlots, empty_equipment
from .status import StatusPool, default_status

__all__ = [
    "AttributeState",
    "Character",
    "CharacterProperties",
    "EquipmentSlots",
    "StatusPool",
    "default_attributes",
    "default_status",
    "empty_equipment",
]
