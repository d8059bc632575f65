"""Shared type aliases for the core and domain layers."""
from typing import Literal, get_args

AttributeType = Literal[
    "strength",
    "toughness",
    "speed",
    "intelligence",
    "charisma",
    "spirituality",
    "metal_lore",
    "plant_lore",
    "animal_lore",
    "alchemy",
]
StatusType = Literal["health", "stamina", "mana", "nourishment"]
EquipmentPosition = Literal["head", "body", "left_hand", "right_hand", "legs", "feet"]
FurnitureSlot = Literal["bed", "bathtub", "kitchen", "workbench"]
UnlockType = Literal[
    "auto_replant",
    "auto_restart",
    "auto_sell",
    "auto_use",
    "auto_buy_land",
    "auto_buy_home",
    "auto_buy_furniture",
    "auto_field",
]
LogStyle = Literal["STANDARD", "INJURY"]
LogCategory = Literal["EVENT", "STORY"]

ATTRIBUTE_TYPES: tuple[AttributeType, ...] = get_args(AttributeType)
STATUS_TYPES: tuple[StatusType, ...] = get_args(StatusType)
EQUIPMENT_POSITIONS: tuple[EquipmentPosition, ...] = get_args(EquipmentPosition)
FURNITURE_SLOTS: tuple[FurnitureSlot, ...] = get_args(FurnitureSlot)
UNLOCK_TYPES: tuple[UnlockType, ...] = get_args(UnlockType)

__all__ = [
    "ATTRIBUTE_TYPES",
    "AttributeType",
    "EQUIPMENT_POSITIONS",
    "EquipmentPosition",
    "FURNITURE_SLOTS",
    "FurnitureSlot",
    "LogCategory",
    "LogStyle",
    "STATUS_TYPES",
    "StatusType",
    "UNLOCK_TYPES",
    "UnlockType",
]
