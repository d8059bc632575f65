"""Attribute models for the character."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from idlelife.core.types import AttributeType

# description, starting value, icon
_ATTRIBUTE_DEFAULTS: Dict[AttributeType, tuple[str, float, str]] = {
    "strength": ("An immortal must have raw physical power.", 1, "fitness_center"),
    "toughness": ("An immortal must develop resilience to endure hardship.", 1, "castle"),
    "speed": ("An immortal must be quick of foot and hand.", 1, "directions_run"),
    "intelligence": ("An immortal must understand the workings of the universe.", 1, "local_library"),
    "charisma": ("An immortal must influence the hearts and minds of others.", 1, "forum"),
    "spirituality": ("An immortal must find deep connections to the divine.", 0, "auto_awesome"),
    "metal_lore": ("Understanding metals and how to forge and use them.", 0, "hardware"),
    "plant_lore": ("Understanding plants and how to grow and care for them.", 0, "forest"),
    "animal_lore": ("Understanding animals and monsters and how to deal with them.", 0, "pets"),
    "alchemy": ("Understanding potions and pills and how to make and use them.", 0, "emoji_food_beverage"),
}


@dataclass(slots=True)
class AttributeState:
    """Current value and permanent aptitude for one attribute."""

    description: str
    value: float
    aptitude: float
    icon: str


def default_attributes() -> Dict[AttributeType, AttributeState]:
    """Return the attribute table a brand new character starts with."""
    return {
        name: AttributeState(description=description, value=value, aptitude=1, icon=icon)
        for name, (description, value, icon) in _ATTRIBUTE_DEFAULTS.items()
    }
