"""Item inventory and home furniture structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from idlelife.core.types import FURNITURE_SLOTS, FurnitureSlot


def _empty_furniture_slots() -> Dict[FurnitureSlot, str | None]:
    return {slot: None for slot in FURNITURE_SLOTS}


@dataclass(slots=True)
class Inventory:
    """Owned item counts keyed by item id."""

    items: Dict[str, int] = field(default_factory=dict)

    def add_item(self, item_id: str, quantity: int = 1) -> None:
        if quantity <= 0:
            return
        self.items[item_id] = self.items.get(item_id, 0) + quantity

    def remove_item(self, item_id: str, quantity: int = 1) -> bool:
        if quantity <= 0:
            return True
        current = self.items.get(item_id, 0)
        if current < quantity:
            return False
        new_value = current - quantity
        if new_value == 0:
            self.items.pop(item_id, None)
        else:
            self.items[item_id] = new_value
        return True

    def quantity(self, item_id: str) -> int:
        return self.items.get(item_id, 0)

    def clear(self) -> None:
        self.items.clear()


@dataclass(slots=True)
class FurnitureSlots:
    """Furniture placed in the home, one piece per slot."""

    slots: Dict[FurnitureSlot, str | None] = field(default_factory=_empty_furniture_slots)

    def place(self, slot: FurnitureSlot, furniture_id: str) -> str | None:
        """Place a piece and return the id it replaced, if any."""
        previous = self.slots.get(slot)
        self.slots[slot] = furniture_id
        return previous

    def placed_ids(self) -> list[str]:
        return [self.slots[slot] for slot in FURNITURE_SLOTS if self.slots.get(slot)]

    def clear(self) -> None:
        self.slots = _empty_furniture_slots()
