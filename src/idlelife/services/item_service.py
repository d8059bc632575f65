"""Inventory item use, selling and automation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal

from idlelife.data.repositories import ItemsRepository
from idlelife.domain.defs import ItemDef
from idlelife.domain.item_effects import ItemEffectResult, apply_effects
from idlelife.domain.state import GameSession

logger = logging.getLogger(__name__)

AutomationMode = Literal["use", "sell"]


@dataclass(slots=True)
class InventoryRowView:
    item_id: str
    name: str
    type: str
    quantity: int
    value: int
    usable: bool
    use_label: str | None
    auto_use: bool
    auto_sell: bool


@dataclass(slots=True)
class ItemEvent:
    """Base class for inventory events."""


@dataclass(slots=True)
class ItemUsedEvent(ItemEvent):
    item_id: str
    item_name: str
    consumed: bool
    remaining: int
    result: ItemEffectResult


@dataclass(slots=True)
class ItemSoldEvent(ItemEvent):
    item_id: str
    item_name: str
    quantity: int
    total_gain: int
    total_money: float


@dataclass(slots=True)
class AutomationToggledEvent(ItemEvent):
    item_id: str
    item_name: str
    mode: AutomationMode
    enabled: bool


@dataclass(slots=True)
class ItemActionFailedEvent(ItemEvent):
    item_id: str
    reason: str
    message: str


class ItemService:
    """Applies item effects to the session and manages owned items."""

    def __init__(self, items_repo: ItemsRepository) -> None:
        self._items_repo = items_repo

    # ------------------------------------------------------------------ Views
    def build_inventory_view(self, session: GameSession) -> List[InventoryRowView]:
        rows: List[InventoryRowView] = []
        for item_id, quantity in sorted(session.inventory.items.items()):
            item = self._items_repo.get(item_id)
            rows.append(
                InventoryRowView(
                    item_id=item_id,
                    name=item.name,
                    type=item.type,
                    quantity=quantity,
                    value=item.value,
                    usable=item.usable,
                    use_label=item.use_label,
                    auto_use=item_id in session.auto_use,
                    auto_sell=item_id in session.auto_sell,
                )
            )
        return rows

    def cheapest_food(self, session: GameSession) -> str | None:
        """Return the lowest-value owned food, ties broken by id."""
        foods = [
            self._items_repo.get(item_id)
            for item_id in session.inventory.items
            if self._items_repo.has(item_id)
        ]
        foods = [item for item in foods if item.type == "food" and item.usable]
        if not foods:
            return None
        return min(foods, key=lambda item: (item.value, item.id)).id

    # ---------------------------------------------------------------- Actions
    def use_item(self, session: GameSession, item_id: str) -> List[ItemEvent]:
        item = self._lookup(item_id)
        if item is None:
            return [self._failed(item_id, "unknown_item", "That item does not exist.")]
        if session.inventory.quantity(item_id) <= 0:
            return [self._failed(item_id, "not_owned", f"You don't have any {item.name}.")]
        if not item.usable:
            return [self._failed(item_id, "not_usable", f"{item.name} can't be used.")]

        result = apply_effects(session, item.effects)
        if item.use_consumes:
            session.inventory.remove_item(item_id)
        logger.debug("Used %s (consumed=%s)", item_id, item.use_consumes)
        return [
            ItemUsedEvent(
                item_id=item_id,
                item_name=item.name,
                consumed=item.use_consumes,
                remaining=session.inventory.quantity(item_id),
                result=result,
            )
        ]

    def sell_item(self, session: GameSession, item_id: str, quantity: int = 1) -> List[ItemEvent]:
        if quantity <= 0:
            return [self._failed(item_id, "invalid_quantity", "Quantity must be positive.")]
        item = self._lookup(item_id)
        if item is None:
            return [self._failed(item_id, "unknown_item", "That item does not exist.")]
        if not session.inventory.remove_item(item_id, quantity):
            return [self._failed(item_id, "not_owned", f"You don't have enough {item.name} to sell.")]
        total_gain = item.value * quantity
        session.character.money += total_gain
        return [
            ItemSoldEvent(
                item_id=item_id,
                item_name=item.name,
                quantity=quantity,
                total_gain=total_gain,
                total_money=session.character.money,
            )
        ]

    def set_auto_use(self, session: GameSession, item_id: str, enabled: bool) -> List[ItemEvent]:
        return self._set_automation(session, item_id, "use", enabled)

    def set_auto_sell(self, session: GameSession, item_id: str, enabled: bool) -> List[ItemEvent]:
        return self._set_automation(session, item_id, "sell", enabled)

    def run_automation(self, session: GameSession) -> List[ItemEvent]:
        """Use every auto-use item and sell every auto-sell item currently owned."""
        events: List[ItemEvent] = []
        if session.is_unlocked("auto_use"):
            for item_id in sorted(session.auto_use):
                item = self._lookup(item_id)
                if item is None or not item.usable:
                    continue
                uses = session.inventory.quantity(item_id) if item.use_consumes else 1
                for _ in range(uses):
                    if session.inventory.quantity(item_id) <= 0:
                        break
                    events.extend(self.use_item(session, item_id))
        if session.is_unlocked("auto_sell"):
            for item_id in sorted(session.auto_sell):
                quantity = session.inventory.quantity(item_id)
                if quantity > 0:
                    events.extend(self.sell_item(session, item_id, quantity))
        return events

    # ---------------------------------------------------------------- Helpers
    def _set_automation(
        self, session: GameSession, item_id: str, mode: AutomationMode, enabled: bool
    ) -> List[ItemEvent]:
        item = self._lookup(item_id)
        if item is None:
            return [self._failed(item_id, "unknown_item", "That item does not exist.")]
        unlock = "auto_use" if mode == "use" else "auto_sell"
        if not session.is_unlocked(unlock):
            return [
                self._failed(item_id, "locked", f"You haven't learned how to automatically {mode} items yet.")
            ]
        if mode == "use" and not item.usable:
            return [self._failed(item_id, "not_usable", f"{item.name} can't be used.")]

        target, other = (
            (session.auto_use, session.auto_sell) if mode == "use" else (session.auto_sell, session.auto_use)
        )
        if enabled:
            target.add(item_id)
            other.discard(item_id)
        else:
            target.discard(item_id)
        return [AutomationToggledEvent(item_id=item_id, item_name=item.name, mode=mode, enabled=enabled)]

    def _lookup(self, item_id: str) -> ItemDef | None:
        try:
            return self._items_repo.get(item_id)
        except KeyError:
            return None

    @staticmethod
    def _failed(item_id: str, reason: str, message: str) -> ItemActionFailedEvent:
        return ItemActionFailedEvent(item_id=item_id, reason=reason, message=message)
