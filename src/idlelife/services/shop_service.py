"""Shop service for buying items and furniture."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from idlelife.data.repositories import FurnitureRepository, ItemsRepository, ShopsRepository
from idlelife.domain.defs import ShopDef, ShopType
from idlelife.domain.item_effects import is_owned
from idlelife.domain.state import GameSession

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ShopEvent:
    """Base class for shop-related events."""


@dataclass(slots=True)
class ShopPurchaseEvent(ShopEvent):
    entry_id: str
    entry_name: str
    quantity: int
    total_cost: int
    total_money: float


@dataclass(slots=True)
class FurniturePlacedEvent(ShopEvent):
    furniture_id: str
    furniture_name: str
    slot: str
    replaced_id: str | None


@dataclass(slots=True)
class ShopActionFailedEvent(ShopEvent):
    reason: str
    message: str


@dataclass(slots=True)
class ShopSummaryView:
    shop_id: str
    name: str
    shop_type: ShopType


@dataclass(slots=True)
class ShopEntryView:
    entry_id: str
    name: str
    price: int
    description: str
    owned: bool
    quantity: int


@dataclass(slots=True)
class ShopView:
    shop_id: str
    name: str
    shop_type: ShopType
    money: float
    entries: List[ShopEntryView] = field(default_factory=list)


class ShopService:
    """Catalog browsing and purchases paid from the character's money."""

    def __init__(
        self,
        *,
        shops_repo: ShopsRepository,
        items_repo: ItemsRepository,
        furniture_repo: FurnitureRepository,
    ) -> None:
        self._shops_repo = shops_repo
        self._items_repo = items_repo
        self._furniture_repo = furniture_repo

    def list_shops(self) -> List[ShopSummaryView]:
        return [
            ShopSummaryView(shop_id=shop.id, name=shop.name, shop_type=shop.shop_type)
            for shop in self._shops_repo.all()
        ]

    def build_shop_view(self, session: GameSession, shop_id: str) -> ShopView:
        shop = self._shops_repo.get(shop_id)
        entries = [self._build_entry(session, shop, entry_id) for entry_id in shop.stock]
        return ShopView(
            shop_id=shop.id,
            name=shop.name,
            shop_type=shop.shop_type,
            money=session.character.money,
            entries=entries,
        )

    def buy(
        self, session: GameSession, shop_id: str, entry_id: str, quantity: int = 1
    ) -> List[ShopEvent]:
        if quantity <= 0:
            return [ShopActionFailedEvent(reason="invalid_quantity", message="Quantity must be positive.")]
        try:
            shop = self._shops_repo.get(shop_id)
        except KeyError:
            return [ShopActionFailedEvent(reason="unknown_shop", message="That shop does not exist.")]
        if entry_id not in shop.stock:
            return [ShopActionFailedEvent(reason="not_in_stock", message="Item is not available here.")]
        if shop.shop_type == "furniture":
            return self._buy_furniture(session, entry_id, quantity)
        return self._buy_item(session, entry_id, quantity)

    def _buy_item(self, session: GameSession, item_id: str, quantity: int) -> List[ShopEvent]:
        item = self._items_repo.get(item_id)
        if is_owned(session, item.effects):
            return [
                ShopActionFailedEvent(reason="already_owned", message=f"You already know {item.name}.")
            ]
        total_cost = item.value * quantity
        if session.character.money < total_cost:
            return [ShopActionFailedEvent(reason="insufficient_money", message="Not enough money.")]
        session.character.money -= total_cost
        session.inventory.add_item(item_id, quantity)
        return [
            ShopPurchaseEvent(
                entry_id=item_id,
                entry_name=item.name,
                quantity=quantity,
                total_cost=total_cost,
                total_money=session.character.money,
            )
        ]

    def _buy_furniture(self, session: GameSession, furniture_id: str, quantity: int) -> List[ShopEvent]:
        if quantity != 1:
            return [
                ShopActionFailedEvent(
                    reason="invalid_quantity", message="Furniture can only be bought one piece at a time."
                )
            ]
        furniture = self._furniture_repo.get(furniture_id)
        if session.furniture.slots.get(furniture.slot) == furniture_id:
            return [
                ShopActionFailedEvent(
                    reason="already_owned", message=f"Your home already has a {furniture.name}."
                )
            ]
        if session.character.money < furniture.value:
            return [ShopActionFailedEvent(reason="insufficient_money", message="Not enough money.")]
        session.character.money -= furniture.value
        replaced = session.furniture.place(furniture.slot, furniture_id)
        logger.debug("Placed %s in %s (replaced %s)", furniture_id, furniture.slot, replaced)
        return [
            ShopPurchaseEvent(
                entry_id=furniture_id,
                entry_name=furniture.name,
                quantity=1,
                total_cost=furniture.value,
                total_money=session.character.money,
            ),
            FurniturePlacedEvent(
                furniture_id=furniture_id,
                furniture_name=furniture.name,
                slot=furniture.slot,
                replaced_id=replaced,
            ),
        ]

    def _build_entry(self, session: GameSession, shop: ShopDef, entry_id: str) -> ShopEntryView:
        if shop.shop_type == "furniture":
            furniture = self._furniture_repo.get(entry_id)
            placed = session.furniture.slots.get(furniture.slot) == entry_id
            return ShopEntryView(
                entry_id=entry_id,
                name=furniture.name,
                price=furniture.value,
                description=furniture.description,
                owned=placed,
                quantity=1 if placed else 0,
            )
        item = self._items_repo.get(entry_id)
        quantity = session.inventory.quantity(entry_id)
        return ShopEntryView(
            entry_id=entry_id,
            name=item.name,
            price=item.value,
            description=item.description,
            owned=quantity > 0 or is_owned(session, item.effects),
            quantity=quantity,
        )
