from __future__ import annotations

from idlelife.core.rng import RNG
from idlelife.data.repositories import FurnitureRepository, ItemsRepository, ShopsRepository
from idlelife.domain.state import GameSession
from idlelife.services.shop_service import (
    FurniturePlacedEvent,
    ShopActionFailedEvent,
    ShopPurchaseEvent,
    ShopService,
)


def _build_service() -> ShopService:
    items_repo = ItemsRepository()
    furniture_repo = FurnitureRepository()
    shops_repo = ShopsRepository(items_repo=items_repo, furniture_repo=furniture_repo)
    return ShopService(shops_repo=shops_repo, items_repo=items_repo, furniture_repo=furniture_repo)


def _session() -> GameSession:
    return GameSession(seed=5, rng=RNG(5))


def test_list_shops() -> None:
    shops = _build_service().list_shops()

    assert [(shop.shop_id, shop.shop_type) for shop in shops] == [
        ("furniture_store", "furniture"),
        ("general_store", "item"),
    ]


def test_buy_item_adds_to_inventory() -> None:
    service = _build_service()
    session = _session()

    events = service.buy(session, "general_store", "rice", 5)

    assert isinstance(events[0], ShopPurchaseEvent)
    assert events[0].total_cost == 5
    assert session.character.money == 295
    assert session.inventory.quantity("rice") == 5


def test_buy_failures() -> None:
    service = _build_service()
    session = _session()

    assert service.buy(session, "general_store", "rice", 0)[0].reason == "invalid_quantity"
    assert service.buy(session, "black_market", "rice")[0].reason == "unknown_shop"
    assert service.buy(session, "general_store", "elm_log")[0].reason == "not_in_stock"
    session.character.money = 10
    failure = service.buy(session, "general_store", "melon")[0]
    assert isinstance(failure, ShopActionFailedEvent)
    assert failure.reason == "insufficient_money"
    assert session.character.money == 10
    assert session.inventory.items == {}


def test_known_manual_cannot_be_bought_again() -> None:
    service = _build_service()
    session = _session()
    session.unlocks["auto_use"] = True

    event = service.buy(session, "general_store", "auto_use_manual")[0]

    assert event.reason == "already_owned"
    assert session.character.money == 300


def test_buy_furniture_places_and_replaces() -> None:
    service = _build_service()
    session = _session()

    first = service.buy(session, "furniture_store", "blanket")
    second = service.buy(session, "furniture_store", "mat")

    assert isinstance(first[1], FurniturePlacedEvent) and first[1].replaced_id is None
    assert isinstance(second[1], FurniturePlacedEvent) and second[1].replaced_id == "blanket"
    assert session.furniture.slots["bed"] == "mat"
    assert session.character.money == 298


def test_buy_furniture_rejects_duplicates_and_quantities() -> None:
    service = _build_service()
    session = _session()
    service.buy(session, "furniture_store", "anvil")

    assert service.buy(session, "furniture_store", "anvil")[0].reason == "already_owned"
    assert service.buy(session, "furniture_store", "wok", 2)[0].reason == "invalid_quantity"
    assert session.character.money == 299


def test_shop_view_marks_owned_entries() -> None:
    service = _build_service()
    session = _session()
    session.inventory.add_item("beans", 3)
    session.unlocks["auto_sell"] = True

    view = service.build_shop_view(session, "general_store")
    entries = {entry.entry_id: entry for entry in view.entries}

    assert view.money == 300
    assert entries["beans"].owned is True and entries["beans"].quantity == 3
    assert entries["auto_sell_manual"].owned is True
    assert entries["rice"].owned is False


def test_furniture_view_marks_placed_piece() -> None:
    service = _build_service()
    session = _session()
    session.furniture.place("kitchen", "wok")

    view = service.build_shop_view(session, "furniture_store")
    owned = [entry.entry_id for entry in view.entries if entry.owned]

    assert owned == ["wok"]
