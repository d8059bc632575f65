from __future__ import annotations

from idlelife.core.rng import RNG
from idlelife.data.repositories import ItemsRepository
from idlelife.domain.state import GameSession
from idlelife.services.item_service import (
    AutomationToggledEvent,
    ItemActionFailedEvent,
    ItemService,
    ItemSoldEvent,
    ItemUsedEvent,
)


def _setup(**items: int) -> tuple[ItemService, GameSession]:
    session = GameSession(seed=3, rng=RNG(3))
    for item_id, quantity in items.items():
        session.inventory.add_item(item_id, quantity)
    return ItemService(ItemsRepository()), session


def test_use_food_consumes_and_feeds() -> None:
    service, session = _setup(rice=2)

    events = service.use_item(session, "rice")

    assert isinstance(events[0], ItemUsedEvent)
    assert events[0].consumed is True
    assert events[0].remaining == 1
    assert events[0].result.status_deltas["nourishment"] == 1
    assert session.character.status["nourishment"].value == 8


def test_use_food_is_clamped_at_max_nourishment() -> None:
    service, session = _setup(rice=1)
    session.character.status["nourishment"].value = 14

    service.use_item(session, "rice")

    assert session.character.status["nourishment"].value == 14
    assert session.inventory.quantity("rice") == 0


def test_use_item_failures() -> None:
    service, session = _setup(elm_log=1)

    not_owned = service.use_item(session, "rice")[0]
    not_usable = service.use_item(session, "elm_log")[0]
    unknown = service.use_item(session, "philosopher_stone")[0]

    assert isinstance(not_owned, ItemActionFailedEvent) and not_owned.reason == "not_owned"
    assert isinstance(not_usable, ItemActionFailedEvent) and not_usable.reason == "not_usable"
    assert isinstance(unknown, ItemActionFailedEvent) and unknown.reason == "unknown_item"
    assert session.inventory.quantity("elm_log") == 1


def test_reading_manual_unlocks_feature() -> None:
    service, session = _setup(auto_use_manual=1)

    events = service.use_item(session, "auto_use_manual")

    assert events[0].result.unlocked == ["auto_use"]
    assert session.is_unlocked("auto_use") is True
    assert session.inventory.quantity("auto_use_manual") == 0


def test_sell_item_pays_full_value() -> None:
    service, session = _setup(iron_bar=3)
    price = ItemsRepository().get("iron_bar").value

    events = service.sell_item(session, "iron_bar", 2)

    assert isinstance(events[0], ItemSoldEvent)
    assert events[0].total_gain == price * 2
    assert session.character.money == 300 + price * 2
    assert session.inventory.quantity("iron_bar") == 1


def test_sell_item_failures() -> None:
    service, session = _setup(elm_log=1)

    assert service.sell_item(session, "elm_log", 0)[0].reason == "invalid_quantity"
    assert service.sell_item(session, "elm_log", 2)[0].reason == "not_owned"
    assert service.sell_item(session, "dragon_scale", 1)[0].reason == "unknown_item"
    assert session.character.money == 300


def test_automation_requires_unlock() -> None:
    service, session = _setup(rice=1)

    event = service.set_auto_use(session, "rice", True)[0]

    assert isinstance(event, ItemActionFailedEvent)
    assert event.reason == "locked"
    assert session.auto_use == set()


def test_auto_use_and_auto_sell_are_exclusive() -> None:
    service, session = _setup(rice=1)
    session.unlocks["auto_use"] = True
    session.unlocks["auto_sell"] = True

    service.set_auto_use(session, "rice", True)
    event = service.set_auto_sell(session, "rice", True)[0]

    assert isinstance(event, AutomationToggledEvent)
    assert session.auto_sell == {"rice"}
    assert session.auto_use == set()


def test_auto_use_rejects_unusable_item() -> None:
    service, session = _setup(elm_log=1)
    session.unlocks["auto_use"] = True

    assert service.set_auto_use(session, "elm_log", True)[0].reason == "not_usable"


def test_run_automation_uses_and_sells() -> None:
    service, session = _setup(rice=3, elm_log=4)
    session.unlocks["auto_use"] = True
    session.unlocks["auto_sell"] = True
    service.set_auto_use(session, "rice", True)
    service.set_auto_sell(session, "elm_log", True)

    events = service.run_automation(session)

    assert sum(isinstance(event, ItemUsedEvent) for event in events) == 3
    assert session.inventory.items == {}
    assert session.character.status["nourishment"].value == 10
    assert session.character.money == 304


def test_run_automation_does_nothing_while_locked() -> None:
    service, session = _setup(elm_log=4)
    session.auto_sell.add("elm_log")

    assert service.run_automation(session) == []
    assert session.inventory.quantity("elm_log") == 4


def test_cheapest_food_picks_lowest_value() -> None:
    service, session = _setup(beans=1, cabbage=2, elm_log=5)

    assert service.cheapest_food(session) == "cabbage"
    session.inventory.clear()
    assert service.cheapest_food(session) is None


def test_inventory_view_is_sorted_and_flags_automation() -> None:
    service, session = _setup(rice=1, beans=2)
    session.auto_use.add("rice")

    rows = service.build_inventory_view(session)

    assert [row.item_id for row in rows] == ["beans", "rice"]
    assert rows[1].auto_use is True
    assert rows[0].use_label == "Eat"
