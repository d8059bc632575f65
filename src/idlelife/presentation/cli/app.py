"""Console-driven UI loops for Idle Life."""
from __future__ import annotations

import json
import logging
import secrets
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Tuple

from idlelife.data.repositories import FurnitureRepository, ItemsRepository, ShopsRepository
from idlelife.domain.state import GameSession
from idlelife.presentation.cli import config, render
from idlelife.presentation.cli.save_slots import SaveSlotStore, SlotMetadata
from idlelife.services import (
    AutomationToggledEvent,
    CharacterDiedEvent,
    FurniturePlacedEvent,
    ItemActionFailedEvent,
    ItemService,
    ItemSoldEvent,
    ItemUsedEvent,
    LifeService,
    ReincarnatedEvent,
    SaveLoadError,
    SaveService,
    ShopActionFailedEvent,
    ShopPurchaseEvent,
    ShopService,
    StarvingEvent,
    TimePassedResult,
)

logger = logging.getLogger(__name__)

MenuAction = Literal["new_game", "load_game", "quit"]
GameAction = Literal[
    "pass_time", "inventory", "shops", "character", "reincarnate", "save", "debug_money", "quit"
]
_MAX_RANDOM_SEED = 2**31 - 1
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_RECENT_LOG_LINES = 5
_DEBUG_MONEY_GRANT = 1000


@dataclass(slots=True)
class CliServices:
    life: LifeService
    items: ItemService
    shops: ShopService
    saves: SaveService


def main() -> None:
    """Start the interactive CLI session."""
    options = config.load_config()
    logging.basicConfig(level=options["log_level"], format=_LOG_FORMAT)
    services = _build_services()
    store = SaveSlotStore()
    print("=== Idle Life ===")
    while True:
        action = _main_menu_loop()
        if action == "quit":
            break
        if action == "new_game":
            session = services.life.start_new_game(_prompt_seed())
        else:
            session = _load_from_slot(services.saves, store)
            if session is None:
                continue
        _run_game_loop(services, store, session, days_per_turn=options["days_per_turn"])
    print("Goodbye!")


def _build_services() -> CliServices:
    """Construct every service with concrete repositories."""
    items_repo = ItemsRepository()
    furniture_repo = FurnitureRepository()
    shops_repo = ShopsRepository(items_repo=items_repo, furniture_repo=furniture_repo)
    item_service = ItemService(items_repo)
    return CliServices(
        life=LifeService(items_repo=items_repo, furniture_repo=furniture_repo, item_service=item_service),
        items=item_service,
        shops=ShopService(shops_repo=shops_repo, items_repo=items_repo, furniture_repo=furniture_repo),
        saves=SaveService(items_repo=items_repo, furniture_repo=furniture_repo),
    )


# ------------------------------------------------------------------ Menus
def _main_menu_options() -> List[Tuple[str, MenuAction]]:
    return [("New Life", "new_game"), ("Load Game", "load_game"), ("Quit", "quit")]


def _build_game_menu_entries() -> List[Tuple[str, GameAction]]:
    entries: List[Tuple[str, GameAction]] = [
        ("Pass Time", "pass_time"),
        ("Inventory", "inventory"),
        ("Shops", "shops"),
        ("Character", "character"),
        ("Reincarnate", "reincarnate"),
        ("Save Game", "save"),
    ]
    if render.debug_enabled():
        entries.append((f"[DEBUG] Grant {_DEBUG_MONEY_GRANT} money", "debug_money"))
    entries.append(("Quit to Main Menu", "quit"))
    return entries


def _main_menu_loop() -> MenuAction:
    options = _main_menu_options()
    while True:
        render.render_menu("Main Menu", [label for label, _ in options])
        index = _prompt_index(len(options), allow_back=False)
        if index is not None:
            return options[index][1]


def _run_game_loop(
    services: CliServices, store: SaveSlotStore, session: GameSession, *, days_per_turn: int
) -> None:
    """Run the in-game menu until the player returns to the main menu."""
    while True:
        character = session.character
        print(
            f"\nLife {session.life_count} | Age {render.format_age(character.age)} "
            f"of {render.format_age(character.lifespan)} | Money {character.money:g}"
        )
        entries = _build_game_menu_entries()
        render.render_menu("Actions", [label for label, _ in entries])
        index = _prompt_index(len(entries), allow_back=False)
        if index is None:
            continue
        action = entries[index][1]
        if action == "pass_time":
            result = services.life.pass_days(session, days_per_turn)
            render.render_bullet_lines(_format_time_passed(result))
            render.render_bullet_lines(
                render.format_log_entry(entry) for entry in session.log.recent(_RECENT_LOG_LINES)
            )
        elif action == "inventory":
            _run_inventory_menu(services.items, session)
        elif action == "shops":
            _run_shops_menu(services.shops, session)
        elif action == "character":
            _render_character(session)
        elif action == "reincarnate":
            if _confirm("Abandon this life and reincarnate?"):
                render.render_bullet_lines([_format_event(services.life.reincarnate(session))])
        elif action == "save":
            _save_to_slot(services.saves, store, session)
        elif action == "debug_money":
            character.money += _DEBUG_MONEY_GRANT
        else:
            return


# -------------------------------------------------------------- Inventory
def _run_inventory_menu(item_service: ItemService, session: GameSession) -> None:
    while True:
        rows = item_service.build_inventory_view(session)
        if not rows:
            print("\nYour inventory is empty.")
            return
        labels = []
        for row in rows:
            flags = [flag for flag, enabled in (("auto-use", row.auto_use), ("auto-sell", row.auto_sell)) if enabled]
            suffix = f" [{', '.join(flags)}]" if flags else ""
            labels.append(f"{row.name} x{row.quantity} (value {row.value}){suffix}")
        render.render_menu("Inventory", labels)
        index = _prompt_index(len(rows))
        if index is None:
            return
        row = rows[index]
        actions: List[Tuple[str, str]] = []
        if row.usable:
            actions.append((row.use_label or "Use", "use"))
        actions.append(("Sell", "sell"))
        if session.is_unlocked("auto_use") and row.usable:
            actions.append(("Disable auto-use" if row.auto_use else "Enable auto-use", "auto_use"))
        if session.is_unlocked("auto_sell"):
            actions.append(("Disable auto-sell" if row.auto_sell else "Enable auto-sell", "auto_sell"))
        render.render_menu(row.name, [label for label, _ in actions])
        choice = _prompt_index(len(actions))
        if choice is None:
            continue
        action = actions[choice][1]
        if action == "use":
            events = item_service.use_item(session, row.item_id)
        elif action == "sell":
            events = item_service.sell_item(session, row.item_id, _prompt_quantity(row.quantity))
        elif action == "auto_use":
            events = item_service.set_auto_use(session, row.item_id, not row.auto_use)
        else:
            events = item_service.set_auto_sell(session, row.item_id, not row.auto_sell)
        render.render_bullet_lines(_format_event(event) for event in events)


# ------------------------------------------------------------------ Shops
def _run_shops_menu(shop_service: ShopService, session: GameSession) -> None:
    shops = shop_service.list_shops()
    while True:
        render.render_menu("Shops", [shop.name for shop in shops])
        index = _prompt_index(len(shops))
        if index is None:
            return
        _run_shop(shop_service, session, shops[index].shop_id)


def _run_shop(shop_service: ShopService, session: GameSession, shop_id: str) -> None:
    while True:
        view = shop_service.build_shop_view(session, shop_id)
        labels = [
            f"{entry.name} - {entry.price}{' (owned)' if entry.owned else ''}: {entry.description}"
            for entry in view.entries
        ]
        render.render_menu(f"{view.name} (money {view.money:g})", labels)
        index = _prompt_index(len(view.entries))
        if index is None:
            return
        entry = view.entries[index]
        quantity = 1 if view.shop_type == "furniture" else _prompt_quantity(None)
        events = shop_service.buy(session, shop_id, entry.entry_id, quantity)
        render.render_bullet_lines(_format_event(event) for event in events)


# -------------------------------------------------------------- Character
def _render_character(session: GameSession) -> None:
    character = session.character
    render.render_heading("Character")
    render.render_bullet_lines(render.format_lifespan_lines(character))
    render.render_heading("Status")
    render.render_bullet_lines(render.format_status_lines(character))
    render.render_heading("Attributes")
    render.render_bullet_lines(
        render.format_attribute_lines(character, show_debug=render.debug_enabled())
    )
    render.render_heading("Furniture")
    render.render_bullet_lines(
        f"{slot.title()}: {furniture_id or '-'}" for slot, furniture_id in session.furniture.slots.items()
    )


# ------------------------------------------------------------ Save / Load
def _format_slot_label(slot: SlotMetadata) -> str:
    if not slot.exists:
        return f"Slot {slot.slot}: Empty"
    if slot.is_corrupt or slot.metadata is None:
        return f"Slot {slot.slot}: Corrupt save"
    metadata = slot.metadata
    return (
        f"Slot {slot.slot}: Life {metadata.get('life_count', '?')}, "
        f"age {metadata.get('age_years', '?')}, money {metadata.get('money', '?')} "
        f"({metadata.get('saved_at', 'unknown time')})"
    )


def _save_to_slot(save_service: SaveService, store: SaveSlotStore, session: GameSession) -> None:
    slots = store.list_slots()
    render.render_menu("Save Game", [_format_slot_label(slot) for slot in slots])
    index = _prompt_index(len(slots))
    if index is None:
        return
    slot = slots[index]
    if slot.exists and not _confirm(f"Overwrite slot {slot.slot}?"):
        return
    store.write_slot(slot.slot, save_service.serialize(session))
    print(f"Saved to slot {slot.slot}.")


def _load_from_slot(save_service: SaveService, store: SaveSlotStore) -> GameSession | None:
    slots = store.list_slots()
    render.render_menu("Load Game", [_format_slot_label(slot) for slot in slots])
    index = _prompt_index(len(slots))
    if index is None:
        return None
    slot = slots[index]
    if not slot.exists:
        print("That slot is empty.")
        return None
    return _deserialize_slot(save_service, store, slot.slot)


def _deserialize_slot(save_service: SaveService, store: SaveSlotStore, slot: int) -> GameSession | None:
    try:
        payload: Dict[str, Any] = store.read_slot(slot)
        session = save_service.deserialize(payload)
    except (OSError, json.JSONDecodeError, SaveLoadError) as exc:
        logger.warning("Failed to load slot %s: %s", slot, exc)
        print(f"Could not load slot {slot}: {exc}")
        return None
    print(f"Loaded slot {slot}.")
    return session


# ----------------------------------------------------------------- Events
def _format_time_passed(result: TimePassedResult) -> List[str]:
    lines = [f"{result.days_passed} day(s) pass."]
    for food_id, count in sorted(result.meals_eaten.items()):
        lines.append(f"Ate {food_id.replace('_', ' ')} x{count}.")
    if result.rice_bought:
        lines.append(f"Bought and ate rice x{result.rice_bought}.")
    lines.extend(_format_event(event) for event in result.events)
    return lines


def _format_event(event: object) -> str:
    if isinstance(event, ItemUsedEvent):
        return f"Used {event.item_name} ({event.remaining} left)."
    if isinstance(event, ItemSoldEvent):
        return f"Sold {event.item_name} x{event.quantity} for {event.total_gain} (Total: {event.total_money:g})."
    if isinstance(event, AutomationToggledEvent):
        state = "enabled" if event.enabled else "disabled"
        return f"Auto-{event.mode} {state} for {event.item_name}."
    if isinstance(event, (ItemActionFailedEvent, ShopActionFailedEvent)):
        return event.message
    if isinstance(event, ShopPurchaseEvent):
        return f"Bought {event.entry_name} x{event.quantity} for {event.total_cost} (Money: {event.total_money:g})."
    if isinstance(event, FurniturePlacedEvent):
        if event.replaced_id:
            return f"{event.furniture_name} replaces the old {event.slot} furniture."
        return f"{event.furniture_name} is placed in your home."
    if isinstance(event, StarvingEvent):
        return f"You are starving! Lost {event.damage:g} health ({event.health:g} left)."
    if isinstance(event, CharacterDiedEvent):
        cause = "old age" if event.cause == "old_age" else "injury"
        return f"Life {event.life_count} ended by {cause} at {render.format_age(event.age)}."
    if isinstance(event, ReincarnatedEvent):
        return (
            f"Life {event.life_count} begins. Lifespan {render.format_age(event.lifespan)}, "
            f"total aptitude {event.total_aptitude:.2f}."
        )
    return str(event)


# ---------------------------------------------------------------- Prompts
def _prompt_seed() -> int:
    while True:
        raw_value = input("Enter seed (blank for random): ").strip()
        if not raw_value:
            return secrets.randbelow(_MAX_RANDOM_SEED)
        try:
            return int(raw_value)
        except ValueError:
            print("Invalid seed. Please enter a valid integer.")


def _prompt_index(count: int, *, allow_back: bool = True) -> int | None:
    """Return a zero-based choice, or None when the player backs out."""
    prompt = "Select an option (0 to go back): " if allow_back else "Select an option: "
    while True:
        raw = input(prompt).strip()
        if allow_back and raw in ("", "0"):
            return None
        try:
            index = int(raw) - 1
        except ValueError:
            print("Please enter a number.")
            continue
        if 0 <= index < count:
            return index
        print(f"Please enter a value between 1 and {count}.")


def _prompt_quantity(maximum: int | None) -> int:
    hint = f" (1-{maximum}, default 1)" if maximum is not None else " (default 1)"
    while True:
        raw = input(f"Quantity{hint}: ").strip()
        if not raw:
            return 1
        try:
            quantity = int(raw)
        except ValueError:
            print("Please enter a number.")
            continue
        if quantity >= 1 and (maximum is None or quantity <= maximum):
            return quantity
        print("Invalid quantity.")


def _confirm(question: str) -> bool:
    return input(f"{question} [y/N]: ").strip().lower() in ("y", "yes")
