"""Serialization helpers for manual save/load."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Set

from idlelife.core.rng import RNG, RNGStatePayload
from idlelife.core.types import (
    ATTRIBUTE_TYPES,
    EQUIPMENT_POSITIONS,
    FURNITURE_SLOTS,
    STATUS_TYPES,
    UNLOCK_TYPES,
)
from idlelife.data.repositories import FurnitureRepository, ItemsRepository
from idlelife.domain.entities import Character, CharacterProperties
from idlelife.domain.inventory import FurnitureSlots, Inventory
from idlelife.domain.progression import days_to_years
from idlelife.domain.state import GameSession
from idlelife.services.errors import SaveLoadError

logger = logging.getLogger(__name__)

SavePayload = Dict[str, Any]


class SaveService:
    """Converts runtime state to/from a validated, versioned payload."""

    SAVE_VERSION = 1

    def __init__(self, *, items_repo: ItemsRepository, furniture_repo: FurnitureRepository) -> None:
        self._items_repo = items_repo
        self._furniture_repo = furniture_repo

    def serialize(self, session: GameSession) -> SavePayload:
        """Return a JSON-serializable payload for disk persistence."""
        return {
            "save_version": self.SAVE_VERSION,
            "metadata": self._build_metadata(session),
            "rng": session.rng.export_state(),
            "state": self._serialize_state(session),
        }

    def deserialize(self, payload: Mapping[str, Any]) -> GameSession:
        """Rehydrate a GameSession + RNG from a persisted payload."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        if payload.get("save_version") != self.SAVE_VERSION:
            raise SaveLoadError("Save format is not supported by this version of the game.")
        rng_payload = payload.get("rng")
        state_payload = payload.get("state")
        if not isinstance(rng_payload, Mapping) or not isinstance(state_payload, Mapping):
            raise SaveLoadError("Save data is missing required sections.")

        seed = self._require_int(state_payload.get("seed"), "state.seed")
        rng = RNG(seed)
        try:
            rng.restore_state(self._coerce_rng_payload(rng_payload))
        except ValueError as exc:
            raise SaveLoadError(f"Invalid RNG state: {exc}") from exc

        character = Character()
        character.set_properties(self._coerce_character(state_payload.get("character")))
        session = GameSession(
            seed=seed,
            rng=rng,
            character=character,
            inventory=self._coerce_inventory(state_payload.get("inventory")),
            furniture=self._coerce_furniture(state_payload.get("furniture")),
            unlocks=self._coerce_unlocks(state_payload.get("unlocks")),
            auto_use=self._coerce_item_set(state_payload.get("auto_use"), "state.auto_use"),
            auto_sell=self._coerce_item_set(state_payload.get("auto_sell"), "state.auto_sell"),
            life_count=self._coerce_int_at_least(state_payload.get("life_count"), "state.life_count", 1),
            days_elapsed=self._coerce_int_at_least(
                state_payload.get("days_elapsed"), "state.days_elapsed", 0
            ),
        )
        logger.info("Loaded save for life %s", session.life_count)
        return session

    # ------------------------------------------------------------- Serialize
    def _build_metadata(self, session: GameSession) -> Dict[str, Any]:
        return {
            "life_count": session.life_count,
            "age_years": days_to_years(session.character.age),
            "money": session.character.money,
            "seed": session.seed,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    def _serialize_state(self, session: GameSession) -> Dict[str, Any]:
        return {
            "seed": session.seed,
            "life_count": session.life_count,
            "days_elapsed": session.days_elapsed,
            "character": session.character.get_properties(),
            "inventory": dict(session.inventory.items),
            "furniture": dict(session.furniture.slots),
            "unlocks": dict(session.unlocks),
            "auto_use": sorted(session.auto_use),
            "auto_sell": sorted(session.auto_sell),
        }

    # ----------------------------------------------------------- Deserialize
    def _coerce_rng_payload(self, payload: Mapping[str, Any]) -> RNGStatePayload:
        version = self._require_int(payload.get("version"), "rng.version")
        state_values = payload.get("state")
        if not isinstance(state_values, list):
            raise SaveLoadError("Invalid RNG state payload.")
        return {"version": version, "state": state_values, "gauss": payload.get("gauss")}

    def _coerce_character(self, value: Any) -> CharacterProperties:
        data = self._require_dict(value, "state.character")
        attributes = self._require_exact_keys(
            data.get("attributes"), ATTRIBUTE_TYPES, "state.character.attributes"
        )
        status = self._require_exact_keys(data.get("status"), STATUS_TYPES, "state.character.status")
        equipment = self._require_exact_keys(
            data.get("equipment"), EQUIPMENT_POSITIONS, "state.character.equipment"
        )
        age = data.get("age")
        if age is not None:
            age = self._require_int(age, "state.character.age")
        return {
            "attributes": {
                name: {
                    "description": self._require_str(entry.get("description"), f"{context}.description"),
                    "value": self._require_number(entry.get("value"), f"{context}.value"),
                    "aptitude": self._require_number(entry.get("aptitude"), f"{context}.aptitude"),
                    "icon": self._require_str(entry.get("icon"), f"{context}.icon"),
                }
                for name, entry, context in self._iter_entries(attributes, "state.character.attributes")
            },
            "money": self._require_number(data.get("money"), "state.character.money"),
            "equipment": {
                position: self._coerce_optional_str(item_id, f"state.character.equipment.{position}")
                for position, item_id in equipment.items()
            },
            "age": age,
            "status": {
                name: {
                    "description": self._require_str(entry.get("description"), f"{context}.description"),
                    "value": self._require_number(entry.get("value"), f"{context}.value"),
                    "max": self._require_number(entry.get("max"), f"{context}.max"),
                }
                for name, entry, context in self._iter_entries(status, "state.character.status")
            },
            "base_lifespan": self._require_number(data.get("base_lifespan"), "state.character.base_lifespan"),
            "food_lifespan": self._require_number(data.get("food_lifespan"), "state.character.food_lifespan"),
            "stat_lifespan": self._require_number(data.get("stat_lifespan"), "state.character.stat_lifespan"),
        }

    def _iter_entries(self, mapping: Dict[str, Any], context: str):
        for name, entry in mapping.items():
            entry_context = f"{context}.{name}"
            yield name, self._require_dict(entry, entry_context), entry_context

    def _coerce_inventory(self, value: Any) -> Inventory:
        mapping = self._require_dict(value, "state.inventory")
        inventory = Inventory()
        for item_id, quantity in mapping.items():
            self._require_known_item(item_id, "state.inventory")
            inventory.add_item(item_id, self._coerce_int_at_least(quantity, f"state.inventory.{item_id}", 1))
        return inventory

    def _coerce_furniture(self, value: Any) -> FurnitureSlots:
        mapping = self._require_exact_keys(value, FURNITURE_SLOTS, "state.furniture")
        furniture = FurnitureSlots()
        for slot, furniture_id in mapping.items():
            if furniture_id is None:
                continue
            furniture_id = self._require_str(furniture_id, f"state.furniture.{slot}")
            try:
                furniture_def = self._furniture_repo.get(furniture_id)
            except KeyError as exc:
                raise SaveLoadError(f"state.furniture.{slot} references unknown furniture '{furniture_id}'.") from exc
            if furniture_def.slot != slot:
                raise SaveLoadError(f"state.furniture.{slot} cannot hold '{furniture_id}'.")
            furniture.place(slot, furniture_id)
        return furniture

    def _coerce_unlocks(self, value: Any) -> Dict[str, bool]:
        mapping = self._require_dict(value, "state.unlocks")
        unlocks = {unlock: False for unlock in UNLOCK_TYPES}
        for key, flag in mapping.items():
            if key not in unlocks:
                raise SaveLoadError(f"state.unlocks has unknown key '{key}'.")
            if not isinstance(flag, bool):
                raise SaveLoadError(f"state.unlocks.{key} must be a boolean.")
            unlocks[key] = flag
        return unlocks

    def _coerce_item_set(self, value: Any, context: str) -> Set[str]:
        if value is None:
            return set()
        if not isinstance(value, list):
            raise SaveLoadError(f"{context} must be a list.")
        for item_id in value:
            self._require_known_item(item_id, context)
        return set(value)

    def _require_known_item(self, item_id: Any, context: str) -> str:
        item_id = self._require_str(item_id, f"{context} entry")
        if not self._items_repo.has(item_id):
            raise SaveLoadError(f"{context} references unknown item '{item_id}'.")
        return item_id

    def _require_exact_keys(self, value: Any, expected: tuple[str, ...], context: str) -> Dict[str, Any]:
        mapping = self._require_dict(value, context)
        if set(mapping) != set(expected):
            raise SaveLoadError(f"{context} must contain exactly {list(expected)}.")
        return mapping

    def _coerce_int_at_least(self, value: Any, context: str, minimum: int) -> int:
        value_int = self._require_int(value, context)
        if value_int < minimum:
            raise SaveLoadError(f"{context} must be at least {minimum}.")
        return value_int

    def _coerce_optional_str(self, value: Any, context: str) -> str | None:
        if value is None:
            return None
        return self._require_str(value, context)

    @staticmethod
    def _require_dict(value: Any, context: str) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise SaveLoadError(f"{context} must be an object.")
        return value

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: Any, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SaveLoadError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_number(value: Any, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SaveLoadError(f"{context} must be a number.")
        return value
