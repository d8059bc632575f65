"""Items repository."""
from __future__ import annotations

from typing import Dict, get_args

from idlelife.data.errors import DataValidationError
from idlelife.data.repositories.base import RepositoryBase
from idlelife.data.repositories.effects_parser import parse_effect_list
from idlelife.domain.defs import ItemDef, ItemType

_ITEM_TYPES: tuple[str, ...] = get_args(ItemType)
_REQUIRED_FIELDS = {"name", "type", "value", "description"}
_OPTIONAL_FIELDS = {"use_label", "use_description", "use_consumes", "effects"}


class ItemsRepository(RepositoryBase[ItemDef]):
    """Loads and validates item definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("items.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ItemDef]:
        items: Dict[str, ItemDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Item IDs must be strings.")
            context = f"item '{raw_id}'"
            item_data = self._require_mapping(payload, context)
            self._assert_fields(item_data, _REQUIRED_FIELDS, _OPTIONAL_FIELDS, context)

            value = self._require_int(item_data["value"], f"{context} value")
            if value < 0:
                raise DataValidationError(f"{context} value must be zero or higher.")
            effects = parse_effect_list(item_data.get("effects", []), context)
            use_label = item_data.get("use_label")
            if effects and use_label is None:
                raise DataValidationError(f"{context} has effects but no use_label.")

            items[raw_id] = ItemDef(
                id=raw_id,
                name=self._require_str(item_data["name"], f"{context} name"),
                type=self._require_choice(item_data["type"], _ITEM_TYPES, f"{context} type"),
                value=value,
                description=self._require_str(item_data["description"], f"{context} description"),
                use_label=self._optional_str(use_label, f"{context} use_label"),
                use_description=self._optional_str(
                    item_data.get("use_description"), f"{context} use_description"
                ),
                use_consumes=self._require_bool(
                    item_data.get("use_consumes", False), f"{context} use_consumes"
                ),
                effects=effects,
            )
        return items

    def _optional_str(self, value: object, context: str) -> str | None:
        if value is None:
            return None
        return self._require_str(value, context)
