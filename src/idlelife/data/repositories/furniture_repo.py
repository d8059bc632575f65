"""Furniture repository."""
from __future__ import annotations

from typing import Dict

from idlelife.core.types import FURNITURE_SLOTS
from idlelife.data.errors import DataValidationError
from idlelife.data.repositories.base import RepositoryBase
from idlelife.data.repositories.effects_parser import parse_effect_list
from idlelife.domain.defs import FurnitureDef


class FurnitureRepository(RepositoryBase[FurnitureDef]):
    """Loads and validates furniture definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("furniture.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, FurnitureDef]:
        furniture: Dict[str, FurnitureDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Furniture IDs must be strings.")
            context = f"furniture '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_fields(
                data,
                {"name", "slot", "value", "description", "effects"},
                set(),
                context,
            )
            value = self._require_int(data["value"], f"{context} value")
            if value < 0:
                raise DataValidationError(f"{context} value must be zero or higher.")
            furniture[raw_id] = FurnitureDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                slot=self._require_choice(data["slot"], FURNITURE_SLOTS, f"{context} slot"),
                value=value,
                description=self._require_str(data["description"], f"{context} description"),
                effects=parse_effect_list(data["effects"], context),
            )
        return furniture
