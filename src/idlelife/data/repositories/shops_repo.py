"""Shops repository."""
from __future__ import annotations

from typing import Dict, List, get_args

from idlelife.data.errors import DataReferenceError, DataValidationError
from idlelife.data.repositories.base import RepositoryBase
from idlelife.data.repositories.furniture_repo import FurnitureRepository
from idlelife.data.repositories.items_repo import ItemsRepository
from idlelife.domain.defs import ShopDef, ShopType

_SHOP_TYPES: tuple[str, ...] = get_args(ShopType)


class ShopsRepository(RepositoryBase[ShopDef]):
    """Loads and validates shop definitions."""

    def __init__(
        self,
        base_path=None,
        *,
        items_repo: ItemsRepository,
        furniture_repo: FurnitureRepository,
    ) -> None:
        super().__init__("shops.json", base_path)
        self._items_repo = items_repo
        self._furniture_repo = furniture_repo

    def _build(self, raw: dict[str, object]) -> Dict[str, ShopDef]:
        raw_shops = self._require_mapping(raw.get("shops"), "shops.json.shops")
        definitions: Dict[str, ShopDef] = {}
        for shop_id, payload in raw_shops.items():
            if not isinstance(shop_id, str):
                raise DataValidationError("Shop IDs must be strings.")
            context = f"shop '{shop_id}'"
            shop_map = self._require_mapping(payload, context)
            self._assert_fields(shop_map, {"name", "shop_type", "stock"}, set(), context)
            shop_type = self._require_choice(
                shop_map["shop_type"], _SHOP_TYPES, f"{context} shop_type"
            )
            definitions[shop_id] = ShopDef(
                id=shop_id,
                name=self._require_str(shop_map["name"], f"{context} name"),
                shop_type=shop_type,
                stock=self._parse_stock(shop_id, shop_type, shop_map["stock"]),
            )
        return definitions

    def _parse_stock(self, shop_id: str, shop_type: str, raw_stock: object) -> tuple[str, ...]:
        stock_data = self._require_list(raw_stock, f"shop '{shop_id}' stock")
        repo = self._items_repo if shop_type == "item" else self._furniture_repo
        entries: List[str] = []
        for index, entry in enumerate(stock_data):
            entry_id = self._require_str(entry, f"shop '{shop_id}' stock[{index}]")
            if entry_id in entries:
                raise DataValidationError(f"shop '{shop_id}' stock has duplicate id '{entry_id}'.")
            if not repo.has(entry_id):
                raise DataReferenceError(
                    f"shop '{shop_id}' stock references missing id '{entry_id}'."
                )
            entries.append(entry_id)
        return tuple(entries)
