"""Domain definition exports."""

from .effect_def import EffectDef
from .furniture_def import FurnitureDef
from .item_def import ItemDef, ItemType
from .shop_def import ShopDef, ShopType

__all__ = [
    "EffectDef",
    "FurnitureDef",
    "ItemDef",
    "ItemType",
    "ShopDef",
    "ShopType",
]
