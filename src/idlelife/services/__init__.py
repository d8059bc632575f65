"""Service layer exports."""

from .errors import SaveLoadError
from .item_service import (
    AutomationToggledEvent,
    InventoryRowView,
    ItemActionFailedEvent,
    ItemService,
    ItemSoldEvent,
    ItemUsedEvent,
)
from .life_service import (
    CharacterDiedEvent,
    LifeService,
    ReincarnatedEvent,
    StarvingEvent,
    TimePassedResult,
)
from .save_service import SaveService
from .shop_service import (
    FurniturePlacedEvent,
    ShopActionFailedEvent,
    ShopPurchaseEvent,
    ShopService,
    ShopView,
)

__all__ = [
    "SaveLoadError",
    "AutomationToggledEvent",
    "InventoryRowView",
    "ItemActionFailedEvent",
    "ItemService",
    "ItemSoldEvent",
    "ItemUsedEvent",
    "CharacterDiedEvent",
    "LifeService",
    "ReincarnatedEvent",
    "StarvingEvent",
    "TimePassedResult",
    "SaveService",
    "FurniturePlacedEvent",
    "ShopActionFailedEvent",
    "ShopPurchaseEvent",
    "ShopService",
    "ShopView",
]
