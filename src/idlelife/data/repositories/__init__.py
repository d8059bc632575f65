"""Repository exports."""

from .furniture_repo import FurnitureRepository
from .items_repo import ItemsRepository
from .shops_repo import ShopsRepository

__all__ = [
    "FurnitureRepository",
    "ItemsRepository",
    "ShopsRepository",
]
