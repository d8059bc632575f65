"""Shop definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Tuple


ShopType = Literal["item", "furniture"]


@dataclass(slots=True)
class ShopDef:
    """Definition for a shop and the catalog ids it sells."""

    id: str
    name: str
    shop_type: ShopType
    stock: Tuple[str, ...] = field(default_factory=tuple)
