"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set

from idlelife.core.rng import RNG
from idlelife.core.types import UNLOCK_TYPES, UnlockType
from idlelife.domain.entities import Character
from idlelife.domain.game_log import GameLog
from idlelife.domain.inventory import FurnitureSlots, Inventory


def _default_unlocks() -> Dict[UnlockType, bool]:
    return {unlock: False for unlock in UNLOCK_TYPES}


@dataclass
class GameSession:
    """Single owner of the live character and everything around it.

    Services and effect handlers receive the session and reach the
    character through ``session.character``; nothing else keeps a
    reference to it.
    """

    seed: int
    rng: RNG
    character: Character = field(default_factory=Character)
    inventory: Inventory = field(default_factory=Inventory)
    furniture: FurnitureSlots = field(default_factory=FurnitureSlots)
    unlocks: Dict[UnlockType, bool] = field(default_factory=_default_unlocks)
    auto_use: Set[str] = field(default_factory=set)
    auto_sell: Set[str] = field(default_factory=set)
    log: GameLog = field(default_factory=GameLog)
    life_count: int = 1
    days_elapsed: int = 0

    def is_unlocked(self, unlock: UnlockType) -> bool:
        return self.unlocks.get(unlock, False)
