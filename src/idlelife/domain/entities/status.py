"""Status resource pools (health, stamina, mana, nourishment)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from idlelife.core.types import StatusType

STATUS_DESCRIPTIONS: Dict[StatusType, str] = {
    "health": "Physical well-being. Take too much damage and you will die.",
    "stamina": (
        "Physical energy to accomplish tasks. Most activities use stamina, and if you let "
        "yourself run down you could get sick and have to stay in bed for a few days."
    ),
    "mana": "Magical energy required for mysterious spiritual activities.",
    "nourishment": (
        "Eating is essential to life. You will automatically eat whatever food you have "
        "available when you are hungry. If you run out of food you will automatically "
        "spend your money on a bowl of rice each day."
    ),
}

# value, max
STARTING_STATUS: Dict[StatusType, tuple[float, float]] = {
    "health": (100, 100),
    "stamina": (100, 100),
    "mana": (0, 0),
    "nourishment": (7, 14),
}


@dataclass(slots=True)
class StatusPool:
    """A capped, replenishable resource."""

    description: str
    value: float
    max: float

    def reset(self, value: float, maximum: float) -> None:
        self.value = value
        self.max = maximum

    def clamp(self) -> None:
        if self.value > self.max:
            self.value = self.max


def default_status() -> Dict[StatusType, StatusPool]:
    return {
        name: StatusPool(description=STATUS_DESCRIPTIONS[name], value=value, max=maximum)
        for name, (value, maximum) in STARTING_STATUS.items()
    }
