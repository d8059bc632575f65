"""The character aggregate: attributes, status, money, age and lifespan."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping

from idlelife.core.types import AttributeType, StatusType
from idlelife.domain import progression
from idlelife.domain.progression import INITIAL_AGE

from .attributes import AttributeState, default_attributes
from .equipment import EquipmentSlots, empty_equipment
from .status import STARTING_STATUS, StatusPool, default_status

logger = logging.getLogger(__name__)

CharacterProperties = Dict[str, Any]

_CLAMPED_STATUS: tuple[StatusType, ...] = ("health", "stamina", "nourishment")


@dataclass
class Character:
    """Owns every piece of per-life progression state.

    Mutations never re-establish invariants on their own. Callers run
    ``check_overage()`` after anything that may push health, stamina or
    nourishment past their ceilings, and ``recalculate_lifespan()`` after
    changing a lifespan component or spirituality.
    """

    attributes: Dict[AttributeType, AttributeState] = field(default_factory=default_attributes)
    status: Dict[StatusType, StatusPool] = field(default_factory=default_status)
    equipment: EquipmentSlots = field(default_factory=empty_equipment)
    money: float = progression.INITIAL_MONEY
    age: int = INITIAL_AGE
    base_lifespan: float = progression.INITIAL_BASE_LIFESPAN
    food_lifespan: float = 0
    stat_lifespan: float = 0
    dead: bool = False
    lifespan: float = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.recalculate_lifespan()

    # ------------------------------------------------------------ Attributes
    def increase_attribute(self, attribute: AttributeType, amount: float) -> None:
        """Add ``amount`` scaled by the attribute's aptitude multiplier."""
        state = self.attributes[attribute]
        state.value += amount * progression.aptitude_multiplier(state.aptitude)

    def total_aptitude(self) -> float:
        return sum(state.aptitude for state in self.attributes.values())

    # ---------------------------------------------------------------- Status
    def check_overage(self) -> None:
        """Clamp health, stamina and nourishment to their maximums. Mana is left alone."""
        for name in _CLAMPED_STATUS:
            self.status[name].clamp()

    # -------------------------------------------------------------- Lifespan
    def recalculate_lifespan(self) -> None:
        self.lifespan = (
            self.base_lifespan
            + self.food_lifespan
            + self.stat_lifespan
            + self.attributes["spirituality"].value
        )

    # ---------------------------------------------------------- Reincarnation
    def reincarnate(self) -> None:
        """End this life and start the next one.

        Status pools, money, age, food lifespan and equipment reset. Every
        attribute that was developed this life converts a hundredth of its
        value into permanent aptitude and restarts at a value derived from
        that aptitude. Stat lifespan is recomputed from the average aptitude.
        """
        for name, (value, maximum) in STARTING_STATUS.items():
            self.status[name].reset(value, maximum)

        for state in self.attributes.values():
            if state.value > 0:
                state.aptitude += progression.aptitude_gain(state.value)
                state.value = progression.attribute_starting_value(state.aptitude)
        total_aptitude = self.total_aptitude()

        self.money = 0
        self.age = INITIAL_AGE
        self.base_lifespan += progression.REINCARNATION_LIFESPAN_BONUS
        self.stat_lifespan = progression.compute_stat_lifespan(total_aptitude, len(self.attributes))
        self.food_lifespan = 0
        self.recalculate_lifespan()
        self.equipment = empty_equipment()
        logger.debug(
            "Reincarnated: total aptitude %.3f, lifespan %.1f days", total_aptitude, self.lifespan
        )

    # ---------------------------------------------------------- Persistence
    def get_properties(self) -> CharacterProperties:
        """Return a detached snapshot of all persisted fields.

        ``lifespan`` is derived and never included.
        """
        return {
            "attributes": {name: asdict(state) for name, state in self.attributes.items()},
            "money": self.money,
            "equipment": dict(self.equipment),
            "age": self.age,
            "status": {name: asdict(pool) for name, pool in self.status.items()},
            "base_lifespan": self.base_lifespan,
            "food_lifespan": self.food_lifespan,
            "stat_lifespan": self.stat_lifespan,
        }

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        """Load a snapshot produced by ``get_properties()``.

        A missing or zero ``age`` falls back to the initial age so older
        saves keep loading.
        """
        self.attributes = {
            name: AttributeState(**payload) for name, payload in properties["attributes"].items()
        }
        self.money = properties["money"]
        self.equipment = dict(properties["equipment"])
        self.age = properties.get("age") or INITIAL_AGE
        self.status = {name: StatusPool(**payload) for name, payload in properties["status"].items()}
        self.base_lifespan = properties["base_lifespan"]
        self.food_lifespan = properties["food_lifespan"]
        self.stat_lifespan = properties["stat_lifespan"]
        self.recalculate_lifespan()
