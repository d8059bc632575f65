"""Time passage, death and reincarnation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Literal

from idlelife.core.rng import RNG
from idlelife.data.repositories import FurnitureRepository, ItemsRepository
from idlelife.domain.item_effects import apply_effects
from idlelife.domain.progression import days_to_years
from idlelife.domain.state import GameSession
from idlelife.services.item_service import ItemService

logger = logging.getLogger(__name__)

RICE_ITEM_ID = "rice"
DAILY_NOURISHMENT_COST = 1
STARVATION_DAMAGE = 20

DeathCause = Literal["old_age", "injury"]


@dataclass(slots=True)
class LifeEvent:
    """Base class for life-cycle events."""


@dataclass(slots=True)
class StarvingEvent(LifeEvent):
    damage: float
    health: float


@dataclass(slots=True)
class CharacterDiedEvent(LifeEvent):
    cause: DeathCause
    age: int
    life_count: int


@dataclass(slots=True)
class ReincarnatedEvent(LifeEvent):
    life_count: int
    lifespan: float
    total_aptitude: float


@dataclass(slots=True)
class TimePassedResult:
    """What happened over a stretch of days.

    Routine meals are only counted; anything worth showing on its own is
    in ``events``.
    """

    days_passed: int = 0
    meals_eaten: Dict[str, int] = field(default_factory=dict)
    rice_bought: int = 0
    events: List[object] = field(default_factory=list)

    @property
    def died(self) -> bool:
        return any(isinstance(event, CharacterDiedEvent) for event in self.events)


class LifeService:
    """Advances the daily loop and runs the death/rebirth transition."""

    def __init__(
        self,
        *,
        items_repo: ItemsRepository,
        furniture_repo: FurnitureRepository,
        item_service: ItemService | None = None,
    ) -> None:
        self._items_repo = items_repo
        self._furniture_repo = furniture_repo
        self._item_service = item_service or ItemService(items_repo)

    def start_new_game(self, seed: int) -> GameSession:
        session = GameSession(seed=seed, rng=RNG(seed))
        session.log.add(
            "A new life begins. You are 18 years old, with a little money and a lot of ambition.",
            "STANDARD",
            "STORY",
        )
        logger.info("Started new game with seed %s", seed)
        return session

    def pass_days(self, session: GameSession, days: int = 1) -> TimePassedResult:
        """Advance up to ``days`` days; stops early on the day the character dies."""
        result = TimePassedResult()
        for _ in range(max(0, days)):
            self._advance_day(session, result)
            result.days_passed += 1
            if result.died:
                break
        return result

    def reincarnate(self, session: GameSession) -> ReincarnatedEvent:
        """Start the next life. Unlocks and automation choices carry over."""
        character = session.character
        character.reincarnate()
        character.dead = False
        session.inventory.clear()
        session.furniture.clear()
        session.life_count += 1
        total_aptitude = character.total_aptitude()
        session.log.add(
            "Your soul passes through the great river of reincarnation. "
            "You are born anew, carrying the lessons of your past lives.",
            "STANDARD",
            "STORY",
        )
        logger.info(
            "Life %s begins: lifespan %.1f days, total aptitude %.3f",
            session.life_count,
            character.lifespan,
            total_aptitude,
        )
        return ReincarnatedEvent(
            life_count=session.life_count,
            lifespan=character.lifespan,
            total_aptitude=total_aptitude,
        )

    # ------------------------------------------------------------ Daily loop
    def _advance_day(self, session: GameSession, result: TimePassedResult) -> None:
        character = session.character
        character.age += 1
        session.days_elapsed += 1

        self._feed(session, result)
        for furniture_id in session.furniture.placed_ids():
            apply_effects(session, self._furniture_repo.get(furniture_id).effects)
        result.events.extend(self._item_service.run_automation(session))
        character.check_overage()

        if character.status["health"].value <= 0:
            self._die(session, "injury", result)
        elif character.age >= character.lifespan:
            self._die(session, "old_age", result)

    def _feed(self, session: GameSession, result: TimePassedResult) -> None:
        character = session.character
        nourishment = character.status["nourishment"]
        nourishment.value -= DAILY_NOURISHMENT_COST
        if nourishment.value > 0:
            return

        food_id = self._item_service.cheapest_food(session)
        if food_id is not None:
            self._item_service.use_item(session, food_id)
            result.meals_eaten[food_id] = result.meals_eaten.get(food_id, 0) + 1
            return

        rice = self._items_repo.get(RICE_ITEM_ID)
        if character.money >= rice.value:
            character.money -= rice.value
            apply_effects(session, rice.effects)
            result.rice_bought += 1
            return

        health = character.status["health"]
        health.value -= STARVATION_DAMAGE
        session.log.add("You have no food and no money. Hunger gnaws at you.", "INJURY", "EVENT")
        result.events.append(StarvingEvent(damage=STARVATION_DAMAGE, health=health.value))

    def _die(self, session: GameSession, cause: DeathCause, result: TimePassedResult) -> None:
        character = session.character
        character.dead = True
        years = days_to_years(character.age)
        if cause == "old_age":
            session.log.add(f"You reach the end of your natural life at {years} years old.", "STANDARD", "STORY")
        else:
            session.log.add(f"Your body gives out at {years} years old.", "INJURY", "STORY")
        logger.info("Life %s ended (%s) at age %s days", session.life_count, cause, character.age)
        result.events.append(
            CharacterDiedEvent(cause=cause, age=character.age, life_count=session.life_count)
        )
        result.events.append(self.reincarnate(session))
