"""Effect handlers for items and furniture, resolved by effect kind."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from idlelife.core.types import ATTRIBUTE_TYPES, STATUS_TYPES, UNLOCK_TYPES
from idlelife.domain.defs import EffectDef
from idlelife.domain.state import GameSession

logger = logging.getLogger(__name__)

MANUAL_LEARNED_MESSAGE = (
    "The teachings of the manual sink deep into your soul. "
    "You'll be able to apply this knowledge in all future reincarnations."
)


@dataclass(slots=True)
class ItemEffectResult:
    """Summary of what a batch of effects changed."""

    status_deltas: Dict[str, float] = field(default_factory=dict)
    max_deltas: Dict[str, float] = field(default_factory=dict)
    attribute_deltas: Dict[str, float] = field(default_factory=dict)
    food_lifespan_delta: float = 0
    unlocked: List[str] = field(default_factory=list)

    @property
    def had_effect(self) -> bool:
        deltas = (
            *self.status_deltas.values(),
            *self.max_deltas.values(),
            *self.attribute_deltas.values(),
            self.food_lifespan_delta,
        )
        return bool(self.unlocked) or any(delta != 0 for delta in deltas)


def _accumulate(store: Dict[str, float], key: str, delta: float) -> None:
    store[key] = store.get(key, 0) + delta


EffectApply = Callable[[GameSession, EffectDef, ItemEffectResult], None]
EffectOwned = Callable[[GameSession, EffectDef], bool]


@dataclass(frozen=True, slots=True)
class EffectHandler:
    """Behaviour registered for one effect kind.

    ``targets`` lists the names ``EffectDef.target`` may take, or is None
    when the kind takes no target.
    """

    kind: str
    apply: EffectApply
    targets: tuple[str, ...] | None = None
    is_owned: EffectOwned | None = None
    nested: bool = False


_HANDLERS: Dict[str, EffectHandler] = {}


def register_effect(
    kind: str,
    *,
    targets: Sequence[str] | None = None,
    is_owned: EffectOwned | None = None,
    nested: bool = False,
) -> Callable[[EffectApply], EffectApply]:
    """Register ``func`` as the handler for ``kind``."""

    def decorator(func: EffectApply) -> EffectApply:
        _HANDLERS[kind] = EffectHandler(
            kind=kind,
            apply=func,
            targets=tuple(targets) if targets is not None else None,
            is_owned=is_owned,
            nested=nested,
        )
        return func

    return decorator


def get_handler(kind: str) -> EffectHandler:
    try:
        return _HANDLERS[kind]
    except KeyError as exc:
        raise KeyError(kind) from exc


def effect_kinds() -> tuple[str, ...]:
    return tuple(sorted(_HANDLERS))


def apply_effects(
    session: GameSession,
    effects: Sequence[EffectDef],
    *,
    result: ItemEffectResult | None = None,
) -> ItemEffectResult:
    """Apply effects in order against the session's character."""
    result = result if result is not None else ItemEffectResult()
    for effect in effects:
        get_handler(effect.kind).apply(session, effect, result)
    return result


def is_owned(session: GameSession, effects: Sequence[EffectDef]) -> bool:
    """Return True when any effect reports its benefit as already owned."""
    for effect in effects:
        handler = get_handler(effect.kind)
        if handler.is_owned is not None and handler.is_owned(session, effect):
            return True
    return False


# ------------------------------------------------------------------ Handlers
@register_effect("restore_status", targets=STATUS_TYPES)
def _restore_status(session: GameSession, effect: EffectDef, result: ItemEffectResult) -> None:
    session.character.status[effect.target].value += effect.amount
    _accumulate(result.status_deltas, effect.target, effect.amount)


@register_effect("raise_status_max", targets=STATUS_TYPES)
def _raise_status_max(session: GameSession, effect: EffectDef, result: ItemEffectResult) -> None:
    session.character.status[effect.target].max += effect.amount
    _accumulate(result.max_deltas, effect.target, effect.amount)


@register_effect("increase_attribute", targets=ATTRIBUTE_TYPES)
def _increase_attribute(session: GameSession, effect: EffectDef, result: ItemEffectResult) -> None:
    state = session.character.attributes[effect.target]
    before = state.value
    session.character.increase_attribute(effect.target, effect.amount)
    _accumulate(result.attribute_deltas, effect.target, state.value - before)


@register_effect("extend_food_lifespan")
def _extend_food_lifespan(session: GameSession, effect: EffectDef, result: ItemEffectResult) -> None:
    character = session.character
    if effect.cap is not None and character.food_lifespan >= effect.cap:
        return
    character.food_lifespan += effect.amount
    character.recalculate_lifespan()
    result.food_lifespan_delta += effect.amount


@register_effect("check_overage")
def _check_overage(session: GameSession, effect: EffectDef, result: ItemEffectResult) -> None:
    status = session.character.status
    before = {name: pool.value for name, pool in status.items()}
    session.character.check_overage()
    for name, pool in status.items():
        if pool.value != before[name]:
            _accumulate(result.status_deltas, name, pool.value - before[name])


@register_effect("chance", nested=True)
def _chance(session: GameSession, effect: EffectDef, result: ItemEffectResult) -> None:
    if session.rng.roll(effect.chance):
        apply_effects(session, effect.effects, result=result)


def _unlock_owned(session: GameSession, effect: EffectDef) -> bool:
    return session.is_unlocked(effect.target)


@register_effect("unlock", targets=UNLOCK_TYPES, is_owned=_unlock_owned)
def _unlock(session: GameSession, effect: EffectDef, result: ItemEffectResult) -> None:
    session.unlocks[effect.target] = True
    session.log.add(MANUAL_LEARNED_MESSAGE, "STANDARD", "EVENT")
    result.unlocked.append(effect.target)
    logger.info("Unlocked %s", effect.target)
