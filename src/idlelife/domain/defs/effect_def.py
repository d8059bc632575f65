"""Effect definition primitives."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class EffectDef:
    """One data-described effect, resolved by ``kind`` at use time.

    ``target`` names the status, attribute or unlock the effect acts on.
    ``effects`` is only populated for ``chance`` effects.
    """

    kind: str
    target: str | None = None
    amount: float = 0
    chance: float = 1.0
    cap: float | None = None
    effects: List[EffectDef] = field(default_factory=list)
