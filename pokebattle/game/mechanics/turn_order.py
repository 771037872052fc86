"""Ordering of the actions submitted for one turn."""

import math
from dataclasses import dataclass
from typing import List, Optional

from pokebattle.game.mechanics.random_source import RandomSource
from pokebattle.game.mechanics.stat_stages import StatStageTracker
from pokebattle.game.schema.combatant_state import CombatantState
from pokebattle.game.schema.enums import Stat, Status

# Switches resolve before any move.
SWITCH_PRIORITY = 7
PARALYSIS_SPEED_MULTIPLIER = 0.5


@dataclass(frozen=True)
class ActionSlot:
    """One side's action, reduced to what ordering needs."""

    side_id: str
    priority: int
    speed: int
    move_index: Optional[int] = None
    switch_index: Optional[int] = None

    @property
    def is_switch(self) -> bool:
        return self.switch_index is not None


def effective_speed(combatant: CombatantState) -> int:
    """Speed after its stage; paralysis halves it."""
    speed = StatStageTracker.effective_stat(
        combatant.stats.speed, combatant.get_stage(Stat.SPE)
    )
    if combatant.status == Status.PARALYSIS:
        speed = math.floor(speed * PARALYSIS_SPEED_MULTIPLIER)
    return speed


def order_actions(actions: List[ActionSlot], rng: RandomSource) -> List[ActionSlot]:
    """Sort actions by priority, then effective speed, then a coin flip.

    The coin flip is drawn only when two actions tie on both keys.

    Args:
        actions: At most one action per side
        rng: Random source used for the tie-break

    Returns:
        Actions in execution order
    """
    if len(actions) < 2:
        return list(actions)
    if len(actions) > 2:
        raise ValueError(f"Expected at most two actions, got {len(actions)}")

    action_1, action_2 = actions
    if action_1.priority != action_2.priority:
        return (
            [action_1, action_2]
            if action_1.priority > action_2.priority
            else [action_2, action_1]
        )

    if action_1.speed != action_2.speed:
        return (
            [action_1, action_2]
            if action_1.speed > action_2.speed
            else [action_2, action_1]
        )

    return [action_1, action_2] if rng.coin_flip() else [action_2, action_1]
