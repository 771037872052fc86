"""Persistent status and volatile condition rules.

The engine never mutates a combatant. Every method inspects the current state
and returns the events that describe what happens; StateTransition applies
them.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional

from absl import logging

from pokebattle.game.events.battle_event import (
    BattleEvent,
    DamageEvent,
    HealedEvent,
    SideConditionEndedEvent,
    SideConditionTickedEvent,
    StatusAppliedEvent,
    StatusCuredEvent,
    StatusFailedEvent,
    StatusTickedEvent,
    VolatileEndedEvent,
    VolatileStartedEvent,
    VolatileTickedEvent,
)
from pokebattle.game.mechanics.random_source import RandomSource
from pokebattle.game.schema.combatant_state import CombatantState
from pokebattle.game.schema.enums import Status, VolatileCondition
from pokebattle.game.schema.side_state import SideState

SLEEP_TURNS = (1, 3)
FREEZE_TURNS = (1, 3)
REST_SLEEP_TURNS = 2

FREEZE_STAY_CHANCE = 75
FULL_PARALYSIS_CHANCE = 25
CONFUSION_FAIL_CHANCE = 50

BURN_DAMAGE_DIVISOR = 16
POISON_DAMAGE_DIVISOR = 8
TOXIC_DAMAGE_DIVISOR = 16

STATUS_IMMUNITIES: Dict[Status, FrozenSet[str]] = {
    Status.BURN: frozenset({"fire"}),
    Status.PARALYSIS: frozenset({"electric"}),
    Status.POISON: frozenset({"poison", "steel"}),
    Status.TOXIC: frozenset({"poison", "steel"}),
    Status.FREEZE: frozenset({"ice", "fire"}),
}


@dataclass(frozen=True)
class ActionCheck:
    """Whether a combatant may act this turn, and why not when it cannot.

    Attributes:
        reason: "recharge", "sleep", "freeze", "flinch", "paralysis" or
            "confusion" when can_act is False
    """

    can_act: bool
    reason: Optional[str] = None


class StatusEngine:
    """Decides action blocking and produces status-related events."""

    def __init__(self, rng: RandomSource):
        self.rng = rng

    def can_act(self, combatant: CombatantState) -> ActionCheck:
        """Check whether a combatant may execute its chosen move.

        Checks run in a fixed order and stop at the first one that blocks:
        recharge, sleep, freeze (75% stays frozen), flinch, paralysis (25%
        fully paralyzed), confusion (50% unable to act). Only the freeze,
        paralysis and confusion checks draw from the random source.

        A frozen combatant that beats the 75% roll acts this turn but stays
        frozen; only the end-of-turn counter running out cures freeze, so the
        roll repeats on every later action.
        """
        if combatant.has_volatile(VolatileCondition.RECHARGE):
            return ActionCheck(False, "recharge")
        if combatant.status == Status.SLEEP and combatant.status_turns > 0:
            return ActionCheck(False, "sleep")
        if combatant.status == Status.FREEZE and self.rng.chance(FREEZE_STAY_CHANCE):
            return ActionCheck(False, "freeze")
        if combatant.has_volatile(VolatileCondition.FLINCH):
            return ActionCheck(False, "flinch")
        if combatant.status == Status.PARALYSIS and self.rng.chance(
            FULL_PARALYSIS_CHANCE
        ):
            return ActionCheck(False, "paralysis")
        if combatant.has_volatile(VolatileCondition.CONFUSION) and self.rng.chance(
            CONFUSION_FAIL_CHANCE
        ):
            return ActionCheck(False, "confusion")
        return ActionCheck(True)

    @staticmethod
    def immunity_reason(combatant: CombatantState, status: Status) -> Optional[str]:
        immune_types = STATUS_IMMUNITIES.get(status, frozenset())
        for combatant_type in combatant.types:
            if combatant_type in immune_types:
                return f"{combatant_type}-type is immune"
        return None

    def inflict_status(
        self,
        side_id: str,
        slot: int,
        combatant: CombatantState,
        status: Status,
        turns: Optional[int] = None,
    ) -> BattleEvent:
        """Try to give a combatant a persistent status.

        Args:
            side_id: Side of the target
            slot: Roster slot of the target
            combatant: Target state
            status: Status to inflict
            turns: Fixed sleep or freeze duration; drawn from 1-3 when None

        Returns:
            StatusAppliedEvent, or StatusFailedEvent when the target already
            has a status, has fainted, or is immune by type
        """
        if status == Status.NONE:
            raise ValueError("Cannot inflict Status.NONE")

        reason = None
        if not combatant.is_alive():
            reason = "fainted"
        elif combatant.status != Status.NONE:
            reason = f"already has {combatant.status.value}"
        else:
            reason = self.immunity_reason(combatant, status)
        if reason is not None:
            logging.debug("%s resisted %s: %s", combatant.name, status.value, reason)
            return StatusFailedEvent(side_id, slot, combatant.name, status, reason)

        if turns is None:
            if status == Status.SLEEP:
                turns = self.rng.randint(*SLEEP_TURNS)
            elif status == Status.FREEZE:
                turns = self.rng.randint(*FREEZE_TURNS)
            elif status == Status.TOXIC:
                turns = 1
            else:
                turns = 0
        return StatusAppliedEvent(side_id, slot, combatant.name, status, turns)

    def rest(self, side_id: str, slot: int, combatant: CombatantState) -> List[BattleEvent]:
        """Fully heal, replace any status, and sleep for exactly two turns."""
        events: List[BattleEvent] = []
        missing_hp = combatant.max_hp - combatant.current_hp
        if missing_hp > 0:
            events.append(HealedEvent(side_id, slot, combatant.name, missing_hp))
        if combatant.status != Status.NONE:
            events.append(StatusCuredEvent(side_id, slot, combatant.name, combatant.status))
        events.append(
            StatusAppliedEvent(
                side_id, slot, combatant.name, Status.SLEEP, REST_SLEEP_TURNS
            )
        )
        return events

    def volatile_turns(self, min_turns: int, max_turns: int) -> int:
        if min_turns == max_turns:
            return min_turns
        return self.rng.randint(min_turns, max_turns)

    def inflict_volatile(
        self,
        side_id: str,
        slot: int,
        combatant: CombatantState,
        condition: VolatileCondition,
        turns: int,
    ) -> Optional[VolatileStartedEvent]:
        """Start a volatile condition; returns None if it is already present."""
        if not combatant.is_alive() or combatant.has_volatile(condition):
            return None
        return VolatileStartedEvent(side_id, slot, combatant.name, condition, turns)

    @staticmethod
    def status_damage(combatant: CombatantState) -> int:
        """HP lost to the combatant's status at the end of this turn."""
        max_hp = combatant.max_hp
        if combatant.status == Status.BURN:
            return max(1, max_hp // BURN_DAMAGE_DIVISOR)
        if combatant.status == Status.POISON:
            return max(1, max_hp // POISON_DAMAGE_DIVISOR)
        if combatant.status == Status.TOXIC:
            counter = max(combatant.status_turns, 1)
            return max(1, (max_hp * counter) // TOXIC_DAMAGE_DIVISOR)
        return 0

    def end_of_turn(
        self, side_id: str, slot: int, combatant: CombatantState
    ) -> List[BattleEvent]:
        """Produce end-of-turn events for one combatant.

        Order: status damage (burn, poison, toxic), toxic counter growth,
        sleep/freeze counter decrement, then volatile counter decrement. A
        combatant knocked out by its status damage gets no further events.
        """
        if not combatant.is_alive():
            return []

        name = combatant.name
        events: List[BattleEvent] = []

        damage = self.status_damage(combatant)
        if damage:
            events.append(
                DamageEvent(side_id, slot, name, damage, source=combatant.status.value)
            )
            if damage >= combatant.current_hp:
                return events

        if combatant.status == Status.TOXIC:
            counter = max(combatant.status_turns, 1) + 1
            events.append(StatusTickedEvent(side_id, slot, name, Status.TOXIC, counter))
        elif combatant.status in (Status.SLEEP, Status.FREEZE) and combatant.status_turns > 0:
            remaining = combatant.status_turns - 1
            if remaining == 0:
                events.append(StatusCuredEvent(side_id, slot, name, combatant.status))
            else:
                events.append(
                    StatusTickedEvent(side_id, slot, name, combatant.status, remaining)
                )

        for condition, turns in combatant.volatile_conditions.items():
            remaining = turns - 1
            if remaining <= 0:
                events.append(VolatileEndedEvent(side_id, slot, name, condition))
            else:
                events.append(
                    VolatileTickedEvent(side_id, slot, name, condition, remaining)
                )
        return events

    @staticmethod
    def side_end_of_turn(side: SideState) -> List[BattleEvent]:
        """Decrement side conditions and end those that reach zero."""
        events: List[BattleEvent] = []
        for condition, turns in side.side_conditions.items():
            remaining = turns - 1
            if remaining <= 0:
                events.append(SideConditionEndedEvent(side.side_id, condition))
            else:
                events.append(SideConditionTickedEvent(side.side_id, condition, remaining))
        return events
