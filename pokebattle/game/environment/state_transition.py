"""State transition logic for battle simulation.

This module provides pure functions that apply battle events to create new
immutable battle states. The main entry point is StateTransition.apply(); the
BattleStateMachine is its only caller during a battle.
"""

from dataclasses import replace
from typing import Tuple

from absl import logging

from pokebattle.game.events.battle_event import (
    BattleEndedEvent,
    BattleEvent,
    BattleStartedEvent,
    CantMoveEvent,
    DamageEvent,
    FaintedEvent,
    HealedEvent,
    MoveBlockedEvent,
    MoveMissedEvent,
    MoveUsedEvent,
    SideConditionEndedEvent,
    SideConditionStartedEvent,
    SideConditionTickedEvent,
    StatChangedEvent,
    StatusAppliedEvent,
    StatusCuredEvent,
    StatusFailedEvent,
    StatusTickedEvent,
    SwitchedEvent,
    TurnEndedEvent,
    VolatileEndedEvent,
    VolatileStartedEvent,
    VolatileTickedEvent,
)
from pokebattle.game.exceptions import InvariantViolationError
from pokebattle.game.mechanics.stat_stages import MAX_STAGE, MIN_STAGE
from pokebattle.game.schema.battle_state import BattleState
from pokebattle.game.schema.combatant_state import CombatantState
from pokebattle.game.schema.enums import BattlePhase, Status
from pokebattle.game.schema.side_state import SideState


class StateTransition:
    """Pure functions from (state, event) to a new state."""

    @staticmethod
    def apply(state: BattleState, event: BattleEvent) -> BattleState:
        """Apply an event to a battle state, returning a new state.

        Args:
            state: Current battle state (immutable)
            event: Battle event to apply

        Returns:
            New battle state with event applied (original unchanged)

        Raises:
            InvariantViolationError: If the event would break a state invariant
        """
        if isinstance(event, DamageEvent):
            return StateTransition._apply_damage(state, event)
        elif isinstance(event, HealedEvent):
            return StateTransition._apply_heal(state, event)
        elif isinstance(event, MoveUsedEvent):
            return StateTransition._apply_move_used(state, event)
        elif isinstance(event, SwitchedEvent):
            return StateTransition._apply_switch(state, event)
        elif isinstance(event, StatusAppliedEvent):
            return StateTransition._apply_status(state, event)
        elif isinstance(event, StatusTickedEvent):
            return StateTransition._apply_status_tick(state, event)
        elif isinstance(event, StatusCuredEvent):
            return StateTransition._apply_cure_status(state, event)
        elif isinstance(event, StatChangedEvent):
            return StateTransition._apply_stat_change(state, event)
        elif isinstance(event, (VolatileStartedEvent, VolatileTickedEvent)):
            return StateTransition._apply_volatile(state, event)
        elif isinstance(event, VolatileEndedEvent):
            return StateTransition._apply_volatile_end(state, event)
        elif isinstance(event, (SideConditionStartedEvent, SideConditionTickedEvent)):
            return StateTransition._apply_side_condition(state, event)
        elif isinstance(event, SideConditionEndedEvent):
            return StateTransition._apply_side_condition_end(state, event)
        elif isinstance(event, FaintedEvent):
            return StateTransition._apply_faint(state, event)
        elif isinstance(event, BattleStartedEvent):
            return replace(state, phase=BattlePhase.IN_PROGRESS)
        elif isinstance(event, TurnEndedEvent):
            return replace(state, field_state=replace(state.field_state, turn_number=event.turn))
        elif isinstance(event, BattleEndedEvent):
            return replace(state, phase=BattlePhase.ENDED, winner=event.winner)
        # Informational events that don't modify battle state
        elif isinstance(
            event, (MoveMissedEvent, MoveBlockedEvent, CantMoveEvent, StatusFailedEvent)
        ):
            return state
        else:
            raise InvariantViolationError(
                f"Unhandled event type: {type(event).__name__}: {event}"
            )

    @staticmethod
    def _get_combatant(
        state: BattleState, side_id: str, slot: int
    ) -> Tuple[CombatantState, SideState]:
        side = state.get_side(side_id)
        if not 0 <= slot < len(side.combatants):
            raise InvariantViolationError(f"{side_id} has no combatant in slot {slot}")
        return side.combatants[slot], side

    @staticmethod
    def _update_combatant(
        state: BattleState, side: SideState, slot: int, combatant: CombatantState
    ) -> BattleState:
        """Replace one combatant, returning the new battle state."""
        if not 0 <= combatant.current_hp <= combatant.max_hp:
            raise InvariantViolationError(
                f"{combatant.name} HP {combatant.current_hp} outside 0..{combatant.max_hp}"
            )
        combatants = list(side.combatants)
        combatants[slot] = combatant
        return StateTransition._update_side(state, replace(side, combatants=combatants))

    @staticmethod
    def _update_side(state: BattleState, side: SideState) -> BattleState:
        sides = dict(state.sides)
        sides[side.side_id] = side
        return replace(state, sides=sides)

    @staticmethod
    def _apply_damage(state: BattleState, event: DamageEvent) -> BattleState:
        """Remove HP, clamping at 0."""
        if event.amount < 0:
            raise InvariantViolationError(f"Negative damage: {event}")
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        new_hp = max(0, combatant.current_hp - event.amount)
        return StateTransition._update_combatant(
            state, side, event.slot, replace(combatant, current_hp=new_hp)
        )

    @staticmethod
    def _apply_heal(state: BattleState, event: HealedEvent) -> BattleState:
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        new_hp = min(combatant.max_hp, combatant.current_hp + event.amount)
        return StateTransition._update_combatant(
            state, side, event.slot, replace(combatant, current_hp=new_hp)
        )

    @staticmethod
    def _apply_move_used(state: BattleState, event: MoveUsedEvent) -> BattleState:
        """Deduct one PP from the used slot."""
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        move_slot = combatant.get_move_slot(event.move_index)
        if not move_slot.has_pp():
            raise InvariantViolationError(f"{combatant.name} used {move_slot.name} with 0 PP")
        moves = list(combatant.moves)
        moves[event.move_index] = replace(move_slot, current_pp=move_slot.current_pp - 1)
        return StateTransition._update_combatant(
            state, side, event.slot, replace(combatant, moves=moves)
        )

    @staticmethod
    def _apply_switch(state: BattleState, event: SwitchedEvent) -> BattleState:
        """Swap the active combatant; the outgoing one loses volatiles and stages."""
        side = state.get_side(event.side)
        if side.active_index != event.from_slot:
            raise InvariantViolationError(
                f"{event.side} active slot is {side.active_index}, not {event.from_slot}"
            )
        incoming, _ = StateTransition._get_combatant(state, event.side, event.to_slot)
        if not incoming.is_alive() or event.to_slot == event.from_slot:
            raise InvariantViolationError(f"Cannot switch to slot {event.to_slot}")

        outgoing = side.combatants[event.from_slot]
        combatants = list(side.combatants)
        combatants[event.from_slot] = replace(
            outgoing, volatile_conditions={}, stat_stages={}
        )
        new_side = replace(side, combatants=combatants, active_index=event.to_slot)
        return StateTransition._update_side(state, new_side)

    @staticmethod
    def _apply_status(state: BattleState, event: StatusAppliedEvent) -> BattleState:
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        if combatant.status != Status.NONE:
            raise InvariantViolationError(
                f"{combatant.name} already has {combatant.status.value}"
            )
        return StateTransition._update_combatant(
            state,
            side,
            event.slot,
            replace(combatant, status=event.status, status_turns=event.turns),
        )

    @staticmethod
    def _apply_status_tick(state: BattleState, event: StatusTickedEvent) -> BattleState:
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        return StateTransition._update_combatant(
            state, side, event.slot, replace(combatant, status_turns=event.turns)
        )

    @staticmethod
    def _apply_cure_status(state: BattleState, event: StatusCuredEvent) -> BattleState:
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        return StateTransition._update_combatant(
            state,
            side,
            event.slot,
            replace(combatant, status=Status.NONE, status_turns=0),
        )

    @staticmethod
    def _apply_stat_change(state: BattleState, event: StatChangedEvent) -> BattleState:
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        new_stage = combatant.get_stage(event.stat) + event.delta
        if not MIN_STAGE <= new_stage <= MAX_STAGE:
            raise InvariantViolationError(
                f"{combatant.name} {event.stat.value} stage would be {new_stage}"
            )
        stages = dict(combatant.stat_stages)
        stages[event.stat] = new_stage
        return StateTransition._update_combatant(
            state, side, event.slot, replace(combatant, stat_stages=stages)
        )

    @staticmethod
    def _apply_volatile(state: BattleState, event) -> BattleState:
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        volatiles = dict(combatant.volatile_conditions)
        volatiles[event.condition] = event.turns
        return StateTransition._update_combatant(
            state, side, event.slot, replace(combatant, volatile_conditions=volatiles)
        )

    @staticmethod
    def _apply_volatile_end(state: BattleState, event: VolatileEndedEvent) -> BattleState:
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        volatiles = dict(combatant.volatile_conditions)
        volatiles.pop(event.condition, None)
        return StateTransition._update_combatant(
            state, side, event.slot, replace(combatant, volatile_conditions=volatiles)
        )

    @staticmethod
    def _apply_side_condition(state: BattleState, event) -> BattleState:
        side = state.get_side(event.side)
        conditions = dict(side.side_conditions)
        conditions[event.condition] = event.turns
        return StateTransition._update_side(
            state, replace(side, side_conditions=conditions)
        )

    @staticmethod
    def _apply_side_condition_end(
        state: BattleState, event: SideConditionEndedEvent
    ) -> BattleState:
        side = state.get_side(event.side)
        conditions = dict(side.side_conditions)
        conditions.pop(event.condition, None)
        return StateTransition._update_side(
            state, replace(side, side_conditions=conditions)
        )

    @staticmethod
    def _apply_faint(state: BattleState, event: FaintedEvent) -> BattleState:
        """A fainted combatant keeps its slot but drops volatiles and stages."""
        combatant, side = StateTransition._get_combatant(state, event.side, event.slot)
        if combatant.is_alive():
            raise InvariantViolationError(f"{combatant.name} fainted with HP left")
        logging.debug("%s fainted on %s", combatant.name, event.side)
        return StateTransition._update_combatant(
            state,
            side,
            event.slot,
            replace(combatant, volatile_conditions={}, stat_stages={}),
        )
