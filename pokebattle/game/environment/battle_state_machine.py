"""Turn-based battle state machine for local battles."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from absl import logging

from pokebattle.game.data.game_data import GameData
from pokebattle.game.data.move import MoveDefinition
from pokebattle.game.data.move_catalog import MoveCatalog
from pokebattle.game.data.move_effect import (
    Heal,
    MoveEffect,
    NoEffect,
    Protect,
    Recharge,
    Rest,
    Screen,
    StatBoost,
    StatusInflict,
    VolatileInflict,
    effect_hits_target,
)
from pokebattle.game.environment.battle_event_store import BattleEventStore
from pokebattle.game.environment.state_transition import StateTransition
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
    SideConditionStartedEvent,
    StatChangedEvent,
    SwitchedEvent,
    TurnEndedEvent,
)
from pokebattle.game.exceptions import BattleError, IllegalChoiceError
from pokebattle.game.interface.battle_choice import BattleChoice, ChoiceType
from pokebattle.game.interface.roster_builder import RosterBuilder
from pokebattle.game.interface.team_loader import RosterEntry
from pokebattle.game.mechanics.damage_calculator import DamageCalculator
from pokebattle.game.mechanics.random_source import RandomSource
from pokebattle.game.mechanics.stat_stages import StatStageTracker
from pokebattle.game.mechanics.status_engine import StatusEngine
from pokebattle.game.mechanics.turn_order import (
    SWITCH_PRIORITY,
    ActionSlot,
    effective_speed,
    order_actions,
)
from pokebattle.game.protocol.battle_event_logger import BattleEventLogger
from pokebattle.game.schema.battle_state import SIDE_IDS, BattleState
from pokebattle.game.schema.enums import BattlePhase, EffectTarget, VolatileCondition

# Recharge is set during the attacking turn, so it must survive that turn's
# end-of-turn decrement to block the next action.
RECHARGE_TURNS = 2
PROTECT_TURNS = 1


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one resolved turn.

    Attributes:
        turn: Turn number (0 for the battle start)
        events: Events of the turn in the order they were applied
        snapshot: BattleState.to_dict() after the last event of the turn
    """

    turn: int
    events: List[BattleEvent] = field(default_factory=list)
    snapshot: Dict[str, Any] = field(default_factory=dict)


class BattleStateMachine:
    """Resolves a two-sided singles battle turn by turn.

    The BattleStateMachine is responsible for:
    - Validating rosters and choices before anything changes
    - Ordering and resolving both sides' actions once both have chosen
    - Applying every change as one event through StateTransition
    - Recording the event log, per-turn results and optional state history

    Example usage:
        ```python
        machine = BattleStateMachine(SeededRandomSource(7))
        machine.start(roster_p1, roster_p2)
        while not machine.is_battle_over():
            machine.submit_choice("p1", agent_p1.choose_action(machine.get_state(), "p1"))
            result = machine.submit_choice(
                "p2", agent_p2.choose_action(machine.get_state(), "p2")
            )
        ```

    Attributes:
        _state: Current immutable BattleState
        _pending: Choices submitted for the turn being collected
        _track_history: Whether to maintain state history
        _history: States after the start and after each turn (if tracking enabled)
    """

    def __init__(
        self,
        rng: RandomSource,
        game_data: Optional[GameData] = None,
        move_catalog: Optional[MoveCatalog] = None,
        battle_id: str = "local",
        track_history: bool = False,
        logger: Optional[BattleEventLogger] = None,
    ) -> None:
        """Initialize the state machine.

        Args:
            rng: Source of every random draw in the battle
            game_data: Data provider (defaults to the packaged GameData)
            move_catalog: Move lookup sharing the data provider
            battle_id: Identifier used in log lines
            track_history: Whether to maintain history of all states
            logger: Optional BattleEventLogger to log events to file
        """
        game_data = game_data or GameData()
        self._rng = rng
        self._battle_id = battle_id
        self._roster_builder = RosterBuilder(game_data, move_catalog)
        self._damage_calculator = DamageCalculator(game_data.get_type_chart(), rng)
        self._status_engine = StatusEngine(rng)
        self._logger = logger

        self._state = BattleState()
        self._pending: Dict[str, BattleChoice] = {}
        self._event_log: List[BattleEvent] = []
        self._turn_results: List[TurnResult] = []
        self._event_store = BattleEventStore()
        self._track_history = track_history
        self._history: List[BattleState] = []

    def start(
        self, roster_p1: Sequence[RosterEntry], roster_p2: Sequence[RosterEntry]
    ) -> TurnResult:
        """Validate both rosters and begin the battle.

        Returns:
            TurnResult for turn 0 holding the battle-started event

        Raises:
            ValidationError: If either roster is malformed (the battle stays
                NOT_STARTED)
            BattleError: If the battle was already started
        """
        if self._state.phase != BattlePhase.NOT_STARTED:
            raise BattleError("Battle has already been started")

        side_p1 = self._roster_builder.build_side("p1", roster_p1)
        side_p2 = self._roster_builder.build_side("p2", roster_p2)

        state = BattleState(sides={"p1": side_p1, "p2": side_p2})
        event = BattleStartedEvent(side_p1.get_active().name, side_p2.get_active().name)
        self._state = StateTransition.apply(state, event)

        logging.info("[%s] %s", self._battle_id, event.describe())
        return self._record_turn(0, [event])

    def get_state(self) -> BattleState:
        """Get current immutable battle state."""
        return self._state

    def is_battle_over(self) -> bool:
        return self._state.ended

    def get_event_log(self) -> List[BattleEvent]:
        """Every event applied so far, in order."""
        return list(self._event_log)

    def get_turn_results(self) -> List[TurnResult]:
        return list(self._turn_results)

    def get_event_store(self) -> BattleEventStore:
        return self._event_store

    def get_history(self) -> List[BattleState]:
        """Get history of all battle states.

        Returns:
            BattleState after the start and after each resolved turn

        Raises:
            ValueError: If history tracking is not enabled
        """
        if not self._track_history:
            raise ValueError(
                "History tracking is not enabled. "
                "Initialize BattleStateMachine with track_history=True"
            )
        return list(self._history)

    def has_submitted(self, side_id: str) -> bool:
        return side_id in self._pending

    def legal_choices(self, side_id: str) -> List[BattleChoice]:
        """List the choices submit_choice would accept for a side right now.

        A side that must replace a fainted combatant can only switch. PASS is
        offered only when no move or switch is available.
        """
        if self._state.phase != BattlePhase.IN_PROGRESS or side_id in self._pending:
            return []

        side = self._state.get_side(side_id)
        switches = [BattleChoice.switch(i) for i in side.available_switches()]
        if side.must_switch():
            return switches

        active = side.get_active()
        moves = []
        if active.is_alive():
            moves = [BattleChoice.move(i) for i in active.usable_move_indices()]
        choices = moves + switches
        return choices or [BattleChoice.pass_turn()]

    def submit_choice(self, side_id: str, choice: BattleChoice) -> Optional[TurnResult]:
        """Submit one side's choice for the current turn.

        The turn resolves as soon as both sides have submitted.

        Returns:
            TurnResult of the resolved turn, or None while waiting for the
            other side

        Raises:
            IllegalChoiceError: If the choice is not legal now; nothing changes
        """
        try:
            self._validate_choice(side_id, choice)
        except IllegalChoiceError as e:
            logging.warning("[%s] Rejected choice: %s", self._battle_id, e)
            raise

        self._pending[side_id] = choice
        logging.debug(
            "[%s] %s chose %s", self._battle_id, side_id, choice.to_command()
        )
        if len(self._pending) < len(SIDE_IDS):
            return None
        return self._resolve_turn()

    def _validate_choice(self, side_id: str, choice: BattleChoice) -> None:
        def reject(reason: str) -> IllegalChoiceError:
            return IllegalChoiceError(side_id, reason)

        if self._state.phase == BattlePhase.NOT_STARTED:
            raise reject("battle has not started")
        if self._state.phase == BattlePhase.ENDED:
            raise reject("battle has ended")
        if side_id not in SIDE_IDS:
            raise reject("unknown side")
        if side_id in self._pending:
            raise reject("choice already submitted this turn")

        side = self._state.get_side(side_id)
        active = side.get_active()
        if side.must_switch() and choice.choice_type != ChoiceType.SWITCH:
            raise reject(f"{active.name} fainted; a switch is required")

        if choice.choice_type == ChoiceType.MOVE:
            if not active.is_alive():
                raise reject(f"{active.name} has fainted")
            if not 0 <= choice.move_index < len(active.moves):
                raise reject(f"move index {choice.move_index} out of range")
            if not active.moves[choice.move_index].has_pp():
                raise reject(f"{active.moves[choice.move_index].name} has no PP left")
            if choice.target_index not in (None, 0):
                raise reject(f"target index {choice.target_index} out of range")
        elif choice.choice_type == ChoiceType.SWITCH:
            index = choice.switch_index
            if not 0 <= index < len(side.combatants):
                raise reject(f"switch index {index} out of range")
            if index == side.active_index:
                raise reject(f"{side.combatants[index].name} is already active")
            if not side.combatants[index].is_alive():
                raise reject(f"{side.combatants[index].name} has fainted")

    def _apply(self, event: BattleEvent, events: List[BattleEvent]) -> None:
        self._state = StateTransition.apply(self._state, event)
        events.append(event)
        logging.debug("[%s] %s", self._battle_id, event.describe())

    def _resolve_turn(self) -> TurnResult:
        turn = self._state.turn_number + 1
        choices, self._pending = self._pending, {}
        events: List[BattleEvent] = []

        actions = []
        for side_id in SIDE_IDS:
            choice = choices[side_id]
            active = self._state.get_active(side_id)
            if choice.choice_type == ChoiceType.SWITCH:
                actions.append(
                    ActionSlot(
                        side_id,
                        SWITCH_PRIORITY,
                        effective_speed(active),
                        switch_index=choice.switch_index,
                    )
                )
            elif choice.choice_type == ChoiceType.MOVE:
                move = active.get_move_slot(choice.move_index).move
                actions.append(
                    ActionSlot(
                        side_id,
                        move.priority,
                        effective_speed(active),
                        move_index=choice.move_index,
                    )
                )

        for action in order_actions(actions, self._rng):
            if action.is_switch:
                self._execute_switch(action.side_id, action.switch_index, events)
            else:
                self._execute_move(action.side_id, action.move_index, events)

        self._end_of_turn(events)

        self._apply(TurnEndedEvent(turn), events)
        losers = [s for s in SIDE_IDS if not self._state.get_side(s).has_alive()]
        if losers:
            winner = None
            if len(losers) == 1:
                winner = BattleState.opponent_of(losers[0])
            self._apply(BattleEndedEvent(winner, turn), events)
            logging.info("[%s] %s", self._battle_id, events[-1].describe())

        logging.info(
            "[%s] Turn %d resolved with %d events", self._battle_id, turn, len(events)
        )
        return self._record_turn(turn, events)

    def _record_turn(self, turn: int, events: List[BattleEvent]) -> TurnResult:
        result = TurnResult(
            turn=turn, events=list(events), snapshot=self._state.to_dict()
        )
        self._event_log.extend(events)
        self._turn_results.append(result)
        self._event_store.add_events(events)
        if self._track_history:
            self._history.append(self._state)
        if self._logger is not None:
            self._logger.log_events(turn, events)
        return result

    def _execute_switch(
        self, side_id: str, switch_index: int, events: List[BattleEvent]
    ) -> None:
        side = self._state.get_side(side_id)
        incoming = side.combatants[switch_index]
        self._apply(
            SwitchedEvent(side_id, side.active_index, switch_index, incoming.name), events
        )

    def _execute_move(
        self, side_id: str, move_index: int, events: List[BattleEvent]
    ) -> None:
        """Run one move: action check, PP, protect, damage, then the effect."""
        side = self._state.get_side(side_id)
        slot = side.active_index
        attacker = side.get_active()
        if not attacker.is_alive():
            logging.debug("[%s] %s fainted before moving", self._battle_id, attacker.name)
            return

        check = self._status_engine.can_act(attacker)
        if not check.can_act:
            self._apply(CantMoveEvent(side_id, slot, attacker.name, check.reason), events)
            return

        move = attacker.get_move_slot(move_index).move
        self._apply(
            MoveUsedEvent(side_id, slot, attacker.name, move_index, move.name), events
        )

        opponent_id = BattleState.opponent_of(side_id)
        opponent_side = self._state.get_side(opponent_id)
        target_slot = opponent_side.active_index
        defender = opponent_side.get_active()
        if move.target.hits_opponent() and not defender.is_alive():
            logging.debug("[%s] %s has no target", self._battle_id, move.name)
            return

        if move.is_status():
            self._apply_effect(move.effect, side_id, slot, opponent_id, target_slot, events)
            return

        attacker = self._state.get_active(side_id)
        if not self._damage_calculator.check_accuracy(attacker, defender, move):
            self._apply(MoveMissedEvent(side_id, slot, attacker.name, move.name), events)
            return

        if defender.has_volatile(VolatileCondition.PROTECT):
            self._apply(
                MoveBlockedEvent(opponent_id, target_slot, defender.name, move.name),
                events,
            )
            return

        result = self._damage_calculator.calculate_hit(
            attacker, defender, move, tuple(opponent_side.side_conditions)
        )
        self._apply(
            DamageEvent(
                opponent_id,
                target_slot,
                defender.name,
                result.damage,
                source=move.name,
                effectiveness=result.effectiveness,
                is_critical=result.is_critical,
            ),
            events,
        )
        self._check_faint(opponent_id, target_slot, events)
        if result.effectiveness == 0:
            return

        if self._effect_triggers(move):
            self._apply_effect(move.effect, side_id, slot, opponent_id, target_slot, events)

    def _effect_triggers(self, move: MoveDefinition) -> bool:
        if isinstance(move.effect, NoEffect):
            return False
        if move.effect_chance is None:
            return True
        return self._rng.chance(move.effect_chance)

    def _apply_effect(
        self,
        effect: MoveEffect,
        user_side: str,
        user_slot: int,
        target_side: str,
        target_slot: int,
        events: List[BattleEvent],
    ) -> None:
        """Apply a move's effect; effects on a fainted recipient do nothing."""
        user = self._state.get_side(user_side).combatants[user_slot]
        target = self._state.get_side(target_side).combatants[target_slot]
        if effect_hits_target(effect) and not target.is_alive():
            return
        if not user.is_alive() and not effect_hits_target(effect):
            return

        if isinstance(effect, StatusInflict):
            self._apply(
                self._status_engine.inflict_status(
                    target_side, target_slot, target, effect.status
                ),
                events,
            )
        elif isinstance(effect, StatBoost):
            if effect.target == EffectTarget.TARGET:
                side_id, slot = target_side, target_slot
            else:
                side_id, slot = user_side, user_slot
            for stat, delta in effect.changes:
                recipient = self._state.get_side(side_id).combatants[slot]
                outcome = StatStageTracker.apply_boost(recipient.stat_stages, stat, delta)
                self._apply(
                    StatChangedEvent(
                        side_id, slot, recipient.name, stat, outcome.applied, delta
                    ),
                    events,
                )
        elif isinstance(effect, Heal):
            amount = min(
                int(user.max_hp * effect.fraction), user.max_hp - user.current_hp
            )
            if amount > 0:
                self._apply(HealedEvent(user_side, user_slot, user.name, amount), events)
        elif isinstance(effect, Protect):
            self._apply_volatile(
                user_side, user_slot, VolatileCondition.PROTECT, PROTECT_TURNS, events
            )
        elif isinstance(effect, VolatileInflict):
            if not target.has_volatile(effect.condition):
                turns = self._status_engine.volatile_turns(
                    effect.min_turns, effect.max_turns
                )
                self._apply_volatile(
                    target_side, target_slot, effect.condition, turns, events
                )
        elif isinstance(effect, Rest):
            for event in self._status_engine.rest(user_side, user_slot, user):
                self._apply(event, events)
        elif isinstance(effect, Screen):
            side = self._state.get_side(user_side)
            if side.has_side_condition(effect.condition):
                logging.debug("[%s] %s already up", self._battle_id, effect.condition.value)
            else:
                self._apply(
                    SideConditionStartedEvent(user_side, effect.condition, effect.turns),
                    events,
                )
        elif isinstance(effect, Recharge):
            self._apply_volatile(
                user_side, user_slot, VolatileCondition.RECHARGE, RECHARGE_TURNS, events
            )

    def _apply_volatile(
        self,
        side_id: str,
        slot: int,
        condition: VolatileCondition,
        turns: int,
        events: List[BattleEvent],
    ) -> None:
        combatant = self._state.get_side(side_id).combatants[slot]
        event = self._status_engine.inflict_volatile(
            side_id, slot, combatant, condition, turns
        )
        if event is not None:
            self._apply(event, events)

    def _check_faint(self, side_id: str, slot: int, events: List[BattleEvent]) -> None:
        combatant = self._state.get_side(side_id).combatants[slot]
        if combatant.current_hp == 0:
            self._apply(FaintedEvent(side_id, slot, combatant.name), events)

    def _end_of_turn(self, events: List[BattleEvent]) -> None:
        """Status damage and counters for each live active, then side conditions."""
        for side_id in SIDE_IDS:
            side = self._state.get_side(side_id)
            active = side.get_active()
            for event in self._status_engine.end_of_turn(
                side_id, side.active_index, active
            ):
                self._apply(event, events)
            if active.is_alive():
                self._check_faint(side_id, side.active_index, events)

        for side_id in SIDE_IDS:
            for event in StatusEngine.side_end_of_turn(self._state.get_side(side_id)):
                self._apply(event, events)
