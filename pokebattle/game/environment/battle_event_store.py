"""Store for retrieving past battle events and actions."""

from typing import Dict, List, Sequence

from pokebattle.game.events.battle_event import (
    BattleEndedEvent,
    BattleEvent,
    BattleStartedEvent,
    MoveUsedEvent,
    SwitchedEvent,
    TurnEndedEvent,
)
from pokebattle.game.interface.battle_choice import BattleChoice


class BattleEventStore:
    """Store for accessing past battle events and extracting side actions.

    This class groups the event log by turn and provides methods to:
    1. Retrieve the events of one turn
    2. Extract the actions (moves, switches) each side actually took

    Events before the first turn (the battle start) are kept under turn 0.
    """

    def __init__(self, events: Sequence[BattleEvent] = ()) -> None:
        self._events_by_turn: Dict[int, List[BattleEvent]] = {}
        self._current_turn = 0
        self.add_events(events)

    def add_events(self, events: Sequence[BattleEvent]) -> None:
        """Append events in log order, grouping them by turn."""
        for event in events:
            if isinstance(event, BattleStartedEvent):
                self._events_by_turn.setdefault(0, []).append(event)
                self._current_turn = 1
            elif isinstance(event, TurnEndedEvent):
                self._events_by_turn.setdefault(event.turn, []).append(event)
                self._current_turn = event.turn + 1
            elif isinstance(event, BattleEndedEvent):
                self._events_by_turn.setdefault(event.turn, []).append(event)
            else:
                self._events_by_turn.setdefault(self._current_turn, []).append(event)

    def get_turn_events(self, turn: int) -> List[BattleEvent]:
        return list(self._events_by_turn.get(turn, []))

    def get_past_battle_actions(
        self, side_id: str, past_turns: int = 0
    ) -> Dict[int, List[BattleChoice]]:
        """Get the actions a side executed on past turns.

        Blocked actions (asleep, flinched, recharging) leave no move-used
        event and are not reported.

        Args:
            side_id: "p1" or "p2"
            past_turns: Number of most recent turns to retrieve (0 = all turns)

        Returns:
            Dictionary mapping turn number to the BattleChoices executed
        """
        turn_ids = sorted(turn for turn in self._events_by_turn if turn > 0)
        if past_turns > 0:
            turn_ids = turn_ids[-past_turns:]

        actions_by_turn: Dict[int, List[BattleChoice]] = {}
        for turn_id in turn_ids:
            actions: List[BattleChoice] = []
            for event in self._events_by_turn[turn_id]:
                if isinstance(event, MoveUsedEvent) and event.side == side_id:
                    actions.append(BattleChoice.move(event.move_index))
                elif isinstance(event, SwitchedEvent) and event.side == side_id:
                    actions.append(BattleChoice.switch(event.to_slot))
            actions_by_turn[turn_id] = actions
        return actions_by_turn
