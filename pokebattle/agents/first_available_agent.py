"""First available agent that always picks the first legal choice."""

from typing import Optional, Sequence

from pokebattle.agents.agent_interface import Agent
from pokebattle.game.events.battle_event import MoveBlockedEvent, MoveMissedEvent
from pokebattle.game.interface.battle_choice import BattleChoice, ChoiceType
from pokebattle.game.schema.battle_state import BattleState


class FirstAvailableAgent(Agent):
    """Agent that picks the first usable move, else the first legal choice.

    If the move it used on the previous turn missed or was blocked, it moves
    on to the next usable move instead of repeating it. This deterministic
    behavior makes this agent useful for baseline comparisons and for
    reproducible battle-flow tests.
    """

    def _failed_move_index(self, turn: int) -> Optional[int]:
        """Index of this side's move on the given turn if it missed or was blocked."""
        actions = self._event_store.get_past_battle_actions(
            self._side_id, past_turns=1
        ).get(turn, [])
        move_indices = [
            action.move_index
            for action in actions
            if action.choice_type == ChoiceType.MOVE
        ]
        if not move_indices:
            return None

        for event in self._event_store.get_turn_events(turn):
            if isinstance(event, MoveMissedEvent) and event.side == self._side_id:
                return move_indices[-1]
            if isinstance(event, MoveBlockedEvent) and event.side != self._side_id:
                return move_indices[-1]
        return None

    def choose_action(
        self, state: BattleState, legal_choices: Sequence[BattleChoice]
    ) -> BattleChoice:
        """Choose the first legal move, falling back to the first legal choice.

        Raises:
            ValueError: If no choices are available
        """
        if not legal_choices:
            raise ValueError(f"No legal choices for {self._side_id}")

        moves = [c for c in legal_choices if c.choice_type == ChoiceType.MOVE]
        if not moves:
            return legal_choices[0]

        failed_index = self._failed_move_index(state.turn_number)
        for choice in moves:
            if choice.move_index != failed_index:
                return choice
        return moves[0]
