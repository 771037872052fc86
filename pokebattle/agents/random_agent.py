"""Random agent that selects random legal choices."""

from typing import Sequence

from pokebattle.agents.agent_interface import Agent
from pokebattle.game.environment.battle_event_store import BattleEventStore
from pokebattle.game.interface.battle_choice import BattleChoice, ChoiceType
from pokebattle.game.mechanics.random_source import RandomSource
from pokebattle.game.schema.battle_state import BattleState


class RandomAgent(Agent):
    """Agent that picks random legal choices.

    This agent makes completely random decisions during battles:
    - 90% chance to pick a random move (when moves are available)
    - 10% chance to pick a random switch (when switches are available)
    - Always switches when forced or when no moves are available

    All draws come from the injected random source, so a seeded source makes
    the agent reproducible.

    Attributes:
        switch_probability: Probability of choosing switch over move (default 0.1)
    """

    def __init__(
        self,
        side_id: str,
        event_store: BattleEventStore,
        rng: RandomSource,
        switch_probability: float = 0.1,
    ) -> None:
        """Initialize RandomAgent.

        Args:
            side_id: The side this agent plays
            event_store: Store containing all battle events
            rng: Random source for every decision
            switch_probability: Probability (0-1) of choosing switch over move
                               when both are available (default 0.1)
        """
        super().__init__(side_id, event_store)
        self._rng = rng
        self.switch_probability = switch_probability

    def _pick(self, choices: Sequence[BattleChoice]) -> BattleChoice:
        return choices[self._rng.randint(0, len(choices) - 1)]

    def choose_action(
        self, state: BattleState, legal_choices: Sequence[BattleChoice]
    ) -> BattleChoice:
        """Choose a random move, or sometimes a random switch.

        Raises:
            ValueError: If no choices are available
        """
        if not legal_choices:
            raise ValueError(f"No legal choices for {self._side_id}")

        moves = [c for c in legal_choices if c.choice_type == ChoiceType.MOVE]
        switches = [c for c in legal_choices if c.choice_type == ChoiceType.SWITCH]

        if not moves:
            return self._pick(switches or legal_choices)

        if switches and self._rng.random() < self.switch_probability:
            return self._pick(switches)

        return self._pick(moves)
