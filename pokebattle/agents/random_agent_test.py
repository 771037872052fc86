"""Unit tests for RandomAgent."""

import unittest

from pokebattle.agents.random_agent import RandomAgent
from pokebattle.game.environment.battle_event_store import BattleEventStore
from pokebattle.game.interface.battle_choice import BattleChoice, ChoiceType
from pokebattle.game.mechanics.random_source import (
    FixedSequenceRandomSource,
    SeededRandomSource,
)
from pokebattle.game.schema.battle_state import BattleState

MOVES = [BattleChoice.move(i) for i in range(4)]
SWITCHES = [BattleChoice.switch(1), BattleChoice.switch(2)]


class RandomAgentTest(unittest.TestCase):
    """Test RandomAgent functionality."""

    def _agent(self, draws, switch_probability: float = 0.1) -> RandomAgent:
        return RandomAgent(
            "p1",
            BattleEventStore(),
            FixedSequenceRandomSource(draws),
            switch_probability=switch_probability,
        )

    def test_returns_move(self) -> None:
        """Test that agent picks a move when the switch roll fails."""
        agent = self._agent([0.5, 0.6])
        choice = agent.choose_action(BattleState(), MOVES + SWITCHES)
        self.assertEqual(choice, BattleChoice.move(2))

    def test_returns_switch(self) -> None:
        """Test that agent switches when the switch roll succeeds."""
        agent = self._agent([0.05, 0.9])
        choice = agent.choose_action(BattleState(), MOVES + SWITCHES)
        self.assertEqual(choice, BattleChoice.switch(2))

    def test_switches_when_no_moves(self) -> None:
        """Test that a forced switch never draws the switch roll."""
        agent = self._agent([0.0])
        choice = agent.choose_action(BattleState(), SWITCHES)
        self.assertEqual(choice, BattleChoice.switch(1))

    def test_moves_only(self) -> None:
        agent = self._agent([0.99])
        self.assertEqual(agent.choose_action(BattleState(), MOVES), BattleChoice.move(3))

    def test_pass_only(self) -> None:
        agent = self._agent([0.3])
        choice = agent.choose_action(BattleState(), [BattleChoice.pass_turn()])
        self.assertEqual(choice.choice_type, ChoiceType.PASS)

    def test_no_choices(self) -> None:
        agent = self._agent([])
        with self.assertRaises(ValueError):
            agent.choose_action(BattleState(), [])

    def test_always_legal(self) -> None:
        agent = RandomAgent("p2", BattleEventStore(), SeededRandomSource(5), 0.5)
        legal = MOVES[:2] + SWITCHES
        for _ in range(50):
            self.assertIn(agent.choose_action(BattleState(), legal), legal)
        self.assertEqual(agent.side_id, "p2")


if __name__ == "__main__":
    unittest.main()
