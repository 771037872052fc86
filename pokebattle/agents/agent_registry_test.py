"""Tests for agent registry."""

import unittest

from pokebattle.agents.agent_interface import Agent
from pokebattle.agents.agent_registry import AgentRegistry
from pokebattle.agents.first_available_agent import FirstAvailableAgent
from pokebattle.agents.random_agent import RandomAgent
from pokebattle.game.environment.battle_event_store import BattleEventStore
from pokebattle.game.mechanics.random_source import SeededRandomSource


class AgentRegistryTest(unittest.TestCase):
    """Test cases for AgentRegistry class."""

    def setUp(self) -> None:
        self._saved_map = dict(AgentRegistry._AGENT_MAP)

    def tearDown(self) -> None:
        AgentRegistry._AGENT_MAP = self._saved_map

    def _create(self, name: str) -> Agent:
        return AgentRegistry.create_agent(
            name, "p1", BattleEventStore(), SeededRandomSource(1)
        )

    def test_get_available_agents_returns_sorted_list(self) -> None:
        """Test that get_available_agents returns sorted agent names."""
        agents = AgentRegistry.get_available_agents()

        self.assertEqual(agents, sorted(agents))
        self.assertIn("random", agents)
        self.assertIn("first_move", agents)

    def test_has_agent_is_case_insensitive(self) -> None:
        self.assertTrue(AgentRegistry.has_agent("Random"))
        self.assertTrue(AgentRegistry.has_agent("FIRST_MOVE"))
        self.assertFalse(AgentRegistry.has_agent("nonexistent"))

    def test_create_agent_returns_random_agent(self) -> None:
        agent = self._create("random")

        self.assertIsInstance(agent, RandomAgent)
        self.assertEqual(agent.side_id, "p1")

    def test_create_agent_returns_first_available_agent(self) -> None:
        self.assertIsInstance(self._create("First_Move"), FirstAvailableAgent)

    def test_create_agent_raises_for_unknown_name(self) -> None:
        """Test that the error lists the registered agents."""
        with self.assertRaisesRegex(ValueError, "Available agents: first_move, random"):
            self._create("minimax")

    def test_register_agent(self) -> None:
        AgentRegistry.register_agent(
            "Lazy", lambda side_id, store, rng: FirstAvailableAgent(side_id, store)
        )

        self.assertTrue(AgentRegistry.has_agent("lazy"))
        self.assertIsInstance(self._create("lazy"), FirstAvailableAgent)

    def test_register_agent_rejects_duplicates(self) -> None:
        with self.assertRaises(ValueError):
            AgentRegistry.register_agent(
                "random", lambda side_id, store, rng: RandomAgent(side_id, store, rng)
            )


if __name__ == "__main__":
    unittest.main()
