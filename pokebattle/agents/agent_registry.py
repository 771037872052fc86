"""Agent registry for mapping agent names to agent classes."""

from typing import Callable, Dict, List

from pokebattle.agents.agent_interface import Agent
from pokebattle.agents.first_available_agent import FirstAvailableAgent
from pokebattle.agents.random_agent import RandomAgent
from pokebattle.game.environment.battle_event_store import BattleEventStore
from pokebattle.game.mechanics.random_source import RandomSource

AgentFactory = Callable[[str, BattleEventStore, RandomSource], Agent]


class AgentRegistry:
    """Registry for managing available agent types.

    This registry maps agent names (used in the CLI) to factory functions.
    Agents are instantiated per battle and side with the battle's event store
    and a random source.

    Example Usage:
        ```python
        agent = AgentRegistry.create_agent(
            "random", "p1", machine.get_event_store(), SeededRandomSource(3)
        )
        ```

    Attributes:
        _AGENT_MAP: Mapping from agent names to agent factory functions
    """

    _AGENT_MAP: Dict[str, AgentFactory] = {
        "random": lambda side_id, store, rng: RandomAgent(side_id, store, rng),
        "first_move": lambda side_id, store, rng: FirstAvailableAgent(side_id, store),
    }

    @classmethod
    def get_available_agents(cls) -> List[str]:
        """Get list of all available agent names."""
        return sorted(cls._AGENT_MAP.keys())

    @classmethod
    def has_agent(cls, agent_name: str) -> bool:
        return agent_name.lower() in cls._AGENT_MAP

    @classmethod
    def create_agent(
        cls,
        agent_name: str,
        side_id: str,
        event_store: BattleEventStore,
        rng: RandomSource,
    ) -> Agent:
        """Create an agent instance by name for one side of a battle.

        Args:
            agent_name: Name of the agent to create (case insensitive)
            side_id: The side the agent plays
            event_store: Store containing all battle events
            rng: Random source for agents that make random decisions

        Returns:
            Instance of the requested agent

        Raises:
            ValueError: If agent_name is not registered
        """
        normalized_name = agent_name.lower()

        if normalized_name not in cls._AGENT_MAP:
            available = ", ".join(cls.get_available_agents())
            raise ValueError(
                f"Unknown agent: '{agent_name}'. Available agents: {available}"
            )

        return cls._AGENT_MAP[normalized_name](side_id, event_store, rng)

    @classmethod
    def register_agent(cls, agent_name: str, agent_factory: AgentFactory) -> None:
        """Register a new agent type.

        Raises:
            ValueError: If agent_name is already registered
        """
        normalized_name = agent_name.lower()

        if normalized_name in cls._AGENT_MAP:
            raise ValueError(f"Agent '{agent_name}' is already registered")

        cls._AGENT_MAP[normalized_name] = agent_factory
