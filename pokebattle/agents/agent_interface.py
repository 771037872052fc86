"""Abstract base class for battle agents."""

from abc import ABC, abstractmethod
from typing import Sequence

from pokebattle.game.environment.battle_event_store import BattleEventStore
from pokebattle.game.interface.battle_choice import BattleChoice
from pokebattle.game.schema.battle_state import BattleState


class Agent(ABC):
    """Abstract base class for all battle agents.

    Agents are instantiated per battle and per side, receiving the side id and
    the battle's event store in the constructor, so they can keep
    battle-specific state and read past turns.

    The agent interface follows these design principles:

    1. **Immutable State**: Agents receive an immutable BattleState snapshot and
       should not attempt to modify it. Each turn produces a new state.

    2. **Legal Choices**: The caller passes the choices the state machine would
       accept right now (BattleStateMachine.legal_choices). Agents pick one of
       them; anything else is rejected with IllegalChoiceError.

    3. **Synchronous**: Local battles are resolved in-process, so
       choose_action is a plain method.

    Example Usage:
        ```python
        machine = BattleStateMachine(SeededRandomSource(1))
        machine.start(roster_p1, roster_p2)
        agent = RandomAgent("p1", machine.get_event_store(), SeededRandomSource(2))

        choice = agent.choose_action(machine.get_state(), machine.legal_choices("p1"))
        machine.submit_choice("p1", choice)
        ```

    Attributes:
        _side_id: The side this agent plays
        _event_store: Store containing all battle events for this battle
    """

    def __init__(self, side_id: str, event_store: BattleEventStore):
        """Initialize the agent for a specific battle.

        Args:
            side_id: "p1" or "p2"
            event_store: Store containing all battle events seen so far
        """
        self._side_id = side_id
        self._event_store = event_store

    @property
    def side_id(self) -> str:
        return self._side_id

    @abstractmethod
    def choose_action(
        self, state: BattleState, legal_choices: Sequence[BattleChoice]
    ) -> BattleChoice:
        """Choose a battle choice based on the current state.

        Args:
            state: Immutable snapshot of the current battle state
            legal_choices: Non-empty list of choices the battle accepts now

        Returns:
            One of legal_choices

        Raises:
            ValueError: If legal_choices is empty
        """
        pass
