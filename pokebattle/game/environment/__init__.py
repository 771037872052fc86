"""Battle state machine and state transition logic."""

from pokebattle.game.environment.battle_state_machine import (
    BattleStateMachine,
    TurnResult,
)
from pokebattle.game.environment.state_transition import StateTransition

__all__ = ["BattleStateMachine", "StateTransition", "TurnResult"]
