"""Side state representation for battle simulation."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from pokebattle.game.exceptions import InvariantViolationError
from pokebattle.game.schema.combatant_state import CombatantState
from pokebattle.game.schema.enums import SideCondition


@dataclass(frozen=True)
class SideState:
    """Immutable state of one player's side during battle.

    This includes the whole roster in order, which member is active, and side
    conditions like Reflect and Light Screen.
    """

    side_id: str
    combatants: List[CombatantState] = field(default_factory=list)
    active_index: int = 0
    side_conditions: Dict[SideCondition, int] = field(default_factory=dict)

    def get_active(self) -> CombatantState:
        """Get the active combatant.

        Raises:
            InvariantViolationError: If active_index does not point into the roster
        """
        if not 0 <= self.active_index < len(self.combatants):
            raise InvariantViolationError(
                f"Active index {self.active_index} is out of bounds for {self.side_id}"
            )
        return self.combatants[self.active_index]

    def get_alive(self) -> List[CombatantState]:
        return [c for c in self.combatants if c.is_alive()]

    def has_alive(self) -> bool:
        return any(c.is_alive() for c in self.combatants)

    def available_switches(self) -> List[int]:
        """Indices of benched combatants that can be switched in."""
        return [
            i
            for i, combatant in enumerate(self.combatants)
            if i != self.active_index and combatant.is_alive()
        ]

    def must_switch(self) -> bool:
        """True when the active combatant fainted and a replacement exists."""
        return not self.get_active().is_alive() and bool(self.available_switches())

    def has_side_condition(self, condition: SideCondition) -> bool:
        return condition in self.side_conditions

    def to_dict(self) -> Dict[str, Any]:
        """Convert side state to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the side state
        """
        return {
            "side_id": self.side_id,
            "active_index": self.active_index,
            "combatants": [c.to_dict() for c in self.combatants],
            "side_conditions": {
                cond.value: turns for cond, turns in self.side_conditions.items()
            },
            "fainted_count": len(self.combatants) - len(self.get_alive()),
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), indent=2, sort_keys=True)
