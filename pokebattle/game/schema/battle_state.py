"""Battle state representation for battle simulation."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pokebattle.game.schema.combatant_state import CombatantState
from pokebattle.game.schema.enums import BattlePhase
from pokebattle.game.schema.field_state import FieldState
from pokebattle.game.schema.side_state import SideState

SIDE_IDS = ("p1", "p2")


@dataclass(frozen=True)
class BattleState:
    """Immutable state of an entire battle.

    This is the complete snapshot of a battle, including both sides, the field,
    the lifecycle phase and the winner once the battle has ended.
    """

    sides: Dict[str, SideState] = field(
        default_factory=lambda: {side_id: SideState(side_id) for side_id in SIDE_IDS}
    )
    field_state: FieldState = field(default_factory=FieldState)
    phase: BattlePhase = BattlePhase.NOT_STARTED
    winner: Optional[str] = None

    @property
    def turn_number(self) -> int:
        return self.field_state.turn_number

    @property
    def ended(self) -> bool:
        return self.phase == BattlePhase.ENDED

    def get_side(self, side_id: str) -> SideState:
        """Get the side state for a player.

        Args:
            side_id: "p1" or "p2"

        Raises:
            ValueError: If the side id is unknown
        """
        if side_id not in self.sides:
            raise ValueError(f"Invalid side ID: {side_id}")
        return self.sides[side_id]

    def get_active(self, side_id: str) -> CombatantState:
        return self.get_side(side_id).get_active()

    @staticmethod
    def opponent_of(side_id: str) -> str:
        if side_id not in SIDE_IDS:
            raise ValueError(f"Invalid side ID: {side_id}")
        return "p2" if side_id == "p1" else "p1"

    def to_dict(self) -> Dict[str, Any]:
        """Convert battle state to dictionary for JSON serialization.

        This is the per-turn snapshot handed to renderers.
        """
        return {
            "phase": self.phase.value,
            "winner": self.winner,
            "field": self.field_state.to_dict(),
            "sides": {side_id: side.to_dict() for side_id, side in self.sides.items()},
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), indent=2, sort_keys=True)
