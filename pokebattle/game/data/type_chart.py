from dataclasses import dataclass
from typing import Dict, Sequence

from pokebattle.game.exceptions import DataNotFoundError, InvariantViolationError

# Every product of one or two per-type factors in {0, 0.5, 1, 2}.
VALID_MULTIPLIERS = frozenset({0.0, 0.25, 0.5, 1.0, 2.0, 4.0})


@dataclass(frozen=True)
class TypeChart:
    effectiveness: Dict[str, Dict[str, float]]

    def get_effectiveness(self, attacking_type: str, defending_type: str) -> float:
        attacking_type = attacking_type.lower()
        defending_type = defending_type.lower()

        if attacking_type not in self.effectiveness:
            raise DataNotFoundError("attacking type", attacking_type)

        if defending_type not in self.effectiveness[attacking_type]:
            raise DataNotFoundError("defending type", defending_type)

        return self.effectiveness[attacking_type][defending_type]

    def effectiveness_against(
        self, move_type: str, defender_types: Sequence[str]
    ) -> float:
        """Combined multiplier of a move type against one or two defending types.

        Args:
            move_type: Type of the attacking move
            defender_types: The defender's one or two types

        Returns:
            One of 0, 0.25, 0.5, 1, 2, 4

        Example:
            >>> chart.effectiveness_against("ground", ["fire", "flying"])
            0.0
        """
        if not 1 <= len(defender_types) <= 2:
            raise InvariantViolationError(
                f"A combatant has one or two types, got {list(defender_types)}"
            )

        multiplier = 1.0
        for defender_type in defender_types:
            multiplier *= self.get_effectiveness(move_type, defender_type)

        if multiplier not in VALID_MULTIPLIERS:
            raise InvariantViolationError(
                f"Type multiplier {multiplier} for {move_type} vs {defender_types} "
                "is outside the valid set"
            )
        return multiplier
