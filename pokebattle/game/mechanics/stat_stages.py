"""Stat stage math: stage multipliers and clamped boosts."""

import math
from dataclasses import dataclass
from typing import Mapping

from pokebattle.game.exceptions import InvariantViolationError
from pokebattle.game.schema.enums import BOOSTABLE_STATS, Stat

MIN_STAGE = -6
MAX_STAGE = 6

# Stat stage multipliers for stages -6 to +6
STAT_STAGE_MULTIPLIERS = {
    -6: 2 / 8,
    -5: 2 / 7,
    -4: 2 / 6,
    -3: 2 / 5,
    -2: 2 / 4,
    -1: 2 / 3,
    0: 1.0,
    1: 3 / 2,
    2: 4 / 2,
    3: 5 / 2,
    4: 6 / 2,
    5: 7 / 2,
    6: 8 / 2,
}


def stage_multiplier(stage: int) -> float:
    """Multiplier for Atk, Def, SpA, SpD or Spe at a stage.

    Raises:
        InvariantViolationError: If the stage is outside [-6, 6]
    """
    if stage not in STAT_STAGE_MULTIPLIERS:
        raise InvariantViolationError(f"Stat stage {stage} is outside [-6, 6]")
    return STAT_STAGE_MULTIPLIERS[stage]


def accuracy_multiplier(stage: int) -> float:
    """Multiplier for accuracy and evasion stages.

    Also used for the attacker's accuracy stage minus the defender's evasion
    stage, which may fall outside [-6, 6] and is not clamped.

    Example:
        >>> accuracy_multiplier(-6)
        0.3333333333333333
    """
    if stage >= 0:
        return (3 + stage) / 3
    return 3 / (3 + abs(stage))


@dataclass(frozen=True)
class BoostOutcome:
    """Result of a boost request.

    Attributes:
        applied: Stage change after clamping into [-6, 6]
        new_stage: Stage after the change
    """

    stat: Stat
    requested: int
    applied: int
    new_stage: int

    @property
    def is_noop(self) -> bool:
        return self.applied == 0


class StatStageTracker:
    """Pure helpers over a combatant's stage mapping."""

    @staticmethod
    def apply_boost(stages: Mapping[Stat, int], stat: Stat, delta: int) -> BoostOutcome:
        """Clamp a stage change into [-6, 6].

        Args:
            stages: Current stage mapping; missing stats are at 0
            stat: Stat to change
            delta: Requested change

        Returns:
            BoostOutcome with the applied change; is_noop is True when the stat
            was already at the boundary

        Raises:
            InvariantViolationError: If the stat has no stage or the current
                stage is already out of range
        """
        if stat not in BOOSTABLE_STATS:
            raise InvariantViolationError(f"{stat.value} cannot carry a stage")
        current = stages.get(stat, 0)
        if not MIN_STAGE <= current <= MAX_STAGE:
            raise InvariantViolationError(f"{stat.value} stage {current} out of range")
        new_stage = max(MIN_STAGE, min(MAX_STAGE, current + delta))
        return BoostOutcome(
            stat=stat, requested=delta, applied=new_stage - current, new_stage=new_stage
        )

    @staticmethod
    def effective_stat(raw: int, stage: int) -> int:
        """Apply a stage to a raw stat, flooring the result.

        Example:
            >>> StatStageTracker.effective_stat(145, -1)
            96
        """
        return math.floor(raw * stage_multiplier(stage))
