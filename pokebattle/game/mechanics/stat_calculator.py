"""Battle stat derivation from base stats, level, IVs, EVs and nature."""

import math
from dataclasses import dataclass, fields
from typing import Mapping

from pokebattle.game.data.nature import Nature
from pokebattle.game.exceptions import ValidationError
from pokebattle.game.schema.combatant_state import BattleStats

MIN_LEVEL = 1
MAX_LEVEL = 100
MAX_IV = 31
MAX_EV = 252
MAX_EV_TOTAL = 510


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class IndividualValues:
    """Individual Values (IVs) for a combatant, ranging from 0-31."""

    hp: int = MAX_IV
    attack: int = MAX_IV
    defense: int = MAX_IV
    special_attack: int = MAX_IV
    special_defense: int = MAX_IV
    speed: int = MAX_IV

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not _is_int(value) or not 0 <= value <= MAX_IV:
                raise ValidationError(
                    f"{f.name} IV must be between 0 and {MAX_IV}, got {value}"
                )


@dataclass(frozen=True)
class EffortValues:
    """Effort Values (EVs) for a combatant: 0-252 each, at most 510 in total."""

    hp: int = 0
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not _is_int(value) or not 0 <= value <= MAX_EV:
                raise ValidationError(
                    f"{f.name} EV must be between 0 and {MAX_EV}, got {value}"
                )
        if self.total() > MAX_EV_TOTAL:
            raise ValidationError(
                f"EV total must be at most {MAX_EV_TOTAL}, got {self.total()}"
            )

    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))


class StatCalculator:
    """Computes the six battle stats of a combatant."""

    @staticmethod
    def _core(base: int, iv: int, ev: int, level: int) -> int:
        return math.floor(((2 * base + iv + ev // 4) * level) / 100)

    @staticmethod
    def calculate_hp(base: int, iv: int, ev: int, level: int) -> int:
        return StatCalculator._core(base, iv, ev, level) + level + 10

    @staticmethod
    def calculate_stat(
        base: int, iv: int, ev: int, level: int, nature_multiplier: float = 1.0
    ) -> int:
        """Compute one non-HP stat.

        Example:
            >>> StatCalculator.calculate_stat(100, 31, 252, 100, 1.1)
            328
        """
        return int((StatCalculator._core(base, iv, ev, level) + 5) * nature_multiplier)

    @staticmethod
    def calculate(
        base_stats: Mapping[str, int],
        level: int,
        ivs: IndividualValues,
        evs: EffortValues,
        nature: Nature,
    ) -> BattleStats:
        """Compute all battle stats.

        Args:
            base_stats: Species base stats keyed "hp", "atk", "def", "spa", "spd", "spe"
            level: Level from 1 to 100
            ivs: Individual values
            evs: Effort values
            nature: Nature; HP is never affected by it

        Returns:
            The derived BattleStats

        Raises:
            ValidationError: If the level is out of range
        """
        if not _is_int(level) or not MIN_LEVEL <= level <= MAX_LEVEL:
            raise ValidationError(
                f"Level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {level}"
            )

        def stat(key: str, iv: int, ev: int) -> int:
            return StatCalculator.calculate_stat(
                base_stats[key], iv, ev, level, nature.multiplier_for(key)
            )

        return BattleStats(
            hp=StatCalculator.calculate_hp(base_stats["hp"], ivs.hp, evs.hp, level),
            attack=stat("atk", ivs.attack, evs.attack),
            defense=stat("def", ivs.defense, evs.defense),
            special_attack=stat("spa", ivs.special_attack, evs.special_attack),
            special_defense=stat("spd", ivs.special_defense, evs.special_defense),
            speed=stat("spe", ivs.speed, evs.speed),
        )
