"""Combatant state representation for battle simulation."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pokebattle.game.data.move import MoveDefinition
from pokebattle.game.schema.enums import Stat, Status, VolatileCondition


@dataclass(frozen=True)
class BattleStats:
    """The six derived stats of a combatant, fixed for the whole battle."""

    hp: int
    attack: int
    defense: int
    special_attack: int
    special_defense: int
    speed: int

    def get(self, stat: Stat) -> int:
        """Return the raw stat for one of the six main stats.

        Raises:
            ValueError: For accuracy and evasion, which only exist as stages
        """
        mapping = {
            Stat.HP: self.hp,
            Stat.ATK: self.attack,
            Stat.DEF: self.defense,
            Stat.SPA: self.special_attack,
            Stat.SPD: self.special_defense,
            Stat.SPE: self.speed,
        }
        if stat not in mapping:
            raise ValueError(f"{stat.value} has no raw value")
        return mapping[stat]

    def to_dict(self) -> Dict[str, int]:
        return {
            "hp": self.hp,
            "atk": self.attack,
            "def": self.defense,
            "spa": self.special_attack,
            "spd": self.special_defense,
            "spe": self.speed,
        }


@dataclass(frozen=True)
class MoveSlot:
    """A known move together with its remaining PP."""

    move: MoveDefinition
    current_pp: int

    @property
    def name(self) -> str:
        return self.move.name

    @property
    def max_pp(self) -> int:
        return self.move.pp

    def has_pp(self) -> bool:
        return self.current_pp > 0


@dataclass(frozen=True)
class CombatantState:
    """Immutable state of a single combatant during battle.

    A combatant is built once at battle start and every later version is a
    copy produced by StateTransition. Fainted combatants stay in the roster
    with current_hp == 0.

    Attributes:
        status_turns: Turns left for sleep or freeze, or the toxic counter n
            (damage n/16 of max HP on the next tick)
        volatile_conditions: Volatile condition -> turns remaining
        stat_stages: Stage per boostable stat; missing stats are at 0
    """

    species: str
    level: int
    types: List[str]
    stats: BattleStats
    current_hp: int
    moves: List[MoveSlot] = field(default_factory=list)
    base_stats: Dict[str, int] = field(default_factory=dict)
    nickname: Optional[str] = None
    nature: str = "Hardy"
    ability: str = ""
    item: Optional[str] = None

    status: Status = Status.NONE
    status_turns: int = 0
    volatile_conditions: Dict[VolatileCondition, int] = field(default_factory=dict)
    stat_stages: Dict[Stat, int] = field(default_factory=dict)

    @property
    def max_hp(self) -> int:
        return self.stats.hp

    @property
    def name(self) -> str:
        return self.nickname or self.species

    def is_alive(self) -> bool:
        """Check if the combatant has not fainted.

        Returns:
            True if HP > 0, False otherwise
        """
        return self.current_hp > 0

    def get_stage(self, stat: Stat) -> int:
        """Get the current stage (-6 to +6) for a stat."""
        return self.stat_stages.get(stat, 0)

    def has_volatile(self, condition: VolatileCondition) -> bool:
        return condition in self.volatile_conditions

    def get_move_slot(self, index: int) -> MoveSlot:
        """Get the move in a slot.

        Raises:
            IndexError: If the slot does not exist
        """
        if not 0 <= index < len(self.moves):
            raise IndexError(f"{self.name} has no move slot {index}")
        return self.moves[index]

    def usable_move_indices(self) -> List[int]:
        return [i for i, slot in enumerate(self.moves) if slot.has_pp()]

    def to_dict(self) -> Dict[str, Any]:
        """Convert combatant state to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the combatant state
        """
        return {
            "species": self.species,
            "nickname": self.nickname,
            "level": self.level,
            "types": list(self.types),
            "hp": {"current": self.current_hp, "max": self.max_hp},
            "stats": self.stats.to_dict(),
            "status": self.status.value,
            "status_turns": self.status_turns,
            "volatile_conditions": {
                condition.value: turns
                for condition, turns in self.volatile_conditions.items()
            },
            "stat_stages": {
                stat.value: stage for stat, stage in self.stat_stages.items() if stage
            },
            "moves": [
                {
                    "name": slot.name,
                    "current_pp": slot.current_pp,
                    "max_pp": slot.max_pp,
                }
                for slot in self.moves
            ],
            "ability": self.ability,
            "item": self.item,
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)
