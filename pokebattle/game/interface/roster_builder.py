"""Roster validation and combatant construction."""

from typing import Dict, List, Optional, Sequence

from absl import logging

from pokebattle.game.data.game_data import GameData
from pokebattle.game.data.move_catalog import MoveCatalog
from pokebattle.game.exceptions import DataNotFoundError, ValidationError
from pokebattle.game.interface.team_loader import RosterEntry
from pokebattle.game.mechanics.stat_calculator import (
    EffortValues,
    IndividualValues,
    StatCalculator,
)
from pokebattle.game.schema.combatant_state import CombatantState, MoveSlot
from pokebattle.game.schema.enums import Stat
from pokebattle.game.schema.side_state import SideState
from pokebattle.game.schema.utils import normalize_name

MAX_ROSTER_SIZE = 6
MAX_MOVES = 4

_STAT_FIELDS = {
    Stat.HP: "hp",
    Stat.ATK: "attack",
    Stat.DEF: "defense",
    Stat.SPA: "special_attack",
    Stat.SPD: "special_defense",
    Stat.SPE: "speed",
}


def _stat_kwargs(values: Dict[str, int], kind: str) -> Dict[str, int]:
    """Map stat labels such as "SpA" to IndividualValues/EffortValues fields."""
    kwargs = {}
    for label, value in values.items():
        try:
            stat = Stat.from_key(label)
        except ValueError as e:
            raise ValidationError(f"Unknown {kind} stat '{label}'") from e
        if stat not in _STAT_FIELDS:
            raise ValidationError(f"{stat.value} cannot carry {kind}s")
        kwargs[_STAT_FIELDS[stat]] = value
    return kwargs


class RosterBuilder:
    """Validates rosters and builds the combatants a battle starts with.

    Every problem is reported as a ValidationError, including names the data
    provider does not know.
    """

    def __init__(
        self,
        game_data: Optional[GameData] = None,
        move_catalog: Optional[MoveCatalog] = None,
    ):
        self.game_data = game_data or GameData()
        self.move_catalog = move_catalog or MoveCatalog(self.game_data)

    def build_side(self, side_id: str, roster: Sequence[RosterEntry]) -> SideState:
        """Validate a whole roster and build its side; the first member leads.

        Raises:
            ValidationError: If the roster or any member is malformed
        """
        if not 1 <= len(roster) <= MAX_ROSTER_SIZE:
            raise ValidationError(
                f"{side_id} roster must have 1-{MAX_ROSTER_SIZE} members, got {len(roster)}"
            )

        combatants: List[CombatantState] = []
        for slot, entry in enumerate(roster):
            try:
                combatants.append(self.build_combatant(entry))
            except ValidationError as e:
                raise ValidationError(f"{side_id} roster slot {slot}: {e}") from e

        logging.debug(
            "Built %s roster: %s", side_id, ", ".join(c.name for c in combatants)
        )
        return SideState(side_id=side_id, combatants=combatants, active_index=0)

    def build_combatant(self, entry: RosterEntry) -> CombatantState:
        """Validate one roster entry and derive its battle state.

        Raises:
            ValidationError: On unknown names, a bad move count, duplicate
                moves, or IV/EV/level values out of range
        """
        if not 1 <= len(entry.moves) <= MAX_MOVES:
            raise ValidationError(
                f"{entry.species} must know 1-{MAX_MOVES} moves, got {len(entry.moves)}"
            )
        normalized_moves = [normalize_name(m) for m in entry.moves]
        if len(set(normalized_moves)) != len(normalized_moves):
            raise ValidationError(f"{entry.species} knows the same move twice")

        try:
            species = self.game_data.get_species(entry.species)
            nature = self.game_data.get_nature(entry.nature)
            moves = [self.move_catalog.get(name) for name in entry.moves]
        except DataNotFoundError as e:
            raise ValidationError(str(e)) from e

        ivs = IndividualValues(**_stat_kwargs(entry.ivs, "IV"))
        evs = EffortValues(**_stat_kwargs(entry.evs, "EV"))
        stats = StatCalculator.calculate(
            species.base_stats, entry.level, ivs, evs, nature
        )

        return CombatantState(
            species=species.name,
            nickname=entry.nickname,
            level=entry.level,
            types=list(species.types),
            base_stats=dict(species.base_stats),
            stats=stats,
            current_hp=stats.hp,
            moves=[MoveSlot(move=move, current_pp=move.pp) for move in moves],
            nature=nature.name,
            ability=entry.ability,
            item=entry.item,
        )
