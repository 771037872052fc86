"""Damage calculation for a single move use."""

import math
from dataclasses import dataclass
from typing import Collection, Tuple

from absl import logging

from pokebattle.game.data.move import MoveDefinition
from pokebattle.game.data.type_chart import TypeChart
from pokebattle.game.mechanics.random_source import RandomSource
from pokebattle.game.mechanics.stat_stages import StatStageTracker, accuracy_multiplier
from pokebattle.game.schema.combatant_state import CombatantState
from pokebattle.game.schema.enums import MoveCategory, SideCondition, Stat, Status

CRITICAL_HIT_CHANCE = 1 / 24
CRITICAL_HIT_MULTIPLIER = 1.5
STAB_MULTIPLIER = 1.5
BURN_MULTIPLIER = 0.5
SCREEN_MULTIPLIER = 0.5
RANDOM_FACTOR_MIN = 0.85
RANDOM_FACTOR_MAX = 1.0


@dataclass(frozen=True)
class DamageResult:
    """Outcome of one damage calculation.

    Attributes:
        damage: HP to remove; 0 for status moves, misses and immunities
        effectiveness: Combined type multiplier against the defender
        is_critical: Whether the critical hit roll succeeded
        missed: Whether the accuracy roll failed
    """

    damage: int
    effectiveness: float
    is_critical: bool = False
    missed: bool = False


class DamageCalculator:
    """Computes damage, effectiveness, critical hits and misses.

    Random draws happen in a fixed order so scripted sources can pin them:
    accuracy (skipped for moves that always hit), critical hit, random factor.
    A move the defender is immune to never draws the random factor.
    """

    def __init__(self, type_chart: TypeChart, rng: RandomSource):
        self.type_chart = type_chart
        self.rng = rng

    def check_accuracy(
        self, attacker: CombatantState, defender: CombatantState, move: MoveDefinition
    ) -> bool:
        """Roll the accuracy check for a move.

        Returns:
            True if the move hits. Moves with accuracy None always hit and do
            not consume a draw.
        """
        if move.always_hits():
            return True
        stage = attacker.get_stage(Stat.ACCURACY) - defender.get_stage(Stat.EVASION)
        effective_accuracy = move.accuracy * accuracy_multiplier(stage)
        return self.rng.random() * 100 < effective_accuracy

    def _attack_and_defense(
        self,
        attacker: CombatantState,
        defender: CombatantState,
        move: MoveDefinition,
        is_critical: bool,
    ) -> Tuple[int, int]:
        if move.category == MoveCategory.PHYSICAL:
            attack_stat, defense_stat = Stat.ATK, Stat.DEF
        else:
            attack_stat, defense_stat = Stat.SPA, Stat.SPD

        attack_stage = attacker.get_stage(attack_stat)
        if is_critical:
            attack_stage = max(attack_stage, 0)

        attack = StatStageTracker.effective_stat(
            attacker.stats.get(attack_stat), attack_stage
        )
        defense = StatStageTracker.effective_stat(
            defender.stats.get(defense_stat), defender.get_stage(defense_stat)
        )
        return attack, max(defense, 1)

    def calculate(
        self,
        attacker: CombatantState,
        defender: CombatantState,
        move: MoveDefinition,
        defender_side_conditions: Collection[SideCondition] = (),
    ) -> DamageResult:
        """Calculate the damage of one move use.

        Args:
            attacker: Combatant using the move
            defender: Combatant receiving it
            move: The move
            defender_side_conditions: Side conditions active on the defender's side

        Returns:
            DamageResult; damage is at least 1 for any hit the defender is not
            immune to

        Example:
            >>> # Lv50, 100 Atk vs 100 Def, 80 BP physical STAB, no crit, factor 1.0
            >>> calculator.calculate(attacker, defender, move).damage
            55
        """
        effectiveness = self.type_chart.effectiveness_against(move.type, defender.types)

        if move.is_status():
            return DamageResult(damage=0, effectiveness=effectiveness)

        if not self.check_accuracy(attacker, defender, move):
            return DamageResult(damage=0, effectiveness=effectiveness, missed=True)
        return self.calculate_hit(attacker, defender, move, defender_side_conditions)

    def calculate_hit(
        self,
        attacker: CombatantState,
        defender: CombatantState,
        move: MoveDefinition,
        defender_side_conditions: Collection[SideCondition] = (),
    ) -> DamageResult:
        """Calculate the damage of a move that already passed its accuracy check.

        Draws the critical hit roll and then the random factor.
        """
        effectiveness = self.type_chart.effectiveness_against(move.type, defender.types)
        is_critical = self.rng.random() < CRITICAL_HIT_CHANCE
        attack, defense = self._attack_and_defense(attacker, defender, move, is_critical)

        base = math.floor(
            ((2 * attacker.level + 10) / 250) * (attack / defense) * move.base_power
        ) + 2

        damage = float(base)
        if is_critical:
            damage *= CRITICAL_HIT_MULTIPLIER
        if move.type in attacker.types:
            damage *= STAB_MULTIPLIER

        if effectiveness == 0:
            return DamageResult(damage=0, effectiveness=0.0, is_critical=is_critical)
        damage *= effectiveness

        if attacker.status == Status.BURN and move.category == MoveCategory.PHYSICAL:
            damage *= BURN_MULTIPLIER

        screen = (
            SideCondition.REFLECT
            if move.category == MoveCategory.PHYSICAL
            else SideCondition.LIGHT_SCREEN
        )
        if screen in defender_side_conditions and not is_critical:
            damage *= SCREEN_MULTIPLIER

        damage *= self.rng.uniform(RANDOM_FACTOR_MIN, RANDOM_FACTOR_MAX)

        result = DamageResult(
            damage=max(1, math.floor(damage)),
            effectiveness=effectiveness,
            is_critical=is_critical,
        )
        logging.debug(
            "%s -> %s with %s: base=%d atk=%d def=%d result=%s",
            attacker.name,
            defender.name,
            move.name,
            base,
            attack,
            defense,
            result,
        )
        return result
