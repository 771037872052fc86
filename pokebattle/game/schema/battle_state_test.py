"""Tests for BattleState and FieldState."""

import json
import unittest

from absl.testing import parameterized

from pokebattle.game.schema.battle_state import BattleState
from pokebattle.game.schema.combatant_state import BattleStats, CombatantState
from pokebattle.game.schema.enums import BattlePhase, FieldEffect, Weather
from pokebattle.game.schema.field_state import FieldState
from pokebattle.game.schema.side_state import SideState


def _side(side_id: str, species: str) -> SideState:
    combatant = CombatantState(
        species=species,
        level=50,
        types=["normal"],
        stats=BattleStats(100, 50, 50, 50, 50, 50),
        current_hp=100,
    )
    return SideState(side_id, combatants=[combatant])


class BattleStateTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.state = BattleState(
            sides={"p1": _side("p1", "Eevee"), "p2": _side("p2", "Pikachu")}
        )

    def test_defaults(self) -> None:
        state = BattleState()
        self.assertEqual(state.phase, BattlePhase.NOT_STARTED)
        self.assertEqual(state.turn_number, 0)
        self.assertIsNone(state.winner)
        self.assertFalse(state.ended)
        self.assertEqual(set(state.sides), {"p1", "p2"})

    def test_get_active(self) -> None:
        self.assertEqual(self.state.get_active("p2").species, "Pikachu")

    def test_unknown_side(self) -> None:
        with self.assertRaises(ValueError):
            self.state.get_side("p3")

    @parameterized.parameters(("p1", "p2"), ("p2", "p1"))
    def test_opponent_of(self, side_id: str, expected: str) -> None:
        self.assertEqual(BattleState.opponent_of(side_id), expected)

    def test_opponent_of_unknown_side(self) -> None:
        with self.assertRaises(ValueError):
            BattleState.opponent_of("p5")

    def test_snapshot_is_json(self) -> None:
        snapshot = json.loads(str(self.state))
        self.assertEqual(snapshot["phase"], "not_started")
        self.assertEqual(snapshot["field"]["turn_number"], 0)
        self.assertEqual(
            snapshot["sides"]["p1"]["combatants"][0]["species"], "Eevee"
        )


class FieldStateTest(unittest.TestCase):
    def test_to_dict(self) -> None:
        field_state = FieldState(
            weather=Weather.NONE,
            field_effects={FieldEffect.TRICK_ROOM: 3},
            turn_number=4,
        )
        self.assertEqual(
            field_state.to_dict(),
            {"turn_number": 4, "weather": "none", "field_effects": {"trickroom": 3}},
        )


if __name__ == "__main__":
    unittest.main()
