import unittest

from absl.testing import parameterized

from pokebattle.game.data.game_data import GameData
from pokebattle.game.exceptions import DataNotFoundError, InvariantViolationError
from pokebattle.game.schema.enums import POKEMON_TYPES


class TypeChartTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.type_chart = GameData().get_type_chart()

    def test_super_effective_types(self) -> None:
        self.assertEqual(self.type_chart.get_effectiveness("fire", "grass"), 2.0)
        self.assertEqual(self.type_chart.get_effectiveness("water", "fire"), 2.0)
        self.assertEqual(self.type_chart.get_effectiveness("ghost", "ghost"), 2.0)

    def test_not_very_effective_types(self) -> None:
        self.assertEqual(self.type_chart.get_effectiveness("fire", "water"), 0.5)
        self.assertEqual(self.type_chart.get_effectiveness("water", "grass"), 0.5)

    def test_immune_types(self) -> None:
        self.assertEqual(self.type_chart.get_effectiveness("ghost", "normal"), 0.0)
        self.assertEqual(self.type_chart.get_effectiveness("normal", "ghost"), 0.0)
        self.assertEqual(self.type_chart.get_effectiveness("ground", "flying"), 0.0)
        self.assertEqual(self.type_chart.get_effectiveness("dragon", "fairy"), 0.0)

    def test_case_insensitive(self) -> None:
        self.assertEqual(self.type_chart.get_effectiveness("FIRE", "grass"), 2.0)
        self.assertEqual(self.type_chart.get_effectiveness("grasS", "FIre"), 0.5)

    def test_unknown_attacking_type(self) -> None:
        with self.assertRaises(DataNotFoundError) as context:
            self.type_chart.get_effectiveness("sound", "fire")
        self.assertIn("Attacking type not found", str(context.exception))

    def test_unknown_defending_type(self) -> None:
        with self.assertRaises(DataNotFoundError):
            self.type_chart.effectiveness_against("fire", ["shadow"])

    @parameterized.parameters(
        ("ground", ["fire", "flying"], 0.0),
        ("ice", ["dragon", "ground"], 4.0),
        ("fire", ["water", "rock"], 0.25),
        ("electric", ["water", "flying"], 4.0),
        ("fighting", ["bug", "steel"], 1.0),
        ("water", ["fire"], 2.0),
        ("fairy", ["dragon", "dark"], 4.0),
    )
    def test_effectiveness_against(self, move_type, defender_types, expected) -> None:
        self.assertEqual(
            self.type_chart.effectiveness_against(move_type, defender_types), expected
        )

    def test_product_of_factors_for_every_pair(self) -> None:
        valid_factors = {0.0, 0.5, 1.0, 2.0}
        for attacking in POKEMON_TYPES:
            for first in POKEMON_TYPES:
                f1 = self.type_chart.get_effectiveness(attacking, first)
                self.assertIn(f1, valid_factors)
                for second in POKEMON_TYPES:
                    if first == second:
                        continue
                    f2 = self.type_chart.get_effectiveness(attacking, second)
                    self.assertEqual(
                        self.type_chart.effectiveness_against(attacking, [first, second]),
                        f1 * f2,
                    )

    def test_rejects_three_types(self) -> None:
        with self.assertRaises(InvariantViolationError):
            self.type_chart.effectiveness_against("fire", ["grass", "bug", "ice"])


if __name__ == "__main__":
    unittest.main()
