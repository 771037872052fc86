"""Tests for battle events."""

import json
import unittest

from absl.testing import parameterized

from pokebattle.game.events.battle_event import (
    EVENT_TYPES,
    BattleEndedEvent,
    BattleEvent,
    CantMoveEvent,
    DamageEvent,
    StatChangedEvent,
    StatusAppliedEvent,
    StatusCuredEvent,
    VolatileStartedEvent,
)
from pokebattle.game.schema.enums import Stat, Status, VolatileCondition


class BattleEventTest(parameterized.TestCase):
    def test_to_dict_flattens_enums(self) -> None:
        event = StatusAppliedEvent("p2", 0, "Snorlax", Status.SLEEP, 2)
        data = event.to_dict()
        self.assertEqual(
            data,
            {
                "kind": "status-applied",
                "side": "p2",
                "slot": 0,
                "name": "Snorlax",
                "status": "slp",
                "turns": 2,
            },
        )
        json.dumps(data)

    def test_event_kinds_are_unique(self) -> None:
        self.assertLen(EVENT_TYPES, 22)
        for kind, cls in EVENT_TYPES.items():
            self.assertTrue(issubclass(cls, BattleEvent))
            self.assertEqual(cls.kind, kind)

    def test_events_are_immutable(self) -> None:
        event = DamageEvent("p1", 0, "Eevee", 10, source="Tackle")
        with self.assertRaises(AttributeError):
            event.amount = 20  # type: ignore

    @parameterized.named_parameters(
        (
            "super_effective_crit",
            DamageEvent("p1", 0, "Eevee", 80, "Close Combat", 2.0, True),
            "A critical hit! It's super effective! Eevee took 80 damage.",
        ),
        (
            "resisted",
            DamageEvent("p1", 0, "Eevee", 8, "Ember", 0.5),
            "It's not very effective... Eevee took 8 damage.",
        ),
        (
            "burn_tick",
            DamageEvent("p1", 0, "Eevee", 6, "brn"),
            "Eevee was hurt by its burn!",
        ),
        (
            "toxic_tick",
            DamageEvent("p1", 0, "Eevee", 6, "tox"),
            "Eevee was hurt by poison!",
        ),
        (
            "sharp_rise",
            StatChangedEvent("p1", 0, "Eevee", Stat.ATK, 2, 2),
            "Eevee's Attack sharply rose!",
        ),
        (
            "capped",
            StatChangedEvent("p1", 0, "Eevee", Stat.SPE, 0, -1),
            "Eevee's Speed won't go any lower!",
        ),
        (
            "woke_up",
            StatusCuredEvent("p1", 0, "Eevee", Status.SLEEP),
            "Eevee woke up!",
        ),
        (
            "paralyzed",
            StatusAppliedEvent("p1", 0, "Eevee", Status.PARALYSIS),
            "Eevee was paralyzed!",
        ),
        (
            "flinched",
            CantMoveEvent("p1", 0, "Eevee", "flinch"),
            "Eevee flinched and couldn't move!",
        ),
        (
            "confused",
            VolatileStartedEvent("p1", 0, "Eevee", VolatileCondition.CONFUSION, 3),
            "Eevee became confused!",
        ),
        (
            "draw",
            BattleEndedEvent(None, 12),
            "The battle ended in a draw after turn 12.",
        ),
        ("winner", BattleEndedEvent("p1", 12), "p1 won the battle!"),
    )
    def test_describe(self, event: BattleEvent, expected: str) -> None:
        self.assertEqual(event.describe(), expected)


if __name__ == "__main__":
    unittest.main()
