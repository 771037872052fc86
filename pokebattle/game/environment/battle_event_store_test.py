import unittest

from pokebattle.game.environment.battle_event_store import BattleEventStore
from pokebattle.game.events.battle_event import (
    BattleEndedEvent,
    BattleStartedEvent,
    CantMoveEvent,
    DamageEvent,
    FaintedEvent,
    MoveUsedEvent,
    SwitchedEvent,
    TurnEndedEvent,
)
from pokebattle.game.interface.battle_choice import BattleChoice


def _battle_events():
    return [
        BattleStartedEvent("Eevee", "Pikachu"),
        MoveUsedEvent("p1", 0, "Eevee", 0, "Tackle"),
        DamageEvent("p2", 0, "Pikachu", 20, source="Tackle", effectiveness=1.0),
        MoveUsedEvent("p2", 0, "Pikachu", 1, "Thunderbolt"),
        DamageEvent("p1", 0, "Eevee", 30, source="Thunderbolt", effectiveness=1.0),
        TurnEndedEvent(1),
        SwitchedEvent("p1", 0, 1, "Snorlax"),
        CantMoveEvent("p2", 0, "Pikachu", "paralysis"),
        TurnEndedEvent(2),
        MoveUsedEvent("p1", 1, "Snorlax", 2, "Body Slam"),
        DamageEvent("p2", 0, "Pikachu", 90, source="Body Slam", effectiveness=1.0),
        FaintedEvent("p2", 0, "Pikachu"),
        TurnEndedEvent(3),
        BattleEndedEvent("p1", 3),
    ]


class BattleEventStoreTest(unittest.TestCase):
    def setUp(self) -> None:
        self.store = BattleEventStore(_battle_events())

    def test_groups_events_by_turn(self) -> None:
        self.assertEqual(
            [e.kind for e in self.store.get_turn_events(0)], ["battle-started"]
        )
        self.assertEqual(len(self.store.get_turn_events(1)), 5)
        self.assertEqual(self.store.get_turn_events(3)[-1], BattleEndedEvent("p1", 3))

    def test_get_turn_events(self) -> None:
        self.assertEqual(
            [e.kind for e in self.store.get_turn_events(2)],
            ["switched", "cant-move", "turn-ended"],
        )
        self.assertEqual(self.store.get_turn_events(9), [])

    def test_past_battle_actions(self) -> None:
        self.assertEqual(
            self.store.get_past_battle_actions("p1"),
            {
                1: [BattleChoice.move(0)],
                2: [BattleChoice.switch(1)],
                3: [BattleChoice.move(2)],
            },
        )
        # A blocked action leaves nothing behind
        self.assertEqual(
            self.store.get_past_battle_actions("p2"),
            {1: [BattleChoice.move(1)], 2: [], 3: []},
        )

    def test_past_battle_actions_limited(self) -> None:
        self.assertEqual(
            self.store.get_past_battle_actions("p1", past_turns=1),
            {3: [BattleChoice.move(2)]},
        )

    def test_incremental_add(self) -> None:
        store = BattleEventStore()
        events = _battle_events()
        store.add_events(events[:6])
        store.add_events(events[6:])
        for turn in range(4):
            self.assertEqual(store.get_turn_events(turn), self.store.get_turn_events(turn))

    def test_returned_lists_are_copies(self) -> None:
        self.store.get_turn_events(1).clear()
        self.assertEqual(len(self.store.get_turn_events(1)), 5)


if __name__ == "__main__":
    unittest.main()
