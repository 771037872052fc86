"""Tests for status and volatile condition rules."""

import unittest
from dataclasses import replace
from typing import Dict, Optional, Sequence

from absl.testing import parameterized

from pokebattle.game.events.battle_event import (
    DamageEvent,
    HealedEvent,
    SideConditionEndedEvent,
    SideConditionTickedEvent,
    StatusAppliedEvent,
    StatusCuredEvent,
    StatusFailedEvent,
    StatusTickedEvent,
    VolatileEndedEvent,
    VolatileTickedEvent,
)
from pokebattle.game.mechanics.random_source import FixedSequenceRandomSource
from pokebattle.game.mechanics.status_engine import StatusEngine
from pokebattle.game.schema.combatant_state import BattleStats, CombatantState
from pokebattle.game.schema.enums import SideCondition, Status, VolatileCondition
from pokebattle.game.schema.side_state import SideState


def _combatant(
    types: Sequence[str] = ("normal",),
    max_hp: int = 100,
    current_hp: Optional[int] = None,
    status: Status = Status.NONE,
    status_turns: int = 0,
    volatiles: Optional[Dict[VolatileCondition, int]] = None,
) -> CombatantState:
    return CombatantState(
        species="Testmon",
        level=50,
        types=list(types),
        stats=BattleStats(max_hp, 100, 100, 100, 100, 100),
        current_hp=max_hp if current_hp is None else current_hp,
        status=status,
        status_turns=status_turns,
        volatile_conditions=volatiles or {},
    )


def _apply_status_events(combatant: CombatantState, events) -> CombatantState:
    """Mirror what StateTransition does for the events these tests produce."""
    for event in events:
        if isinstance(event, DamageEvent):
            combatant = replace(
                combatant, current_hp=max(0, combatant.current_hp - event.amount)
            )
        elif isinstance(event, StatusTickedEvent):
            combatant = replace(combatant, status_turns=event.turns)
        elif isinstance(event, StatusCuredEvent):
            combatant = replace(combatant, status=Status.NONE, status_turns=0)
    return combatant


class CanActTest(parameterized.TestCase):
    def _engine(self, draws: Sequence[float] = ()) -> StatusEngine:
        self.rng = FixedSequenceRandomSource(draws)
        return StatusEngine(self.rng)

    def test_healthy_combatant_acts_without_draws(self) -> None:
        check = self._engine().can_act(_combatant())
        self.assertTrue(check.can_act)
        self.assertIsNone(check.reason)

    def test_recharge_checked_first(self) -> None:
        combatant = _combatant(
            status=Status.SLEEP,
            status_turns=2,
            volatiles={VolatileCondition.RECHARGE: 1},
        )
        check = self._engine().can_act(combatant)
        self.assertFalse(check.can_act)
        self.assertEqual(check.reason, "recharge")

    def test_asleep(self) -> None:
        check = self._engine().can_act(_combatant(status=Status.SLEEP, status_turns=1))
        self.assertEqual(check.reason, "sleep")

    def test_flinch(self) -> None:
        combatant = _combatant(volatiles={VolatileCondition.FLINCH: 1})
        self.assertEqual(self._engine().can_act(combatant).reason, "flinch")

    @parameterized.named_parameters(
        ("frozen_stays", Status.FREEZE, 0.74, False, "freeze"),
        ("frozen_thaws_for_turn", Status.FREEZE, 0.75, True, None),
        ("fully_paralyzed", Status.PARALYSIS, 0.24, False, "paralysis"),
        ("paralyzed_acts", Status.PARALYSIS, 0.25, True, None),
    )
    def test_rolled_statuses(
        self, status: Status, draw: float, can_act: bool, reason: Optional[str]
    ) -> None:
        engine = self._engine([draw])
        check = engine.can_act(_combatant(status=status, status_turns=2))
        self.assertEqual(check.can_act, can_act)
        self.assertEqual(check.reason, reason)
        self.assertEqual(self.rng.remaining, 0)

    def test_thaw_roll_does_not_cure_freeze(self) -> None:
        engine = self._engine([0.75, 0.74])
        combatant = _combatant(status=Status.FREEZE, status_turns=3)

        self.assertTrue(engine.can_act(combatant).can_act)
        combatant = _apply_status_events(
            combatant, engine.end_of_turn("p1", 0, combatant)
        )
        self.assertEqual(combatant.status, Status.FREEZE)
        self.assertEqual(combatant.status_turns, 2)

        self.assertEqual(engine.can_act(combatant).reason, "freeze")
        self.assertEqual(self.rng.remaining, 0)

    @parameterized.parameters((0.49, False), (0.5, True))
    def test_confusion(self, draw: float, can_act: bool) -> None:
        combatant = _combatant(volatiles={VolatileCondition.CONFUSION: 2})
        check = self._engine([draw]).can_act(combatant)
        self.assertEqual(check.can_act, can_act)


class InflictStatusTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.engine = StatusEngine(FixedSequenceRandomSource([0.99]))

    @parameterized.named_parameters(
        ("fire_burn", ("fire",), Status.BURN),
        ("electric_paralysis", ("electric",), Status.PARALYSIS),
        ("poison_poison", ("poison",), Status.POISON),
        ("steel_poison", ("steel",), Status.POISON),
        ("steel_toxic", ("dragon", "steel"), Status.TOXIC),
        ("ice_freeze", ("ice",), Status.FREEZE),
        ("fire_freeze", ("fire",), Status.FREEZE),
    )
    def test_type_immunity(self, types: Sequence[str], status: Status) -> None:
        event = self.engine.inflict_status("p2", 0, _combatant(types=types), status)
        self.assertIsInstance(event, StatusFailedEvent)
        self.assertIn("immune", event.reason)

    def test_already_statused(self) -> None:
        event = self.engine.inflict_status(
            "p2", 0, _combatant(status=Status.PARALYSIS), Status.BURN
        )
        self.assertIsInstance(event, StatusFailedEvent)

    def test_fainted_target(self) -> None:
        event = self.engine.inflict_status(
            "p2", 0, _combatant(current_hp=0), Status.BURN
        )
        self.assertIsInstance(event, StatusFailedEvent)

    def test_burn_applied(self) -> None:
        event = self.engine.inflict_status("p2", 1, _combatant(), Status.BURN)
        self.assertEqual(event, StatusAppliedEvent("p2", 1, "Testmon", Status.BURN, 0))

    def test_sleep_duration_is_drawn(self) -> None:
        event = self.engine.inflict_status("p1", 0, _combatant(), Status.SLEEP)
        self.assertEqual(event.turns, 3)

    def test_toxic_counter_starts_at_one(self) -> None:
        event = self.engine.inflict_status("p1", 0, _combatant(), Status.TOXIC)
        self.assertEqual(event.turns, 1)

    def test_none_status_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.engine.inflict_status("p1", 0, _combatant(), Status.NONE)


class EndOfTurnTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.engine = StatusEngine(FixedSequenceRandomSource([]))

    @parameterized.named_parameters(
        ("burn", Status.BURN, 100, 6),
        ("poison", Status.POISON, 100, 12),
        ("toxic_first_tick", Status.TOXIC, 100, 6),
        ("burn_minimum", Status.BURN, 10, 1),
        ("poison_large", Status.POISON, 341, 42),
    )
    def test_status_damage(self, status: Status, max_hp: int, expected: int) -> None:
        combatant = _combatant(max_hp=max_hp, status=status, status_turns=1)
        self.assertEqual(StatusEngine.status_damage(combatant), expected)
        events = self.engine.end_of_turn("p1", 0, combatant)
        self.assertIsInstance(events[0], DamageEvent)
        self.assertEqual(events[0].amount, expected)
        self.assertEqual(events[0].source, status.value)

    def test_toxic_escalates(self) -> None:
        combatant = _combatant(status=Status.TOXIC, status_turns=1)
        damage = []
        for _ in range(3):
            events = self.engine.end_of_turn("p1", 0, combatant)
            damage.append(events[0].amount)
            combatant = _apply_status_events(combatant, events)
        self.assertEqual(damage, [6, 12, 18])
        self.assertEqual(combatant.status_turns, 4)
        self.assertEqual(combatant.current_hp, 64)

    def test_sleep_counter_two_wakes_after_two_turns(self) -> None:
        combatant = _combatant(status=Status.SLEEP, status_turns=2)

        events = self.engine.end_of_turn("p1", 0, combatant)
        self.assertEqual(events, [StatusTickedEvent("p1", 0, "Testmon", Status.SLEEP, 1)])
        combatant = _apply_status_events(combatant, events)
        self.assertEqual(self.engine.can_act(combatant).reason, "sleep")

        events = self.engine.end_of_turn("p1", 0, combatant)
        self.assertEqual(events, [StatusCuredEvent("p1", 0, "Testmon", Status.SLEEP)])
        combatant = _apply_status_events(combatant, events)
        self.assertTrue(self.engine.can_act(combatant).can_act)

    def test_freeze_thaws_when_counter_runs_out(self) -> None:
        combatant = _combatant(status=Status.FREEZE, status_turns=1)
        events = self.engine.end_of_turn("p1", 0, combatant)
        self.assertEqual(events, [StatusCuredEvent("p1", 0, "Testmon", Status.FREEZE)])

    def test_lethal_status_damage_stops_processing(self) -> None:
        combatant = _combatant(
            current_hp=5,
            status=Status.BURN,
            volatiles={VolatileCondition.CONFUSION: 2},
        )
        events = self.engine.end_of_turn("p1", 0, combatant)
        self.assertEqual(len(events), 1)
        self.assertIsInstance(events[0], DamageEvent)

    def test_fainted_combatant_has_no_events(self) -> None:
        combatant = _combatant(current_hp=0, status=Status.POISON)
        self.assertEqual(self.engine.end_of_turn("p1", 0, combatant), [])

    def test_volatiles_tick_and_end(self) -> None:
        combatant = _combatant(
            volatiles={VolatileCondition.CONFUSION: 3, VolatileCondition.PROTECT: 1}
        )
        events = self.engine.end_of_turn("p2", 0, combatant)
        self.assertCountEqual(
            events,
            [
                VolatileTickedEvent("p2", 0, "Testmon", VolatileCondition.CONFUSION, 2),
                VolatileEndedEvent("p2", 0, "Testmon", VolatileCondition.PROTECT),
            ],
        )

    def test_side_conditions_decay(self) -> None:
        side = SideState(
            "p1",
            side_conditions={SideCondition.REFLECT: 5, SideCondition.LIGHT_SCREEN: 1},
        )
        events = StatusEngine.side_end_of_turn(side)
        self.assertCountEqual(
            events,
            [
                SideConditionTickedEvent("p1", SideCondition.REFLECT, 4),
                SideConditionEndedEvent("p1", SideCondition.LIGHT_SCREEN),
            ],
        )


class RestAndVolatileTest(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = StatusEngine(FixedSequenceRandomSource([0.0]))

    def test_rest_heals_cures_and_sleeps(self) -> None:
        combatant = _combatant(current_hp=40, status=Status.POISON)
        events = self.engine.rest("p1", 0, combatant)
        self.assertEqual(
            events,
            [
                HealedEvent("p1", 0, "Testmon", 60),
                StatusCuredEvent("p1", 0, "Testmon", Status.POISON),
                StatusAppliedEvent("p1", 0, "Testmon", Status.SLEEP, 2),
            ],
        )

    def test_rest_at_full_hp_only_sleeps(self) -> None:
        events = self.engine.rest("p1", 0, _combatant())
        self.assertEqual(events, [StatusAppliedEvent("p1", 0, "Testmon", Status.SLEEP, 2)])

    def test_volatile_not_stacked(self) -> None:
        combatant = _combatant(volatiles={VolatileCondition.CONFUSION: 2})
        self.assertIsNone(
            self.engine.inflict_volatile(
                "p1", 0, combatant, VolatileCondition.CONFUSION, 3
            )
        )

    def test_volatile_started(self) -> None:
        event = self.engine.inflict_volatile(
            "p1", 0, _combatant(), VolatileCondition.FLINCH, 1
        )
        self.assertEqual(event.condition, VolatileCondition.FLINCH)
        self.assertEqual(event.turns, 1)

    def test_volatile_turns_draw(self) -> None:
        self.assertEqual(self.engine.volatile_turns(2, 2), 2)
        self.assertEqual(self.engine.volatile_turns(1, 4), 1)


if __name__ == "__main__":
    unittest.main()
