"""Structured events emitted while a battle is resolved.

Every change to BattleState is described by exactly one of these events and
applied by StateTransition. Events reference combatants by side id and roster
slot, and also carry the display name so logs read without the state.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from pokebattle.game.schema.enums import SideCondition, Stat, Status, VolatileCondition

_STATUS_NAMES = {
    Status.BURN: "burned",
    Status.PARALYSIS: "paralyzed",
    Status.POISON: "poisoned",
    Status.TOXIC: "badly poisoned",
    Status.SLEEP: "asleep",
    Status.FREEZE: "frozen solid",
}

_STAT_NAMES = {
    Stat.ATK: "Attack",
    Stat.DEF: "Defense",
    Stat.SPA: "Sp. Atk",
    Stat.SPD: "Sp. Def",
    Stat.SPE: "Speed",
    Stat.ACCURACY: "accuracy",
    Stat.EVASION: "evasiveness",
}

_SIDE_CONDITION_NAMES = {
    SideCondition.REFLECT: "Reflect",
    SideCondition.LIGHT_SCREEN: "Light Screen",
}


@dataclass(frozen=True)
class BattleEvent:
    """Base class for all battle events."""

    kind: ClassVar[str] = "event"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the event with enum values flattened to strings."""
        data: Dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = value.value if isinstance(value, Enum) else value
        return data

    def describe(self) -> str:
        return self.kind


@dataclass(frozen=True)
class BattleStartedEvent(BattleEvent):
    kind: ClassVar[str] = "battle-started"

    p1_lead: str
    p2_lead: str

    def describe(self) -> str:
        return f"Battle started! {self.p1_lead} vs {self.p2_lead}"


@dataclass(frozen=True)
class SwitchedEvent(BattleEvent):
    kind: ClassVar[str] = "switched"

    side: str
    from_slot: int
    to_slot: int
    name: str

    def describe(self) -> str:
        return f"{self.side} sent out {self.name}!"


@dataclass(frozen=True)
class MoveUsedEvent(BattleEvent):
    """A move was executed; applying it deducts one PP from the slot."""

    kind: ClassVar[str] = "move-used"

    side: str
    slot: int
    name: str
    move_index: int
    move: str

    def describe(self) -> str:
        return f"{self.name} used {self.move}!"


@dataclass(frozen=True)
class MoveMissedEvent(BattleEvent):
    kind: ClassVar[str] = "move-missed"

    side: str
    slot: int
    name: str
    move: str

    def describe(self) -> str:
        return f"{self.name}'s attack missed!"


@dataclass(frozen=True)
class MoveBlockedEvent(BattleEvent):
    kind: ClassVar[str] = "move-blocked"

    side: str
    slot: int
    name: str
    move: str

    def describe(self) -> str:
        return f"{self.name} protected itself!"


@dataclass(frozen=True)
class CantMoveEvent(BattleEvent):
    kind: ClassVar[str] = "cant-move"

    side: str
    slot: int
    name: str
    reason: str

    def describe(self) -> str:
        messages = {
            "recharge": f"{self.name} must recharge!",
            "sleep": f"{self.name} is fast asleep!",
            "freeze": f"{self.name} is frozen solid!",
            "flinch": f"{self.name} flinched and couldn't move!",
            "paralysis": f"{self.name} is paralyzed and can't move!",
            "confusion": f"{self.name} is confused and can't move!",
        }
        return messages.get(self.reason, f"{self.name} can't move!")


@dataclass(frozen=True)
class DamageEvent(BattleEvent):
    """HP loss from a move or a status tick.

    Attributes:
        source: Move name, or the status value ("brn", "psn", "tox") for ticks
        effectiveness: Type multiplier, or None for status damage
    """

    kind: ClassVar[str] = "damage"

    side: str
    slot: int
    name: str
    amount: int
    source: str
    effectiveness: Optional[float] = None
    is_critical: bool = False

    def describe(self) -> str:
        if self.source == Status.BURN.value:
            return f"{self.name} was hurt by its burn!"
        if self.source in (Status.POISON.value, Status.TOXIC.value):
            return f"{self.name} was hurt by poison!"
        parts = []
        if self.is_critical:
            parts.append("A critical hit!")
        if self.effectiveness is not None and self.effectiveness > 1:
            parts.append("It's super effective!")
        elif self.effectiveness is not None and 0 < self.effectiveness < 1:
            parts.append("It's not very effective...")
        parts.append(f"{self.name} took {self.amount} damage.")
        return " ".join(parts)


@dataclass(frozen=True)
class HealedEvent(BattleEvent):
    kind: ClassVar[str] = "healed"

    side: str
    slot: int
    name: str
    amount: int

    def describe(self) -> str:
        return f"{self.name} restored {self.amount} HP!"


@dataclass(frozen=True)
class StatusAppliedEvent(BattleEvent):
    """A persistent status starts; turns seeds the combatant's status counter."""

    kind: ClassVar[str] = "status-applied"

    side: str
    slot: int
    name: str
    status: Status
    turns: int = 0

    def describe(self) -> str:
        if self.status == Status.SLEEP:
            return f"{self.name} fell asleep!"
        return f"{self.name} was {_STATUS_NAMES[self.status]}!"


@dataclass(frozen=True)
class StatusFailedEvent(BattleEvent):
    kind: ClassVar[str] = "status-failed"

    side: str
    slot: int
    name: str
    status: Status
    reason: str

    def describe(self) -> str:
        return f"It doesn't affect {self.name}... ({self.reason})"


@dataclass(frozen=True)
class StatusTickedEvent(BattleEvent):
    kind: ClassVar[str] = "status-ticked"

    side: str
    slot: int
    name: str
    status: Status
    turns: int

    def describe(self) -> str:
        return f"{self.name} is still {_STATUS_NAMES[self.status]}."


@dataclass(frozen=True)
class StatusCuredEvent(BattleEvent):
    kind: ClassVar[str] = "status-cured"

    side: str
    slot: int
    name: str
    status: Status

    def describe(self) -> str:
        if self.status == Status.SLEEP:
            return f"{self.name} woke up!"
        if self.status == Status.FREEZE:
            return f"{self.name} thawed out!"
        return f"{self.name} is no longer {_STATUS_NAMES[self.status]}."


@dataclass(frozen=True)
class StatChangedEvent(BattleEvent):
    """A stat stage changed, or a boost hit the [-6, 6] boundary.

    Attributes:
        delta: Change actually applied after clamping (0 for a no-op)
        requested: Change the move asked for
    """

    kind: ClassVar[str] = "stat-changed"

    side: str
    slot: int
    name: str
    stat: Stat
    delta: int
    requested: int

    def describe(self) -> str:
        stat_name = _STAT_NAMES[self.stat]
        if self.delta == 0:
            direction = "higher" if self.requested > 0 else "lower"
            return f"{self.name}'s {stat_name} won't go any {direction}!"
        size = abs(self.delta)
        verb = "rose" if self.delta > 0 else "fell"
        if size == 2:
            adverb = " sharply"
        elif size >= 3:
            adverb = " drastically" if self.delta > 0 else " severely"
        else:
            adverb = ""
        return f"{self.name}'s {stat_name}{adverb} {verb}!"


@dataclass(frozen=True)
class VolatileStartedEvent(BattleEvent):
    kind: ClassVar[str] = "volatile-started"

    side: str
    slot: int
    name: str
    condition: VolatileCondition
    turns: int

    def describe(self) -> str:
        messages = {
            VolatileCondition.PROTECT: f"{self.name} protected itself!",
            VolatileCondition.CONFUSION: f"{self.name} became confused!",
            VolatileCondition.FLINCH: f"{self.name} flinched!",
            VolatileCondition.RECHARGE: f"{self.name} must recharge next turn!",
        }
        return messages[self.condition]


@dataclass(frozen=True)
class VolatileTickedEvent(BattleEvent):
    kind: ClassVar[str] = "volatile-ticked"

    side: str
    slot: int
    name: str
    condition: VolatileCondition
    turns: int

    def describe(self) -> str:
        return f"{self.name}: {self.condition.value} ({self.turns} turns left)"


@dataclass(frozen=True)
class VolatileEndedEvent(BattleEvent):
    kind: ClassVar[str] = "volatile-ended"

    side: str
    slot: int
    name: str
    condition: VolatileCondition

    def describe(self) -> str:
        if self.condition == VolatileCondition.CONFUSION:
            return f"{self.name} snapped out of its confusion!"
        return f"{self.name}: {self.condition.value} ended"


@dataclass(frozen=True)
class SideConditionStartedEvent(BattleEvent):
    kind: ClassVar[str] = "side-condition-started"

    side: str
    condition: SideCondition
    turns: int

    def describe(self) -> str:
        return f"{_SIDE_CONDITION_NAMES[self.condition]} raised {self.side}'s defenses!"


@dataclass(frozen=True)
class SideConditionTickedEvent(BattleEvent):
    kind: ClassVar[str] = "side-condition-ticked"

    side: str
    condition: SideCondition
    turns: int

    def describe(self) -> str:
        name = _SIDE_CONDITION_NAMES[self.condition]
        return f"{name} on {self.side}'s side: {self.turns} turns left"


@dataclass(frozen=True)
class SideConditionEndedEvent(BattleEvent):
    kind: ClassVar[str] = "side-condition-ended"

    side: str
    condition: SideCondition

    def describe(self) -> str:
        return f"{self.side}'s {_SIDE_CONDITION_NAMES[self.condition]} wore off!"


@dataclass(frozen=True)
class FaintedEvent(BattleEvent):
    kind: ClassVar[str] = "fainted"

    side: str
    slot: int
    name: str

    def describe(self) -> str:
        return f"{self.name} fainted!"


@dataclass(frozen=True)
class TurnEndedEvent(BattleEvent):
    kind: ClassVar[str] = "turn-ended"

    turn: int

    def describe(self) -> str:
        return f"Turn {self.turn} ended."


@dataclass(frozen=True)
class BattleEndedEvent(BattleEvent):
    kind: ClassVar[str] = "battle-ended"

    winner: Optional[str]
    turn: int

    def describe(self) -> str:
        if self.winner is None:
            return f"The battle ended in a draw after turn {self.turn}."
        return f"{self.winner} won the battle!"


EVENT_TYPES: Dict[str, type] = {
    cls.kind: cls
    for cls in (
        BattleStartedEvent,
        SwitchedEvent,
        MoveUsedEvent,
        MoveMissedEvent,
        MoveBlockedEvent,
        CantMoveEvent,
        DamageEvent,
        HealedEvent,
        StatusAppliedEvent,
        StatusFailedEvent,
        StatusTickedEvent,
        StatusCuredEvent,
        StatChangedEvent,
        VolatileStartedEvent,
        VolatileTickedEvent,
        VolatileEndedEvent,
        SideConditionStartedEvent,
        SideConditionTickedEvent,
        SideConditionEndedEvent,
        FaintedEvent,
        TurnEndedEvent,
        BattleEndedEvent,
    )
}
