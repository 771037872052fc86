"""Secondary effects a move can carry.

Effects form a closed set of frozen dataclasses. The engine dispatches on the
effect's type, never on strings; raw data-provider records are converted by
`parse_move_effect` once, when the move catalog loads them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from pokebattle.game.schema.enums import (
    EffectTarget,
    SideCondition,
    Stat,
    Status,
    VolatileCondition,
)


@dataclass(frozen=True)
class NoEffect:
    """The move only deals damage (or does nothing)."""


@dataclass(frozen=True)
class StatusInflict:
    """Inflict a persistent status on the target."""

    status: Status


@dataclass(frozen=True)
class StatBoost:
    """Change one or more stat stages of the user or the target.

    Attributes:
        changes: (stat, stages) pairs; negative stages lower the stat
        target: Whether the changes land on the user or on the target
    """

    changes: Tuple[Tuple[Stat, int], ...]
    target: EffectTarget


@dataclass(frozen=True)
class Heal:
    """Restore a fraction of the user's max HP (0 < fraction <= 1)."""

    fraction: float


@dataclass(frozen=True)
class Protect:
    """Shield the user from damaging moves for the rest of the turn."""


@dataclass(frozen=True)
class VolatileInflict:
    """Start a volatile condition on the target for a drawn number of turns."""

    condition: VolatileCondition
    min_turns: int = 1
    max_turns: int = 1


@dataclass(frozen=True)
class Rest:
    """Fully heal the user and put it to sleep for two turns."""


@dataclass(frozen=True)
class Screen:
    """Raise a damage-halving screen on the user's side."""

    condition: SideCondition
    turns: int = 5


@dataclass(frozen=True)
class Recharge:
    """The user must skip its next action."""


MoveEffect = Union[
    NoEffect,
    StatusInflict,
    StatBoost,
    Heal,
    Protect,
    VolatileInflict,
    Rest,
    Screen,
    Recharge,
]

# Effects whose primary recipient is the move's target rather than its user.
_TARGET_EFFECTS = (StatusInflict, VolatileInflict)


def effect_hits_target(effect: MoveEffect) -> bool:
    """Return True if the effect lands on the opposing combatant."""
    if isinstance(effect, StatBoost):
        return effect.target == EffectTarget.TARGET
    return isinstance(effect, _TARGET_EFFECTS)


def parse_move_effect(raw: Optional[Dict[str, Any]]) -> MoveEffect:
    """Convert a raw effect record from the data provider into a MoveEffect.

    Args:
        raw: Effect object such as {"kind": "stat_boost", "changes": {"atk": 2},
            "target": "user"}, or None for moves without an effect

    Returns:
        The typed effect

    Raises:
        ValueError: If the record has an unknown kind or a malformed payload

    Examples:
        >>> parse_move_effect({"kind": "status", "status": "burn"})
        StatusInflict(status=<Status.BURN: 'brn'>)
        >>> parse_move_effect(None)
        NoEffect()
    """
    if raw is None:
        return NoEffect()

    kind = raw.get("kind")
    if kind == "none":
        return NoEffect()
    if kind == "status":
        status = Status.from_name(raw["status"])
        if status == Status.NONE:
            raise ValueError("status effect cannot inflict 'none'")
        return StatusInflict(status=status)
    if kind == "stat_boost":
        changes = raw.get("changes")
        if not isinstance(changes, dict) or not changes:
            raise ValueError("stat_boost effect requires a non-empty 'changes' object")
        parsed = []
        for stat_key, stages in changes.items():
            stat = Stat.from_key(stat_key)
            if stat == Stat.HP:
                raise ValueError("HP has no stat stage")
            if not isinstance(stages, int) or stages == 0 or abs(stages) > 6:
                raise ValueError(f"invalid stage change {stages!r} for {stat_key}")
            parsed.append((stat, stages))
        target = EffectTarget(raw.get("target", "user"))
        return StatBoost(changes=tuple(parsed), target=target)
    if kind == "heal":
        fraction = float(raw["fraction"])
        if not 0 < fraction <= 1:
            raise ValueError(f"heal fraction must be in (0, 1], got {fraction}")
        return Heal(fraction=fraction)
    if kind == "protect":
        return Protect()
    if kind == "volatile":
        condition = VolatileCondition.from_name(raw["condition"])
        min_turns = int(raw.get("min_turns", 1))
        max_turns = int(raw.get("max_turns", min_turns))
        if min_turns < 1 or max_turns < min_turns:
            raise ValueError(f"invalid turn range {min_turns}-{max_turns}")
        return VolatileInflict(
            condition=condition, min_turns=min_turns, max_turns=max_turns
        )
    if kind == "rest":
        return Rest()
    if kind == "screen":
        return Screen(
            condition=SideCondition.from_name(raw["condition"]),
            turns=int(raw.get("turns", 5)),
        )
    if kind == "recharge":
        return Recharge()
    raise ValueError(f"Unknown effect kind: {kind!r}")
