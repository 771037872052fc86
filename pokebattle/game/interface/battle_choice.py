"""Battle choice representation for agent decisions."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChoiceType(Enum):
    """Type of choice a side can submit for a turn."""

    MOVE = "move"
    SWITCH = "switch"
    PASS = "pass"


@dataclass(frozen=True)
class BattleChoice:
    """Immutable representation of one side's decision for a turn.

    Shape is checked here; legality against the current battle state (PP left,
    fainted switch targets, forced switches) is checked by the state machine.

    Attributes:
        choice_type: MOVE, SWITCH or PASS
        move_index: Move slot (0-3), required for MOVE choices
        target_index: Target slot on the opposing side, optional (singles
            battles always target the opposing active combatant)
        switch_index: Roster slot to switch in, required for SWITCH choices

    Examples:
        >>> BattleChoice.move(0)
        BattleChoice(choice_type=<ChoiceType.MOVE: 'move'>, move_index=0, target_index=None, switch_index=None)
        >>> BattleChoice.switch(2).to_command()
        'switch 2'
    """

    choice_type: ChoiceType
    move_index: Optional[int] = None
    target_index: Optional[int] = None
    switch_index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.choice_type == ChoiceType.MOVE and self.move_index is None:
            raise ValueError("MOVE choice requires move_index")
        if self.choice_type == ChoiceType.SWITCH and self.switch_index is None:
            raise ValueError("SWITCH choice requires switch_index")

    @classmethod
    def move(cls, move_index: int, target_index: Optional[int] = None) -> "BattleChoice":
        return cls(ChoiceType.MOVE, move_index=move_index, target_index=target_index)

    @classmethod
    def switch(cls, switch_index: int) -> "BattleChoice":
        return cls(ChoiceType.SWITCH, switch_index=switch_index)

    @classmethod
    def pass_turn(cls) -> "BattleChoice":
        return cls(ChoiceType.PASS)

    def to_command(self) -> str:
        """Render the choice as a short command string for logs."""
        if self.choice_type == ChoiceType.MOVE:
            return f"move {self.move_index}"
        if self.choice_type == ChoiceType.SWITCH:
            return f"switch {self.switch_index}"
        return "pass"
