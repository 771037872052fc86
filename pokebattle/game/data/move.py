from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pokebattle.game.data.base import StaticRecord
from pokebattle.game.data.move_effect import MoveEffect, NoEffect, parse_move_effect
from pokebattle.game.schema.enums import MoveCategory, MoveTarget


@dataclass(frozen=True)
class MoveDefinition(StaticRecord):
    """Static attributes of a move.

    Attributes:
        accuracy: Percent chance to hit before stage modifiers, or None when
            the move always hits
        effect_chance: Percent chance for the secondary effect once the move
            connects, or None when the effect always applies
    """

    name: str
    type: str
    category: MoveCategory
    base_power: int
    accuracy: Optional[int]
    pp: int
    priority: int = 0
    target: MoveTarget = MoveTarget.OPPONENT
    effect: MoveEffect = field(default_factory=NoEffect)
    effect_chance: Optional[int] = None
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MoveDefinition":
        """Build a move from a raw data-provider record.

        Raises:
            ValueError: If an enum value or the effect object is malformed
            KeyError: If a required field is missing
        """
        category = MoveCategory(data["category"].lower())
        base_power = int(data["base_power"])
        if category == MoveCategory.STATUS and base_power != 0:
            raise ValueError("status moves have no base power")
        if category != MoveCategory.STATUS and base_power <= 0:
            raise ValueError("damaging moves need a positive base power")

        effect_chance = data.get("effect_chance")
        if effect_chance is not None and not 1 <= int(effect_chance) <= 100:
            raise ValueError(f"effect_chance must be in 1-100, got {effect_chance}")

        accuracy = data.get("accuracy")
        return cls(
            name=data["name"],
            type=data["type"].lower(),
            category=category,
            base_power=base_power,
            accuracy=None if accuracy is None else int(accuracy),
            pp=int(data["pp"]),
            priority=int(data.get("priority", 0)),
            target=MoveTarget(data.get("target", MoveTarget.OPPONENT.value)),
            effect=parse_move_effect(data.get("effect")),
            effect_chance=None if effect_chance is None else int(effect_chance),
            description=data.get("description", ""),
        )

    def is_status(self) -> bool:
        return self.category == MoveCategory.STATUS

    def always_hits(self) -> bool:
        return self.accuracy is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "category": self.category.value,
            "base_power": self.base_power,
            "accuracy": self.accuracy,
            "pp": self.pp,
            "priority": self.priority,
            "target": self.target.value,
            "effect": type(self.effect).__name__,
            "effect_chance": self.effect_chance,
        }
