"""Field state representation for battle simulation."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict

from pokebattle.game.schema.enums import FieldEffect, Weather


@dataclass(frozen=True)
class FieldState:
    """Immutable state of global field conditions during battle.

    Weather and field effects are carried for snapshots only; no mechanic
    reads them.
    """

    weather: Weather = Weather.NONE
    field_effects: Dict[FieldEffect, int] = field(default_factory=dict)
    turn_number: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turn_number": self.turn_number,
            "weather": self.weather.value,
            "field_effects": {
                effect.value: turns for effect, turns in self.field_effects.items()
            },
        }

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)
