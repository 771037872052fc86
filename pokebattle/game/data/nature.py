from dataclasses import dataclass
from typing import Optional

from pokebattle.game.data.base import StaticRecord


@dataclass(frozen=True)
class Nature(StaticRecord):
    name: str
    plus_stat: Optional[str]
    minus_stat: Optional[str]

    def is_neutral(self) -> bool:
        return self.plus_stat is None or self.plus_stat == self.minus_stat

    def multiplier_for(self, stat_key: str) -> float:
        """Return 1.1, 0.9 or 1.0 for a stat key such as "atk"."""
        if self.is_neutral():
            return 1.0
        if stat_key == self.plus_stat:
            return 1.1
        if stat_key == self.minus_stat:
            return 0.9
        return 1.0
