from dataclasses import dataclass
from typing import Any, Dict, List

from pokebattle.game.data.base import StaticRecord


@dataclass(frozen=True)
class Species(StaticRecord):
    name: str
    num: int
    types: List[str]
    base_stats: Dict[str, int]
    abilities: List[str]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Species":
        return cls(
            name=data["name"],
            num=int(data["num"]),
            types=[t.lower() for t in data["types"]],
            base_stats={k: int(v) for k, v in data["base_stats"].items()},
            abilities=list(data.get("abilities", [])),
        )
