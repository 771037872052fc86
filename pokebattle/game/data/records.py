"""Pydantic schemas for the packaged JSON data files.

GameData validates every raw record against one of these models before
building its lookup tables.
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, Field, RootModel, ValidationError, field_validator

from pokebattle.game.data.move_effect import parse_move_effect
from pokebattle.game.data.type_chart import TypeChart
from pokebattle.game.schema.enums import POKEMON_TYPES, MoveCategory, MoveTarget

BASE_STAT_KEYS = ("hp", "atk", "def", "spa", "spd", "spe")
NATURE_STATS = ("atk", "def", "spa", "spd", "spe")
CHART_FACTORS = frozenset({0, 0.5, 1, 2})

# Strict so that JSON booleans and numeric strings are rejected.
StrictInt = Annotated[int, Field(strict=True)]
PositiveStat = Annotated[int, Field(strict=True, gt=0)]
ChartFactor = Annotated[float, Field(strict=True)]


def _check_type_name(type_name: str) -> str:
    if type_name.lower() not in POKEMON_TYPES:
        raise ValueError(f"unknown type '{type_name}'")
    return type_name


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into "field: message" pairs."""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "record"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


class SpeciesRecord(BaseModel):
    """One entry of species.json."""

    name: str
    num: StrictInt
    types: List[str] = Field(min_length=1, max_length=2)
    base_stats: Dict[str, PositiveStat]
    abilities: List[str] = Field(default_factory=list)

    @field_validator("types")
    @classmethod
    def _known_types(cls, types: List[str]) -> List[str]:
        return [_check_type_name(type_name) for type_name in types]

    @field_validator("base_stats")
    @classmethod
    def _all_base_stats(cls, stats: Dict[str, int]) -> Dict[str, int]:
        missing = [key for key in BASE_STAT_KEYS if key not in stats]
        if missing:
            raise ValueError(f"missing base stats {missing}")
        return stats


class MoveRecord(BaseModel):
    """One entry of moves.json. accuracy is required but may be null."""

    name: str
    type: str
    category: MoveCategory
    base_power: Annotated[int, Field(strict=True, ge=0)]
    accuracy: Optional[Annotated[int, Field(strict=True, ge=1, le=100)]]
    pp: Annotated[int, Field(strict=True, ge=1)]
    priority: StrictInt = 0
    target: MoveTarget = MoveTarget.OPPONENT
    effect: Any = None
    effect_chance: Optional[Annotated[int, Field(strict=True, ge=1, le=100)]] = None

    @field_validator("type")
    @classmethod
    def _known_type(cls, type_name: str) -> str:
        return _check_type_name(type_name)

    @field_validator("effect")
    @classmethod
    def _parsable_effect(cls, effect: Any) -> Any:
        try:
            parse_move_effect(effect)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"bad effect: {e}") from e
        return effect


class NatureRecord(BaseModel):
    """One entry of natures.json. Neutral natures have null stats."""

    name: str
    plus_stat: Optional[str]
    minus_stat: Optional[str]

    @field_validator("plus_stat", "minus_stat")
    @classmethod
    def _known_stat(cls, stat: Optional[str]) -> Optional[str]:
        if stat is not None and stat not in NATURE_STATS:
            raise ValueError(f"unknown stat '{stat}'")
        return stat


class TypeChartRecord(RootModel[Dict[str, Dict[str, ChartFactor]]]):
    """Sparse attacking -> defending factor mapping from type_chart.json."""

    @field_validator("root")
    @classmethod
    def _complete_chart(
        cls, chart: Dict[str, Dict[str, float]]
    ) -> Dict[str, Dict[str, float]]:
        missing = [t for t in POKEMON_TYPES if t not in chart]
        if missing:
            raise ValueError(f"missing attacking types {missing}")
        unknown = sorted(set(chart) - set(POKEMON_TYPES))
        if unknown:
            raise ValueError(f"unknown attacking types {unknown}")
        for attacking, row in chart.items():
            for defending, factor in row.items():
                if defending not in POKEMON_TYPES:
                    raise ValueError(f"{attacking}: unknown defending type '{defending}'")
                if factor not in CHART_FACTORS:
                    raise ValueError(
                        f"{attacking}: invalid factor {factor!r} against {defending}"
                    )
        return chart

    def to_type_chart(self) -> TypeChart:
        """Build the dense 18x18 chart. Pairs missing from the file are neutral."""
        return TypeChart(
            effectiveness={
                attacking: {
                    defending: float(self.root[attacking].get(defending, 1))
                    for defending in POKEMON_TYPES
                }
                for attacking in POKEMON_TYPES
            }
        )
