import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from absl import logging
from pydantic import BaseModel, ValidationError

from pokebattle.game.data.nature import Nature
from pokebattle.game.data.records import (
    MoveRecord,
    NatureRecord,
    SpeciesRecord,
    TypeChartRecord,
    describe_validation_error,
)
from pokebattle.game.data.species import Species
from pokebattle.game.data.type_chart import TypeChart
from pokebattle.game.exceptions import DataNotFoundError, DataSchemaError
from pokebattle.game.schema.utils import normalize_name

T = TypeVar("T", Species, Nature)
M = TypeVar("M", bound=BaseModel)

DEFAULT_DATA_DIR = Path(__file__).parent / "static"


def validate_record(source: str, model: Type[M], record: Any) -> M:
    """Check one decoded JSON value against its schema.

    Args:
        source: File the record came from, used in the error message
        model: Schema the record must satisfy
        record: Decoded JSON value for one record

    Raises:
        DataSchemaError: If the record does not satisfy the schema
    """
    try:
        return model.model_validate(record)
    except ValidationError as e:
        name = record.get("name") if isinstance(record, dict) else None
        raise DataSchemaError(source, describe_validation_error(e), name) from e


class GameData:
    """Singleton class for accessing static game data.

    This class loads species, moves, natures and the type chart once, checks
    every record against its schema, and provides read-only access throughout
    the application. Move records are returned raw; MoveCatalog turns them
    into MoveDefinition objects.
    """

    _instance: Optional["GameData"] = None

    def __new__(cls, data_dir: Optional[str] = None) -> "GameData":
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, data_dir: Optional[str] = None) -> None:
        """Initialize the game data (only runs once for the singleton)."""
        if self._initialized:  # type: ignore
            return

        self.data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        self._species_lookup = self._load_lookup_data(
            "species.json", Species, SpeciesRecord
        )
        self._moves_lookup = self._load_raw_moves()
        self._natures_lookup = self._load_lookup_data(
            "natures.json", Nature, NatureRecord
        )
        self._type_chart = self._load_type_chart()
        self._initialized = True  # type: ignore
        logging.info(
            "Loaded %d species, %d moves, %d natures from %s",
            len(self._species_lookup),
            len(self._moves_lookup),
            len(self._natures_lookup),
            self.data_dir,
        )

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next construction reloads from disk."""
        cls._instance = None

    def _read_json(self, filename: str) -> Any:
        try:
            with open(self.data_dir / filename, "r") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise DataSchemaError(filename, f"invalid JSON: {e}") from e

    def _read_records(
        self, filename: str, model: Type[BaseModel]
    ) -> List[Dict[str, Any]]:
        data = self._read_json(filename)
        if not isinstance(data, list):
            raise DataSchemaError(filename, "expected a list of records")
        for record in data:
            validate_record(filename, model, record)
        return data

    def _load_lookup_data(
        self, filename: str, cls: Type[T], model: Type[BaseModel]
    ) -> Dict[str, T]:
        data = self._read_records(filename, model)
        return {normalize_name(entry["name"]): cls.from_dict(entry) for entry in data}

    def _load_raw_moves(self) -> Dict[str, Dict[str, Any]]:
        data = self._read_records("moves.json", MoveRecord)
        return {normalize_name(entry["name"]): entry for entry in data}

    def _load_type_chart(self) -> TypeChart:
        chart = validate_record(
            "type_chart.json", TypeChartRecord, self._read_json("type_chart.json")
        )
        return chart.to_type_chart()

    def get_species(self, name: str) -> Species:
        key = normalize_name(name)
        if key not in self._species_lookup:
            raise DataNotFoundError("species", name)
        return self._species_lookup[key]

    def get_move(self, name: str) -> Dict[str, Any]:
        key = normalize_name(name)
        if key not in self._moves_lookup:
            raise DataNotFoundError("move", name)
        return dict(self._moves_lookup[key])

    def get_nature(self, name: str) -> Nature:
        key = normalize_name(name)
        if key not in self._natures_lookup:
            raise DataNotFoundError("nature", name)
        return self._natures_lookup[key]

    def get_type_chart(self) -> TypeChart:
        return self._type_chart

    def move_names(self) -> List[str]:
        return [entry["name"] for entry in self._moves_lookup.values()]
