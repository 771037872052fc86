"""Typed access to moves served by the static data provider."""

from typing import Any, Dict, Optional

from absl import logging

from pokebattle.game.data.game_data import GameData
from pokebattle.game.data.move import MoveDefinition
from pokebattle.game.exceptions import DataSchemaError
from pokebattle.game.schema.utils import normalize_name


class MoveCatalog:
    """Normalizes raw move records into MoveDefinition objects.

    Lookups are cached per catalog instance, so a catalog shared by several
    battles parses each move once.

    Example:
        >>> catalog = MoveCatalog()
        >>> catalog.get("Thunderbolt").effect
        StatusInflict(status=<Status.PARALYSIS: 'par'>)
    """

    def __init__(self, game_data: Optional[GameData] = None):
        self._game_data = game_data or GameData()
        self._cache: Dict[str, MoveDefinition] = {}

    @staticmethod
    def from_raw(raw: Dict[str, Any]) -> MoveDefinition:
        """Convert one raw record into a MoveDefinition.

        Args:
            raw: Record as served by GameData.get_move

        Returns:
            The normalized move

        Raises:
            DataSchemaError: If the record does not describe a valid move
        """
        try:
            return MoveDefinition.from_dict(raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise DataSchemaError("moves.json", str(e), raw.get("name")) from e

    def get(self, name: str) -> MoveDefinition:
        """Look up a move by name.

        Raises:
            DataNotFoundError: If the data provider has no such move
            DataSchemaError: If its record is malformed
        """
        key = normalize_name(name)
        move = self._cache.get(key)
        if move is None:
            move = self.from_raw(self._game_data.get_move(name))
            self._cache[key] = move
            logging.debug("Cached move %s", move.name)
        return move
